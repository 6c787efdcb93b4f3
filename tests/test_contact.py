"""
Contact inquiry submission and support desk endpoint tests.
"""

from datetime import timedelta

from amrutam.core.utils.datetime_utils import utc_now
from helpers import run


def inquiry(**overrides):
    payload = {
        "name": "Priya Nair",
        "email": "Priya.Nair@example.com",
        "phone": "+919900112233",
        "subject": "Unable to book",
        "message": "The booking page keeps spinning after I pick a slot.",
        "inquiryType": "technical-support",
    }
    payload.update(overrides)
    return payload


def submit(client, **overrides):
    response = client.post("/api/contact", json=inquiry(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


def backdate(repos, contact_id, hours):
    contact = run(repos.contacts.find_by_id(contact_id))
    contact.created_at = utc_now() - timedelta(hours=hours)
    return run(repos.contacts.save(contact))


def test_submit_inquiry(client):
    response = client.post("/api/contact", json=inquiry(), headers={"User-Agent": "pytest-browser", "Referer": "https://amrutam.com/contact"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Your message has been sent successfully. We will get back to you soon."
    data = body["data"]
    assert data["email"] == "priya.nair@example.com"
    assert data["inquiryType"] == "technical-support"
    assert data["priority"] == "high"
    assert data["estimatedResponseTime"] == "4-8 hours"
    assert f"Your inquiry ID: {data['inquiryId']}" in data["autoResponse"]
    assert "Subject: Unable to book" in data["autoResponse"]

    contact = client.get(f"/api/contact/{data['inquiryId']}").json()["data"]["contact"]
    assert contact["status"] == "new"
    assert contact["userAgent"] == "pytest-browser"
    assert contact["referrerPage"] == "https://amrutam.com/contact"
    assert contact["ipAddress"]
    assert contact["overdue"] is False


def test_collection_routes_accept_trailing_slash(client):
    response = client.post("/api/contact/", json=inquiry(), follow_redirects=False)
    assert response.status_code == 201
    assert response.json()["data"]["priority"] == "high"

    listed = client.get("/api/contact/", follow_redirects=False)
    assert listed.status_code == 200
    assert listed.json()["data"]["pagination"]["total"] == 1


def test_priority_follows_inquiry_type(client):
    assert submit(client, inquiryType="complaint")["priority"] == "high"
    assert submit(client, inquiryType="billing")["priority"] == "high"

    feedback = submit(client, inquiryType="feedback")
    assert feedback["priority"] == "low"
    assert feedback["estimatedResponseTime"] == "24-48 hours"

    general = submit(client, inquiryType="general", subject=None)
    assert general["priority"] == "medium"
    assert "Subject: General Inquiry" in general["autoResponse"]


def test_submit_requires_core_fields(client):
    payload = inquiry()
    del payload["phone"]
    response = client.post("/api/contact", json=payload)
    assert response.status_code == 400
    assert response.json()["message"] == "Please provide all required fields: name, email, phone, and message"


def test_submit_rejects_unknown_inquiry_type(client):
    response = client.post("/api/contact", json=inquiry(inquiryType="gossip"))
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_list_filters_and_search(client):
    tech = submit(client)
    feedback = submit(client, inquiryType="feedback", name="Arjun Rao", email="arjun@example.com", subject="Great app", message="Loved the Panchakarma guide.")

    data = client.get("/api/contact").json()["data"]
    assert {c["id"] for c in data["contacts"]} == {tech["inquiryId"], feedback["inquiryId"]}
    assert data["pagination"] == {"page": 1, "limit": 20, "total": 2, "pages": 1}
    assert "ipAddress" not in data["contacts"][0]

    by_priority = client.get("/api/contact", params={"priority": "low"}).json()["data"]
    assert [c["id"] for c in by_priority["contacts"]] == [feedback["inquiryId"]]

    by_type = client.get("/api/contact", params={"inquiryType": "technical-support"}).json()["data"]
    assert [c["id"] for c in by_type["contacts"]] == [tech["inquiryId"]]

    searched = client.get("/api/contact", params={"search": "panchakarma"}).json()["data"]
    assert [c["id"] for c in searched["contacts"]] == [feedback["inquiryId"]]

    # Regex metacharacters are matched literally
    literal = client.get("/api/contact", params={"search": ".*"}).json()["data"]
    assert literal["contacts"] == []


def test_pending_orders_by_priority_then_age(client, repos):
    low = submit(client, inquiryType="feedback")
    old_medium = submit(client, inquiryType="general")
    new_medium = submit(client, inquiryType="partnership")
    high = submit(client, inquiryType="billing")
    resolved = submit(client, inquiryType="complaint")
    backdate(repos, old_medium["inquiryId"], hours=30)
    backdate(repos, new_medium["inquiryId"], hours=1)
    client.put(f"/api/contact/{resolved['inquiryId']}/resolve", json={"resolutionSummary": "Refunded"})

    data = client.get("/api/contact/pending").json()["data"]
    assert data["count"] == 4
    assert [c["id"] for c in data["pendingInquiries"]] == [
        high["inquiryId"],
        old_medium["inquiryId"],
        new_medium["inquiryId"],
        low["inquiryId"],
    ]
    overdue = {c["id"]: c["overdue"] for c in data["pendingInquiries"]}
    assert overdue[old_medium["inquiryId"]] is True
    assert overdue[new_medium["inquiryId"]] is False


def test_resolved_inquiry_is_never_overdue(client, repos):
    submitted = submit(client)
    backdate(repos, submitted["inquiryId"], hours=48)
    assert client.get(f"/api/contact/{submitted['inquiryId']}").json()["data"]["contact"]["overdue"] is True

    client.put(f"/api/contact/{submitted['inquiryId']}/resolve", json={"resolutionSummary": "Cache cleared"})
    assert client.get(f"/api/contact/{submitted['inquiryId']}").json()["data"]["contact"]["overdue"] is False


def test_update_status_assign_and_note(client):
    submitted = submit(client)
    response = client.put(
        f"/api/contact/{submitted['inquiryId']}/status",
        json={"status": "assigned", "assignedTo": "kavya@amrutam.com", "notes": "Checking booking logs"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Contact inquiry status updated successfully"
    contact = response.json()["data"]["contact"]
    assert contact["status"] == "assigned"
    assert contact["assignedTo"] == "kavya@amrutam.com"
    assert contact["assignedAt"] is not None
    assert contact["internalNotes"][0]["note"] == "Checking booking logs"
    assert contact["internalNotes"][0]["addedBy"] == "system"


def test_update_status_rejects_unknown_status(client):
    submitted = submit(client)
    response = client.put(f"/api/contact/{submitted['inquiryId']}/status", json={"status": "archived"})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid status"


def test_respond(client):
    submitted = submit(client)
    response = client.post(
        f"/api/contact/{submitted['inquiryId']}/respond",
        json={"message": "  Please clear your browser cache.  ", "respondedBy": "Kavya"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Response sent successfully"
    contact = response.json()["data"]["contact"]
    assert contact["status"] == "in-progress"
    assert contact["response"]["message"] == "Please clear your browser cache."
    assert contact["response"]["respondedBy"] == "Kavya"
    assert contact["responseTime"] is not None


def test_respond_requires_message(client):
    submitted = submit(client)
    response = client.post(f"/api/contact/{submitted['inquiryId']}/respond", json={"message": "   "})
    assert response.status_code == 400
    assert response.json()["message"] == "Response message is required"


def test_resolve(client, repos):
    submitted = submit(client)
    backdate(repos, submitted["inquiryId"], hours=6)
    response = client.put(
        f"/api/contact/{submitted['inquiryId']}/resolve",
        json={"resolutionSummary": "Fixed in release 2.3"},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Contact inquiry resolved successfully"
    contact = response.json()["data"]["contact"]
    assert contact["status"] == "resolved"
    assert contact["resolutionSummary"] == "Fixed in release 2.3"
    assert contact["resolvedAt"] is not None
    assert round(contact["resolutionTime"]) == 6


def test_resolve_requires_summary(client):
    submitted = submit(client)
    response = client.put(f"/api/contact/{submitted['inquiryId']}/resolve", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Resolution summary is required"


def test_stats_summary(client):
    first = submit(client)
    second = submit(client, inquiryType="feedback")
    submit(client, inquiryType="general")
    submit(client, inquiryType="billing")
    client.put(f"/api/contact/{first['inquiryId']}/resolve", json={"resolutionSummary": "Done"})
    client.post(f"/api/contact/{second['inquiryId']}/respond", json={"message": "Thank you!"})

    summary = client.get("/api/contact/stats/summary").json()["data"]["summary"]
    assert summary["totalInquiries"] == 4
    assert summary["newInquiries"] == 2
    assert summary["inProgressInquiries"] == 1
    assert summary["resolvedInquiries"] == 1
    assert summary["highPriorityInquiries"] == 2
    assert summary["pendingInquiries"] == 3
    assert summary["resolutionRate"] == 25
    assert summary["inquiryTypes"] == ["billing", "feedback", "general", "technical-support"]


def test_stats_summary_when_empty(client):
    summary = client.get("/api/contact/stats/summary").json()["data"]["summary"]
    assert summary["totalInquiries"] == 0
    assert summary["resolutionRate"] == 0
    assert summary["averageResolutionTime"] is None


def test_contact_not_found(client):
    response = client.get("/api/contact/65f0c0ffee0000000000abcd")
    assert response.status_code == 404
    assert response.json()["message"] == "Contact inquiry not found"

    response = client.put("/api/contact/65f0c0ffee0000000000abcd/resolve", json={"resolutionSummary": "x"})
    assert response.status_code == 404
