"""
Payment initiation, completion, refund, earnings and withdrawal endpoint tests.
"""

import re
from datetime import timedelta

import pytest

from amrutam.core.utils.datetime_utils import utc_now
from helpers import auth_header

NEXT_WEEK = utc_now() + timedelta(days=7)


def schedule_consultation(client, doctor_id):
    response = client.post(
        "/api/consultations",
        json={
            "doctorId": doctor_id,
            "patientName": "Sunil Joshi",
            "patientEmail": "sunil.joshi@example.com",
            "patientPhone": "9811122233",
            "patientAge": 52,
            "patientGender": "Male",
            "consultationType": "audio",
            "consultationDate": NEXT_WEEK.replace(microsecond=0).isoformat(),
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["consultation"]


def book_appointment(client, doctor_id):
    response = client.post(
        "/api/appointments",
        json={
            "doctorId": doctor_id,
            "patientName": "Sunil Joshi",
            "patientEmail": "sunil.joshi@example.com",
            "patientPhone": "9811122233",
            "appointmentDate": NEXT_WEEK.date().isoformat(),
            "appointmentTime": "09:00",
            "consultationMode": "in-person",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["appointment"]


def initiate(client, doctor_id, service_id, service_type="consultation", **overrides):
    payload = {
        "doctorId": doctor_id,
        "patientEmail": "Sunil.Joshi@example.com",
        "patientName": "Sunil Joshi",
        "serviceType": service_type,
        "serviceId": service_id,
        "paymentMethod": "upi",
    }
    payload.update(overrides)
    return client.post("/api/payments/initiate", json=payload)


def paid_consultation(client, doctor_id):
    consultation = schedule_consultation(client, doctor_id)
    transaction_id = initiate(client, doctor_id, consultation["id"]).json()["data"]["payment"]["transactionId"]
    response = client.post("/api/payments/complete", json={"transactionId": transaction_id, "paymentId": "pay_gateway01"})
    assert response.status_code == 200, response.text
    return consultation, response.json()["data"]["payment"]


def own_profile(client, doctor):
    return client.get("/api/doctors/me", headers=auth_header(doctor.token)).json()["data"]["doctor"]


def test_initiate_payment(client, doctor):
    consultation = schedule_consultation(client, doctor.id)
    response = initiate(client, doctor.id, consultation["id"])
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Payment initiated successfully"

    payment = body["data"]["payment"]
    assert re.fullmatch(r"TXN_\d{13}_[a-z0-9]{9}", payment["transactionId"])
    assert re.fullmatch(r"ORD_\d{13}_[a-z0-9]{6}", payment["orderId"])
    assert payment["amount"] == 540
    assert payment["currency"] == "INR"
    assert payment["status"] == "pending"

    assert body["data"]["breakdown"] == {
        "consultationFee": 500,
        "platformFee": 25,
        "processingFee": 10,
        "taxes": 5,
        "totalAmount": 540,
    }

    gateway = body["data"]["gatewayResponse"]
    assert re.fullmatch(r"pay_[a-z0-9]{14}", gateway["paymentId"])
    assert gateway["orderId"] == payment["orderId"]
    assert gateway["status"] == "created"
    assert gateway["description"].startswith("consultation with Dr.")
    assert gateway["notes"]["service_id"] == consultation["id"]


def test_initiated_payment_details(client, doctor):
    consultation = schedule_consultation(client, doctor.id)
    transaction_id = initiate(client, doctor.id, consultation["id"]).json()["data"]["payment"]["transactionId"]

    payment = client.get(f"/api/payments/{transaction_id}").json()["data"]["payment"]
    assert payment["patientEmail"] == "sunil.joshi@example.com"
    assert payment["serviceModel"] == "Consultation"
    assert payment["paymentMethod"] == "upi"
    assert payment["taxes"] == {"gst": 5, "cgst": 3, "sgst": 3, "igst": 0}
    assert payment["doctorEarning"] == {
        "grossAmount": 500,
        "platformCommission": 75,
        "netAmount": 425,
        "commissionPercentage": 15,
    }
    assert payment["settlementStatus"] == "pending"
    assert payment["paymentDate"] is None


def test_initiate_for_unknown_service_or_doctor(client, doctor):
    response = initiate(client, doctor.id, "65f0c0ffee0000000000abcd")
    assert response.status_code == 404
    assert response.json()["message"] == "Service not found"

    consultation = schedule_consultation(client, doctor.id)
    response = initiate(client, doctor.id, consultation["id"], service_type="subscription")
    assert response.status_code == 404
    assert response.json()["message"] == "Service not found"

    response = initiate(client, "65f0c0ffee0000000000abcd", consultation["id"])
    assert response.status_code == 404
    assert response.json()["message"] == "Doctor not found"


def test_complete_payment_credits_doctor_and_marks_service_paid(client, doctor):
    consultation, payment = paid_consultation(client, doctor.id)
    assert payment["status"] == "completed"
    assert payment["paymentDate"] is not None
    assert payment["gatewayResponse"]["payment_id"] == "pay_gateway01"

    profile = own_profile(client, doctor)
    assert profile["totalEarnings"] == 425
    assert profile["pendingWithdrawal"] == 425

    paid = client.get(f"/api/consultations/{consultation['id']}").json()["data"]["consultation"]
    assert paid["paymentStatus"] == "paid"
    assert paid["transactionId"] == payment["transactionId"]


def test_repeated_completion_does_not_credit_twice(client, doctor):
    _, payment = paid_consultation(client, doctor.id)
    response = client.post("/api/payments/complete", json={"transactionId": payment["transactionId"]})
    assert response.status_code == 200
    assert response.json()["message"] == "Payment completed successfully"
    assert own_profile(client, doctor)["pendingWithdrawal"] == 425


def test_completion_after_failure_does_not_credit_twice(client, doctor):
    _, payment = paid_consultation(client, doctor.id)
    url = "/api/payments/complete"
    client.post(url, json={"transactionId": payment["transactionId"], "status": "failed"})
    response = client.post(url, json={"transactionId": payment["transactionId"]})
    assert response.status_code == 200
    assert response.json()["data"]["payment"]["status"] == "completed"
    assert own_profile(client, doctor)["pendingWithdrawal"] == 425


@pytest.mark.parametrize("amount, status", [(540, "refunded"), (140, "partially-refunded")])
def test_completion_rejected_after_refund(client, doctor, amount, status):
    _, payment = paid_consultation(client, doctor.id)
    transaction_id = payment["transactionId"]
    client.post(f"/api/payments/{transaction_id}/refund", json={"amount": amount})

    response = client.post("/api/payments/complete", json={"transactionId": transaction_id})
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot update a payment that has been refunded"
    assert client.get(f"/api/payments/{transaction_id}").json()["data"]["payment"]["status"] == status
    assert own_profile(client, doctor)["pendingWithdrawal"] == 425


def test_appointment_payment_marks_appointment_paid(client, doctor):
    appointment = book_appointment(client, doctor.id)
    response = initiate(client, doctor.id, appointment["id"], service_type="appointment")
    transaction_id = response.json()["data"]["payment"]["transactionId"]
    client.post("/api/payments/complete", json={"transactionId": transaction_id})

    paid = client.get(f"/api/appointments/{appointment['id']}").json()["data"]["appointment"]
    assert paid["paymentStatus"] == "paid"
    assert paid["transactionId"] == transaction_id


def test_failed_callback_does_not_credit(client, doctor):
    consultation = schedule_consultation(client, doctor.id)
    transaction_id = initiate(client, doctor.id, consultation["id"]).json()["data"]["payment"]["transactionId"]
    response = client.post("/api/payments/complete", json={"transactionId": transaction_id, "status": "failed"})
    assert response.json()["data"]["payment"]["status"] == "failed"
    assert own_profile(client, doctor)["pendingWithdrawal"] == 0


def test_complete_unknown_payment(client):
    response = client.post("/api/payments/complete", json={"transactionId": "TXN_0_missing"})
    assert response.status_code == 404
    assert response.json()["message"] == "Payment not found"


def test_partial_then_blocked_refund(client, doctor):
    _, payment = paid_consultation(client, doctor.id)
    url = f"/api/payments/{payment['transactionId']}/refund"

    response = client.post(url, json={"amount": 140, "reason": "quality-issue", "initiatedBy": "doctor"})
    assert response.status_code == 200
    assert response.json()["message"] == "Refund processed successfully"
    data = response.json()["data"]
    assert data["refund"]["amount"] == 140
    assert data["refund"]["status"] == "completed"
    assert re.fullmatch(r"ref_[a-z0-9]{14}", data["refund"]["refundId"])
    assert data["payment"]["status"] == "partially-refunded"
    assert data["payment"]["totalRefundedAmount"] == 140
    assert data["payment"]["netPaymentAmount"] == 400
    assert data["payment"]["refunds"][0]["gatewayRefundId"] == data["refund"]["refundId"]

    # Only completed payments can be refunded again
    response = client.post(url, json={"amount": 10})
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot refund a payment that is not completed"


def test_full_refund_defaults_to_payment_amount(client, doctor):
    _, payment = paid_consultation(client, doctor.id)
    response = client.post(f"/api/payments/{payment['transactionId']}/refund")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["refund"]["amount"] == 540
    assert data["refund"]["reason"] is None
    assert data["payment"]["status"] == "refunded"
    assert data["payment"]["netPaymentAmount"] == 0


def test_refund_rules(client, doctor):
    _, payment = paid_consultation(client, doctor.id)
    response = client.post(f"/api/payments/{payment['transactionId']}/refund", json={"amount": 600})
    assert response.status_code == 400
    assert response.json()["message"] == "Refund amount cannot exceed the net payment amount"

    response = client.post(f"/api/payments/{payment['transactionId']}/refund", json={"amount": -5})
    assert response.status_code == 400

    consultation = schedule_consultation(client, doctor.id)
    pending = initiate(client, doctor.id, consultation["id"]).json()["data"]["payment"]
    response = client.post(f"/api/payments/{pending['transactionId']}/refund", json={})
    assert response.status_code == 400
    assert response.json()["message"] == "Cannot refund a payment that is not completed"

    response = client.post("/api/payments/TXN_0_missing/refund", json={})
    assert response.status_code == 404


def test_payment_lists(client, doctor):
    _, completed = paid_consultation(client, doctor.id)
    consultation = schedule_consultation(client, doctor.id)
    pending = initiate(client, doctor.id, consultation["id"]).json()["data"]["payment"]

    data = client.get(f"/api/payments/doctor/{doctor.id}").json()["data"]
    assert [p["transactionId"] for p in data["payments"]] == [completed["transactionId"], pending["transactionId"]]
    assert data["pagination"]["total"] == 2

    only_pending = client.get(f"/api/payments/doctor/{doctor.id}", params={"status": "pending"}).json()["data"]
    assert [p["transactionId"] for p in only_pending["payments"]] == [pending["transactionId"]]

    by_patient = client.get("/api/payments/patient/SUNIL.JOSHI@example.com").json()["data"]
    assert by_patient["pagination"]["total"] == 2

    nobody = client.get("/api/payments/patient/nobody@example.com").json()["data"]
    assert nobody["payments"] == []


def test_earnings_summary(client, doctor):
    paid_consultation(client, doctor.id)
    paid_consultation(client, doctor.id)
    consultation = schedule_consultation(client, doctor.id)
    initiate(client, doctor.id, consultation["id"])

    response = client.get(f"/api/payments/earnings/{doctor.id}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["doctorId"] == doctor.id
    assert data["summary"] == {
        "totalGrossEarnings": 1000,
        "totalPlatformCommission": 150,
        "totalNetEarnings": 850,
        "totalTransactions": 2,
        "averageTransactionValue": 540,
        "pendingSettlement": 850,
    }


def test_earnings_summary_explicit_range(client, doctor):
    paid_consultation(client, doctor.id)
    params = {
        "startDate": (utc_now() - timedelta(days=30)).isoformat(),
        "endDate": (utc_now() - timedelta(days=20)).isoformat(),
    }
    data = client.get(f"/api/payments/earnings/{doctor.id}", params=params).json()["data"]
    assert data["summary"]["totalTransactions"] == 0
    assert data["summary"]["pendingSettlement"] == 425


def test_earnings_summary_rejects_unknown_period(client, doctor):
    response = client.get(f"/api/payments/earnings/{doctor.id}", params={"period": "decade"})
    assert response.status_code == 400


def test_withdraw(client, doctor):
    paid_consultation(client, doctor.id)
    response = client.post(
        f"/api/payments/withdraw/{doctor.id}",
        json={"amount": 200, "bankDetails": {"accountHolderName": "Meera Sharma", "ifscCode": "HDFC0001234"}},
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Withdrawal request processed successfully"
    data = response.json()["data"]
    assert data["withdrawalId"].startswith("WD_")
    assert data["amount"] == 200
    assert data["status"] == "processed"
    assert data["remainingBalance"] == 225

    profile = own_profile(client, doctor)
    assert profile["pendingWithdrawal"] == 225
    assert profile["totalEarnings"] == 425


def test_withdraw_rules(client, doctor):
    paid_consultation(client, doctor.id)
    url = f"/api/payments/withdraw/{doctor.id}"

    response = client.post(url, json={"amount": 1000})
    assert response.status_code == 400
    assert response.json()["message"] == "Withdrawal amount exceeds pending balance"

    assert client.post(url, json={"amount": 0}).status_code == 400

    response = client.post("/api/payments/withdraw/65f0c0ffee0000000000abcd", json={"amount": 10})
    assert response.status_code == 404
    assert response.json()["message"] == "Doctor not found"


def test_payment_not_found(client):
    response = client.get("/api/payments/TXN_0_missing")
    assert response.status_code == 404
    assert response.json()["message"] == "Payment not found"
