"""
Synchronous HTTP client for the doctor portal REST API.

Every call returns the decoded ``{status, message, data}`` envelope and
raises :class:`PortalAPIError` on a non-2xx answer.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("amrutam")

DEFAULT_BASE_URL = "http://localhost:3001/api"
DEFAULT_TIMEOUT = 15


class PortalAPIError(Exception):
    """Error envelope returned by the API."""

    def __init__(self, message: str, status_code: int, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}


def create_http_session(max_retries: int = 3, backoff_factor: float = 0.5) -> requests.Session:
    """Session with connection pooling; idempotent GETs are retried on 5xx."""
    session = requests.Session()
    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy, pool_connections=10, pool_maxsize=10)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class _Resource:
    def __init__(self, client: "PortalClient"):
        self._client = client

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._client.request("GET", path, params=params)

    def _post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._client.request("POST", path, json=body or {})

    def _put(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._client.request("PUT", path, json=body or {})


class DoctorsAPI(_Resource):
    def register(self, doctor: Dict[str, Any]) -> Dict[str, Any]:
        response = self._post("/doctors/register", doctor)
        self._client.token = response["data"]["token"]
        return response

    def login(self, email: str, password: str) -> Dict[str, Any]:
        response = self._post("/doctors/login", {"email": email, "password": password})
        self._client.token = response["data"]["token"]
        return response

    def list(self, **params: Any) -> Dict[str, Any]:
        return self._get("/doctors", params)

    def get(self, doctor_id: str) -> Dict[str, Any]:
        return self._get(f"/doctors/{_segment(doctor_id)}")

    def search(self, query: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/doctors/search/{_segment(query)}", params)

    def stats(self) -> Dict[str, Any]:
        return self._get("/doctors/stats/summary")

    def me(self) -> Dict[str, Any]:
        return self._get("/doctors/me")

    def update_me(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._put("/doctors/me", changes)


class AppointmentsAPI(_Resource):
    def create(self, appointment: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/appointments", appointment)

    def by_doctor(self, doctor_id: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/appointments/doctor/{_segment(doctor_id)}", params)

    def by_patient(self, email: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/appointments/patient/{_segment(email)}", params)

    def get(self, appointment_id: str) -> Dict[str, Any]:
        return self._get(f"/appointments/{_segment(appointment_id)}")

    def update_status(self, appointment_id: str, status: str, notes: Optional[str] = None) -> Dict[str, Any]:
        return self._put(f"/appointments/{_segment(appointment_id)}/status", {"status": status, "notes": notes})

    def reschedule(self, appointment_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._put(f"/appointments/{_segment(appointment_id)}/reschedule", changes)

    def cancel(self, appointment_id: str, reason: Optional[str] = None, cancelled_by: Optional[str] = None):
        body = {"reason": reason, "cancelledBy": cancelled_by}
        return self._put(f"/appointments/{_segment(appointment_id)}/cancel", body)

    def available_slots(self, doctor_id: str, day: str) -> Dict[str, Any]:
        return self._get(f"/appointments/slots/{_segment(doctor_id)}/{_segment(day)}")


class ConsultationsAPI(_Resource):
    def create(self, consultation: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/consultations", consultation)

    def by_doctor(self, doctor_id: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/consultations/doctor/{_segment(doctor_id)}", params)

    def get(self, consultation_id: str) -> Dict[str, Any]:
        return self._get(f"/consultations/{_segment(consultation_id)}")

    def update(self, consultation_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._put(f"/consultations/{_segment(consultation_id)}", changes)

    def add_prescription(self, consultation_id: str, prescription: Dict[str, Any]) -> Dict[str, Any]:
        return self._post(f"/consultations/{_segment(consultation_id)}/prescription", prescription)

    def add_assessment(self, consultation_id: str, assessment: Dict[str, Any]) -> Dict[str, Any]:
        return self._post(f"/consultations/{_segment(consultation_id)}/assessment", assessment)

    def stats(self, **params: Any) -> Dict[str, Any]:
        return self._get("/consultations/stats/summary", params)


class ContactAPI(_Resource):
    def submit(self, inquiry: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/contact", inquiry)

    def list(self, **params: Any) -> Dict[str, Any]:
        return self._get("/contact", params)

    def get(self, contact_id: str) -> Dict[str, Any]:
        return self._get(f"/contact/{_segment(contact_id)}")

    def pending(self) -> Dict[str, Any]:
        return self._get("/contact/pending")

    def stats(self, **params: Any) -> Dict[str, Any]:
        return self._get("/contact/stats/summary", params)

    def update_status(self, contact_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._put(f"/contact/{_segment(contact_id)}/status", changes)

    def respond(self, contact_id: str, message: str, responded_by: str = "Support Team") -> Dict[str, Any]:
        body = {"message": message, "respondedBy": responded_by}
        return self._post(f"/contact/{_segment(contact_id)}/respond", body)

    def resolve(self, contact_id: str, resolution_summary: str) -> Dict[str, Any]:
        body = {"resolutionSummary": resolution_summary}
        return self._put(f"/contact/{_segment(contact_id)}/resolve", body)


class PaymentsAPI(_Resource):
    def initiate(self, payment: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/payments/initiate", payment)

    def complete(self, callback: Dict[str, Any]) -> Dict[str, Any]:
        return self._post("/payments/complete", callback)

    def get(self, transaction_id: str) -> Dict[str, Any]:
        return self._get(f"/payments/{_segment(transaction_id)}")

    def by_doctor(self, doctor_id: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/payments/doctor/{_segment(doctor_id)}", params)

    def by_patient(self, email: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/payments/patient/{_segment(email)}", params)

    def refund(self, transaction_id: str, refund: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._post(f"/payments/{_segment(transaction_id)}/refund", refund)

    def earnings(self, doctor_id: str, **params: Any) -> Dict[str, Any]:
        return self._get(f"/payments/earnings/{_segment(doctor_id)}", params)

    def withdraw(self, doctor_id: str, withdrawal: Dict[str, Any]) -> Dict[str, Any]:
        return self._post(f"/payments/withdraw/{_segment(doctor_id)}", withdrawal)


class PortalClient:
    """Client for the doctor portal API.

    ``session`` may be any object with a requests-style ``request`` method;
    the bearer token from register/login is kept and sent on later calls.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or create_http_session()
        self.token = token
        self.timeout = timeout

        self.doctors = DoctorsAPI(self)
        self.appointments = AppointmentsAPI(self)
        self.consultations = ConsultationsAPI(self)
        self.contact = ContactAPI(self)
        self.payments = PaymentsAPI(self)

    def health(self) -> Dict[str, Any]:
        return self.request("GET", "/health")

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            params=params or None,
            json=json,
            headers=headers,
            timeout=self.timeout,
        )
        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if not 200 <= response.status_code < 300:
            message = payload.get("message") or "API call failed"
            logger.warning(f"API call failed: {method} {path} status={response.status_code} message={message}")
            raise PortalAPIError(message, response.status_code, payload)
        return payload
