"""
Domain entity rules: booking windows, SLA tracking, commission and refunds.
"""

from datetime import date, datetime, timedelta

import pytest

from amrutam.core.utils.datetime_utils import utc_now
from amrutam.domain.entities.appointment import Appointment
from amrutam.domain.entities.consultation import Consultation
from amrutam.domain.entities.contact import Contact
from amrutam.domain.entities.doctor import Doctor
from amrutam.domain.entities.payment import Payment
from amrutam.domain.errors import InsufficientBalanceError, InvalidEntityDataError

NOW = datetime(2025, 3, 10, 8, 0)


def make_appointment(**overrides):
    fields = dict(
        doctor_id="d1",
        patient_name="Ravi Kumar",
        patient_email="Ravi@Example.com ",
        patient_phone="9876543210",
        appointment_date=date(2025, 3, 10),
        appointment_time="14:00",
        consultation_mode="video",
    )
    fields.update(overrides)
    return Appointment(**fields)


def make_payment(**overrides):
    fields = dict(
        transaction_id="TXN_1_abc",
        doctor_id="d1",
        patient_email="p@example.com",
        patient_name="Patient",
        service_type="consultation",
        service_id="c1",
        service_model="Consultation",
        amount=540,
        consultation_fee=500,
        payment_method="card",
        payment_provider="razorpay",
    )
    fields.update(overrides)
    return Payment(**fields)


def make_doctor(**overrides):
    fields = dict(
        full_name="Dr. Asha Rao",
        email="ASHA@Example.com",
        phone="+919812345678",
        password_hash="x",
        medical_license_number="LIC-1",
        specialization="Ayurveda",
        experience=5,
        qualification="BAMS",
        consultation_fee=400,
    )
    fields.update(overrides)
    return Doctor(**fields)


class TestAppointment:
    def test_email_is_normalized(self):
        assert make_appointment().patient_email == "ravi@example.com"

    def test_rejects_malformed_time(self):
        with pytest.raises(InvalidEntityDataError):
            make_appointment(appointment_time="25:00")

    def test_rejects_duration_out_of_range(self):
        with pytest.raises(InvalidEntityDataError):
            make_appointment(duration=10)

    def test_end_time_follows_duration(self):
        appointment = make_appointment(duration=45)
        assert appointment.appointment_end_time == datetime(2025, 3, 10, 14, 45)

    def test_cancellation_window(self):
        appointment = make_appointment()
        assert appointment.can_be_cancelled(NOW)
        assert not appointment.can_be_cancelled(datetime(2025, 3, 10, 12, 30))
        # Exactly at the window boundary is too late
        assert not appointment.can_be_cancelled(datetime(2025, 3, 10, 12, 0))

    def test_cancelled_appointment_cannot_be_cancelled_again(self):
        appointment = make_appointment()
        appointment.cancel("patient request", "patient", NOW)
        assert appointment.status == "cancelled"
        assert appointment.cancelled_at == NOW
        assert not appointment.can_be_cancelled(NOW)

    def test_reschedule_window_and_limit(self):
        appointment = make_appointment()
        assert not appointment.can_be_rescheduled(datetime(2025, 3, 10, 10, 30))
        assert appointment.can_be_rescheduled(NOW)

        appointment.reschedule(date(2025, 3, 12), "10:00", "travel", "patient")
        appointment.reschedule(date(2025, 3, 13), "11:00", "travel", "patient")
        assert appointment.rescheduling_count == 2
        assert appointment.status == "rescheduled"
        assert appointment.original_appointment_date == date(2025, 3, 10)
        assert not appointment.can_be_rescheduled(NOW)

    def test_meeting_room_uses_saved_id(self):
        appointment = make_appointment(id="65f0c0ffee0000000000abcd")
        appointment.assign_meeting_room("https://meet.amrutam.com/")
        assert appointment.meeting_id == "amrutam-0000abcd"
        assert appointment.meeting_link == "https://meet.amrutam.com/amrutam-0000abcd"

    def test_meeting_room_requires_id(self):
        with pytest.raises(InvalidEntityDataError):
            make_appointment().assign_meeting_room("https://meet.amrutam.com")


class TestConsultation:
    def make(self, **overrides):
        fields = dict(
            doctor_id="d1",
            patient_name="Ravi",
            patient_email="ravi@example.com",
            patient_phone="9876543210",
            patient_age=34,
            patient_gender="Male",
            consultation_type="video",
            consultation_date=NOW,
        )
        fields.update(overrides)
        return Consultation(**fields)

    def test_transition_stamps_start_and_end(self):
        consultation = self.make()
        assert consultation.transition_to("in-progress", NOW) is False
        assert consultation.start_time == NOW

        assert consultation.transition_to("completed", NOW + timedelta(minutes=42, seconds=20)) is True
        assert consultation.actual_duration == 42

    def test_completing_twice_reports_completion_once(self):
        consultation = self.make()
        assert consultation.transition_to("completed", NOW)
        assert not consultation.transition_to("completed", NOW + timedelta(hours=1))
        assert consultation.end_time == NOW

    def test_assessment_keeps_omitted_values(self):
        consultation = self.make(prakriti="Vata")
        consultation.record_assessment(vikriti="Pitta")
        assert consultation.prakriti == "Vata"
        assert consultation.vikriti == "Pitta"

    def test_rejects_rating_out_of_range(self):
        with pytest.raises(InvalidEntityDataError):
            self.make(doctor_rating=6)


class TestContact:
    def make(self, **overrides):
        fields = dict(name="Anita", email="anita@example.com", phone="9876543210", message="Need help")
        fields.update(overrides)
        return Contact(**fields)

    @pytest.mark.parametrize(
        "inquiry_type, priority",
        [("complaint", "high"), ("billing", "high"), ("technical-support", "high"),
         ("feedback", "low"), ("general", "medium"), ("partnership", "medium")],
    )
    def test_priority_from_inquiry_type(self, inquiry_type, priority):
        assert Contact.priority_for(inquiry_type) == priority

    @pytest.mark.parametrize("priority, hours", [("urgent", 2), ("high", 8), ("medium", 24), ("low", 72)])
    def test_overdue_after_sla_window(self, priority, hours):
        contact = self.make(priority=priority, created_at=NOW)
        assert contact.sla_hours() == hours
        assert not contact.is_overdue(NOW + timedelta(hours=hours, minutes=-1))
        assert contact.is_overdue(NOW + timedelta(hours=hours, minutes=1))

    def test_closed_inquiry_is_never_overdue(self):
        contact = self.make(priority="urgent", created_at=NOW)
        contact.set_status("closed", NOW + timedelta(hours=1))
        assert not contact.is_overdue(NOW + timedelta(days=10))

    def test_resolved_inquiry_is_never_overdue(self):
        contact = self.make(priority="urgent", created_at=NOW)
        contact.resolve("Refund issued", NOW + timedelta(hours=5))
        assert contact.status == "resolved"
        assert contact.resolution_time == 5
        assert not contact.is_overdue(NOW + timedelta(days=3))

    def test_response_moves_new_inquiry_in_progress(self):
        contact = self.make(created_at=utc_now() - timedelta(hours=3))
        contact.respond("We are looking into it", "Support Team")
        assert contact.status == "in-progress"
        assert contact.response_time == pytest.approx(3, abs=0.01)

    def test_internal_note_length_is_limited(self):
        with pytest.raises(InvalidEntityDataError):
            self.make().add_internal_note("x" * 501, "agent")


class TestPayment:
    def test_commission_split(self):
        payment = make_payment()
        earning = payment.apply_commission(15)
        assert earning.gross_amount == 500
        assert earning.platform_commission == 75
        assert earning.net_amount == 425
        assert earning.commission_percentage == 15

    def test_commission_is_not_recomputed(self):
        payment = make_payment()
        payment.apply_commission(15)
        payment.apply_commission(30)
        assert payment.doctor_earning.commission_percentage == 15

    def test_partial_then_full_refund(self):
        payment = make_payment(status="completed")
        first = payment.initiate_refund(200, "patient-request", "admin")
        payment.complete_refund(first, "ref_1")
        assert payment.status == "partially-refunded"
        assert payment.net_payment_amount == 340

        second = payment.initiate_refund(340, None, "admin")
        payment.complete_refund(second, "ref_2")
        assert payment.status == "refunded"
        assert payment.total_refunded_amount == 540

    def test_rejects_negative_amount(self):
        with pytest.raises(InvalidEntityDataError):
            make_payment(amount=-1)


class TestDoctor:
    def test_email_is_normalized_and_profile_checked(self):
        doctor = make_doctor()
        assert doctor.email == "asha@example.com"
        assert doctor.check_profile_complete()

    def test_zero_experience_leaves_profile_incomplete(self):
        assert not make_doctor(experience=0).check_profile_complete()

    def test_rejects_bad_phone(self):
        with pytest.raises(InvalidEntityDataError):
            make_doctor(phone="12-34")

    def test_withdraw_from_pending_balance(self):
        doctor = make_doctor()
        doctor.credit_earnings(425)
        assert doctor.withdraw(125) == 300
        assert doctor.total_earnings == 425
        with pytest.raises(InsufficientBalanceError):
            doctor.withdraw(301)

    def test_slots_for_unknown_day_is_empty(self):
        assert make_doctor().slots_for("Monday") == []
