import datetime as dt
from collections.abc import Callable

import pytest

from clinic.domain.exceptions import AppointmentNotFoundError, DuplicateAppointmentError
from clinic.domain.models import Appointment, TimePeriod
from clinic.model.appointments import AppointmentList

MakeAppointment = Callable[..., Appointment]


def _period(start: str, end: str) -> TimePeriod:
    return TimePeriod(start=dt.time.fromisoformat(start), end=dt.time.fromisoformat(end))


class TestAdd:
    def test_duplicate_identity_raises(self, make_appointment: MakeAppointment) -> None:
        appointments = AppointmentList()
        appointments.add(make_appointment())

        with pytest.raises(DuplicateAppointmentError):
            appointments.add(make_appointment(appointment_type="Follow-up"))

        assert len(appointments) == 1

    def test_same_window_for_different_patients_is_allowed(
        self, make_appointment: MakeAppointment
    ) -> None:
        appointments = AppointmentList()
        appointments.add(make_appointment())

        appointments.add(make_appointment(nric="T7654321B"))

        assert len(appointments) == 2


class TestLookup:
    def test_get_matching_returns_stored_appointment(
        self, make_appointment: MakeAppointment
    ) -> None:
        stored = make_appointment(note="fasting")
        appointments = AppointmentList()
        appointments.add(stored)

        found = appointments.get_matching(
            "S1234567A", dt.date(2024, 1, 5), _period("09:00", "09:30")
        )

        assert found == stored

    def test_get_matching_missing_raises(self, make_appointment: MakeAppointment) -> None:
        appointments = AppointmentList()
        appointments.add(make_appointment())

        with pytest.raises(AppointmentNotFoundError):
            appointments.get_matching("S1234567A", dt.date(2024, 1, 5), _period("09:00", "10:00"))

    def test_find_by_identity_returns_none_when_missing(self) -> None:
        assert (
            AppointmentList().find_by_identity(
                "S1234567A", dt.date(2024, 1, 5), _period("09:00", "09:30")
            )
            is None
        )


class TestHasOverlap:
    @pytest.fixture
    def appointments(self, make_appointment: MakeAppointment) -> AppointmentList:
        appointment_list = AppointmentList()
        appointment_list.add(make_appointment(start="09:00", end="10:00"))
        return appointment_list

    @pytest.mark.parametrize(
        ("start", "end", "expected"),
        [("09:30", "10:30", True), ("10:00", "11:00", False), ("08:00", "09:00", False)],
        ids=["overlapping", "back-to-back-after", "back-to-back-before"],
    )
    def test_same_patient_same_date(
        self,
        appointments: AppointmentList,
        make_appointment: MakeAppointment,
        start: str,
        end: str,
        expected: bool,
    ) -> None:
        assert appointments.has_overlap(make_appointment(start=start, end=end)) is expected

    def test_other_patient_does_not_overlap(
        self, appointments: AppointmentList, make_appointment: MakeAppointment
    ) -> None:
        candidate = make_appointment(nric="T7654321B", start="09:30", end="10:30")

        assert appointments.has_overlap(candidate) is False

    def test_excluded_appointment_is_ignored(
        self, appointments: AppointmentList, make_appointment: MakeAppointment
    ) -> None:
        existing = make_appointment(start="09:00", end="10:00")
        moved = make_appointment(start="09:15", end="10:15")

        assert appointments.has_overlap(moved, excluding=existing) is False


class TestMutations:
    def test_set_appointment_keeps_position(self, make_appointment: MakeAppointment) -> None:
        first = make_appointment()
        second = make_appointment(start="11:00", end="11:30")
        appointments = AppointmentList()
        appointments.add(first)
        appointments.add(second)

        marked = first.with_mark(True)
        appointments.set_appointment(first, marked)

        assert appointments.as_tuple() == (marked, second)

    def test_set_appointment_missing_target_raises(
        self, make_appointment: MakeAppointment
    ) -> None:
        with pytest.raises(AppointmentNotFoundError):
            AppointmentList().set_appointment(make_appointment(), make_appointment())

    def test_set_appointment_onto_another_identity_raises(
        self, make_appointment: MakeAppointment
    ) -> None:
        first = make_appointment()
        second = make_appointment(start="11:00", end="11:30")
        appointments = AppointmentList()
        appointments.add(first)
        appointments.add(second)

        with pytest.raises(DuplicateAppointmentError):
            appointments.set_appointment(first, second.with_mark(True))

    def test_delete_by_nric_leaves_other_patients(
        self, make_appointment: MakeAppointment
    ) -> None:
        bobs = make_appointment(nric="T7654321B")
        appointments = AppointmentList()
        appointments.add(make_appointment())
        appointments.add(make_appointment(start="11:00", end="11:30"))
        appointments.add(bobs)

        removed = appointments.delete_by_nric("S1234567A")

        assert removed == 2
        assert appointments.as_tuple() == (bobs,)

    def test_delete_by_nric_with_no_matches_succeeds(self) -> None:
        assert AppointmentList().delete_by_nric("S1234567A") == 0

    def test_remove_missing_raises(self, make_appointment: MakeAppointment) -> None:
        with pytest.raises(AppointmentNotFoundError):
            AppointmentList().remove(make_appointment())

    def test_rekey_nric(self, make_appointment: MakeAppointment) -> None:
        appointments = AppointmentList()
        appointments.add(make_appointment())

        appointments.rekey_nric("S1234567A", "G1111111Z")

        assert [a.nric for a in appointments] == ["G1111111Z"]
