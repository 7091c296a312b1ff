import datetime as dt
from collections.abc import Iterable, Iterator

from clinic.domain.exceptions import AppointmentNotFoundError, DuplicateAppointmentError
from clinic.domain.models import Appointment, TimePeriod


class AppointmentList:
    """Ordered list of appointments, unique by ``(nric, date, time_period)``.

    Patient existence, date validity and overlaps are checked by the
    caller; this list only guards identity uniqueness.
    """

    def __init__(self) -> None:
        self._appointments: list[Appointment] = []

    def contains(self, appointment: Appointment) -> bool:
        return any(a.is_same_appointment(appointment) for a in self._appointments)

    def find_by_identity(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment | None:
        key = (nric, date, time_period)
        return next((a for a in self._appointments if a.identity == key), None)

    def get_matching(self, nric: str, date: dt.date, time_period: TimePeriod) -> Appointment:
        appointment = self.find_by_identity(nric, date, time_period)
        if appointment is None:
            raise AppointmentNotFoundError(nric)
        return appointment

    def for_nric(self, nric: str) -> list[Appointment]:
        return [a for a in self._appointments if a.nric == nric]

    def has_overlap(self, candidate: Appointment, excluding: Appointment | None = None) -> bool:
        """Check ``candidate`` against the same patient's appointments on the same date.

        ``excluding`` is skipped, so an appointment being edited does not
        conflict with its own previous version.
        """
        for existing in self._appointments:
            if excluding is not None and existing.is_same_appointment(excluding):
                continue
            if existing.overlaps(candidate):
                return True
        return False

    def add(self, appointment: Appointment) -> None:
        if self.contains(appointment):
            raise DuplicateAppointmentError(appointment.nric)
        self._appointments.append(appointment)

    def set_appointment(self, target: Appointment, replacement: Appointment) -> None:
        index = self._index_of(target)
        if not target.is_same_appointment(replacement) and self.contains(replacement):
            raise DuplicateAppointmentError(replacement.nric)
        self._appointments[index] = replacement

    def remove(self, appointment: Appointment) -> None:
        del self._appointments[self._index_of(appointment)]

    def delete_by_nric(self, nric: str) -> int:
        """Remove every appointment of ``nric``; returns how many were removed."""
        before = len(self._appointments)
        self._appointments = [a for a in self._appointments if a.nric != nric]
        return before - len(self._appointments)

    def rekey_nric(self, old_nric: str, new_nric: str) -> None:
        self._appointments = [
            a.model_copy(update={"nric": new_nric}) if a.nric == old_nric else a
            for a in self._appointments
        ]

    def set_appointments(self, appointments: Iterable[Appointment]) -> None:
        """Replace the whole list; fails without changes if ``appointments`` has duplicates."""
        appointments = list(appointments)
        identities = {a.identity for a in appointments}
        if len(identities) != len(appointments):
            raise DuplicateAppointmentError()
        self._appointments = appointments

    def as_tuple(self) -> tuple[Appointment, ...]:
        return tuple(self._appointments)

    def _index_of(self, appointment: Appointment) -> int:
        for index, existing in enumerate(self._appointments):
            if existing.is_same_appointment(appointment):
                return index
        raise AppointmentNotFoundError(appointment.nric)

    def __iter__(self) -> Iterator[Appointment]:
        return iter(tuple(self._appointments))

    def __len__(self) -> int:
        return len(self._appointments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AppointmentList):
            return NotImplemented
        return self._appointments == other._appointments

    def __repr__(self) -> str:
        return f"AppointmentList({self._appointments!r})"
