from collections.abc import Iterable, Iterator

from clinic.domain.models import Appointment, AppointmentView, Patient


class AppointmentViewList:
    """Appointments joined with their patient's name, ordered by date and time.

    Never edited directly: ``recompute`` rebuilds it from the registries.
    """

    def __init__(self) -> None:
        self._views: tuple[AppointmentView, ...] = ()

    def recompute(self, patients: Iterable[Patient], appointments: Iterable[Appointment]) -> None:
        names = {p.nric: p.name for p in patients}
        ordered = sorted(appointments, key=lambda a: (a.date, a.start_time, a.end_time))
        self._views = tuple(
            AppointmentView(patient_name=names[a.nric], appointment=a) for a in ordered
        )

    def as_tuple(self) -> tuple[AppointmentView, ...]:
        return self._views

    def __iter__(self) -> Iterator[AppointmentView]:
        return iter(self._views)

    def __len__(self) -> int:
        return len(self._views)
