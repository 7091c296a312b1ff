import datetime as dt

from pydantic import BaseModel, ConfigDict, field_validator

from clinic.domain.models import AppointmentView, Nric, Patient


def show_all(_: object) -> bool:
    return True


class NameContainsKeywordsPredicate(BaseModel):
    """Matches patients whose name contains any of the keywords as a whole word."""

    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...]

    @field_validator("keywords")
    @classmethod
    def _not_empty(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        value = tuple(k.strip() for k in value if k.strip())
        if not value:
            raise ValueError("At least one keyword is required")
        return value

    def __call__(self, patient: Patient) -> bool:
        words = {w.lower() for w in patient.name.split()}
        return any(k.lower() in words for k in self.keywords)


class AppointmentViewMatchesPredicate(BaseModel):
    """Matches appointment views on every field that is set."""

    model_config = ConfigDict(frozen=True)

    nric: Nric | None = None
    date: dt.date | None = None
    start_time: dt.time | None = None

    def __call__(self, view: AppointmentView) -> bool:
        appointment = view.appointment
        if self.nric is not None and appointment.nric != self.nric:
            return False
        if self.date is not None and appointment.date != self.date:
            return False
        if self.start_time is not None and appointment.start_time != self.start_time:
            return False
        return True
