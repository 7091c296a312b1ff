import datetime as dt
import re
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, field_validator, model_validator

_NRIC_PATTERN = re.compile(r"[STFGM]\d{7}[A-Z]")
_NAME_PATTERN = re.compile(r"[A-Za-z0-9]+( [A-Za-z0-9]+)*")
_PHONE_PATTERN = re.compile(r"\d{3,}")
_EMAIL_PATTERN = re.compile(r"[A-Za-z0-9+_.-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+")

APPOINTMENT_TYPE_MAX_LENGTH = 50
NOTE_MAX_LENGTH = 200


def _validate_nric(value: str) -> str:
    value = value.strip().upper()
    if not _NRIC_PATTERN.fullmatch(value):
        raise ValueError(
            "NRIC should start with S, T, F, G or M, followed by 7 digits and a letter"
        )
    return value


def _validate_name(value: str) -> str:
    value = " ".join(value.split())
    if not _NAME_PATTERN.fullmatch(value):
        raise ValueError("Names should only contain alphanumeric characters and spaces")
    return value


def _validate_phone(value: str) -> str:
    value = value.strip()
    if not _PHONE_PATTERN.fullmatch(value):
        raise ValueError("Phone numbers should only contain digits and be at least 3 digits long")
    return value


def _validate_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_PATTERN.fullmatch(value):
        raise ValueError("Emails should be of the format local-part@domain")
    return value


def _validate_address(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Addresses can take any values, but should not be blank")
    return value


def _validate_appointment_type(value: str) -> str:
    value = value.strip()
    if not value or len(value) > APPOINTMENT_TYPE_MAX_LENGTH:
        raise ValueError(
            f"Appointment types should not be blank or longer than "
            f"{APPOINTMENT_TYPE_MAX_LENGTH} characters"
        )
    return value


def _validate_note(value: str) -> str:
    value = value.strip()
    if len(value) > NOTE_MAX_LENGTH:
        raise ValueError(f"Notes should not be longer than {NOTE_MAX_LENGTH} characters")
    return value


Nric = Annotated[str, AfterValidator(_validate_nric)]
Name = Annotated[str, AfterValidator(_validate_name)]
Phone = Annotated[str, AfterValidator(_validate_phone)]
Email = Annotated[str, AfterValidator(_validate_email)]
Address = Annotated[str, AfterValidator(_validate_address)]
AppointmentType = Annotated[str, AfterValidator(_validate_appointment_type)]
Note = Annotated[str, AfterValidator(_validate_note)]


class Gender(str, Enum):
    """Gender as recorded on the patient's identity card."""

    MALE = "M"
    FEMALE = "F"


class Patient(BaseModel):
    """A patient registered at the clinic, identified by NRIC."""

    model_config = ConfigDict(frozen=True)

    name: Name
    nric: Nric
    gender: Gender
    dob: dt.date
    phone: Phone
    email: Email
    address: Address

    @field_validator("dob")
    @classmethod
    def _dob_not_in_future(cls, value: dt.date) -> dt.date:
        if value > dt.date.today():
            raise ValueError("Date of birth cannot be in the future")
        return value

    def is_same_patient(self, other: "Patient") -> bool:
        return self.nric == other.nric


class TimePeriod(BaseModel):
    """A half-open ``[start, end)`` window within a single day."""

    model_config = ConfigDict(frozen=True)

    start: dt.time
    end: dt.time

    @model_validator(mode="after")
    def _start_before_end(self) -> "TimePeriod":
        if self.start >= self.end:
            raise ValueError("Start time must be before end time")
        return self

    def overlaps(self, other: "TimePeriod") -> bool:
        """``[9:00, 10:00)`` overlaps ``[9:30, 10:30)`` but not ``[10:00, 11:00)``."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


class Appointment(BaseModel):
    """An appointment, identified by the patient's NRIC, its date and its time period."""

    model_config = ConfigDict(frozen=True)

    nric: Nric
    date: dt.date
    time_period: TimePeriod
    appointment_type: AppointmentType
    note: Note = ""
    mark: bool = False

    @property
    def identity(self) -> tuple[str, dt.date, TimePeriod]:
        return self.nric, self.date, self.time_period

    @property
    def start_time(self) -> dt.time:
        return self.time_period.start

    @property
    def end_time(self) -> dt.time:
        return self.time_period.end

    def is_same_appointment(self, other: "Appointment") -> bool:
        return self.identity == other.identity

    def overlaps(self, other: "Appointment") -> bool:
        """True if both belong to the same patient on the same date and their windows intersect."""
        return (
            self.nric == other.nric
            and self.date == other.date
            and self.time_period.overlaps(other.time_period)
        )

    def with_mark(self, mark: bool) -> "Appointment":
        return self.model_copy(update={"mark": mark})


class AppointmentView(BaseModel):
    """An appointment paired with its patient's current name, for display."""

    model_config = ConfigDict(frozen=True)

    patient_name: str
    appointment: Appointment
