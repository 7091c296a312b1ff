import datetime as dt


class ClinicError(Exception):
    """Base exception for all clinic record errors."""


class DuplicateEntityError(ClinicError):
    """Raised when an entity with the same identity already exists."""


class DuplicatePatientError(DuplicateEntityError):
    """Raised when a patient with the same NRIC already exists."""

    def __init__(self, nric: str | None = None) -> None:
        self.nric = nric
        super().__init__("Operation would result in duplicate patients")


class DuplicateAppointmentError(DuplicateEntityError):
    """Raised when an appointment with the same NRIC, date and time period already exists."""

    def __init__(self, nric: str | None = None) -> None:
        self.nric = nric
        super().__init__("Operation would result in duplicate appointments")


class EntityNotFoundError(ClinicError):
    """Raised when a looked-up entity does not exist."""


class PatientNotFoundError(EntityNotFoundError):
    """Raised when no patient has the given NRIC."""

    def __init__(self, nric: str | None = None) -> None:
        self.nric = nric
        super().__init__("Patient not found")


class AppointmentNotFoundError(EntityNotFoundError):
    """Raised when no appointment matches the given NRIC, date and time period."""

    def __init__(self, nric: str | None = None) -> None:
        self.nric = nric
        super().__init__("Appointment not found")


class InvalidAppointmentDateError(ClinicError):
    """Raised when an appointment would take place before the patient was born."""

    def __init__(self, appointment_date: dt.date, date_of_birth: dt.date) -> None:
        self.appointment_date = appointment_date
        self.date_of_birth = date_of_birth
        super().__init__(
            f"Appointment date {appointment_date.isoformat()} is before "
            f"the patient's date of birth {date_of_birth.isoformat()}"
        )


class DataLoadingError(ClinicError):
    """Raised when a stored snapshot cannot be read or fails validation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to load data: {reason}")


class CommandError(ClinicError):
    """Raised by a command with a message meant for the user."""
