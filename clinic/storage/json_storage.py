from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ValidationError

from clinic.domain.exceptions import ClinicError, DataLoadingError
from clinic.domain.models import Appointment, Patient
from clinic.model.address_book import AddressBook
from clinic.model.ports import ReadOnlyAddressBook


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


class JsonAdaptedPatient(BaseModel):
    """Flat, string-only form of a patient as stored on disk."""

    name: str
    nric: str
    gender: str
    dob: str
    phone: str
    email: str
    address: str

    @classmethod
    def from_model(cls, patient: Patient) -> "JsonAdaptedPatient":
        return cls(
            name=patient.name,
            nric=patient.nric,
            gender=patient.gender.value,
            dob=patient.dob.isoformat(),
            phone=patient.phone,
            email=patient.email,
            address=patient.address,
        )

    def to_model(self) -> Patient:
        try:
            return Patient.model_validate(self.model_dump())
        except ValidationError as exc:
            raise DataLoadingError(f"invalid patient record ({_first_error(exc)})") from exc


class JsonAdaptedAppointment(BaseModel):
    """Flat form of an appointment as stored on disk."""

    nric: str
    date: str
    start_time: str
    end_time: str
    appointment_type: str
    note: str = ""
    mark: bool = False

    @classmethod
    def from_model(cls, appointment: Appointment) -> "JsonAdaptedAppointment":
        return cls(
            nric=appointment.nric,
            date=appointment.date.isoformat(),
            start_time=appointment.start_time.isoformat(),
            end_time=appointment.end_time.isoformat(),
            appointment_type=appointment.appointment_type,
            note=appointment.note,
            mark=appointment.mark,
        )

    def to_model(self) -> Appointment:
        try:
            return Appointment.model_validate(
                {
                    "nric": self.nric,
                    "date": self.date,
                    "time_period": {"start": self.start_time, "end": self.end_time},
                    "appointment_type": self.appointment_type,
                    "note": self.note,
                    "mark": self.mark,
                }
            )
        except ValidationError as exc:
            raise DataLoadingError(f"invalid appointment record ({_first_error(exc)})") from exc


class JsonSnapshot(BaseModel):
    patients: list[JsonAdaptedPatient] = []
    appointments: list[JsonAdaptedAppointment] = []

    @classmethod
    def from_address_book(cls, address_book: ReadOnlyAddressBook) -> "JsonSnapshot":
        return cls(
            patients=[JsonAdaptedPatient.from_model(p) for p in address_book.patients],
            appointments=[JsonAdaptedAppointment.from_model(a) for a in address_book.appointments],
        )

    def to_address_book(self) -> AddressBook:
        """Rebuild the records; any invalid field or broken invariant fails the whole load."""
        book = AddressBook()
        try:
            for patient in self.patients:
                book.add_patient(patient.to_model())
            for appointment in self.appointments:
                book.add_appointment(appointment.to_model())
        except DataLoadingError:
            raise
        except ClinicError as exc:
            raise DataLoadingError(str(exc)) from exc
        return book


class JsonAddressBookStorage:
    """Stores the records as a single JSON document."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AddressBook | None:
        if not self._path.exists():
            logger.info("No data file at {}; starting with no records", self._path)
            return None

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise DataLoadingError(f"cannot read {self._path}: {exc}") from exc

        try:
            snapshot = JsonSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            raise DataLoadingError(f"malformed data file ({_first_error(exc)})") from exc

        book = snapshot.to_address_book()
        logger.info(
            "Loaded {} patient(s) and {} appointment(s) from {}",
            len(book.patients),
            len(book.appointments),
            self._path,
        )
        return book

    def save(self, address_book: ReadOnlyAddressBook) -> None:
        snapshot = JsonSnapshot.from_address_book(address_book)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("Saved records to {}", self._path)
