import datetime as dt
from collections.abc import Callable
from typing import Any

import pytest

from clinic.domain.models import Appointment, Gender, Patient, TimePeriod
from clinic.logic.executor import CommandExecutor
from clinic.model.address_book import AddressBook
from clinic.model.manager import ModelManager
from clinic.storage.fake import InMemoryStorage

ALICE_NRIC = "S1234567A"
BOB_NRIC = "T7654321B"


def period(start: str, end: str) -> TimePeriod:
    return TimePeriod(start=dt.time.fromisoformat(start), end=dt.time.fromisoformat(end))


@pytest.fixture
def alice() -> Patient:
    return Patient(
        name="Alice Tan",
        nric=ALICE_NRIC,
        gender=Gender.FEMALE,
        dob=dt.date(1990, 1, 1),
        phone="91234567",
        email="alice@example.com",
        address="1 Clementi Road",
    )


@pytest.fixture
def bob() -> Patient:
    return Patient(
        name="Bob Lim",
        nric=BOB_NRIC,
        gender=Gender.MALE,
        dob=dt.date(2000, 6, 15),
        phone="98765432",
        email="bob@example.com",
        address="2 Jurong West Street",
    )


@pytest.fixture
def make_appointment() -> Callable[..., Appointment]:
    """Build an appointment; defaults to Alice, 2024-01-05, 09:00-09:30, unmarked."""

    def _make(
        nric: str = ALICE_NRIC,
        date: dt.date = dt.date(2024, 1, 5),
        start: str = "09:00",
        end: str = "09:30",
        **overrides: Any,
    ) -> Appointment:
        fields: dict[str, Any] = {
            "nric": nric,
            "date": date,
            "time_period": period(start, end),
            "appointment_type": "Consultation",
            "note": "",
            "mark": False,
        }
        fields.update(overrides)
        return Appointment(**fields)

    return _make


@pytest.fixture
def address_book(alice: Patient, bob: Patient) -> AddressBook:
    book = AddressBook()
    book.add_patient(alice)
    book.add_patient(bob)
    return book


@pytest.fixture
def model(address_book: AddressBook) -> ModelManager:
    return ModelManager(address_book)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def executor(model: ModelManager, storage: InMemoryStorage) -> CommandExecutor:
    return CommandExecutor(model, storage)
