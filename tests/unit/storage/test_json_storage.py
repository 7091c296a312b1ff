import datetime as dt
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from clinic.domain.exceptions import DataLoadingError
from clinic.domain.models import Appointment
from clinic.model.address_book import AddressBook
from clinic.storage.json_storage import JsonAddressBookStorage

MakeAppointment = Callable[..., Appointment]


def _patient_record(**overrides: Any) -> dict[str, Any]:
    record = {
        "name": "Alice Tan",
        "nric": "S1234567A",
        "gender": "F",
        "dob": "1990-01-01",
        "phone": "91234567",
        "email": "alice@example.com",
        "address": "1 Clementi Road",
    }
    record.update(overrides)
    return record


def _appointment_record(**overrides: Any) -> dict[str, Any]:
    record = {
        "nric": "S1234567A",
        "date": "2024-01-05",
        "start_time": "09:00",
        "end_time": "09:30",
        "appointment_type": "Consultation",
        "note": "",
        "mark": False,
    }
    record.update(overrides)
    return record


def _write(path: Path, patients: list[dict[str, Any]], appointments: list[dict[str, Any]]) -> None:
    path.write_text(json.dumps({"patients": patients, "appointments": appointments}))


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "clinic.json"


class TestSave:
    def test_round_trip_preserves_order_and_marks(
        self,
        data_file: Path,
        address_book: AddressBook,
        make_appointment: MakeAppointment,
    ) -> None:
        address_book.add_appointment(make_appointment(date=dt.date(2024, 3, 1), mark=True))
        address_book.add_appointment(make_appointment(nric="T7654321B", note="x-ray"))
        storage = JsonAddressBookStorage(data_file)

        storage.save(address_book)
        loaded = storage.load()

        assert loaded == address_book
        assert loaded is not None
        assert loaded.appointment_views == address_book.appointment_views

    def test_round_trip_keeps_seconds(
        self,
        data_file: Path,
        address_book: AddressBook,
        make_appointment: MakeAppointment,
    ) -> None:
        address_book.add_appointment(make_appointment(start="09:00:10", end="09:00:50.500000"))
        storage = JsonAddressBookStorage(data_file)

        storage.save(address_book)
        loaded = storage.load()

        assert loaded == address_book

    def test_writes_flat_records(self, data_file: Path, address_book: AddressBook) -> None:
        JsonAddressBookStorage(data_file).save(address_book)

        data = json.loads(data_file.read_text())

        assert data["patients"][0] == _patient_record()
        assert data["appointments"] == []


class TestLoad:
    def test_missing_file_returns_none(self, data_file: Path) -> None:
        assert JsonAddressBookStorage(data_file).load() is None

    def test_loads_valid_snapshot(self, tmp_path: Path) -> None:
        path = tmp_path / "clinic.json"
        _write(path, [_patient_record()], [_appointment_record(mark=True)])

        book = JsonAddressBookStorage(path).load()

        assert book is not None
        assert book.appointments[0].mark is True
        assert book.appointment_views[0].patient_name == "Alice Tan"

    def test_malformed_json_fails(self, tmp_path: Path) -> None:
        path = tmp_path / "clinic.json"
        path.write_text("{not json")

        with pytest.raises(DataLoadingError, match="malformed data file"):
            JsonAddressBookStorage(path).load()

    @pytest.mark.parametrize(
        ("patients", "appointments", "reason"),
        [
            ([_patient_record(nric="X1")], [], "invalid patient record"),
            ([_patient_record(), _patient_record(name="Alice Lee")], [], "duplicate patients"),
            ([_patient_record()], [_appointment_record(end_time="08:00")], "invalid appointment"),
            ([_patient_record()], [_appointment_record(nric="T7654321B")], "Patient not found"),
            ([_patient_record()], [_appointment_record(date="1980-01-01")], "before"),
            (
                [_patient_record()],
                [_appointment_record(), _appointment_record(note="again")],
                "duplicate appointments",
            ),
        ],
        ids=[
            "bad-field",
            "duplicate-patient",
            "bad-time-period",
            "orphan-appointment",
            "before-dob",
            "duplicate-appointment",
        ],
    )
    def test_any_invalid_record_fails_whole_load(
        self,
        tmp_path: Path,
        patients: list[dict[str, Any]],
        appointments: list[dict[str, Any]],
        reason: str,
    ) -> None:
        path = tmp_path / "clinic.json"
        _write(path, patients, appointments)

        with pytest.raises(DataLoadingError, match=reason):
            JsonAddressBookStorage(path).load()
