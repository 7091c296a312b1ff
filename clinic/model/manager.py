import datetime as dt

from loguru import logger

from clinic.domain.models import Appointment, AppointmentView, Patient, TimePeriod
from clinic.model.address_book import AddressBook
from clinic.model.ports import (
    AbstractModel,
    AppointmentViewPredicate,
    PatientPredicate,
    ReadOnlyAddressBook,
)
from clinic.model.predicates import show_all


class ModelManager(AbstractModel):
    """Model that delegates to an AddressBook and keeps the filters for display.

    Filtered lists are computed from the current records on every access, so
    they always reflect the latest mutation.
    """

    def __init__(self, address_book: AddressBook | None = None) -> None:
        self._book = address_book if address_book is not None else AddressBook()
        self._patient_filter: PatientPredicate = show_all
        self._view_filter: AppointmentViewPredicate = show_all

    @property
    def address_book(self) -> AddressBook:
        return self._book

    def reset_address_book(self, new_data: ReadOnlyAddressBook) -> None:
        self._book.reset_data(new_data)
        logger.info(
            "Records reset: {} patient(s), {} appointment(s)",
            len(self._book.patients),
            len(self._book.appointments),
        )

    def has_patient_with_nric(self, nric: str) -> bool:
        return self._book.has_patient_with_nric(nric)

    def get_patient_with_nric(self, nric: str) -> Patient:
        return self._book.get_patient_with_nric(nric)

    def add_patient(self, patient: Patient) -> None:
        self._book.add_patient(patient)
        self.update_filtered_patient_list(show_all)

    def set_patient(self, target: Patient, edited: Patient) -> None:
        self._book.set_patient(target, edited)

    def delete_patient_with_nric(self, nric: str) -> Patient:
        return self._book.delete_patient_with_nric(nric)

    def has_appointment(self, appointment: Appointment) -> bool:
        return self._book.has_appointment(appointment)

    def find_appointment(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment | None:
        return self._book.find_appointment(nric, date, time_period)

    def get_matching_appointment(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment:
        return self._book.get_matching_appointment(nric, date, time_period)

    def has_overlapping_appointment(
        self, candidate: Appointment, excluding: Appointment | None = None
    ) -> bool:
        return self._book.has_overlapping_appointment(candidate, excluding)

    def add_appointment(self, appointment: Appointment) -> None:
        self._book.add_appointment(appointment)
        self.update_filtered_appointment_view_list(show_all)

    def set_appointment(self, target: Appointment, edited: Appointment) -> None:
        self._book.set_appointment(target, edited)

    def delete_appointment(self, appointment: Appointment) -> None:
        self._book.delete_appointment(appointment)

    @property
    def filtered_patients(self) -> tuple[Patient, ...]:
        return tuple(p for p in self._book.patients if self._patient_filter(p))

    @property
    def filtered_appointment_views(self) -> tuple[AppointmentView, ...]:
        return tuple(v for v in self._book.appointment_views if self._view_filter(v))

    def update_filtered_patient_list(self, predicate: PatientPredicate) -> None:
        logger.debug("Patient filter set to {}", predicate)
        self._patient_filter = predicate

    def update_filtered_appointment_view_list(self, predicate: AppointmentViewPredicate) -> None:
        logger.debug("Appointment filter set to {}", predicate)
        self._view_filter = predicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelManager):
            return NotImplemented
        return self._book == other._book
