import datetime as dt
from collections.abc import Callable, Iterable

from loguru import logger

from clinic.domain.exceptions import (
    AppointmentNotFoundError,
    DuplicateAppointmentError,
    DuplicatePatientError,
    InvalidAppointmentDateError,
    PatientNotFoundError,
)
from clinic.domain.models import Appointment, AppointmentView, Patient, TimePeriod
from clinic.model.appointments import AppointmentList
from clinic.model.patients import UniquePatientList
from clinic.model.ports import ReadOnlyAddressBook
from clinic.model.views import AppointmentViewList

Listener = Callable[["AddressBook"], None]


def _validated(
    patients: Iterable[Patient], appointments: Iterable[Appointment]
) -> tuple[UniquePatientList, AppointmentList]:
    """Copy the records into fresh registries, checking the invariants that span both."""
    patient_list = UniquePatientList()
    patient_list.set_patients(patients)
    appointment_list = AppointmentList()
    appointment_list.set_appointments(appointments)
    for appointment in appointment_list:
        patient = patient_list.get_by_nric(appointment.nric)
        if appointment.date < patient.dob:
            raise InvalidAppointmentDateError(appointment.date, patient.dob)
    return patient_list, appointment_list


class AddressBook:
    """All patient and appointment records, and the only place they are mutated.

    Every mutation validates its preconditions before touching a registry,
    so a failed call leaves the records unchanged. Successful mutations
    rebuild the appointment views and then notify listeners. Registries
    passed to the constructor are copied and checked like ``reset_data``.
    """

    def __init__(
        self,
        patients: UniquePatientList | None = None,
        appointments: AppointmentList | None = None,
        appointment_views: AppointmentViewList | None = None,
    ) -> None:
        self._patients, self._appointments = _validated(
            patients if patients is not None else (),
            appointments if appointments is not None else (),
        )
        self._views = appointment_views if appointment_views is not None else AppointmentViewList()
        self._listeners: list[Listener] = []
        self._refresh_views()

    @classmethod
    def copy_of(cls, source: ReadOnlyAddressBook) -> "AddressBook":
        book = cls()
        book.reset_data(source)
        return book

    # Listeners

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # Read-only views

    @property
    def patients(self) -> tuple[Patient, ...]:
        return self._patients.as_tuple()

    @property
    def appointments(self) -> tuple[Appointment, ...]:
        return self._appointments.as_tuple()

    @property
    def appointment_views(self) -> tuple[AppointmentView, ...]:
        return self._views.as_tuple()

    # Patient queries

    def has_patient_with_nric(self, nric: str) -> bool:
        return self._patients.has_nric(nric)

    def get_patient_with_nric(self, nric: str) -> Patient:
        return self._patients.get_by_nric(nric)

    # Patient mutations

    def add_patient(self, patient: Patient) -> None:
        self._patients.add(patient)
        self._changed()
        logger.info("Patient added; {} patient(s) on record", len(self._patients))

    def set_patient(self, target: Patient, edited: Patient) -> None:
        if target not in self._patients.as_tuple():
            raise PatientNotFoundError(target.nric)
        nric_changed = target.nric != edited.nric
        if nric_changed and self._patients.has_nric(edited.nric):
            raise DuplicatePatientError(edited.nric)
        for appointment in self._appointments.for_nric(target.nric):
            if appointment.date < edited.dob:
                raise InvalidAppointmentDateError(appointment.date, edited.dob)

        self._patients.set_patient(target, edited)
        if nric_changed:
            self._appointments.rekey_nric(target.nric, edited.nric)
        self._changed()
        logger.info("Patient record updated")

    def delete_patient_with_nric(self, nric: str) -> Patient:
        patient = self._patients.get_by_nric(nric)
        self._patients.delete_by_nric(nric)
        removed = self._appointments.delete_by_nric(nric)
        self._changed()
        logger.info("Patient deleted along with {} appointment(s)", removed)
        return patient

    # Appointment queries

    def has_appointment(self, appointment: Appointment) -> bool:
        return self._appointments.contains(appointment)

    def find_appointment(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment | None:
        return self._appointments.find_by_identity(nric, date, time_period)

    def get_matching_appointment(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment:
        return self._appointments.get_matching(nric, date, time_period)

    def is_valid_appointment_for_patient(self, appointment: Appointment) -> bool:
        """An appointment is valid if it is not before its patient's date of birth."""
        patient = self._patients.get_by_nric(appointment.nric)
        return appointment.date >= patient.dob

    def has_overlapping_appointment(
        self, candidate: Appointment, excluding: Appointment | None = None
    ) -> bool:
        return self._appointments.has_overlap(candidate, excluding)

    # Appointment mutations

    def add_appointment(self, appointment: Appointment) -> None:
        self._check_appointment_for_patient(appointment)
        self._appointments.add(appointment)
        self._changed()
        logger.info("Appointment added for {}", appointment.date.isoformat())

    def set_appointment(self, target: Appointment, edited: Appointment) -> None:
        if not self._appointments.contains(target):
            raise AppointmentNotFoundError(target.nric)
        self._check_appointment_for_patient(edited)
        if not target.is_same_appointment(edited) and self._appointments.contains(edited):
            raise DuplicateAppointmentError(edited.nric)

        self._appointments.set_appointment(target, edited)
        self._changed()
        logger.info("Appointment on {} updated", edited.date.isoformat())

    def delete_appointment(self, appointment: Appointment) -> None:
        self._appointments.remove(appointment)
        self._changed()
        logger.info("Appointment on {} deleted", appointment.date.isoformat())

    def delete_appointments_with_nric(self, nric: str) -> int:
        removed = self._appointments.delete_by_nric(nric)
        self._changed()
        return removed

    # Bulk

    def reset_data(self, new_data: ReadOnlyAddressBook) -> None:
        """Replace every record with those of ``new_data``, validated as a whole."""
        patients, appointments = _validated(new_data.patients, new_data.appointments)
        self._patients = patients
        self._appointments = appointments
        self._changed()

    def _check_appointment_for_patient(self, appointment: Appointment) -> None:
        if not self._patients.has_nric(appointment.nric):
            raise PatientNotFoundError(appointment.nric)
        if not self.is_valid_appointment_for_patient(appointment):
            patient = self._patients.get_by_nric(appointment.nric)
            raise InvalidAppointmentDateError(appointment.date, patient.dob)

    def _refresh_views(self) -> None:
        self._views.recompute(self._patients, self._appointments)

    def _changed(self) -> None:
        self._refresh_views()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Listener {!r} failed after a change", listener)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AddressBook):
            return NotImplemented
        return self._patients == other._patients and self._appointments == other._appointments

    def __repr__(self) -> str:
        return (
            f"AddressBook(patients={len(self._patients)}, "
            f"appointments={len(self._appointments)})"
        )
