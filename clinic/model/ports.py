import datetime as dt
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Protocol

from clinic.domain.models import Appointment, AppointmentView, Patient, TimePeriod

PatientPredicate = Callable[[Patient], bool]
AppointmentViewPredicate = Callable[[AppointmentView], bool]


class ReadOnlyAddressBook(Protocol):
    """Read-only view of the clinic's records, for rendering and persistence."""

    @property
    def patients(self) -> tuple[Patient, ...]: ...

    @property
    def appointments(self) -> tuple[Appointment, ...]: ...

    @property
    def appointment_views(self) -> tuple[AppointmentView, ...]: ...


class AbstractModel(ABC):
    """Operations available to commands."""

    @property
    @abstractmethod
    def address_book(self) -> ReadOnlyAddressBook:
        """The underlying records."""

    @abstractmethod
    def reset_address_book(self, new_data: ReadOnlyAddressBook) -> None:
        """Replace all records with ``new_data``."""

    # Patients

    @abstractmethod
    def has_patient_with_nric(self, nric: str) -> bool: ...

    @abstractmethod
    def get_patient_with_nric(self, nric: str) -> Patient:
        """Return the patient with ``nric``.

        Raises:
            PatientNotFoundError: If no patient has this NRIC.
        """

    @abstractmethod
    def add_patient(self, patient: Patient) -> None:
        """Register a new patient.

        Raises:
            DuplicatePatientError: If the NRIC is already registered.
        """

    @abstractmethod
    def set_patient(self, target: Patient, edited: Patient) -> None:
        """Replace ``target`` with ``edited``, keeping its position.

        Raises:
            PatientNotFoundError: If ``target`` is not registered.
            DuplicatePatientError: If ``edited`` takes another patient's NRIC.
            InvalidAppointmentDateError: If ``edited.dob`` is after one of the
                patient's appointments.
        """

    @abstractmethod
    def delete_patient_with_nric(self, nric: str) -> Patient:
        """Delete a patient together with all of their appointments.

        Raises:
            PatientNotFoundError: If no patient has this NRIC.
        """

    # Appointments

    @abstractmethod
    def has_appointment(self, appointment: Appointment) -> bool: ...

    @abstractmethod
    def find_appointment(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment | None: ...

    @abstractmethod
    def get_matching_appointment(
        self, nric: str, date: dt.date, time_period: TimePeriod
    ) -> Appointment:
        """Return the appointment with exactly this NRIC, date and time period.

        Raises:
            AppointmentNotFoundError: If nothing matches.
        """

    @abstractmethod
    def has_overlapping_appointment(
        self, candidate: Appointment, excluding: Appointment | None = None
    ) -> bool: ...

    @abstractmethod
    def add_appointment(self, appointment: Appointment) -> None:
        """Add an appointment for an existing patient.

        Overlaps are not rejected here; check ``has_overlapping_appointment`` first.

        Raises:
            PatientNotFoundError: If the appointment's NRIC is not registered.
            InvalidAppointmentDateError: If the date is before the patient's DOB.
            DuplicateAppointmentError: If the same appointment already exists.
        """

    @abstractmethod
    def set_appointment(self, target: Appointment, edited: Appointment) -> None:
        """Replace ``target`` with ``edited``.

        Raises:
            AppointmentNotFoundError: If ``target`` does not exist.
            PatientNotFoundError: If ``edited`` refers to an unknown patient.
            InvalidAppointmentDateError: If ``edited`` predates the patient's DOB.
            DuplicateAppointmentError: If ``edited`` collides with another appointment.
        """

    @abstractmethod
    def delete_appointment(self, appointment: Appointment) -> None:
        """Delete one appointment.

        Raises:
            AppointmentNotFoundError: If the appointment does not exist.
        """

    # Filtered views

    @property
    @abstractmethod
    def filtered_patients(self) -> tuple[Patient, ...]: ...

    @property
    @abstractmethod
    def filtered_appointment_views(self) -> tuple[AppointmentView, ...]: ...

    @abstractmethod
    def update_filtered_patient_list(self, predicate: PatientPredicate) -> None: ...

    @abstractmethod
    def update_filtered_appointment_view_list(
        self, predicate: AppointmentViewPredicate
    ) -> None: ...
