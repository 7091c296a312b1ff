import datetime as dt

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from clinic.domain.exceptions import (
    CommandError,
    DuplicatePatientError,
    InvalidAppointmentDateError,
    PatientNotFoundError,
)
from clinic.domain.formatting import format_patient
from clinic.domain.models import Address, Email, Gender, Name, Nric, Patient, Phone
from clinic.logic import messages
from clinic.logic.commands.base import Command, CommandResult
from clinic.model.ports import AbstractModel
from clinic.model.predicates import NameContainsKeywordsPredicate


class AddPatientCommand(Command):
    COMMAND_WORD = "addpatient"

    def __init__(self, patient: Patient) -> None:
        self._patient = patient

    def execute(self, model: AbstractModel) -> CommandResult:
        if model.has_patient_with_nric(self._patient.nric):
            raise CommandError(messages.DUPLICATE_PATIENT)
        model.add_patient(self._patient)
        return CommandResult(feedback=f"New patient added: {format_patient(self._patient)}")


class EditPatientDescriptor(BaseModel):
    """Fields to change on a patient; ``None`` leaves a field as it is."""

    model_config = ConfigDict(frozen=True)

    name: Name | None = None
    nric: Nric | None = None
    gender: Gender | None = None
    dob: dt.date | None = None
    phone: Phone | None = None
    email: Email | None = None
    address: Address | None = None

    def is_any_field_edited(self) -> bool:
        return bool(self.model_dump(exclude_none=True))

    def apply_to(self, patient: Patient) -> Patient:
        return Patient.model_validate(
            {**patient.model_dump(), **self.model_dump(exclude_none=True)}
        )


class EditPatientCommand(Command):
    """Edits the details of the patient with the given NRIC.

    Changing the NRIC moves the patient's appointments to the new NRIC.
    """

    COMMAND_WORD = "editpatient"

    def __init__(self, nric: str, descriptor: EditPatientDescriptor) -> None:
        self._nric = nric
        self._descriptor = descriptor

    def execute(self, model: AbstractModel) -> CommandResult:
        if not self._descriptor.is_any_field_edited():
            raise CommandError(messages.NOTHING_EDITED)
        if not model.has_patient_with_nric(self._nric):
            raise CommandError(messages.PATIENT_NOT_FOUND)

        target = model.get_patient_with_nric(self._nric)
        try:
            edited = self._descriptor.apply_to(target)
        except ValidationError as exc:
            raise CommandError(exc.errors()[0]["msg"]) from exc

        try:
            model.set_patient(target, edited)
        except DuplicatePatientError as exc:
            raise CommandError(messages.DUPLICATE_PATIENT) from exc
        except InvalidAppointmentDateError as exc:
            raise CommandError(messages.DOB_AFTER_APPOINTMENT) from exc

        return CommandResult(feedback=f"Edited patient: {format_patient(edited)}")


class DeletePatientCommand(Command):
    """Deletes a patient and every appointment they have."""

    COMMAND_WORD = "deletepatient"

    def __init__(self, nric: str) -> None:
        self._nric = nric

    def execute(self, model: AbstractModel) -> CommandResult:
        try:
            deleted = model.delete_patient_with_nric(self._nric)
        except PatientNotFoundError as exc:
            raise CommandError(messages.PATIENT_NOT_FOUND) from exc
        return CommandResult(feedback=f"Deleted patient: {format_patient(deleted)}")


class FindPatientCommand(Command):
    COMMAND_WORD = "find"
    MUTATES = False

    def __init__(self, predicate: NameContainsKeywordsPredicate) -> None:
        self._predicate = predicate

    def execute(self, model: AbstractModel) -> CommandResult:
        model.update_filtered_patient_list(self._predicate)
        count = len(model.filtered_patients)
        logger.debug("find matched {} patient(s)", count)
        return CommandResult(feedback=messages.PATIENTS_LISTED.format(count=count))
