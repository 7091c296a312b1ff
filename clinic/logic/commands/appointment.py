import datetime as dt
from typing import ClassVar

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError

from clinic.domain.exceptions import CommandError, InvalidAppointmentDateError
from clinic.domain.formatting import format_appointment
from clinic.domain.models import Appointment, AppointmentType, Note, TimePeriod
from clinic.logic import messages
from clinic.logic.commands.base import Command, CommandResult
from clinic.model.ports import AbstractModel
from clinic.model.predicates import AppointmentViewMatchesPredicate, show_all


class AddAppointmentCommand(Command):
    """Books an appointment for an existing patient.

    Rejects appointments that overlap another one of the same patient.
    """

    COMMAND_WORD = "addappt"

    def __init__(self, appointment: Appointment) -> None:
        self._appointment = appointment

    def execute(self, model: AbstractModel) -> CommandResult:
        appointment = self._appointment
        if not model.has_patient_with_nric(appointment.nric):
            raise CommandError(messages.PATIENT_NOT_FOUND)
        if model.has_appointment(appointment):
            raise CommandError(messages.DUPLICATE_APPOINTMENT)
        if model.has_overlapping_appointment(appointment):
            raise CommandError(messages.OVERLAPPING_APPOINTMENT)

        try:
            model.add_appointment(appointment)
        except InvalidAppointmentDateError as exc:
            raise CommandError(messages.APPOINTMENT_BEFORE_DOB) from exc

        return CommandResult(feedback=f"New appointment added: {format_appointment(appointment)}")


class EditAppointmentDescriptor(BaseModel):
    """Fields to change on an appointment; ``None`` leaves a field as it is."""

    model_config = ConfigDict(frozen=True)

    date: dt.date | None = None
    time_period: TimePeriod | None = None
    appointment_type: AppointmentType | None = None
    note: Note | None = None

    def is_any_field_edited(self) -> bool:
        return bool(self.model_dump(exclude_none=True))

    def apply_to(self, appointment: Appointment) -> Appointment:
        return Appointment.model_validate(
            {**appointment.model_dump(), **self.model_dump(exclude_none=True)}
        )


class _TargetedAppointmentCommand(Command):
    """Base for commands addressing one appointment by NRIC, date and time period."""

    def __init__(self, nric: str, date: dt.date, time_period: TimePeriod) -> None:
        self._nric = nric
        self._date = date
        self._time_period = time_period

    def _find_target(self, model: AbstractModel) -> Appointment:
        if not model.has_patient_with_nric(self._nric):
            raise CommandError(messages.PATIENT_NOT_FOUND)
        target = model.find_appointment(self._nric, self._date, self._time_period)
        if target is None:
            raise CommandError(messages.APPOINTMENT_NOT_FOUND)
        return target


class EditAppointmentCommand(_TargetedAppointmentCommand):
    COMMAND_WORD = "editappt"

    def __init__(
        self,
        nric: str,
        date: dt.date,
        time_period: TimePeriod,
        descriptor: EditAppointmentDescriptor,
    ) -> None:
        super().__init__(nric, date, time_period)
        self._descriptor = descriptor

    def execute(self, model: AbstractModel) -> CommandResult:
        if not self._descriptor.is_any_field_edited():
            raise CommandError(messages.NOTHING_EDITED)
        target = self._find_target(model)
        try:
            edited = self._descriptor.apply_to(target)
        except ValidationError as exc:
            raise CommandError(exc.errors()[0]["msg"]) from exc

        if not target.is_same_appointment(edited) and model.has_appointment(edited):
            raise CommandError(messages.DUPLICATE_APPOINTMENT)
        if model.has_overlapping_appointment(edited, excluding=target):
            raise CommandError(messages.OVERLAPPING_APPOINTMENT)

        try:
            model.set_appointment(target, edited)
        except InvalidAppointmentDateError as exc:
            raise CommandError(messages.APPOINTMENT_BEFORE_DOB) from exc

        return CommandResult(feedback=f"Edited appointment: {format_appointment(edited)}")


class DeleteAppointmentCommand(_TargetedAppointmentCommand):
    COMMAND_WORD = "deleteappt"

    def execute(self, model: AbstractModel) -> CommandResult:
        target = self._find_target(model)
        model.delete_appointment(target)
        return CommandResult(feedback=f"Deleted appointment: {format_appointment(target)}")


class MarkCommand(_TargetedAppointmentCommand):
    """Marks an appointment as completed and shows every appointment again."""

    COMMAND_WORD = "mark"
    MARK: ClassVar[bool] = True
    SUCCESS: ClassVar[str] = "Appointment successfully marked as seen: {}"

    def execute(self, model: AbstractModel) -> CommandResult:
        target = self._find_target(model)
        updated = target.with_mark(self.MARK)
        model.set_appointment(target, updated)
        model.update_filtered_appointment_view_list(show_all)
        logger.debug("{} set mark={} on appointment", self.COMMAND_WORD, self.MARK)
        return CommandResult(feedback=self.SUCCESS.format(format_appointment(updated)))


class UnmarkCommand(MarkCommand):
    """Marks an appointment as not completed."""

    COMMAND_WORD = "unmark"
    MARK = False
    SUCCESS = "Appointment successfully unmarked: {}"


class FindAppointmentCommand(Command):
    COMMAND_WORD = "findappt"
    MUTATES = False

    def __init__(self, predicate: AppointmentViewMatchesPredicate) -> None:
        self._predicate = predicate

    def execute(self, model: AbstractModel) -> CommandResult:
        model.update_filtered_appointment_view_list(self._predicate)
        count = len(model.filtered_appointment_views)
        return CommandResult(feedback=messages.APPOINTMENTS_LISTED.format(count=count))
