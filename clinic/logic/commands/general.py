from clinic.logic.commands.base import Command, CommandResult
from clinic.model.address_book import AddressBook
from clinic.model.ports import AbstractModel
from clinic.model.predicates import show_all


class ListCommand(Command):
    """Clears any filter so every patient and appointment is shown."""

    COMMAND_WORD = "list"
    MUTATES = False

    def execute(self, model: AbstractModel) -> CommandResult:
        model.update_filtered_patient_list(show_all)
        model.update_filtered_appointment_view_list(show_all)
        return CommandResult(feedback="Listed all patients and appointments")


class ClearCommand(Command):
    COMMAND_WORD = "clear"

    def execute(self, model: AbstractModel) -> CommandResult:
        model.reset_address_book(AddressBook())
        return CommandResult(feedback="All patient and appointment records have been cleared!")
