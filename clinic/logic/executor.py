from loguru import logger

from clinic.domain.exceptions import CommandError
from clinic.logic import messages
from clinic.logic.commands.base import Command, CommandResult
from clinic.model.ports import AbstractModel
from clinic.storage.ports import StorageProtocol


class CommandExecutor:
    """Runs commands against the model and saves the records after each change."""

    def __init__(self, model: AbstractModel, storage: StorageProtocol) -> None:
        self._model = model
        self._storage = storage

    @property
    def model(self) -> AbstractModel:
        return self._model

    def execute(self, command: Command) -> CommandResult:
        """Run ``command`` and save the records if it changed them.

        A failed save does not roll the change back: the result is marked
        unsuccessful and its feedback says the change is only held in memory.
        """
        logger.debug("Running command: {}", command.COMMAND_WORD)

        try:
            result = command.execute(self._model)
        except CommandError as exc:
            return CommandResult(feedback=str(exc), success=False)
        except Exception:
            logger.exception("Unexpected error in {}", command.COMMAND_WORD)
            return CommandResult(feedback=messages.UNEXPECTED_ERROR, success=False)

        if command.MUTATES:
            try:
                self._storage.save(self._model.address_book)
            except OSError as exc:
                logger.error("Could not save records: {}", exc)
                return CommandResult(
                    feedback=f"{result.feedback}\n{messages.CHANGE_NOT_SAVED.format(error=exc)}",
                    success=False,
                )

        return result
