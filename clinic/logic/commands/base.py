from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from clinic.model.ports import AbstractModel


class CommandResult(BaseModel):
    """Outcome of a command, ready to be shown to the user."""

    model_config = ConfigDict(frozen=True)

    feedback: str
    success: bool = True


class Command(ABC):
    """A single user intent, built from already-validated values."""

    COMMAND_WORD: ClassVar[str]
    # Whether a successful run changes the records and should be persisted.
    MUTATES: ClassVar[bool] = True

    @abstractmethod
    def execute(self, model: AbstractModel) -> CommandResult:
        """Run the command against ``model``.

        Raises:
            CommandError: If the command cannot be carried out.
        """

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        fields = ", ".join(f"{k.lstrip('_')}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({fields})"
