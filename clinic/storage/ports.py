from typing import Protocol

from clinic.model.address_book import AddressBook
from clinic.model.ports import ReadOnlyAddressBook


class StorageProtocol(Protocol):
    """Loads and saves a snapshot of every patient and appointment."""

    def load(self) -> AddressBook | None:
        """Rebuild the records from the stored snapshot.

        Returns:
            The loaded records, or None if no snapshot has been saved yet.

        Raises:
            DataLoadingError: If the snapshot is unreadable or any record in it is invalid.
        """
        ...

    def save(self, address_book: ReadOnlyAddressBook) -> None:
        """Overwrite the stored snapshot with ``address_book``."""
        ...
