from clinic.model.address_book import AddressBook
from clinic.model.ports import ReadOnlyAddressBook


class InMemoryStorage:
    """In-memory implementation of StorageProtocol, also used as a test double.

    Set ``snapshot`` to control what ``load`` returns.  Set ``load_error``
    or ``save_error`` to make the corresponding method raise.

    After calls, inspect ``saves`` to see how many times records were saved.
    """

    def __init__(self, snapshot: AddressBook | None = None) -> None:
        self.snapshot = snapshot
        self.saves: int = 0

        self.load_error: Exception | None = None
        self.save_error: Exception | None = None

    def load(self) -> AddressBook | None:
        if self.load_error:
            raise self.load_error
        if self.snapshot is None:
            return None
        return AddressBook.copy_of(self.snapshot)

    def save(self, address_book: ReadOnlyAddressBook) -> None:
        if self.save_error:
            raise self.save_error
        self.snapshot = AddressBook.copy_of(address_book)
        self.saves += 1
