from typing import Callable

from loguru import logger

from clinic.config import AppConfig, StorageBackend
from clinic.domain.exceptions import DataLoadingError
from clinic.logic.executor import CommandExecutor
from clinic.model.address_book import AddressBook
from clinic.model.manager import ModelManager
from clinic.storage.fake import InMemoryStorage
from clinic.storage.json_storage import JsonAddressBookStorage
from clinic.storage.ports import StorageProtocol


def _build_json(config: AppConfig) -> StorageProtocol:
    return JsonAddressBookStorage(config.data_file)


def _build_memory(config: AppConfig) -> StorageProtocol:
    return InMemoryStorage()


_BUILDERS: dict[StorageBackend, Callable[[AppConfig], StorageProtocol]] = {
    StorageBackend.JSON: _build_json,
    StorageBackend.MEMORY: _build_memory,
}


def build_storage(config: AppConfig) -> StorageProtocol:
    """Build the storage backend selected in config."""
    backend = config.storage
    logger.info("Building storage with backend: {}", backend.value)
    return _BUILDERS[backend](config)


def load_address_book(storage: StorageProtocol) -> AddressBook:
    """Load stored records, starting empty if there are none or they are corrupt."""
    try:
        book = storage.load()
    except DataLoadingError as exc:
        logger.warning("{}; starting with no records", exc)
        return AddressBook()
    return book if book is not None else AddressBook()


def build_executor(config: AppConfig) -> CommandExecutor:
    """Wire storage, model and executor together from config."""
    storage = build_storage(config)
    model = ModelManager(load_address_book(storage))
    return CommandExecutor(model, storage)
