import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .errors import NotFoundError, QuoteNotFoundError, RepositoryError, StoreError
from .logs import TRACE, get_logger
from .storage.jsonfile import JsonStore


@dataclass(frozen=True)
class Quote:
    author: str
    quote: str

    def to_record(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_record(cls, record: Any) -> "Quote":
        if not isinstance(record, dict):
            raise RepositoryError(f"Stored quote is not an object: {record!r}")
        author, quote = record.get("author"), record.get("quote")
        if not (isinstance(author, str) and isinstance(quote, str)):
            raise RepositoryError(f"Stored quote is missing author or quote text: {record!r}")
        return cls(author=author, quote=quote)


class Repository:
    """Quote-shaped access to a JsonStore."""

    def __init__(self, store: JsonStore, logger: logging.Logger | None = None):
        self.store = store
        self.log = logger or get_logger()

    def save_quote(self, quote: Quote) -> Quote:
        """
        Persist a quote and return the copy read back from disk.

        The stored copy must equal the input; anything else means the
        record did not survive serialization and is reported as an error.
        """
        self.log.log(TRACE, "repository_save_quote %r", quote)
        try:
            quote_id = self.store.insert(quote.to_record())
            saved = Quote.from_record(self.store.get(quote_id))
        except StoreError as exc:
            raise RepositoryError(f"Could not save quote: {exc}") from exc
        if saved != quote:
            raise RepositoryError(f"Stored quote {quote_id} does not match: {saved!r} != {quote!r}")
        self.log.info("repository_saved_quote id: %s %r", quote_id, saved)
        return saved

    def get_quotes(self) -> Dict[str, Quote]:
        self.log.log(TRACE, "repository_get_quotes")
        try:
            records = self.store.get_all()
        except StoreError as exc:
            raise RepositoryError(f"Could not read quotes: {exc}") from exc
        return {quote_id: Quote.from_record(r) for quote_id, r in records.items()}

    def delete_quote(self, quote_id: str) -> None:
        self.log.log(TRACE, "repository_delete_quote id: %s", quote_id)
        try:
            self.store.delete(quote_id)
        except NotFoundError as exc:
            raise QuoteNotFoundError(quote_id) from exc
        except StoreError as exc:
            raise RepositoryError(f"Could not delete quote {quote_id}: {exc}") from exc
        self.log.info("repository_delete_quote id: %s", quote_id)

    def count_quotes(self) -> int:
        try:
            return self.store.count()
        except StoreError as exc:
            raise RepositoryError(f"Could not count quotes: {exc}") from exc
