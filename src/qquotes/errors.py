class QuotesError(Exception):
    """Base class for every error qquotes reports at the command line."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(QuotesError):
    pass


class StoreError(QuotesError):
    pass


StoreIOError = StoreError


class NotFoundError(StoreError):
    def __init__(self, record_id: str, message: str | None = None):
        super().__init__(message or f"No record found with id {record_id}")
        self.record_id = record_id


class RepositoryError(QuotesError):
    pass


class QuoteNotFoundError(RepositoryError, NotFoundError):
    def __init__(self, quote_id: str):
        NotFoundError.__init__(self, quote_id, f"No quote found with id {quote_id}")
        self.quote_id = quote_id


class InputError(QuotesError):
    pass
