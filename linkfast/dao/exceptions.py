from linkfast.exceptions import LinkFastError


class DAOError(LinkFastError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Raised when a URLRecord is not found in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Raised when inserting a URLRecord whose short code is already taken."""

    error_code = 'dao:short_url_already_exists_error'


class TargetURLAlreadyExistsError(DAOError):
    """Raised when inserting a URLRecord whose target URL is already in the reverse index.

    The short code the target URL is already mapped to is kept in `shortcode`.
    """

    error_code = 'dao:target_url_already_exists_error'

    def __init__(self, message: str, shortcode: str):
        super().__init__(message)
        self.shortcode = shortcode


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, and out-of-memory failures.
    """

    error_code = 'dao:data_store_error'


class TransactionConflictError(DataStoreError):
    """Raised when an optimistic transaction keeps losing to concurrent writers."""

    error_code = 'dao:transaction_conflict_error'


class CacheMissError(DAOError):
    """Raised when a requested cache entry is missing or expired."""

    error_code = 'dao:cache_miss_error'
