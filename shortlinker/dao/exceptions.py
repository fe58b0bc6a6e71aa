"""Exceptions related to Data Access Objects (DAO) operations.

Every exception carries an explicit `kind` (see OutcomeKind) which callers
match on to decide how to present the failure. Only ShortLinkNotFoundError
is a classified, client-visible outcome; everything else maps to a generic
internal failure.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a URL or Detail Record is not found in the data store
        (never allocated or TTL-expired).

    BackendUnavailableError:
        Raised when the key-value store can't be reached or returns an
        unexpected error (connection issues, timeouts, OOM, etc.).

    CorruptRecordError:
        Raised when a stored record can't be decoded.

Example:
    >>> from shortlinker.dao.exceptions import ShortLinkNotFoundError
    >>> raise ShortLinkNotFoundError("Short link with code 'abc' not found.")
    Traceback (most recent call last):
        ...
    shortlinker.dao.exceptions.ShortLinkNotFoundError: Short link with code 'abc' not found.
"""

from shortlinker.constants import OutcomeKind
from shortlinker.exceptions import ShortLinkerError


class DAOError(ShortLinkerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a short link record is not found in the data store."""

    error_code = 'dao:short_link_not_found_error'
    kind = OutcomeKind.NOT_FOUND


class BackendUnavailableError(DAOError):
    """Exception raised when the key-value store is unreachable or misbehaves.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:backend_unavailable_error'
    kind = OutcomeKind.BACKEND_UNAVAILABLE


class CorruptRecordError(DAOError):
    """Exception raised when a stored record can't be decoded."""

    error_code = 'dao:corrupt_record_error'
