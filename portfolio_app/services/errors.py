"""Exceptions raised by the content services."""


class PortfolioError(Exception):
    """Base class for content service errors."""


class BackendUnavailableError(PortfolioError, RuntimeError):
    """The backend is not configured, so writes cannot be performed."""


class RecordNotFoundError(PortfolioError, LookupError):
    """A fetch-by-id found no matching document."""


class BackendError(PortfolioError, RuntimeError):
    """Any other failure reported by the backend."""


class OrderConflictError(PortfolioError):
    """The order values changed between reading and writing a reorder."""


class InvalidCredentialsError(PortfolioError):
    """Email or password did not match the admin account."""
