"""Service-layer error taxonomy.

Store errors raised by the driver (network, permission, malformed query) are
not wrapped; they reach the caller as-is.
"""


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code = 400

    def __init__(self, message: str | None = None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class BackendUnavailable(ServiceError):
    """The document store handle is not connected."""

    status_code = 503


class MissingTenantScope(ServiceError):
    """A school (and, where required, classroom) identifier is required."""

    status_code = 400


class NoScoresProvided(ServiceError):
    """No scores provided to save."""

    status_code = 400


class InvalidScore(ServiceError):
    """A submitted score is not a number."""

    status_code = 422

    def __init__(self, subject: str, value):
        super().__init__(f"Score for {subject!r} is not a number: {value!r}")
        self.subject = subject
        self.value = value


class RecordNotFound(ServiceError):
    """Record not found."""

    status_code = 404


class WriteConflict(ServiceError):
    """The record kept changing underneath this write; try again."""

    status_code = 409
