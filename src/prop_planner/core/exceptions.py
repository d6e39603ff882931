"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class PersistenceError(AppError):
    """Raised when the persistence service rejects or fails a request."""

    def __init__(self, action: str, detail: str):
        self.action = action
        self.detail = detail
        super().__init__(f"Failed to {action} account: {detail}", code="PERSISTENCE_ERROR")


class MalformedResponseError(AppError):
    """Raised when an external collaborator returns an unusable payload."""

    def __init__(self, source: str, detail: str):
        super().__init__(f"Malformed response from {source}: {detail}", code="MALFORMED_RESPONSE")


class ScheduleError(AppError):
    """Raised when a schedule cannot be generated on request."""

    def __init__(self, message: str):
        super().__init__(message, code="NO_ACTIVE_ACCOUNTS")


class OptimizerError(AppError):
    """Raised when the schedule optimizer call fails."""

    def __init__(self, detail: str):
        super().__init__(f"Schedule optimization failed: {detail}", code="OPTIMIZER_ERROR")


class AnalyzerError(AppError):
    """Raised when the trade-history analyzer call fails."""

    def __init__(self, detail: str):
        super().__init__(f"Trade history analysis failed: {detail}", code="ANALYZER_ERROR")
