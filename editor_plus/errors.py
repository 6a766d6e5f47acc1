"""Domain errors raised by the store, the sanitizer and the admin guards."""


class EditorError(Exception):
    """Base class. `message` is safe to show to the operator."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EditorError):
    """A required field is empty after sanitization. Nothing was written."""

    def __init__(self, message: str, field: str = ""):
        super().__init__(message)
        self.field = field


class NotFoundError(EditorError):
    """The record id does not exist for this kind."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind.replace('_', ' ').capitalize()} not found.")
        self.kind = kind
        self.record_id = record_id


class AccessDenied(EditorError):
    """Missing operator token or invalid anti-forgery nonce."""
