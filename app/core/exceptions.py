"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""


class ValidationError(AppError):
    """Validation failure for operator input."""


class IntegrationError(AppError):
    """External integration call failure."""


class TransportError(IntegrationError):
    """The n8n server could not be reached (DNS, refused connection, reset)."""


class HttpStatusError(IntegrationError):
    """The n8n server answered with a non-success status."""

    def __init__(self, code: int, text: str):
        self.code = code
        self.text = text
        super().__init__(f"Erro {code}: {text}")


class NotConfiguredError(RuntimeError):
    """An API call was attempted before a credential was saved."""
