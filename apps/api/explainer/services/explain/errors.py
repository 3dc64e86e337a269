class ExplainError(RuntimeError):
    """Base class for failures that map to a client-visible error payload."""

    status_code = 500
    error_code = "unknown"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ExplainError):
    """The inbound payload is malformed or carries unsupported values."""

    status_code = 400
    error_code = "validation_error"


class ConfigError(ExplainError):
    """The server is missing configuration needed to reach the LLM provider."""

    status_code = 500
    error_code = "config_error"


class UpstreamFailure(ExplainError):
    """The completion request could not be delivered or answered."""

    status_code = 500
    error_code = "upstream_error"
