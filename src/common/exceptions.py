from typing import Optional


class TrafficError(Exception):
    """Base exception for all corridor traffic errors."""
    pass

class ConfigurationError(TrafficError):
    """Raised when configuration is invalid."""
    pass

class ProviderError(TrafficError):
    """
    Raised when a call to the traffic provider fails.

    ``retriable`` is True for timeouts, transport errors and 5xx responses.
    """
    def __init__(self, message: str, status_code: Optional[int] = None, retriable: bool = False):
        super().__init__(message)
        self.status_code = status_code
        self.retriable = retriable

class MalformedResponseError(ProviderError):
    """Raised when the provider answers with a body we cannot read."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message, status_code=status_code, retriable=False)

class PersistenceError(TrafficError):
    """Raised when a traffic sample cannot be stored."""
    pass
