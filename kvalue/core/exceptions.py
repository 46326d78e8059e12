"""Custom exceptions for the key-value abstraction."""

from typing import Any, Optional


class KValueError(Exception):
    """Base exception for key-value errors."""

    def __init__(self, message: str, namespace: str = "kvalue") -> None:
        """Initialize error.

        Args:
            message: Error message
            namespace: Table or adapter namespace the error belongs to
        """
        self.namespace = namespace
        super().__init__(f"[{namespace}] {message}")


class ValidationError(KValueError):
    """Raised when a key, lifetime or limiter argument is malformed."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        index: Optional[int] = None,
        namespace: str = "kvalue",
    ) -> None:
        """Initialize error.

        Args:
            message: Error message
            value: The offending value
            index: Position of the offending element in a key sequence
            namespace: Table or adapter namespace
        """
        self.value = value
        self.index = index
        if index is not None:
            message = f"{message} (index {index}: {value!r})"
        else:
            message = f"{message} (got {value!r})"
        super().__init__(message, namespace=namespace)


class ConfigurationError(KValueError):
    """Raised when an adapter cannot be configured (engine, table, driver)."""

    pass


class AdapterStateError(KValueError):
    """Raised when a persistent adapter is used before configure() or after close()."""

    pass


class SerializationError(KValueError):
    """Raised when a stored payload cannot be decoded."""

    pass
