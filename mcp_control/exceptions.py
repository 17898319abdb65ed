"""
Exceptions
==========

Error hierarchy for the automation server.

Configuration errors (double attach, invalid buffer size, unknown provider)
propagate to the caller. Client delivery and provider failures are contained
by the component that observes them.
"""


class MCPControlError(Exception):
    """Base class for all server errors."""


class TransportError(MCPControlError):
    """Streaming transport misconfiguration."""


class TransportAlreadyAttachedError(TransportError):
    """Raised when a transport is attached to an application more than once."""

    def __init__(self, path: str):
        super().__init__(f"SSE transport is already attached (route {path})")
        self.path = path


class ClientWriteError(MCPControlError):
    """Raised when a chunk cannot be delivered to a connected client."""


class ProviderError(MCPControlError):
    """Automation backend failure."""


class UnknownProviderError(ProviderError):
    """Raised when a provider name is not registered."""

    def __init__(self, component: str, name: str, available: list[str]):
        super().__init__(
            f"Unknown {component} provider: {name!r}. Available: {', '.join(available) or 'none'}"
        )
        self.component = component
        self.name = name
        self.available = available


class UnsupportedOperationError(ProviderError):
    """Raised when a backend cannot perform an operation on this platform."""
