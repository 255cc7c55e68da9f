"""
Port interfaces (ABCs) for the http bounded context.

Ports define the contracts that the error pipeline requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from typing import Any, Callable, Optional, Union

from ssr_server.domain.http.entities import RequestInfo, SerializedError

# (error, request, reply) -> result | None, sync or async.
# A non-None result ends the chain and becomes the response.
ErrorHook = Callable[[BaseException, Any, Any], Union[Awaitable[Any], Any]]


class LoggerPort(ABC):
    """Port for emitting structured diagnostic records.

    Implementations must not raise.
    """

    @abstractmethod
    def info(
        self,
        *,
        event: str,
        message: str,
        error: Optional[BaseException] = None,
        request_info: Optional[RequestInfo] = None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def warn(
        self,
        *,
        event: str,
        message: str,
        error: Optional[BaseException] = None,
        request_info: Optional[RequestInfo] = None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def error(
        self,
        *,
        event: str,
        message: str,
        error: Optional[BaseException] = None,
        request_info: Optional[RequestInfo] = None,
    ) -> None:
        raise NotImplementedError


class AssetManifestPort(ABC):
    """Port for retrieving bundler output metadata."""

    @abstractmethod
    async def fetch(self) -> Mapping[str, Any]:
        """Return the bundler stats, keyed by entrypoint under `entrypoints`."""
        raise NotImplementedError


class FallbackComponent(ABC):
    """Port for the application-supplied root error boundary."""

    @abstractmethod
    async def render(self, *, error: SerializedError, url: Mapping[str, Any]) -> str:
        """Render the error boundary to a full HTML document.

        Args:
            error: Serialized error shown to the client.
            url: Parsed URL of the failed request.
        """
        raise NotImplementedError
