"""Request/response abstractions and the handler lifecycle contract.

A handler is driven by a container: ``init(config)`` once, ``service`` any
number of times, ``destroy()`` once. Handlers never catch the failures
raised here; they propagate to whoever called ``service``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class HandlerError(Exception):
    """Failure raised by the container around a handler."""


class HandlerUnavailableError(HandlerError):
    """The handler is not initialized yet or has already been destroyed."""


class HandlerIOError(HandlerError, IOError):
    """Writing to the response stream failed."""


@dataclass
class HandlerConfig:
    """Opaque configuration handed to a handler at init time."""

    name: str
    init_params: Dict[str, str] = field(default_factory=dict)
    context: Dict[str, Any] = field(default_factory=dict)

    def get_init_parameter(self, name: str) -> Optional[str]:
        return self.init_params.get(name)


@dataclass
class HandlerRequest:
    method: str = "GET"
    path: str = "/"
    query_params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class ResponseWriter:
    """Text stream over a response body."""

    def __init__(self) -> None:
        self._chunks: List[str] = []
        self.closed = False

    def write(self, text: str) -> None:
        if self.closed:
            raise HandlerIOError("Response stream is closed.")
        self._chunks.append(text)

    def println(self, text: str = "") -> None:
        self.write(text + "\n")

    def close(self) -> None:
        self.closed = True

    def getvalue(self) -> str:
        return "".join(self._chunks)


class HandlerResponse:
    def __init__(self) -> None:
        self.content_type: Optional[str] = None
        self.status_code = 200
        self._writer = ResponseWriter()

    def set_content_type(self, content_type: str) -> None:
        self.content_type = content_type

    def get_writer(self) -> ResponseWriter:
        return self._writer

    @property
    def body(self) -> str:
        return self._writer.getvalue()


@runtime_checkable
class RequestHandler(Protocol):
    """Capability set every container-managed handler provides."""

    def init(self, config: HandlerConfig) -> None: ...

    def get_config(self) -> Optional[HandlerConfig]: ...

    def service(self, request: HandlerRequest, response: HandlerResponse) -> None: ...

    def get_info(self) -> str: ...

    def destroy(self) -> None: ...


class GenericHandler(ABC):
    """Base for handlers that only care about ``service``.

    Stores the config on ``init(config)`` and then calls the ``setup()``
    hook, so subclasses override the hook instead of ``init`` itself.
    """

    def __init__(self) -> None:
        self._config: Optional[HandlerConfig] = None

    def init(self, config: HandlerConfig) -> None:
        self._config = config
        self.setup()

    def setup(self) -> None:
        pass

    def get_config(self) -> Optional[HandlerConfig]:
        return self._config

    def get_init_parameter(self, name: str) -> Optional[str]:
        if self._config is None:
            return None
        return self._config.get_init_parameter(name)

    @property
    def name(self) -> str:
        if self._config is None:
            return type(self).__name__
        return self._config.name

    def get_info(self) -> str:
        return ""

    def log(self, message: str) -> None:
        logger.info(f"{self.name}: {message}")

    @abstractmethod
    def service(self, request: HandlerRequest, response: HandlerResponse) -> None:
        ...

    def destroy(self) -> None:
        pass
