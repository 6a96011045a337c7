from __future__ import annotations

from typing import Optional

from bookstore.handlers.base import HandlerConfig, HandlerRequest, HandlerResponse


class HelloWorldHandler:
    """Smallest possible handler: answers every request with one line of text."""

    def __init__(self) -> None:
        self._config: Optional[HandlerConfig] = None

    def init(self, config: HandlerConfig) -> None:
        self._config = config

    def get_config(self) -> Optional[HandlerConfig]:
        return self._config

    def service(self, request: HandlerRequest, response: HandlerResponse) -> None:
        response.set_content_type("text/plain")
        out = response.get_writer()
        out.println("Hello, World!")

    def get_info(self) -> str:
        return "HelloWorldHandler"

    def destroy(self) -> None:
        # nothing to release
        pass
