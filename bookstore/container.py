"""Handler container: instantiates handlers, drives their lifecycle and
dispatches requests to them by path.

Each handler is initialized once in ``start()``, serviced any number of
times through ``dispatch()`` and destroyed once in ``shutdown()``.
Exceptions raised by a handler are logged and re-raised unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from bookstore.config import Settings, settings as default_settings
from bookstore.handlers.base import (
    HandlerConfig,
    HandlerRequest,
    HandlerResponse,
    HandlerUnavailableError,
    RequestHandler,
)
from bookstore.handlers.generic_page import GenericPageHandler
from bookstore.handlers.hello_world import HelloWorldHandler

logger = logging.getLogger(__name__)


class ContainerState(Enum):
    NEW = "new"
    STARTED = "started"
    DESTROYED = "destroyed"


@dataclass
class HandlerRegistration:
    path: str
    factory: Callable[[], RequestHandler]
    name: str
    init_params: Dict[str, str] = field(default_factory=dict)
    handler: Optional[RequestHandler] = None


class HandlerContainer:
    """Owns the handlers mounted on a set of paths."""

    def __init__(self, context: Optional[Dict[str, object]] = None) -> None:
        self.context: Dict[str, object] = dict(context or {})
        self.state = ContainerState.NEW
        self._registrations: Dict[str, HandlerRegistration] = {}
        self._started: List[HandlerRegistration] = []

    # ------------------------- Registration ------------------------- #
    def register(self, path: str, factory: Callable[[], RequestHandler],
                 init_params: Optional[Dict[str, str]] = None, name: Optional[str] = None) -> HandlerRegistration:
        if path in self._registrations:
            raise ValueError(f"A handler is already registered for {path}.")
        if self.state is not ContainerState.NEW:
            raise HandlerUnavailableError("Handlers can only be registered before the container starts.")

        registration = HandlerRegistration(
            path=path,
            factory=factory,
            name=name or getattr(factory, "__name__", path),
            init_params=dict(init_params or {}),
        )
        self._registrations[path] = registration
        logger.info(f"Registered handler {registration.name} at {path}")
        return registration

    def get_handler(self, path: str) -> Optional[RequestHandler]:
        registration = self._registrations.get(path)
        return registration.handler if registration else None

    def has_path(self, path: str) -> bool:
        return path in self._registrations

    def describe(self) -> List[Dict[str, str]]:
        rows = []
        for registration in self._registrations.values():
            handler = registration.handler
            rows.append({
                "path": registration.path,
                "name": registration.name,
                "info": handler.get_info() if handler is not None else "",
            })
        return rows

    # ------------------------- Lifecycle ------------------------- #
    def start(self) -> None:
        if self.state is ContainerState.STARTED:
            return
        if self.state is ContainerState.DESTROYED:
            raise HandlerUnavailableError("Container has been shut down.")

        for registration in self._registrations.values():
            handler = registration.factory()
            config = HandlerConfig(
                name=registration.name,
                init_params=dict(registration.init_params),
                context=self.context,
            )
            try:
                handler.init(config)
            except Exception:
                logger.exception(f"Handler {registration.name} failed to initialize")
                self._destroy_started()
                self.state = ContainerState.DESTROYED
                raise
            registration.handler = handler
            self._started.append(registration)

        self.state = ContainerState.STARTED
        logger.info(f"Container started with {len(self._started)} handler(s)")

    def dispatch(self, path: str, request: Optional[HandlerRequest] = None) -> Optional[HandlerResponse]:
        """Service one request; returns None when no handler owns the path."""
        if self.state is not ContainerState.STARTED:
            raise HandlerUnavailableError(f"Container is {self.state.value}; cannot service {path}.")

        registration = self._registrations.get(path)
        if registration is None or registration.handler is None:
            return None

        request = request or HandlerRequest(path=path)
        response = HandlerResponse()
        try:
            registration.handler.service(request, response)
        except Exception:
            logger.exception(f"Handler {registration.name} failed while servicing {path}")
            raise
        finally:
            response.get_writer().close()
        return response

    def shutdown(self) -> None:
        if self.state is ContainerState.DESTROYED:
            return
        self._destroy_started()
        self.state = ContainerState.DESTROYED
        logger.info("Container shut down")

    def _destroy_started(self) -> None:
        while self._started:
            registration = self._started.pop()
            try:
                registration.handler.destroy()
            except Exception:
                # keep releasing the remaining handlers
                logger.exception(f"Handler {registration.name} failed to destroy")
            registration.handler = None

    def __enter__(self) -> "HandlerContainer":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()


def build_default_container(settings: Optional[Settings] = None) -> HandlerContainer:
    """Container with the hello world and generic page handlers mounted."""
    settings = settings or default_settings
    container = HandlerContainer(context={"app_name": settings.app_name, "app_version": settings.app_version})
    container.register(settings.hello_path, HelloWorldHandler, name="HelloWorldHandler")
    container.register(settings.generic_path, GenericPageHandler, name="GenericPageHandler")
    return container
