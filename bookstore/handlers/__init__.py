"""Bookstore - Handlers Package

This package contains the container-managed request handlers:
- Request/response abstractions and the handler contract
- Hello world handler (plain text)
- Generic page handler (static HTML)
"""

from bookstore.handlers.base import (
    GenericHandler,
    HandlerConfig,
    HandlerError,
    HandlerIOError,
    HandlerRequest,
    HandlerResponse,
    HandlerUnavailableError,
    RequestHandler,
    ResponseWriter,
)
from bookstore.handlers.generic_page import GenericPageHandler
from bookstore.handlers.hello_world import HelloWorldHandler

__all__ = [
    "GenericHandler",
    "GenericPageHandler",
    "HandlerConfig",
    "HandlerError",
    "HandlerIOError",
    "HandlerRequest",
    "HandlerResponse",
    "HandlerUnavailableError",
    "HelloWorldHandler",
    "RequestHandler",
    "ResponseWriter",
]
