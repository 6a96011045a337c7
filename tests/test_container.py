from unittest.mock import MagicMock

import pytest

from bookstore.container import ContainerState, HandlerContainer, build_default_container
from bookstore.handlers import HandlerConfig, HandlerRequest, HandlerUnavailableError, HelloWorldHandler


def _mock_handler(name="mock"):
    handler = MagicMock()
    handler.get_info.return_value = name
    return handler


def test_dispatch_hello(container):
    response = container.dispatch("/hello", HandlerRequest(path="/hello"))
    assert response.content_type == "text/plain"
    assert response.body == "Hello, World!\n"


def test_dispatch_generic(container):
    response = container.dispatch("/generic")
    assert response.content_type == "text/html"
    assert "Welcome to the Generic Servlet Example" in response.body


def test_dispatch_unknown_path_returns_none(container):
    assert container.dispatch("/missing") is None


def test_each_dispatch_gets_fresh_response(container):
    first = container.dispatch("/hello")
    second = container.dispatch("/hello")
    assert first is not second
    assert second.body == "Hello, World!\n"


def test_lifecycle_init_once_destroy_once():
    handler = _mock_handler()
    container = HandlerContainer(context={"env": "test"})
    container.register("/mock", lambda: handler, init_params={"k": "v"}, name="mock")

    container.start()
    container.start()
    container.dispatch("/mock")
    container.dispatch("/mock")
    container.shutdown()
    container.shutdown()

    handler.init.assert_called_once()
    config = handler.init.call_args[0][0]
    assert isinstance(config, HandlerConfig)
    assert config.name == "mock"
    assert config.get_init_parameter("k") == "v"
    assert config.context == {"env": "test"}
    assert handler.service.call_count == 2
    handler.destroy.assert_called_once()
    assert container.state is ContainerState.DESTROYED


def test_dispatch_before_start_is_unavailable():
    container = build_default_container()
    with pytest.raises(HandlerUnavailableError):
        container.dispatch("/hello")


def test_dispatch_after_shutdown_is_unavailable(container):
    container.shutdown()
    with pytest.raises(HandlerUnavailableError):
        container.dispatch("/hello")
    with pytest.raises(HandlerUnavailableError):
        container.start()


def test_duplicate_path_rejected():
    container = HandlerContainer()
    container.register("/hello", HelloWorldHandler)
    with pytest.raises(ValueError, match="already registered"):
        container.register("/hello", HelloWorldHandler)


def test_register_after_start_rejected(container):
    with pytest.raises(HandlerUnavailableError):
        container.register("/late", HelloWorldHandler)


def test_service_failure_propagates_unchanged():
    handler = _mock_handler()
    handler.service.side_effect = IOError("disk full")
    container = HandlerContainer()
    container.register("/boom", lambda: handler, name="boom")
    container.start()

    with pytest.raises(IOError, match="disk full"):
        container.dispatch("/boom")
    container.shutdown()


def test_init_failure_destroys_started_handlers():
    first = _mock_handler("first")
    broken = _mock_handler("broken")
    broken.init.side_effect = RuntimeError("no config")
    container = HandlerContainer()
    container.register("/first", lambda: first, name="first")
    container.register("/broken", lambda: broken, name="broken")

    with pytest.raises(RuntimeError, match="no config"):
        container.start()

    first.destroy.assert_called_once()
    broken.destroy.assert_not_called()
    assert container.state is ContainerState.DESTROYED


def test_shutdown_destroys_in_reverse_order():
    order = []
    container = HandlerContainer()
    for name in ("a", "b", "c"):
        handler = _mock_handler(name)
        handler.destroy.side_effect = lambda n=name: order.append(n)
        container.register(f"/{name}", lambda h=handler: h, name=name)
    container.start()
    container.shutdown()
    assert order == ["c", "b", "a"]


def test_describe_reports_info(container):
    rows = {row["path"]: row for row in container.describe()}
    assert rows["/hello"] == {"path": "/hello", "name": "HelloWorldHandler", "info": "HelloWorldHandler"}
    assert rows["/generic"]["name"] == "GenericPageHandler"


def test_context_manager_runs_lifecycle():
    container = build_default_container()
    with container:
        assert container.state is ContainerState.STARTED
        assert container.get_handler("/hello") is not None
    assert container.state is ContainerState.DESTROYED
    assert container.get_handler("/hello") is None
