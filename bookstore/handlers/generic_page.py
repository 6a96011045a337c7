from __future__ import annotations

from bookstore.handlers.base import GenericHandler, HandlerRequest, HandlerResponse

PAGE_LINES = (
    "<html>",
    "<head><title>Generic Servlet Example</title></head>",
    "<body>",
    "<h2>Welcome to the Generic Servlet Example</h2>",
    "</body>",
    "</html>",
)


class GenericPageHandler(GenericHandler):
    """Serves the same static HTML page for every request."""

    def setup(self) -> None:
        pass

    def service(self, request: HandlerRequest, response: HandlerResponse) -> None:
        response.set_content_type("text/html")
        out = response.get_writer()
        for line in PAGE_LINES:
            out.println(line)

    def destroy(self) -> None:
        pass
