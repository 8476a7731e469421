# src/remediator/server/middleware.py
"""
Output capture for WSGI hosts.

The middleware buffers a complete text/html response, hands it to the
remediation pipeline once and emits the result.
"""
import logging
from typing import Any, Callable, Iterable, List, Optional, Tuple

from flask import Flask

from remediator.controllers.remediation_controller import RemediationController
from remediator.managers.config_manager import config_manager

logger = logging.getLogger(__name__)

Headers = List[Tuple[str, str]]


class OutputCapture:
    """
    Scope of one captured response body. The wrapped iterable is closed
    exactly once, however the iteration ends.
    """

    def __init__(self, app_iter: Iterable[bytes]):
        self._app_iter = app_iter
        self._closed = False

    def __enter__(self) -> "OutputCapture":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        close = getattr(self._app_iter, "close", None)
        if close is not None:
            close()


def _header(headers: Headers, name: str) -> Optional[str]:
    for key, value in headers:
        if key.lower() == name:
            return value
    return None


def _charset(content_type: str) -> str:
    for part in content_type.split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip('"\'')
    return "utf-8"


class RemediationMiddleware:
    """WSGI middleware running the remediation pipeline over full HTML pages."""

    def __init__(self, wsgi_app: Callable, controller: Optional[RemediationController] = None):
        self.wsgi_app = wsgi_app
        self.controller = controller or RemediationController()

    @staticmethod
    def _is_html(headers: Headers) -> bool:
        content_type = (_header(headers, "content-type") or "").lower()
        # Compressed bodies cannot be rewritten as text.
        return content_type.startswith("text/html") and _header(headers, "content-encoding") is None

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        state: dict = {}
        written: List[bytes] = []

        def capture(status: str, headers: Headers, exc_info: Any = None):
            state.update(status=status, headers=list(headers), exc_info=exc_info)
            return written.append

        app_iter = self.wsgi_app(environ, capture)

        # Headers already known and not HTML: pass the response through.
        if "status" in state and not self._is_html(state["headers"]):
            write = start_response(state["status"], state["headers"], state["exc_info"])
            for chunk in written:
                write(chunk)
            return app_iter

        with OutputCapture(app_iter):
            for chunk in app_iter:
                written.append(chunk)

        body = b"".join(written)
        headers = state.get("headers", [])
        if self._is_html(headers):
            body = self._remediate(body, headers)
            headers = [(k, v) for k, v in headers if k.lower() != "content-length"]
            headers.append(("Content-Length", str(len(body))))

        start_response(state.get("status", "200 OK"), headers, state.get("exc_info"))
        return [body]

    def _remediate(self, body: bytes, headers: Headers) -> bytes:
        charset = _charset(_header(headers, "content-type") or "")
        try:
            html = body.decode(charset)
        except (LookupError, UnicodeDecodeError) as e:
            logger.warning("Could not decode response body as %s, leaving it unchanged: %s", charset, e)
            return body

        try:
            return self.controller.process(html).encode(charset)
        except Exception as e:
            logger.error("Remediation failed, emitting original body: %s", e, exc_info=True)
            return body


def init_app(flask_app: Flask, controller: Optional[RemediationController] = None) -> RemediationController:
    """
    Installs the remediation middleware on a Flask application.
    Without an explicit controller one is built from settings.json.
    """
    if controller is None:
        controller = RemediationController.from_settings(config_manager.load_settings())

    flask_app.wsgi_app = RemediationMiddleware(flask_app.wsgi_app, controller)
    flask_app.extensions["remediator"] = controller
    return controller
