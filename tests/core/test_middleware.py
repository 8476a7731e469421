# tests/core/test_middleware.py
import pytest
from flask import Flask, jsonify

from remediator.controllers.remediation_controller import RemediationController
from remediator.server.middleware import OutputCapture, RemediationMiddleware, init_app

PAGE = '<html><body><a href="https://github.com/me"></a></body></html>'


@pytest.fixture
def client():
    app = Flask(__name__)

    @app.route("/")
    def index():
        return PAGE

    @app.route("/fragment")
    def fragment():
        return '<a href="https://github.com/me"></a>'

    @app.route("/api")
    def api():
        return jsonify(html=PAGE)

    init_app(app, RemediationController())
    return app.test_client()


def test_html_pages_are_remediated(client):
    response = client.get("/")
    body = response.get_data(as_text=True)

    assert body == '<html><body><a aria-label="GitHub" href="https://github.com/me"></a></body></html>'
    assert response.headers["Content-Length"] == str(len(response.get_data()))


def test_fragments_and_json_pass_through(client):
    assert client.get("/fragment").get_data(as_text=True) == '<a href="https://github.com/me"></a>'
    assert client.get("/api").get_json() == {"html": PAGE}


def test_init_app_registers_the_controller():
    app = Flask(__name__)
    controller = init_app(app, RemediationController())
    assert app.extensions["remediator"] is controller
    assert isinstance(app.wsgi_app, RemediationMiddleware)


class ClosingBody:
    """WSGI body that counts how often it is closed."""

    def __init__(self, chunks):
        self.chunks = chunks
        self.closed = 0

    def __iter__(self):
        return iter(self.chunks)

    def close(self):
        self.closed += 1


def test_output_capture_closes_exactly_once():
    body = ClosingBody([b"x"])
    with OutputCapture(body) as span:
        list(body)
        span.close()
    assert span.closed
    assert body.closed == 1


def test_output_capture_closes_when_iteration_fails():
    body = ClosingBody([b"x"])
    with pytest.raises(RuntimeError):
        with OutputCapture(body):
            raise RuntimeError("client went away")
    assert body.closed == 1


def _call(middleware):
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status
        captured["headers"] = headers
        return lambda chunk: None

    body = b"".join(middleware({}, start_response))
    return captured, body


def test_lazy_start_response_is_buffered_and_body_closed_once():
    html_body = ClosingBody([b'<html><body><button class="search">', b"</button></body></html>"])

    def app(environ, start_response):
        start_response("200 OK", [("Content-Type", "text/html; charset=utf-8"), ("Content-Length", "57")])
        return html_body

    captured, body = _call(RemediationMiddleware(app, RemediationController()))

    assert body == b'<html><body><button aria-label="Search" class="search"></button></body></html>'
    assert ("Content-Length", str(len(body))) in captured["headers"]
    assert ("Content-Length", "57") not in captured["headers"]
    assert html_body.closed == 1


def test_generator_app_starting_late_is_handled():
    def app(environ, start_response):
        def body():
            start_response("200 OK", [("Content-Type", "text/html")])
            yield b'<html><img src="a.png"></html>'
        return body()

    captured, body = _call(RemediationMiddleware(app, RemediationController()))

    assert captured["status"] == "200 OK"
    assert body == b'<html><img alt="" src="a.png"></html>'


def test_non_html_response_is_passed_through():
    payload = ClosingBody([b'{"a": 1}'])

    def app(environ, start_response):
        start_response("200 OK", [("Content-Type", "application/json")])
        return payload

    middleware = RemediationMiddleware(app, RemediationController())
    result = middleware({}, lambda status, headers, exc_info=None: None)

    assert result is payload
    assert payload.closed == 0


def test_compressed_html_is_not_rewritten():
    def app(environ, start_response):
        start_response("200 OK", [("Content-Type", "text/html"), ("Content-Encoding", "gzip")])
        return [b"\x1f\x8b..."]

    captured, body = _call(RemediationMiddleware(app, RemediationController()))
    assert body == b"\x1f\x8b..."
