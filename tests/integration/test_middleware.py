"""Integration test: ASGI middleware → request-scoped session → response header."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import consolelog
from consolelog.core.config import ConsoleLogConfig
from consolelog.core.console import default_session
from consolelog.core.encoding import decode_header_value
from consolelog.core.errors import HeaderAlreadySent
from consolelog.transport.asgi import ConsoleLogMiddleware


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(ConsoleLogMiddleware)

    @app.get("/hello/{name}")
    def hello(name: str) -> dict:
        consolelog.info("hello", name)
        consolelog.warn({"name": name, "ratio": float("inf")})
        return {"name": name}

    @app.get("/async")
    async def async_route() -> dict:
        consolelog.log("from async")
        return {}

    @app.get("/quiet")
    def quiet() -> dict:
        return {}

    return TestClient(app)


class TestConsoleLogMiddleware:
    def test_header_attached(self, client):
        response = client.get("/hello/ann")
        assert response.status_code == 200
        payload = decode_header_value(response.headers["X-ChromeLogger-Data"])
        rows = payload["rows"]
        assert [row[2] for row in rows] == ["info", "warn"]
        assert rows[0][0] == ["hello", "ann"]
        assert rows[1][0] == [{"name": "ann", "ratio": "inf (numeric)"}]

    def test_requests_are_isolated(self, client):
        client.get("/hello/ann")
        response = client.get("/hello/bob")
        rows = decode_header_value(response.headers["X-ChromeLogger-Data"])["rows"]
        assert len(rows) == 2
        assert rows[0][0] == ["hello", "bob"]
        assert default_session().rows == []

    def test_async_route(self, client):
        response = client.get("/async")
        rows = decode_header_value(response.headers["X-ChromeLogger-Data"])["rows"]
        assert rows[0][0] == ["from async"]

    def test_no_rows_no_header(self, client):
        response = client.get("/quiet")
        assert "X-ChromeLogger-Data" not in response.headers


def app_with(config):
    app = FastAPI()
    app.add_middleware(ConsoleLogMiddleware, config=config)

    @app.get("/")
    def index() -> dict:
        consolelog.log("hi")
        return {}

    return TestClient(app)


class TestMiddlewareConfig:
    def test_custom_header_name(self):
        response = app_with(ConsoleLogConfig(header_name="X-Debug")).get("/")
        rows = decode_header_value(response.headers["X-Debug"])["rows"]
        assert rows[0][0] == ["hi"]
        assert "X-ChromeLogger-Data" not in response.headers

    def test_disabled_middleware_attaches_nothing(self):
        response = app_with(ConsoleLogConfig(enabled=False)).get("/")
        assert response.status_code == 200
        assert "X-ChromeLogger-Data" not in response.headers
        assert default_session().rows == []


class TestRawASGI:
    @pytest.mark.asyncio
    async def test_logging_after_response_start_raises(self):
        late_errors = []

        async def app(scope, receive, send):
            consolelog.log("before")
            await send({"type": "http.response.start", "status": 200, "headers": []})
            try:
                consolelog.log("after")
            except HeaderAlreadySent as exc:
                late_errors.append(exc)
            await send({"type": "http.response.body", "body": b"ok"})

        sent = []

        async def send(message):
            sent.append(message)

        async def receive():
            return {"type": "http.request", "body": b"", "more_body": False}

        middleware = ConsoleLogMiddleware(app)
        await middleware({"type": "http", "method": "GET", "path": "/"}, receive, send)

        assert len(late_errors) == 1
        headers = dict(sent[0]["headers"])
        rows = decode_header_value(headers[b"x-chromelogger-data"].decode())["rows"]
        assert [row[0] for row in rows] == [["before"]]

    @pytest.mark.asyncio
    async def test_non_http_scope_passes_through(self):
        seen = []

        async def app(scope, receive, send):
            seen.append(scope["type"])

        async def receive():
            return {"type": "lifespan.startup"}

        async def send(message):
            pass

        await ConsoleLogMiddleware(app)({"type": "lifespan"}, receive, send)
        assert seen == ["lifespan"]
