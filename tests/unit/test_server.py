"""
Unit tests for WikiServer request dispatch (no sockets).
"""

import logging

import pytest

from bauhauswiki import ServerConfig, WikiServer
from bauhauswiki.http.status_codes import HTTPStatus
from bauhauswiki.wiki.store import WikiStore


@pytest.fixture
def server(config: ServerConfig, seeded_store: WikiStore) -> WikiServer:
    return WikiServer(config, store=seeded_store)


class TestConstruction:
    def test_seeded_by_default(self, config: ServerConfig):
        assert WikiServer(config).store.keys() == ["bauhaus", "main"]

    def test_no_seed(self, config: ServerConfig):
        config.seed = False

        assert len(WikiServer(config).store) == 0

    def test_empty_store_is_kept(self, config: ServerConfig):
        """An empty store passed in is used as-is, not replaced."""
        store = WikiStore()

        assert WikiServer(config, store=store).store is store

    def test_invalid_config_fails_fast(self):
        with pytest.raises(ValueError):
            WikiServer(ServerConfig(port=70000))

    def test_address_before_start(self, server: WikiServer):
        assert server.address == ("127.0.0.1", 0)
        assert not server.is_running


class TestDispatch:
    def test_view(self, server: WikiServer):
        response = server.dispatch(b"GET /wiki/bauhaus HTTP/1.1\r\n\r\n", ("127.0.0.1", 1))

        assert response.status == HTTPStatus.OK
        assert "<h2>Bauhaus</h2>" in response.text

    def test_save_round_trip(self, server: WikiServer):
        response = server.dispatch(b"POST /save/de_stijl HTTP/1.1\r\n\r\ncontent=Neoplasticism")

        assert response.status == HTTPStatus.SEE_OTHER
        assert server.store.get_latest("de_stijl").content == "Neoplasticism"

    @pytest.mark.parametrize("raw,status", [
        (b"", HTTPStatus.BAD_REQUEST),
        (b"GARBAGE\r\n\r\n", HTTPStatus.BAD_REQUEST),
        (b"PUT /wiki/main HTTP/1.1\r\n\r\n", HTTPStatus.METHOD_NOT_ALLOWED),
        (b"GET /nowhere HTTP/1.1\r\n\r\n", HTTPStatus.NOT_FOUND),
        (b"POST /wiki/main HTTP/1.1\r\n\r\n", HTTPStatus.METHOD_NOT_ALLOWED),
    ])
    def test_protocol_errors(self, server: WikiServer, raw: bytes, status: HTTPStatus):
        response = server.dispatch(raw)

        assert response.status == status
        assert response.text == status.phrase

    def test_handler_crash_becomes_500(self, server: WikiServer, caplog):
        @server.router.get("/boom")
        def boom(request):
            raise RuntimeError("kaboom")

        with caplog.at_level(logging.ERROR):
            response = server.dispatch(b"GET /boom HTTP/1.1\r\n\r\n")

        assert response.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert response.text == "Internal Server Error"
        assert any("kaboom" in r.getMessage() for r in caplog.records)

    def test_access_log_written(self, server: WikiServer, caplog):
        with caplog.at_level(logging.INFO, logger="bauhauswiki.access"):
            server.dispatch(b"GET /styles.css HTTP/1.1\r\n\r\n", ("10.1.2.3", 4))

        messages = [r.getMessage() for r in caplog.records if r.name == "bauhauswiki.access"]
        assert len(messages) == 1
        assert messages[0].startswith("10.1.2.3 - - [")
        assert '"GET /styles.css" 200' in messages[0]

    def test_use_adds_middleware(self, server: WikiServer):
        from bauhauswiki.middleware import Middleware

        class Tag(Middleware):
            def __call__(self, request, next):
                response = next(request)
                response.set_header("X-Tag", "yes")
                return response

        server.dispatch(b"GET / HTTP/1.1\r\n\r\n")  # builds the chain once
        server.use(Tag())

        response = server.dispatch(b"GET / HTTP/1.1\r\n\r\n")
        assert response.headers["X-Tag"] == "yes"
