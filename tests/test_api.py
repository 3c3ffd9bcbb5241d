"""Tests for the HTTP API using the Flask test client."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from api import create_app, parse_bool
from table_decoder.pipeline import TableDecodePipeline

from tests.conftest import FakeFetcher


@pytest.fixture
def make_client():
    def _make(markup):
        fetcher = FakeFetcher(markup)
        app = create_app(pipeline=TableDecodePipeline(fetcher=fetcher))
        app.config["TESTING"] = True
        return app.test_client(), fetcher
    return _make


class TestDecodeEndpoint:

    def test_healthcheck(self, make_client):
        client, _ = make_client(None)
        response = client.get("/api/decode")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_decode_json(self, make_client, google_doc_html, google_doc_lines):
        client, fetcher = make_client(google_doc_html)
        response = client.post("/api/decode", json={"url": "https://docs.example/pub"})
        body = response.get_json()
        assert response.status_code == 200
        assert body["status"] == "ok"
        assert body["lines"] == google_doc_lines
        assert body["records"] == 6
        assert body["skipped_rows"] == []
        assert fetcher.urls == ["https://docs.example/pub"]

    def test_decode_form(self, make_client, google_doc_html):
        client, _ = make_client(google_doc_html)
        response = client.post("/api/decode", data={"url": "https://docs.example/pub", "prefer_formatted": "yes"})
        body = response.get_json()
        assert response.status_code == 200
        assert body["params"]["prefer_formatted"] is True

    def test_url_required(self, make_client):
        client, _ = make_client(None)
        response = client.post("/api/decode", json={})
        assert response.status_code == 400

    def test_no_data(self, make_client):
        client, _ = make_client(None)
        response = client.post("/api/decode", json={"url": "https://docs.example/pub"})
        assert response.status_code == 502
        assert response.get_json()["status"] == "no_data"

    def test_nothing_to_display(self, make_client):
        client, _ = make_client("<table><tr><td>a</td></tr><tr><td>1</td></tr></table>")
        response = client.post("/api/decode", json={"url": "https://docs.example/pub"})
        assert response.status_code == 422
        assert response.get_json()["lines"] == []


class TestParseBool:

    @pytest.mark.parametrize("value, expected", [
        (None, False), (True, True), ("on", True), ("No", False), (1, False),
    ])
    def test_parse_bool(self, value, expected):
        assert parse_bool(value, False) is expected
