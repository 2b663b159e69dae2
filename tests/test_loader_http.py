"""
Tests for loading graphs over HTTP with mocked responses.

Run with: python -m pytest tests/test_loader_http.py -v
"""

import gzip
from unittest.mock import patch

import pytest
import requests

from rdfloader import GraphLoader, GraphLoadError, LoaderConfig
from rdfloader.core.errors import FormatError, NotFoundError, StreamError
from rdfloader.models import Literal, Uri
from tests.fixtures.rdf_responses import (
    APPLE_RDFXML,
    FOAF_NAME,
    make_response,
    verify_apple_data,
    verify_bruce_campbell,
)

APPLE_URL = "http://www.productontology.org/id/Apple"


@pytest.fixture
def http_loader():
    return GraphLoader(LoaderConfig(timeout=10))


@pytest.mark.integration
class TestContentNegotiation:

    def test_request_headers(self, http_loader, apple_ttl):
        response = make_response(apple_ttl, content_type="text/turtle")
        with patch("requests.request", return_value=response) as mock_request:
            http_loader.load_graph_url(APPLE_URL)

        mock_request.assert_called_once()
        args, kwargs = mock_request.call_args
        assert args == ("GET", APPLE_URL)
        assert kwargs["stream"] is True
        assert kwargs["timeout"] == 10
        headers = kwargs["headers"]
        assert headers["Accept"] == "application/rdf+xml,text/turtle,text/n3,application/trix"
        assert headers["Accept-Charset"] == "utf-8"
        assert headers["Accept-Encoding"] == "gzip"
        assert headers["User-Agent"].startswith("rdfloader/")

    def test_text_turtle(self, http_loader, apple_ttl):
        response = make_response(apple_ttl, content_type="text/turtle; charset=utf-8")
        with patch("requests.request", return_value=response):
            graph = http_loader.load_graph_url(APPLE_URL)
        verify_apple_data(graph)

    def test_text_n3(self, http_loader, resources_dir):
        response = make_response((resources_dir / "test.n3").read_bytes(), content_type="text/n3")
        with patch("requests.request", return_value=response):
            graph = http_loader.load_graph_url("http://example.org/people")
        verify_bruce_campbell(graph)

    @pytest.mark.parametrize("content_type", [
        "application/rdf+xml",
        "application/xml",
        "Application/RDF+XML; charset=UTF-8",
    ])
    def test_registered_rdfxml_types(self, http_loader, content_type):
        response = make_response(APPLE_RDFXML, content_type=content_type)
        with patch("requests.request", return_value=response):
            verify_apple_data(http_loader.load_graph_url(APPLE_URL))

    def test_registered_turtle_type(self, http_loader, apple_ttl):
        response = make_response(apple_ttl, content_type="application/x-turtle")
        with patch("requests.request", return_value=response):
            verify_apple_data(http_loader.load_graph_url(APPLE_URL))

    def test_unrecognized_content_type_defaults_to_rdfxml(self, http_loader, apple_ttl):
        response = make_response(APPLE_RDFXML, content_type="text/plain")
        with patch("requests.request", return_value=response):
            verify_apple_data(http_loader.load_graph_url(APPLE_URL + ".ttl"))

        # Content-Type wins over the URL extension
        response = make_response(apple_ttl, content_type="text/plain")
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError) as exc_info:
                http_loader.load_graph_url(APPLE_URL + ".ttl")
        assert isinstance(exc_info.value.cause, FormatError)

    def test_text_html_is_parsed_as_rdfa(self, http_loader, resources_dir):
        page = (resources_dir / "page.html").read_bytes()
        response = make_response(page, content_type="text/html; charset=utf-8")
        with patch("requests.request", return_value=response):
            graph = http_loader.load_graph_url("http://example.org/people")
        assert graph.get_value(Uri("http://example.org/alice"), FOAF_NAME) == Literal("Alice")
        assert graph.is_asserted(
            "http://example.org/alice", "http://xmlns.com/foaf/0.1/knows", "http://example.org/people#bob"
        )

    def test_missing_content_type_uses_url_extension(self, http_loader, apple_ttl):
        response = make_response(apple_ttl)
        with patch("requests.request", return_value=response):
            verify_apple_data(http_loader.load_graph_url("http://example.org/data/apple.ttl?v=2"))

    def test_missing_content_type_and_extension(self, http_loader):
        response = make_response(APPLE_RDFXML, content_type="")
        with patch("requests.request", return_value=response):
            verify_apple_data(http_loader.load_graph_url(APPLE_URL))

    def test_overrides_can_be_disabled(self, apple_ttl):
        loader = GraphLoader(mime_type_overrides={})
        response = make_response(apple_ttl, content_type="text/turtle")
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError) as exc_info:
                loader.load_graph_url(APPLE_URL)
        assert isinstance(exc_info.value.cause, FormatError)

    def test_url_is_the_base_identifier(self, http_loader):
        body = b'<#me> <http://xmlns.com/foaf/0.1/name> "Relative Reference" .'
        response = make_response(body, content_type="text/turtle")
        with patch("requests.request", return_value=response):
            graph = http_loader.load_graph_url("http://example.org/people/me.ttl")
        me = Uri("http://example.org/people/me.ttl#me")
        assert graph.get_value(me, FOAF_NAME) == Literal("Relative Reference")


@pytest.mark.integration
class TestContentEncoding:

    def test_gzip_response(self, http_loader, apple_ttl):
        response = make_response(gzip.compress(apple_ttl), content_type="text/turtle", content_encoding="gzip")
        with patch("requests.request", return_value=response):
            verify_apple_data(http_loader.load_graph_url(APPLE_URL))

    def test_gzip_body_without_header_is_not_decompressed(self, http_loader, apple_ttl):
        response = make_response(gzip.compress(apple_ttl), content_type="text/turtle")
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError):
                http_loader.load_graph_url(APPLE_URL)

    def test_declared_gzip_with_plain_body(self, http_loader, apple_ttl):
        response = make_response(apple_ttl, content_type="text/turtle", content_encoding="gzip")
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError):
                http_loader.load_graph_url(APPLE_URL)
        response.close.assert_called_once()


@pytest.mark.integration
class TestHttpFailures:

    @pytest.mark.parametrize("status", [404, 410])
    def test_not_found(self, http_loader, status):
        response = make_response(b"", status_code=status, url=APPLE_URL)
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError) as exc_info:
                http_loader.load_graph_url(APPLE_URL)
        assert isinstance(exc_info.value.cause, NotFoundError)
        assert exc_info.value.source == APPLE_URL
        response.close.assert_called_once()

    def test_server_error(self, http_loader):
        response = make_response(b"", status_code=500)
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError) as exc_info:
                http_loader.load_graph_url(APPLE_URL)
        assert isinstance(exc_info.value.cause, StreamError)

    def test_connection_error(self, http_loader):
        with patch("requests.request", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(GraphLoadError) as exc_info:
                http_loader.load_graph_url(APPLE_URL)
        assert isinstance(exc_info.value.cause, StreamError)

    def test_timeout(self, http_loader):
        with patch("requests.request", side_effect=requests.exceptions.Timeout("slow")):
            with pytest.raises(GraphLoadError, match="timed out"):
                http_loader.load_graph_url(APPLE_URL)

    def test_malformed_body_closes_response(self, http_loader):
        response = make_response(b"@prefix broken", content_type="text/turtle")
        with patch("requests.request", return_value=response):
            with pytest.raises(GraphLoadError) as exc_info:
                http_loader.load_graph_url(APPLE_URL)
        assert isinstance(exc_info.value.cause, FormatError)
        response.close.assert_called_once()

    def test_relative_url_rejected(self, http_loader):
        with patch("requests.request") as mock_request:
            with pytest.raises(GraphLoadError) as exc_info:
                http_loader.load_graph_url("/data/apple.ttl")
        assert isinstance(exc_info.value.cause, ValueError)
        mock_request.assert_not_called()
