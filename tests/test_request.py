"""
Unit tests for request building.
"""

from urllib.parse import parse_qs, urlsplit

import pytest

from edgegrid_client import (
    ConfigurationError,
    RequestOptions,
    SigningError,
    build_request,
    make_url,
    merge_options
)
from edgegrid_client.request import DEFAULT_OPTIONS, serialize_body

HOST = "https://akab-test.luna.akamaiapis.net"


class TestMergeOptions:
    """Test merging caller options over defaults."""

    def test_defaults(self):
        """Test that defaults apply when nothing is supplied."""
        merged = merge_options(DEFAULT_OPTIONS, None)

        assert merged.method == 'GET'
        assert merged.headers == {'Content-Type': 'application/json'}
        assert merged.max_redirects == 0

    def test_headers_merged(self):
        """Test that header mappings merge key by key."""
        merged = merge_options(DEFAULT_OPTIONS, {"headers": {"Accept": "text/plain"}})

        assert merged.headers == {'Content-Type': 'application/json', 'Accept': 'text/plain'}
        assert list(merged.headers) == ['Content-Type', 'Accept']

    def test_caller_header_wins(self):
        """Test that the caller overrides a default header."""
        merged = merge_options(DEFAULT_OPTIONS, {"headers": {"Content-Type": "text/csv"}})
        assert merged.headers == {'Content-Type': 'text/csv'}

    def test_scalars_replaced(self):
        """Test that scalar fields replace the default."""
        merged = merge_options(DEFAULT_OPTIONS, RequestOptions(method='POST', max_redirects=3))

        assert merged.method == 'POST'
        assert merged.max_redirects == 3

    def test_lists_replaced_not_merged(self):
        """Test that list bodies replace defaults wholesale."""
        defaults = RequestOptions(body=[1, 2, 3])
        merged = merge_options(defaults, {"body": [4]})
        assert merged.body == [4]

    def test_mapping_fields_merged_recursively(self):
        """Test that every mapping field merges when both sides have it."""
        defaults = RequestOptions(query={"a": "1", "b": "2"}, headers_to_sign={"X-A": "1"})
        merged = merge_options(defaults, {"query": {"b": "3", "c": "4"},
                                          "headers_to_sign": {"X-B": "2"}})

        assert merged.query == {"a": "1", "b": "3", "c": "4"}
        assert merged.headers_to_sign == {"X-A": "1", "X-B": "2"}

    def test_defaults_not_mutated(self):
        """Test that merging leaves the defaults untouched."""
        merge_options(DEFAULT_OPTIONS, {"headers": {"Accept": "*/*"}})
        assert DEFAULT_OPTIONS.headers == {'Content-Type': 'application/json'}

    def test_unknown_option(self):
        """Test that unknown keys are rejected."""
        with pytest.raises(SigningError):
            merge_options(DEFAULT_OPTIONS, {"qs": {"a": "1"}})


class TestSerializeBody:
    """Test body serialization."""

    def test_structured_body(self):
        """Test that dicts are compact JSON."""
        assert serialize_body({"key": "value", "number": 42}) == '{"key":"value","number":42}'

    def test_string_passthrough(self):
        """Test that strings are not re-encoded."""
        assert serialize_body('{"already": "json"}') == '{"already": "json"}'

    def test_bytes_passthrough(self):
        """Test that bytes are kept."""
        assert serialize_body(b"raw") == b"raw"

    def test_none(self):
        """Test absent body."""
        assert serialize_body(None) is None

    def test_unserializable(self):
        """Test that non-JSON values are rejected."""
        with pytest.raises(SigningError):
            serialize_body({"when": object()})


class TestMakeUrl:
    """Test absolute URL construction."""

    def test_path_only(self):
        """Test URL without query."""
        assert make_url(HOST, "/foo") == f"{HOST}/foo"

    def test_relative_path(self):
        """Test path without leading slash."""
        assert make_url(HOST, "foo/bar") == f"{HOST}/foo/bar"

    def test_query_order_kept(self):
        """Test that query order follows the mapping."""
        assert make_url(HOST, "/foo", {"z": "1", "a": "2"}) == f"{HOST}/foo?z=1&a=2"

    def test_existing_query_wins(self):
        """Test that a path query string disables the query mapping."""
        assert make_url(HOST, "/foo?x=1", {"a": "2"}) == f"{HOST}/foo?x=1"

    def test_query_round_trip(self):
        """Test that encoded values parse back to the originals."""
        url = make_url(HOST, "/foo", {"a": "x y", "b": "c&d"})
        assert parse_qs(urlsplit(url).query) == {"a": ["x y"], "b": ["c&d"]}

    def test_empty_query_mapping(self):
        """Test that an empty mapping adds no parameters."""
        assert urlsplit(make_url(HOST, "/foo", {})).query == ""


class TestBuildRequest:
    """Test unsigned request assembly."""

    @pytest.fixture
    def config(self):
        return {
            "client_token": "ct",
            "client_secret": "cs",
            "access_token": "at",
            "host": "akab-test.luna.akamaiapis.net",
        }

    def test_get_defaults(self, config):
        """Test a minimal GET request."""
        request = build_request(config, {"path": "/foo"})

        assert request.method == 'GET'
        assert request.url == f"{HOST}/foo"
        assert request.headers == {'Content-Type': 'application/json'}
        assert request.body is None
        assert request.max_redirects == 0

    def test_method_uppercased(self, config):
        """Test that methods are normalized."""
        assert build_request(config, {"path": "/", "method": "delete"}).method == 'DELETE'

    def test_json_body_serialized(self, config):
        """Test that structured POST bodies become JSON text."""
        request = build_request(config, {"method": "POST", "path": "/items",
                                         "body": {"name": "edge"}})
        assert request.body == '{"name":"edge"}'

    def test_unsupported_method(self, config):
        """Test that unknown methods are rejected."""
        with pytest.raises(SigningError):
            build_request(config, {"path": "/", "method": "BREW"})

    @pytest.mark.parametrize("method", ['GET', 'HEAD'])
    def test_body_on_bodyless_method(self, config, method):
        """Test that GET and HEAD cannot carry a body."""
        with pytest.raises(SigningError):
            build_request(config, {"path": "/", "method": method, "body": "x"})

    def test_missing_path(self, config):
        """Test that a path is required."""
        with pytest.raises(SigningError):
            build_request(config, {})

    def test_unencodable_query(self, config):
        """Test that bad query values surface as SigningError."""
        with pytest.raises(SigningError):
            build_request(config, {"path": "/", "query": {"a": None}})

    def test_surrogate_query_value(self, config):
        """Test that a query value that is not valid UTF-8 surfaces as SigningError."""
        with pytest.raises(SigningError):
            build_request(config, {"path": "/x", "query": {"a": "\ud800"}})

    def test_signed_headers_are_sent(self, config):
        """Test that signed headers missing from headers are added to them."""
        request = build_request(config, {
            "path": "/",
            "headers_to_sign": {"X-Request-Id": "abc", "content-type": "text/plain"},
        })

        assert request.headers == {"Content-Type": "application/json", "X-Request-Id": "abc"}

    def test_explicit_header_wins_over_signed(self, config):
        """Test that a header given in both mappings keeps its explicit value."""
        request = build_request(config, {
            "path": "/",
            "headers": {"X-Request-Id": "sent"},
            "headers_to_sign": {"X-Request-Id": "signed"},
        })

        assert request.headers["X-Request-Id"] == "sent"
        assert request.headers_to_sign == {"X-Request-Id": "signed"}

    def test_missing_credentials(self, config):
        """Test that missing credentials are reported together."""
        del config["client_secret"]
        config["host"] = ""

        with pytest.raises(ConfigurationError) as exc_info:
            build_request(config, {"path": "/"})

        assert exc_info.value.missing == ('client_secret', 'host')
        assert "client_secret, host" in str(exc_info.value)

    def test_options_not_mutated(self, config):
        """Test that caller mappings are copied, not shared."""
        headers = {"Accept": "application/json"}
        request = build_request(config, RequestOptions(path="/", headers=headers))

        request.headers["X-Extra"] = "1"
        assert headers == {"Accept": "application/json"}
