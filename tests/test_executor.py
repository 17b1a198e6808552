"""Tests for request shaping and execution."""

import io
from unittest.mock import MagicMock

import pytest
import requests

from swift_tools.core.exceptions import TransportError
from swift_tools.transport import RequestExecutor, RequestSpec


def _response(status=200, headers=None, content=b""):
    response = MagicMock()
    response.status_code = status
    response.headers = headers or {}
    response.content = content
    return response


@pytest.fixture
def http_session():
    session = requests.Session()
    session.request = MagicMock(return_value=_response())
    return session


@pytest.fixture
def executor(http_session):
    return RequestExecutor(session=http_session)


class TestRequestShaping:
    """Test how each method turns a spec into a request."""

    def test_get_appends_query_params(self, executor, http_session):
        """Test GET parameters go into the query string."""
        executor.send(
            RequestSpec(
                method="GET",
                url="https://s.example/v1/AUTH_x/",
                query_params={"limit": 10, "marker": "", "format": "json"},
                body=b"ignored",
            )
        )

        args, kwargs = http_session.request.call_args
        assert args == ("GET", "https://s.example/v1/AUTH_x/?limit=10&marker=&format=json")
        assert kwargs["data"] is None
        assert kwargs["allow_redirects"] is False

    def test_get_drops_none_params(self, executor, http_session):
        """Test None parameters are omitted."""
        executor.send(
            RequestSpec(
                method="GET",
                url="https://s.example/c/",
                query_params={"prefix": None, "limit": 1},
            )
        )

        assert http_session.request.call_args[0][1] == "https://s.example/c/?limit=1"

    def test_get_extends_existing_query(self, executor, http_session):
        """Test parameters are appended to an existing query string."""
        executor.send(
            RequestSpec(method="GET", url="https://s.example/c/?a=1", query_params={"b": 2})
        )

        assert http_session.request.call_args[0][1] == "https://s.example/c/?a=1&b=2"

    def test_head_without_params_keeps_url(self, executor, http_session):
        """Test HEAD with no parameters leaves the URL alone."""
        executor.send(RequestSpec(method="HEAD", url="https://s.example/c"))

        args, kwargs = http_session.request.call_args
        assert args == ("HEAD", "https://s.example/c")
        assert kwargs["data"] is None

    def test_post_form_encodes_params(self, executor, http_session):
        """Test POST parameters become a form body."""
        executor.send(
            RequestSpec(
                method="POST",
                url="https://s.example/c",
                query_params={"a": "1 2", "b": "x"},
            )
        )

        args, kwargs = http_session.request.call_args
        assert args[1] == "https://s.example/c"
        assert kwargs["data"] == "a=1+2&b=x"
        assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"

    def test_post_without_params_has_no_body(self, executor, http_session):
        """Test header-only POST."""
        executor.send(
            RequestSpec(
                method="POST",
                url="https://s.example/c",
                headers={"X-Container-Meta-Owner": "ana"},
            )
        )

        kwargs = http_session.request.call_args[1]
        assert kwargs["data"] is None
        assert kwargs["headers"] == {"X-Container-Meta-Owner": "ana"}

    def test_put_bytes_declares_length(self, executor, http_session):
        """Test PUT from memory declares Content-Length."""
        executor.send(
            RequestSpec(
                method="PUT",
                url="https://s.example/c/o",
                query_params={"ignored": "yes"},
                body=b"hello",
            )
        )

        args, kwargs = http_session.request.call_args
        assert args[1] == "https://s.example/c/o"
        assert kwargs["data"] == b"hello"
        assert kwargs["headers"]["Content-Length"] == "5"

    def test_put_streams_file_handle(self, executor, http_session):
        """Test PUT passes a file handle through for streaming."""
        handle = io.BytesIO(b"0123456789")
        executor.send(
            RequestSpec(
                method="PUT", url="https://s.example/c/o", body=handle, content_length=10
            )
        )

        kwargs = http_session.request.call_args[1]
        assert kwargs["data"] is handle
        assert kwargs["headers"]["Content-Length"] == "10"

    def test_put_without_body_is_zero_length(self, executor, http_session):
        """Test PUT with no body sends an empty payload."""
        executor.send(RequestSpec(method="PUT", url="https://s.example/c"))

        kwargs = http_session.request.call_args[1]
        assert kwargs["data"] == b""
        assert kwargs["headers"]["Content-Length"] == "0"

    def test_custom_method_passes_through(self, executor, http_session):
        """Test non-standard verbs are sent literally."""
        executor.send(
            RequestSpec(
                method="COPY",
                url="https://s.example/c/o",
                headers={"Destination": "/v1/AUTH_x/c/p"},
                query_params={"ignored": "yes"},
            )
        )

        args, kwargs = http_session.request.call_args
        assert args == ("COPY", "https://s.example/c/o")
        assert kwargs["headers"] == {"Destination": "/v1/AUTH_x/c/p"}
        assert kwargs["data"] is None


class TestRequestExecution:
    """Test timeouts, parsing and error handling."""

    def test_accepts_compressed_responses(self, executor, http_session):
        """Test gzip/deflate are advertised."""
        assert http_session.headers["Accept-Encoding"] == "gzip, deflate"

    def test_timeout_converted_to_seconds(self, executor, http_session):
        """Test per-call timeouts in milliseconds."""
        executor.send(RequestSpec(method="GET", url="https://s.example/", timeout_ms=2500))

        assert http_session.request.call_args[1]["timeout"] == 2.5

    def test_default_timeout(self, http_session):
        """Test executor default timeout and transport default."""
        RequestExecutor(session=http_session, timeout_ms=1000).send(
            RequestSpec(method="GET", url="https://s.example/")
        )
        assert http_session.request.call_args[1]["timeout"] == 1.0

        RequestExecutor(session=http_session).send(
            RequestSpec(method="GET", url="https://s.example/")
        )
        assert http_session.request.call_args[1]["timeout"] is None

    def test_response_envelope(self, executor, http_session):
        """Test the response is normalised into an envelope."""
        http_session.request.return_value = _response(
            200, {"Content-Type": "text/plain", "X-Trans-Id": "tx1"}, b"a\nb\n"
        )

        envelope = executor.send(RequestSpec(method="GET", url="https://s.example/"))

        assert envelope.status_code == 200
        assert envelope.headers["HTTP-Code"] == "200"
        assert envelope.headers["x-trans-id"] == "tx1"
        assert envelope.body == b"a\nb\n"
        assert envelope.url == "https://s.example/"

    def test_header_values_with_commas_stay_intact(self, executor, http_session):
        """Test comma-bearing and comma-joined header values are kept verbatim."""
        http_session.request.return_value = _response(
            204,
            {
                "Date": "Mon, 19 Oct 2026 10:00:00 GMT",
                "X-Container-Meta-Tags": "red, green",
            },
        )

        envelope = executor.send(RequestSpec(method="HEAD", url="https://s.example/c"))

        assert envelope.header("date") == "Mon, 19 Oct 2026 10:00:00 GMT"
        assert envelope.x_headers("X-Container-Meta-") == {
            "x-container-meta-tags": "red, green"
        }

    def test_tls_verification_setting(self, http_session):
        """Test TLS verification is forwarded."""
        RequestExecutor(session=http_session, verify_tls=False).send(
            RequestSpec(method="GET", url="https://s.example/")
        )

        assert http_session.request.call_args[1]["verify"] is False

    @pytest.mark.parametrize(
        "error",
        [
            requests.ConnectionError("refused"),
            requests.Timeout("too slow"),
            requests.exceptions.SSLError("bad cert"),
        ],
    )
    def test_network_failures_raise_transport_error(self, executor, http_session, error):
        """Test network failures are wrapped."""
        http_session.request.side_effect = error

        with pytest.raises(TransportError) as exc_info:
            executor.send(RequestSpec(method="GET", url="https://s.example/"))

        assert exc_info.value.url == "https://s.example/"
        assert exc_info.value.__cause__ is error

    def test_specs_do_not_leak_between_calls(self, executor, http_session):
        """Test parameters of one call never reach the next."""
        executor.send(
            RequestSpec(method="GET", url="https://s.example/", query_params={"limit": 1})
        )
        executor.send(RequestSpec(method="GET", url="https://s.example/"))

        assert http_session.request.call_args[0][1] == "https://s.example/"

    def test_context_manager_closes_session(self, http_session):
        """Test the executor closes its session."""
        http_session.close = MagicMock()

        with RequestExecutor(session=http_session):
            pass

        http_session.close.assert_called_once()
