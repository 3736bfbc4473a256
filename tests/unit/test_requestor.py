"""Unit tests for credentials, response shapes and the request builder."""

import logging
import traceback

import httpx
import pytest
from pydantic import BaseModel

from gitlab_api import (
    APIError,
    AuthMethod,
    Collection,
    Credentials,
    DecodeError,
    Discard,
    Raw,
    Single,
    TokenType,
    TransportError,
)
from gitlab_api.models import Version


class Thing(BaseModel):
    id: int
    name: str


class TestCredentials:
    """Tests for token delivery."""

    def test_private_token_header(self) -> None:
        creds = Credentials("abc")
        assert creds.headers() == {"PRIVATE-TOKEN": "abc"}
        assert creds.params() == {}

    def test_access_token_is_bearer(self) -> None:
        creds = Credentials("abc", TokenType.ACCESS_TOKEN)
        assert creds.headers() == {"Authorization": "Bearer abc"}

    def test_job_token_header(self) -> None:
        assert Credentials("abc", TokenType.JOB_TOKEN).headers() == {"JOB-TOKEN": "abc"}

    def test_url_parameter_delivery(self) -> None:
        creds = Credentials("abc", TokenType.PRIVATE_TOKEN, AuthMethod.URL_PARAMETER)
        assert creds.headers() == {}
        assert creds.params() == {"private_token": "abc"}

    def test_no_token_sends_nothing(self) -> None:
        creds = Credentials(None)
        assert creds.headers() == {}
        assert creds.params() == {}

    def test_repr_masks_token(self) -> None:
        assert "abc" not in repr(Credentials("abc"))


class TestRequestBuilder:
    """Tests for request configuration."""

    def test_retrieve_defaults_to_get(self, make_client) -> None:
        client, _ = make_client()
        assert client.retrieve().verb == "GET"

    def test_dispatch_defaults_to_post(self, make_client) -> None:
        client, _ = make_client()
        assert client.dispatch().verb == "POST"

    def test_builder_methods_return_new_requests(self, make_client) -> None:
        client, _ = make_client()
        base = client.retrieve()
        changed = base.method("put").with_field("title", "x")
        assert base.verb == "GET"
        assert base.fields == ()
        assert changed.verb == "PUT"
        assert changed.fields == (("title", "x"),)

    def test_with_field_skips_none_and_converts(self, make_client) -> None:
        client, _ = make_client()
        request = client.dispatch().with_field("a", None).with_field("b", False).with_field("c", 3)
        assert request.fields == (("b", "false"), ("c", "3"))


class TestRequestExecution:
    """Tests for Request.to()."""

    def test_single_shape(self, make_client) -> None:
        client, handler = make_client(httpx.Response(200, json={"id": 1, "name": "one", "extra": True}))

        result = client.retrieve().to("/things/1", Single(Thing))

        assert result == Thing(id=1, name="one")
        request = handler.requests[0]
        assert request.method == "GET"
        assert str(request.url) == "https://gitlab.example.com/api/v4/things/1"
        assert request.headers["PRIVATE-TOKEN"] == "test-token-12345"

    def test_path_without_leading_slash(self, make_client) -> None:
        client, handler = make_client(httpx.Response(200, json={"version": "16.0.0"}))
        client.retrieve().to("version", Single(Version))
        assert handler.requests[0].url.path == "/api/v4/version"

    def test_collection_shape(self, make_client) -> None:
        client, _ = make_client(httpx.Response(200, json=[{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]))
        result = client.retrieve().to("/things", Collection(Thing))
        assert [t.id for t in result] == [1, 2]

    def test_untyped_single(self, make_client) -> None:
        client, _ = make_client(httpx.Response(200, json={"anything": [1, 2]}))
        assert client.retrieve().to("/x", Single(dict)) == {"anything": [1, 2]}

    def test_query_in_path_is_sent(self, make_client) -> None:
        client, handler = make_client(httpx.Response(200, json=[]))
        client.retrieve().to("/projects?search=a%20b&owned=true", Collection(dict))
        params = handler.requests[0].url.params
        assert params["search"] == "a b"
        assert params["owned"] == "true"

    def test_discard_ignores_body(self, make_client) -> None:
        client, _ = make_client(httpx.Response(202, content=b"this is not json"))
        assert client.retrieve().method("DELETE").to("/things/1", Discard()) is None

    def test_raw_returns_bytes_unmodified(self, make_client) -> None:
        payload = b'\x89PNG\r\n\x1a\n{"not": "parsed"}'
        client, _ = make_client(httpx.Response(200, content=payload, headers={"Content-Type": "application/json"}))
        assert client.retrieve().to("/file/raw", Raw()) == payload

    def test_invalid_json_is_decode_error(self, make_client) -> None:
        client, _ = make_client(httpx.Response(200, content=b"not json"))
        with pytest.raises(DecodeError) as exc_info:
            client.retrieve().to("/version", Single(Version))
        assert not isinstance(exc_info.value, (TransportError, APIError))
        assert exc_info.value.body == b"not json"

    def test_shape_mismatch_is_decode_error(self, make_client) -> None:
        client, _ = make_client(httpx.Response(200, json=[{"id": 1, "name": "a"}]))
        with pytest.raises(DecodeError):
            client.retrieve().to("/things/1", Single(Thing))

    def test_type_mismatch_on_known_field_is_decode_error(self, make_client) -> None:
        client, _ = make_client(httpx.Response(200, json={"id": "not-a-number", "name": "a"}))
        with pytest.raises(DecodeError):
            client.retrieve().to("/things/1", Single(Thing))

    def test_error_status_raises_api_error(self, make_client) -> None:
        client, _ = make_client(httpx.Response(404, json={"message": "404 Project Not Found"}))
        with pytest.raises(APIError) as exc_info:
            client.retrieve().to("/projects/9", Single(dict))
        assert exc_info.value.status_code == 404
        assert "Project Not Found" in exc_info.value.body
        assert exc_info.value.method == "GET"

    def test_error_status_fails_even_with_discard(self, make_client) -> None:
        client, _ = make_client(httpx.Response(403, text="forbidden"))
        with pytest.raises(APIError) as exc_info:
            client.retrieve().method("DELETE").to("/projects/9", Discard())
        assert exc_info.value.status_code == 403

    def test_transport_failure_raises_transport_error(self, make_client) -> None:
        client, handler = make_client(httpx.ConnectError("connection refused"))
        with pytest.raises(TransportError) as exc_info:
            client.retrieve().to("/version", Single(Version))
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(handler.requests) == 1

    def test_no_retry_on_failure(self, make_client) -> None:
        client, handler = make_client(httpx.Response(500, text="boom"), httpx.Response(200, json={}))
        with pytest.raises(APIError):
            client.retrieve().to("/x", Single(dict))
        assert len(handler.requests) == 1

    def test_unexpected_error_is_logged_and_reraised(self, make_client, caplog: pytest.LogCaptureFixture) -> None:
        client, _ = make_client(RuntimeError("transport exploded"))
        with caplog.at_level(logging.ERROR, logger="gitlab_api"), pytest.raises(RuntimeError, match="exploded"):
            client.retrieve().to("/version", Single(Version))
        records = [r for r in caplog.records if r.name == "gitlab_api.http.requestor"]
        assert records
        assert records[-1].exc_info is not None
        assert "Unexpected error for GET /version" in records[-1].getMessage()

    def test_2xx_statuses_are_success(self, make_client) -> None:
        client, _ = make_client(httpx.Response(204))
        assert client.retrieve().method("DELETE").to("/x", Discard()) is None

    def test_redirect_status_is_api_error(self, make_client) -> None:
        client, _ = make_client(httpx.Response(302, headers={"Location": "https://elsewhere.example.com"}))
        with pytest.raises(APIError) as exc_info:
            client.retrieve().to("/x", Single(dict))
        assert exc_info.value.status_code == 302


class TestRequestBodies:
    """Tests for form, query and multipart encoding."""

    def test_post_fields_are_form_encoded(self, make_client) -> None:
        client, handler = make_client(httpx.Response(201, json={}))
        client.dispatch().with_field("branch", "main").with_field("ref", "abc 123").to("/branches", Discard())

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"branch=main&ref=abc+123"

    def test_repeated_fields_are_all_sent(self, make_client) -> None:
        client, handler = make_client(httpx.Response(201, json={}))
        client.dispatch().with_field("labels[]", "a").with_field("labels[]", "b").to("/x", Discard())
        assert handler.requests[0].content == b"labels%5B%5D=a&labels%5B%5D=b"

    def test_get_fields_go_into_query(self, make_client) -> None:
        client, handler = make_client(httpx.Response(200, json=[]))
        client.retrieve().with_field("state", "opened").to("/issues?per_page=5", Collection(dict))

        request = handler.requests[0]
        assert request.content == b""
        assert request.url.params["state"] == "opened"
        assert request.url.params["per_page"] == "5"

    def test_attachment_forces_multipart(self, make_client) -> None:
        client, handler = make_client(httpx.Response(201, json={"url": "/uploads/abc/a.png"}))
        (
            client.dispatch()
            .with_field("description", "logo")
            .with_attachment("file", "a.png", b"PNGDATA")
            .to("/projects/1/uploads", Single(dict))
        )

        request = handler.requests[0]
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="file"; filename="a.png"' in request.content
        assert b"PNGDATA" in request.content
        assert b'name="description"' in request.content

    def test_no_body_without_fields(self, make_client) -> None:
        client, handler = make_client(httpx.Response(201, json={}))
        client.dispatch().to("/users/1/block", Discard())
        assert handler.requests[0].content == b""


class TestAuthenticationDelivery:
    """Tests for token placement on the wire."""

    def test_url_parameter_token(self, make_client, caplog: pytest.LogCaptureFixture) -> None:
        client, handler = make_client(
            httpx.Response(200, json={"version": "16.0.0"}),
            token="s3cr3t-token",
            auth_method=AuthMethod.URL_PARAMETER,
        )

        with caplog.at_level(logging.DEBUG, logger="gitlab_api"):
            client.retrieve().to("/version?x=1", Single(Version))

        request = handler.requests[0]
        assert request.url.params["private_token"] == "s3cr3t-token"
        assert request.url.params["x"] == "1"
        assert "PRIVATE-TOKEN" not in request.headers
        assert "s3cr3t-token" not in caplog.text

    def test_token_not_in_error(self, make_client) -> None:
        client, _ = make_client(
            httpx.Response(401, json={"message": "401 Unauthorized"}),
            token="s3cr3t-token",
            auth_method=AuthMethod.URL_PARAMETER,
        )
        with pytest.raises(APIError) as exc_info:
            client.retrieve().to("/user", Single(dict))
        assert "s3cr3t-token" not in str(exc_info.value)
        assert "s3cr3t-token" not in exc_info.value.url
        assert "s3cr3t-token" not in "".join(traceback.format_exception(exc_info.value))
        assert exc_info.value.__cause__ is None

    def test_token_not_in_logged_error(self, make_client, caplog: pytest.LogCaptureFixture) -> None:
        client, handler = make_client(
            httpx.Response(500, text="boom"),
            token="s3cr3t-token",
            auth_method=AuthMethod.URL_PARAMETER,
        )
        with caplog.at_level(logging.DEBUG, logger="gitlab_api"), pytest.raises(APIError):
            client.retrieve().to("/projects", Collection(dict))
        assert "private_token=s3cr3t-token" in str(handler.requests[0].url)
        assert "s3cr3t-token" not in caplog.text

    def test_oauth_header(self, make_client) -> None:
        client, handler = make_client(httpx.Response(200, json={}), token_type=TokenType.ACCESS_TOKEN)
        client.retrieve().to("/user", Single(dict))
        assert handler.requests[0].headers["Authorization"] == "Bearer test-token-12345"
