"""Unit tests for the page-walking engine."""

import httpx
import pytest

from gitlab_api import APIError, Collection, ConfigurationError, Single
from gitlab_api.http import fetch_all


def page_of(count: int, start: int = 0) -> httpx.Response:
    return httpx.Response(200, json=[{"id": start + i} for i in range(count)])


class TestFetchAll:
    """Tests for Request.get_all() and fetch_all()."""

    def test_walks_until_short_page(self, make_client) -> None:
        client, handler = make_client(page_of(100, 0), page_of(100, 100), page_of(37, 200))

        results = client.retrieve().get_all("/projects", Collection(dict))

        assert len(results) == 237
        assert [r["id"] for r in results] == list(range(237))
        assert len(handler.requests) == 3
        assert [r.url.params["page"] for r in handler.requests] == ["1", "2", "3"]
        assert all(r.url.params["per_page"] == "100" for r in handler.requests)

    def test_empty_first_page(self, make_client) -> None:
        client, handler = make_client(page_of(0))

        assert client.retrieve().get_all("/projects", Collection(dict)) == []
        assert len(handler.requests) == 1

    def test_full_pages_then_empty_page(self, make_client) -> None:
        client, handler = make_client(page_of(100), page_of(100), page_of(100), page_of(0))

        results = client.retrieve().get_all("/projects", Collection(dict))

        assert len(results) == 300
        assert len(handler.requests) == 4

    def test_explicit_per_page_is_reference(self, make_client) -> None:
        client, handler = make_client(page_of(5), page_of(5), page_of(2))

        results = client.retrieve().get_all("/projects?per_page=5", Collection(dict))

        assert len(results) == 12
        assert len(handler.requests) == 3
        assert handler.requests[0].url.params["per_page"] == "5"

    def test_oversized_per_page_is_clamped_for_comparison(self, make_client) -> None:
        client, handler = make_client(page_of(100), page_of(3))

        results = client.retrieve().get_all("/projects?per_page=500", Collection(dict))

        assert len(results) == 103
        assert len(handler.requests) == 2

    def test_starts_from_page_in_path(self, make_client) -> None:
        client, handler = make_client(page_of(10))

        client.retrieve().get_all("/projects?page=3&per_page=20", Collection(dict))

        params = handler.requests[0].url.params
        assert params["page"] == "3"
        assert params["per_page"] == "20"

    def test_other_parameters_are_kept(self, make_client) -> None:
        client, handler = make_client(page_of(100), page_of(1))

        client.retrieve().get_all("/projects?search=a%20b&owned=true", Collection(dict))

        for request in handler.requests:
            assert request.url.params["search"] == "a b"
            assert request.url.params["owned"] == "true"

    def test_error_mid_walk_propagates(self, make_client) -> None:
        client, handler = make_client(page_of(100), httpx.Response(500, text="boom"))

        with pytest.raises(APIError) as exc_info:
            client.retrieve().get_all("/projects", Collection(dict))

        assert exc_info.value.status_code == 500
        assert len(handler.requests) == 2

    def test_rejects_non_collection_shape(self, make_client) -> None:
        client, handler = make_client()

        with pytest.raises(TypeError):
            fetch_all(client.retrieve(), "/projects", Single(dict))  # type: ignore[arg-type]
        assert handler.requests == []

    def test_uses_configured_method(self, make_client) -> None:
        client, handler = make_client(page_of(1))

        client.retrieve().method("POST").get_all("/search", Collection(dict))

        assert handler.requests[0].method == "POST"

    @pytest.mark.parametrize(
        "path",
        ["/projects?per_page=lots", "/projects?page=two&per_page=20", "/projects?page=0"],
    )
    def test_invalid_page_parameters(self, make_client, path: str) -> None:
        client, handler = make_client()

        with pytest.raises(ConfigurationError):
            client.retrieve().get_all(path, Collection(dict))
        assert handler.requests == []
