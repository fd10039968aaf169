"""Tests for the GitHub REST adapter against a mocked transport."""
import asyncio
import base64

import httpx
import pytest

from repo_factcheck.domain.entities import EntryKind
from repo_factcheck.domain.exceptions import (
    ErrorKind,
    FileFetchError,
    GitHubRateLimitError,
    RepositoryFetchError,
    RepositoryNotFoundError,
    TreeFetchError,
)
from repo_factcheck.infrastructure.github_rest_adapter import GitHubRestAdapter

API = "https://api.github.com"


def _adapter(handler, token=None):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubRestAdapter(client=client, token=token)


def _b64(text: str) -> str:
    encoded = base64.b64encode(text.encode()).decode()
    # GitHub wraps base64 payloads every 60 characters
    return "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60))


class TestFetchMetadata:
    def test_returns_default_branch_and_sends_token(self, repo):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            assert str(request.url) == f"{API}/repos/acme/widget"
            return httpx.Response(200, json={"default_branch": "develop"})

        meta = asyncio.run(_adapter(handler, token="tok").fetch_metadata(repo))

        assert meta.default_branch == "develop"
        assert seen["auth"] == "Bearer tok"

    def test_missing_branch_defaults_to_main_and_no_auth_header(self, repo):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={})

        meta = asyncio.run(_adapter(handler).fetch_metadata(repo))

        assert meta.default_branch == "main"
        assert seen["auth"] is None

    @pytest.mark.parametrize("status", [403, 429])
    def test_rate_limit_mentions_token(self, repo, status):
        adapter = _adapter(lambda request: httpx.Response(status))

        with pytest.raises(GitHubRateLimitError, match="token") as excinfo:
            asyncio.run(adapter.fetch_metadata(repo))
        assert excinfo.value.kind is ErrorKind.RATE_LIMITED

    def test_not_found(self, repo):
        adapter = _adapter(lambda request: httpx.Response(404))

        with pytest.raises(RepositoryNotFoundError):
            asyncio.run(adapter.fetch_metadata(repo))

    def test_other_status_is_unknown(self, repo):
        adapter = _adapter(lambda request: httpx.Response(500))

        with pytest.raises(RepositoryFetchError) as excinfo:
            asyncio.run(adapter.fetch_metadata(repo))
        assert type(excinfo.value) is RepositoryFetchError
        assert excinfo.value.kind is ErrorKind.UNKNOWN

    def test_network_error_is_wrapped(self, repo):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(RepositoryFetchError):
            asyncio.run(_adapter(handler).fetch_metadata(repo))

    def test_timeout_is_tagged(self, repo):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(RepositoryFetchError) as excinfo:
            asyncio.run(_adapter(handler).fetch_metadata(repo))
        assert excinfo.value.kind is ErrorKind.TIMEOUT

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>proxy</html>"),
            httpx.Response(200, json=["main"]),
        ],
    )
    def test_malformed_body_is_unknown(self, repo, response):
        adapter = _adapter(lambda r: response)

        with pytest.raises(RepositoryFetchError) as excinfo:
            asyncio.run(adapter.fetch_metadata(repo))
        assert excinfo.value.kind is ErrorKind.UNKNOWN


class TestFetchTree:
    def test_parses_entries_and_truncation(self, repo):
        def handler(request):
            assert request.url.path == "/repos/acme/widget/git/trees/main"
            assert request.url.params["recursive"] == "1"
            return httpx.Response(
                200,
                json={
                    "truncated": True,
                    "tree": [
                        {"path": "src", "type": "tree", "url": f"{API}/t/1"},
                        {"path": "src/app.ts", "type": "blob", "url": f"{API}/b/2"},
                        {"path": "vendor/lib", "type": "commit"},
                    ],
                },
            )

        listing = asyncio.run(_adapter(handler).fetch_tree(repo, "main"))

        assert listing.truncated is True
        assert [(e.path, e.kind) for e in listing.entries] == [
            ("src", EntryKind.DIRECTORY),
            ("src/app.ts", EntryKind.FILE),
        ]
        assert listing.entries[1].content_ref == f"{API}/b/2"

    @pytest.mark.parametrize("status", [403, 429])
    def test_rate_limited(self, repo, status):
        adapter = _adapter(lambda r: httpx.Response(status))

        with pytest.raises(GitHubRateLimitError, match="token"):
            asyncio.run(adapter.fetch_tree(repo, "main"))

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>proxy</html>"),
            httpx.Response(200, json=["not", "an", "object"]),
            httpx.Response(200, json={"tree": [{"type": "blob", "url": f"{API}/b/1"}]}),
        ],
    )
    def test_malformed_body_is_tree_fetch_error(self, repo, response):
        adapter = _adapter(lambda r: response)

        with pytest.raises(TreeFetchError) as excinfo:
            asyncio.run(adapter.fetch_tree(repo, "main"))
        assert excinfo.value.kind is ErrorKind.UNKNOWN

    def test_other_failure(self, repo):
        with pytest.raises(TreeFetchError):
            asyncio.run(_adapter(lambda r: httpx.Response(409)).fetch_tree(repo, "main"))


class TestFetchBlob:
    def test_decodes_base64_content(self):
        text = "line one\n" * 20 + "한글 ok\n"
        adapter = _adapter(lambda r: httpx.Response(200, json={"content": _b64(text)}))

        assert asyncio.run(adapter.fetch_blob(f"{API}/b/1")) == text

    @pytest.mark.parametrize("payload", [{}, {"content": ""}, {"content": None}])
    def test_empty_content_is_none(self, payload):
        adapter = _adapter(lambda r: httpx.Response(200, json=payload))

        assert asyncio.run(adapter.fetch_blob(f"{API}/b/1")) is None

    def test_http_error(self):
        adapter = _adapter(lambda r: httpx.Response(503))

        with pytest.raises(FileFetchError) as excinfo:
            asyncio.run(adapter.fetch_blob(f"{API}/b/1"))
        assert excinfo.value.kind is ErrorKind.UNAVAILABLE

    def test_undecodable_content(self):
        adapter = _adapter(lambda r: httpx.Response(200, json={"content": "a"}))

        with pytest.raises(FileFetchError):
            asyncio.run(adapter.fetch_blob(f"{API}/b/1"))

    def test_non_json_body(self):
        adapter = _adapter(lambda r: httpx.Response(200, text="<html>proxy</html>"))

        with pytest.raises(FileFetchError):
            asyncio.run(adapter.fetch_blob(f"{API}/b/1"))
