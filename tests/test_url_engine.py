from urllib.parse import parse_qs, urlsplit

import httpx

from apiservice.engines.url_engine import append_path_component, build_url
from apiservice.pydantic_models.request.api_request_model import RequestDescriptor


def test_build_url_without_query_is_base_plus_path():
    request = RequestDescriptor(base_url="https://api.example.com/v1", path="users")

    url = build_url(request)

    assert url == "https://api.example.com/v1/users"
    assert "?" not in url


def test_build_url_avoids_duplicate_and_missing_separators():
    assert append_path_component("https://api.example.com/v1/", "/users") == "https://api.example.com/v1/users"
    assert append_path_component("https://api.example.com/v1", "users") == "https://api.example.com/v1/users"
    assert append_path_component("https://api.example.com", "users/42") == "https://api.example.com/users/42"


def test_build_url_with_empty_path_keeps_base():
    request = RequestDescriptor(base_url="https://api.example.com/v1")

    assert build_url(request) == "https://api.example.com/v1"


def test_build_url_with_empty_query_mapping_adds_no_question_mark():
    request = RequestDescriptor(base_url="https://api.example.com", path="users", query_params={})

    assert build_url(request) == "https://api.example.com/users"


def test_build_url_contains_every_query_param():
    params = {"page": "2", "q": "hello world", "sort": "name"}
    request = RequestDescriptor(base_url="https://api.example.com", path="search", query_params=params)

    url = build_url(request)
    parts = urlsplit(url)

    assert parts.path == "/search"
    assert {key: values[0] for key, values in parse_qs(parts.query).items()} == params


def test_build_url_falls_back_to_base_and_path_when_query_composition_fails(monkeypatch):
    def broken_merge(self, params):
        raise httpx.InvalidURL("bad query")

    monkeypatch.setattr(httpx.URL, "copy_merge_params", broken_merge)
    request = RequestDescriptor(base_url="https://api.example.com", path="users", query_params={"a": "1"})

    assert build_url(request) == "https://api.example.com/users"


def test_build_url_accepts_plain_endpoint_classes():
    class ProfileEndpoint:
        base_url = "https://api.example.com"
        path = "/me"
        method = "GET"
        headers = None
        query_params = {"expand": "teams"}
        task = None

    assert build_url(ProfileEndpoint()) == "https://api.example.com/me?expand=teams"


def test_append_path_component_encodes_reserved_and_space_characters():
    base = "https://h.example.com"

    assert append_path_component(base, "files/report#1.pdf") == f"{base}/files/report%231.pdf"
    assert append_path_component(base, "files/what?.txt") == f"{base}/files/what%3F.txt"
    assert append_path_component(base, "my file.txt") == f"{base}/my%20file.txt"


def test_build_url_keeps_encoded_path_ahead_of_query():
    request = RequestDescriptor(
        base_url="https://h.example.com",
        path="files/report#1.pdf",
        query_params={"v": "2"},
    )

    url = build_url(request)

    assert url == "https://h.example.com/files/report%231.pdf?v=2"
    assert httpx.URL(url).path == "/files/report#1.pdf"


def test_encoded_path_reaches_the_wire():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["raw_path"] = request.url.raw_path
        return httpx.Response(200)

    url = build_url(RequestDescriptor(base_url="https://h.example.com", path="files/report#1.pdf"))
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        client.get(url)

    assert seen["raw_path"] == b"/files/report%231.pdf"
