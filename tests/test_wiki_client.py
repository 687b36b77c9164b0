"""Tests for the MediaWiki client over a stubbed requests session."""

import pytest
import requests

from filmwiki.errors import UpstreamError
from filmwiki.handler import handle
from filmwiki.search import search_pages
from filmwiki.wiki_client import WikiClient
from tests.fixtures.pages import MATRIX_PAGE_ID, MATRIX_PARSE_PAYLOAD

API_URL = "https://example.org/w/api.php"


class FakeResponse:
    def __init__(self, payload=None, status=200, invalid_json=False):
        self.payload = payload
        self.status_code = status
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    """Replays queued responses (or exceptions) and records request params."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.headers = {}
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


def make_client(*responses):
    session = FakeSession(*responses)
    return WikiClient(api_url=API_URL, user_agent="filmwiki-tests/1.0", timeout=5, session=session), session


def page_payload(page_id, **fields):
    return {"query": {"pages": {str(page_id): {"pageid": page_id, **fields}}}}


def test_headers_are_set():
    _, session = make_client()

    assert session.headers["User-Agent"] == "filmwiki-tests/1.0"
    assert session.headers["Accept"] == "application/json"


def test_search_params_and_hits():
    payload = {
        "query": {
            "search": [
                {"title": "The Matrix", "pageid": MATRIX_PAGE_ID, "snippet": "<span>The Matrix</span> is"},
                {"title": "The Matrix Reloaded", "pageid": 3},
                {"title": "Broken hit"},
            ]
        }
    }
    client, session = make_client(FakeResponse(payload))

    hits = client.search("The Matrix 1999 film", limit=5)

    assert [(h.title, h.page_id) for h in hits] == [("The Matrix", MATRIX_PAGE_ID), ("The Matrix Reloaded", 3)]
    assert hits[1].snippet == ""
    call = session.calls[0]
    assert call["url"] == API_URL
    assert call["timeout"] == 5
    assert call["params"] == {
        "action": "query",
        "list": "search",
        "srsearch": "The Matrix 1999 film",
        "srlimit": "5",
        "format": "json",
    }


@pytest.mark.parametrize("limit,expected", [(0, "1"), (10, "10"), (500, "50")])
def test_search_limit_is_clamped(limit, expected):
    session = FakeSession(FakeResponse({"query": {"search": []}}))

    assert search_pages("Dune", session=session, api_url=API_URL, limit=limit) == []
    assert session.calls[0]["params"]["srlimit"] == expected


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("connection refused"),
        FakeResponse(status=503),
        FakeResponse(invalid_json=True),
        FakeResponse(["not", "an", "object"]),
        FakeResponse({"error": {"code": "badvalue", "info": "Unrecognized value"}}),
    ],
)
def test_search_failures_raise_upstream_error(response):
    client, _ = make_client(response)

    with pytest.raises(UpstreamError):
        client.search("Dune")


def test_disambiguation_by_category():
    categories = [{"ns": 14, "title": "Category:All article disambiguation pages"}]
    client, session = make_client(FakeResponse(page_payload(10, categories=categories)))

    assert client.is_disambiguation(10) is True
    assert session.calls[0]["params"] == {
        "action": "query",
        "pageids": "10",
        "prop": "categories",
        "cllimit": "max",
        "format": "json",
    }


def test_article_is_not_disambiguation():
    categories = [{"ns": 14, "title": "Category:1999 films"}]
    client, _ = make_client(FakeResponse(page_payload(MATRIX_PAGE_ID, categories=categories)))

    assert client.is_disambiguation(MATRIX_PAGE_ID) is False


def test_uncategorized_page_is_not_disambiguation():
    client, _ = make_client(FakeResponse(page_payload(5)))

    assert client.is_disambiguation(5) is False


def test_disambiguation_check_fails_open():
    client, _ = make_client(requests.Timeout("read timed out"))

    assert client.is_disambiguation(10) is False


def test_parse_page():
    client, session = make_client(FakeResponse(MATRIX_PARSE_PAYLOAD))

    page = client.parse_page(MATRIX_PAGE_ID)

    assert page.title == "The Matrix"
    assert page.page_id == MATRIX_PAGE_ID
    assert page.html.startswith('<div class="mw-content-ltr mw-parser-output"')
    assert [s.title for s in page.sections][:3] == ["Plot", "Cast", "Production"]
    assert page.sections[3].level == 3
    assert page.sections[3].toc_level == 2
    assert page.sections[-1].anchor == "External_links"
    assert len(page.images) == 12
    assert session.calls[0]["params"]["prop"] == "text|sections|images"
    assert session.calls[0]["params"]["pageid"] == str(MATRIX_PAGE_ID)


def test_parse_page_api_error():
    payload = {"error": {"code": "nosuchpageid", "info": "There is no page with ID 1."}}
    client, _ = make_client(FakeResponse(payload))

    with pytest.raises(UpstreamError, match="There is no page with ID 1."):
        client.parse_page(1)


def test_parse_page_missing_output():
    client, _ = make_client(FakeResponse({"warnings": {}}))

    with pytest.raises(UpstreamError):
        client.parse_page(1)


def test_page_url():
    url = "https://en.wikipedia.org/wiki/The_Matrix"
    client, session = make_client(FakeResponse(page_payload(MATRIX_PAGE_ID, fullurl=url)))

    assert client.get_page_url(MATRIX_PAGE_ID) == url
    assert session.calls[0]["params"]["inprop"] == "url"


def test_page_url_missing():
    client, _ = make_client(FakeResponse({"query": {"pages": {}}}))

    assert client.get_page_url(MATRIX_PAGE_ID) is None


def test_summary():
    extract = "The Matrix is a 1999 science fiction action film."
    client, session = make_client(FakeResponse(page_payload(MATRIX_PAGE_ID, extract=extract)))

    assert client.get_summary(MATRIX_PAGE_ID) == extract
    params = session.calls[0]["params"]
    assert params["prop"] == "extracts"
    assert params["explaintext"] == "1"


def test_summary_unavailable():
    client, _ = make_client(FakeResponse(status=500))

    assert client.get_summary(MATRIX_PAGE_ID) is None


def test_context_manager_closes_session():
    client, session = make_client()

    with client:
        pass

    assert session.closed is True


def test_string_error_payload_raises_upstream_error():
    client, _ = make_client(FakeResponse({"error": "rate limited"}))

    with pytest.raises(UpstreamError, match="rate limited"):
        client.get_page_url(MATRIX_PAGE_ID)


@pytest.mark.parametrize(
    "payload",
    [
        {"error": "rate limited"},
        {"query": {"pages": ["not", "a", "mapping"]}},
        {"query": "unexpected"},
        {"query": {"pages": {"10": "unexpected"}}},
        {"query": {"pages": {"10": {"pageid": 10, "categories": ["Category:Disambiguation pages"]}}}},
    ],
)
def test_odd_category_payloads_fail_open(payload):
    client, _ = make_client(FakeResponse(payload))

    assert client.is_disambiguation(10) is False


@pytest.mark.parametrize(
    "payload",
    [{"query": {"pages": ["x"]}}, {"query": ["x"]}],
)
def test_odd_page_payloads_raise_upstream_error(payload):
    client, _ = make_client(FakeResponse(payload))

    with pytest.raises(UpstreamError):
        client.get_page_url(MATRIX_PAGE_ID)


@pytest.mark.parametrize(
    "payload",
    [{"error": "maxlag"}, {"query": {"search": {"title": "x"}}}, {"query": ["x"]}],
)
def test_odd_search_payloads_raise_upstream_error(payload):
    client, _ = make_client(FakeResponse(payload))

    with pytest.raises(UpstreamError):
        client.search("Dune")


def test_odd_search_items_are_skipped():
    payload = {"query": {"search": ["The Matrix", {"title": "The Matrix", "pageid": MATRIX_PAGE_ID}]}}
    client, _ = make_client(FakeResponse(payload))

    assert [hit.page_id for hit in client.search("The Matrix")] == [MATRIX_PAGE_ID]


def test_odd_category_payload_does_not_fail_the_request():
    search = FakeResponse(
        {"query": {"search": [{"title": "Obscure", "pageid": 9}, {"title": "The Matrix", "pageid": MATRIX_PAGE_ID}]}}
    )
    client, _ = make_client(
        search,
        FakeResponse({"error": "rate limited"}),
        FakeResponse({"query": {"pages": "unexpected"}}),
        FakeResponse(MATRIX_PARSE_PAYLOAD),
        FakeResponse({"query": {"pages": {}}}),
    )

    status, body = handle({"title": "The Matrix", "year": "1999", "fullContent": True}, client=client)

    assert status == 200
    assert body["pageId"] == MATRIX_PAGE_ID
