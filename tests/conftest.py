import httpx
import pytest


class RecordingTransport(httpx.MockTransport):
    """MockTransport that serves canned responses by URL and remembers every request."""

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default
        self.requests = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url), self.default)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        if isinstance(route, httpx.Response):
            return route
        status, body = route
        return httpx.Response(status, content=body.encode("utf-8") if isinstance(body, str) else body)


@pytest.fixture
def make_transport():
    return RecordingTransport


LISTING_URL = "https://www.zillow.com/homedetails/361-Blaine-St-Seattle-WA-98109/48689963_zpid/"

NICE_HOUSE_HTML = """<!DOCTYPE html>
<html><head>
<meta name="description" content="Nice house">
<meta property="og:image" content="http://x/photo.jpg">
<script type="application/ld+json">{"@type":"Event","name":"Open House","startDate":"2021-05-01T10:00:00Z","endDate":"2021-05-01T12:00:00Z"}</script>
</head><body><h1>361 Blaine St</h1></body></html>
"""


@pytest.fixture
def nice_house_html():
    return NICE_HOUSE_HTML


@pytest.fixture
def listing_url():
    return LISTING_URL
