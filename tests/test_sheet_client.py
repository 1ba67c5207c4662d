import json

import pytest
import requests

from app.sheet_client import (
    SheetClient, SheetNotConfigured, SheetResponseError, SheetScriptError, SheetTransportError,
)

URL = "https://script.example.test/exec"


def _response(body: str, status: int = 200) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    r._content = body.encode("utf-8")
    r.url = URL
    return r


class RecordingSession:
    """Minimal requests.Session look-alike that hands back one canned response."""
    def __init__(self, response=None, exc=None):
        self.headers = {}
        self.response = response
        self.exc = exc
        self.requests = []

    def _send(self, method, url, **kw):
        self.requests.append((method, url, kw))
        if self.exc:
            raise self.exc
        return self.response

    def get(self, url, **kw):
        return self._send("GET", url, **kw)

    def post(self, url, **kw):
        return self._send("POST", url, **kw)

    def close(self):
        pass


def test_get_sends_action_and_cache_buster():
    s = RecordingSession(_response('[{"id": "ST-1"}]'))
    out = SheetClient(URL, session=s).call("getStores")
    assert out == [{"id": "ST-1"}]
    method, url, kw = s.requests[0]
    assert method == "GET" and url == URL
    assert kw["params"]["action"] == "getStores"
    assert kw["params"]["_t"]
    assert s.headers["Content-Type"].startswith("text/plain")


def test_post_body_carries_action_and_data():
    s = RecordingSession(_response('{"success": true}'))
    SheetClient(URL, session=s).call("deleteStore", "POST", {"id": "ST-9"})
    _, _, kw = s.requests[0]
    assert json.loads(kw["data"].decode("utf-8")) == {"action": "deleteStore", "id": "ST-9"}


@pytest.mark.parametrize("url", ["", "   ", "https://script.google.com/macros/s/HAY_DAN_URL/exec"])
def test_unconfigured_url_raises(url):
    s = RecordingSession(_response("[]"))
    c = SheetClient(url, session=s)
    assert not c.configured
    with pytest.raises(SheetNotConfigured):
        c.call("getStores")
    assert s.requests == []


def test_html_body_is_a_response_error():
    s = RecordingSession(_response("<html>Sorry, unable to open the file</html>"))
    with pytest.raises(SheetResponseError):
        SheetClient(URL, session=s).call("getOrders")


def test_script_error_field_raises():
    s = RecordingSession(_response('{"error": "Sheet Stores not found"}'))
    with pytest.raises(SheetScriptError, match="Stores not found"):
        SheetClient(URL, session=s).call("getStores")


def test_network_failure_and_http_status_are_transport_errors():
    s = RecordingSession(exc=requests.ConnectionError("boom"))
    with pytest.raises(SheetTransportError):
        SheetClient(URL, session=s).call("getStores")

    s = RecordingSession(_response("oops", status=500))
    with pytest.raises(SheetTransportError):
        SheetClient(URL, session=s).call("getStores")
