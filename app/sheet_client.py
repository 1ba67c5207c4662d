import json
import logging
import time
import uuid
from typing import Any, Dict, Optional

import requests

from app import settings

log = logging.getLogger(__name__)


# --------------------------------------------------------------------
# Errors
# --------------------------------------------------------------------
class SheetAPIError(Exception):
    """Base class for anything that goes wrong talking to the sheet script."""


class SheetNotConfigured(SheetAPIError):
    pass


class SheetTransportError(SheetAPIError):
    pass


class SheetResponseError(SheetAPIError):
    """The script answered with something that isn't JSON (usually an HTML error page)."""


class SheetScriptError(SheetAPIError):
    """The script ran and reported an error of its own."""


# --------------------------------------------------------------------
# Client
# --------------------------------------------------------------------
def is_configured(api_url: str) -> bool:
    """False for an empty URL or one still holding the paste-your-URL placeholder."""
    url = (api_url or "").strip()
    return bool(url) and settings.SHEET_API_PLACEHOLDER not in url


class SheetClient:
    """
    Thin client for the Apps Script web app that fronts the spreadsheet.

    Every call is `?action=<name>` on the same URL. POST bodies go out as
    text/plain JSON, which keeps the request "simple" for Apps Script.
    """

    def __init__(self, api_url: str, timeout: float = 30, session: Optional[requests.Session] = None):
        self.api_url = (api_url or "").strip()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "text/plain;charset=utf-8"})

    @property
    def configured(self) -> bool:
        return is_configured(self.api_url)

    def call(self, action: str, method: str = "GET", data: Optional[Dict[str, Any]] = None) -> Any:
        """
        Run one script action and return the decoded JSON.
        Raises a SheetAPIError subclass on any failure.
        """
        if not self.configured:
            raise SheetNotConfigured("Sheet API URL is not configured")

        # _t busts the Google front-end cache
        params = {"action": action, "_t": f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"}
        try:
            if method == "POST":
                body = json.dumps({"action": action, **(data or {})}, ensure_ascii=False)
                r = self.session.post(self.api_url, params=params, data=body.encode("utf-8"), timeout=self.timeout)
            else:
                r = self.session.get(self.api_url, params=params, timeout=self.timeout)
            r.raise_for_status()
        except requests.RequestException as e:
            log.error("sheet request failed: action=%s error=%s", action, e)
            raise SheetTransportError(str(e)) from e

        try:
            payload = r.json()
        except ValueError as e:
            log.error("sheet response is not JSON: action=%s body=%.200s", action, r.text)
            raise SheetResponseError("Sheet returned HTML instead of JSON") from e

        if isinstance(payload, dict) and payload.get("error"):
            log.warning("sheet script error: action=%s error=%s", action, payload["error"])
            raise SheetScriptError(str(payload["error"]))
        return payload


def get_sheet_client():
    """FastAPI dependency: one client (and HTTP session) per request."""
    client = SheetClient(settings.SHEET_API_URL, timeout=settings.SHEET_TIMEOUT)
    try:
        yield client
    finally:
        client.session.close()
