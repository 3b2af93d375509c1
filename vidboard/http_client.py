"""Shared HTTP client for calls to the extraction API."""

import requests
from requests.adapters import HTTPAdapter

_session: requests.Session | None = None


def get_session() -> requests.Session:
    """Return a shared requests.Session.

    Requests go out exactly once: the adapters are mounted with retries
    disabled so a failed call surfaces immediately and the caller decides
    whether to re-request.
    """
    global _session
    if _session is None:
        _session = requests.Session()
        adapter = HTTPAdapter(max_retries=0)
        _session.mount("http://", adapter)
        _session.mount("https://", adapter)
    return _session
