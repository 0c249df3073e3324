# sitwatch/net.py
from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import HTTP_RETRIES, USER_AGENT


def make_session(user_agent: str | None = None, retries: int | None = None) -> requests.Session:
    s = requests.Session()
    s.headers.update({
        "User-Agent": user_agent or USER_AGENT,
        "Content-Type": "application/json",
        "Accept": "application/json",
    })
    total = HTTP_RETRIES if retries is None else retries
    retry = Retry(
        total=total,
        connect=total,
        read=total,
        backoff_factor=0.8,
        status_forcelist=(408, 429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET", "HEAD"}),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    return s
