import asyncio
import json
import logging
from unittest.mock import MagicMock

import requests

from conftest import videos
from sitwatch import main as cli
from sitwatch.client import SitWatch


def test_run_logs_new_videos_and_cleans_up(caplog):
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    payloads = [videos(1), videos(2, 1)]

    def get(url, **_):
        r = requests.Response()
        r.status_code = 200
        r._content = json.dumps(payloads.pop(0) if len(payloads) > 1 else payloads[0]).encode()
        return r

    session.get.side_effect = get
    client = SitWatch(base_url="https://api.example.test/api", token="", session=session, interval_ms=10)

    with caplog.at_level(logging.INFO, logger="sitwatch"):
        asyncio.run(cli.run(client, run_seconds=0.2))

    assert "New video 2: video 2 (by alice)" in caplog.text
    assert len(client.watches) == 0
    session.close.assert_called_once()
