from unittest.mock import MagicMock

import pytest

from dropbox_fetch import client


@pytest.fixture(autouse=True)
def _reset_client_state(monkeypatch):
    # Cada test arranca sin token y con los endpoints por defecto
    monkeypatch.setattr(client, "_token", "")
    monkeypatch.setattr(client, "_timeout", 60.0)
    monkeypatch.setattr(client, "_content_endpoint", client.CONTENT_ENDPOINT)
    monkeypatch.setattr(client, "_api_endpoint", client.API_ENDPOINT)


def make_response(status_code=200, json_data=None, content=b""):
    r = MagicMock()
    r.status_code = status_code
    r.ok = 200 <= status_code < 300
    r.content = content
    r.text = content.decode("utf-8", errors="replace") if content else ""
    r.json.return_value = json_data if json_data is not None else {}
    return r
