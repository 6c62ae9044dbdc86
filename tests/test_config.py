import os
import subprocess
import sys
from pathlib import Path

import pytest

from dropbox_fetch import config, init_client, client

ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("http://localhost:9000", "http://localhost:9000/"),
        (" https://content.dropboxapi.com/ ", "https://content.dropboxapi.com/"),
    ],
)
def test_normalize_endpoint(raw, expected):
    assert config._normalize_endpoint(raw) == expected


def test_get_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DROPBOX_TOKEN", "env-token")
    monkeypatch.setenv("DROPBOX_TIMEOUT", "12.5")
    monkeypatch.setenv("DROPBOX_API_ENDPOINT", "http://proxy.local")
    monkeypatch.delenv("DROPBOX_CONTENT_ENDPOINT", raising=False)

    cfg = config.get_config()
    assert cfg.DROPBOX_TOKEN == "env-token"
    assert cfg.DROPBOX_TIMEOUT == 12.5
    assert cfg.DROPBOX_API_ENDPOINT == "http://proxy.local/"
    assert cfg.DROPBOX_CONTENT_ENDPOINT is None


def test_get_config_sees_later_environment_changes(monkeypatch):
    monkeypatch.setenv("DROPBOX_TOKEN", "first")
    assert config.get_config().DROPBOX_TOKEN == "first"
    monkeypatch.setenv("DROPBOX_TOKEN", "second")
    assert config.get_config().DROPBOX_TOKEN == "second"


def test_invalid_timeout_fails_when_config_is_loaded(monkeypatch):
    monkeypatch.setenv("DROPBOX_TIMEOUT", "soon")
    with pytest.raises(RuntimeError, match="DROPBOX_TIMEOUT"):
        config.get_config()


def test_invalid_timeout_does_not_break_import(tmp_path):
    env = dict(os.environ, DROPBOX_TIMEOUT="soon", PYTHONPATH=str(ROOT))
    code = (
        "import dropbox_fetch\n"
        "from unittest.mock import patch\n"
        "with patch('dropbox_fetch.client.requests.post') as p:\n"
        "    dropbox_fetch.post('files/upload', {'path': '/a'}, b'x', token='t')\n"
        "assert p.called\n"
    )
    # cwd vacío para que ningún .env del repo interfiera
    result = subprocess.run([sys.executable, "-c", code], cwd=tmp_path, env=env, capture_output=True, text=True)
    assert result.returncode == 0, result.stderr


def test_init_client_applies_given_config():
    class Cfg:
        DROPBOX_TOKEN = "init-token"
        DROPBOX_TIMEOUT = 30.0
        DROPBOX_CONTENT_ENDPOINT = None
        DROPBOX_API_ENDPOINT = None

    assert init_client(Cfg) is Cfg
    assert client._token == "init-token"
    assert client._timeout == 30.0
    assert client._content_endpoint == client.CONTENT_ENDPOINT


def test_init_client_loads_environment(monkeypatch):
    monkeypatch.setenv("DROPBOX_TOKEN", "from-env")
    monkeypatch.delenv("DROPBOX_TIMEOUT", raising=False)
    cfg = init_client()
    assert cfg.DROPBOX_TOKEN == "from-env"
    assert client._token == "from-env"
