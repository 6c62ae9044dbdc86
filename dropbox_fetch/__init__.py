# dropbox_fetch/__init__.py
from .config import get_config
from .client import (
    API_ENDPOINT,
    API_METHOD_RE,
    API_VERSION,
    AUTHORIZE_ENDPOINT,
    CONTENT_ENDPOINT,
    WRITE_MODES,
    authorize,
    configure,
    download,
    get,
    get_metadata,
    post,
    set_token,
    upload,
)

__all__ = [
    "API_ENDPOINT",
    "API_METHOD_RE",
    "API_VERSION",
    "AUTHORIZE_ENDPOINT",
    "CONTENT_ENDPOINT",
    "WRITE_MODES",
    "authorize",
    "configure",
    "download",
    "get",
    "get_metadata",
    "init_client",
    "post",
    "set_token",
    "upload",
]


def init_client(config=None):
    """Carga la config (env/.env por defecto) y la aplica al cliente."""
    config = config or get_config()
    configure(config)
    return config
