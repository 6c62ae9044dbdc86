# dropbox_fetch/client.py
import json
import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

API_VERSION = "2/"

AUTHORIZE_ENDPOINT = "https://www.dropbox.com/oauth2/authorize"
CONTENT_ENDPOINT = "https://content.dropboxapi.com/"
API_ENDPOINT = "https://api.dropboxapi.com/"

# Métodos: segmentos [a-z_2] separados por "/", p.ej. files/upload
API_METHOD_RE = re.compile(r"([a-z_2]+/)*[a-z_2]+")

WRITE_MODES = ("add", "overwrite", "update")

# -------------------- Estado del módulo --------------------
# Token con el que se firman las llamadas cuando no se pasa uno explícito.
_token: str = ""
_timeout: float = 60.0
_content_endpoint: str = CONTENT_ENDPOINT
_api_endpoint: str = API_ENDPOINT


# -------------------- Validación --------------------
def _check_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"invalid argument {value!r} (expected: string)")
    return value


def _check_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"invalid argument {value!r} (expected: boolean)")
    return value


def _check_api_method(api_method: Any) -> str:
    _check_str(api_method)
    if not API_METHOD_RE.fullmatch(api_method):
        raise ValueError(f"apiMethod has an unexpected format: {api_method}")
    return api_method


def _check_args(api_args: Any) -> Mapping:
    if not isinstance(api_args, Mapping):
        raise TypeError(f"invalid argument {api_args!r} (expected: object)")
    return api_args


def _resolve_token(token: Optional[str]) -> str:
    return _check_str(_token if token is None else token)


# -------------------- Headers --------------------
def _api_arg(api_args: Mapping) -> str:
    # Los headers HTTP solo admiten ASCII; json escapa el resto como \uXXXX
    # (Dropbox exige además escapar DEL).
    return json.dumps(dict(api_args), separators=(",", ":")).replace("\x7f", "\\u007f")


def _h(token: str, api_args: Optional[Mapping] = None, content_type: Optional[str] = None) -> Dict[str, str]:
    h = {"Authorization": f"Bearer {token}"}
    if content_type:
        h["Content-Type"] = content_type
    if api_args is not None:
        h["Dropbox-API-Arg"] = _api_arg(api_args)
    return h


# -------------------- AUTH --------------------
def authorize(client_id: Optional[str] = None, redirect_uri: str = ""):
    """El flujo OAuth 2.0 no está implementado; usa un token generado a mano."""
    raise NotImplementedError(
        "Not implemented yet, please obtain a token manually and store it via set_token"
    )


def set_token(token: str) -> None:
    """
    Fija el token usado por todas las llamadas. Con esto ya se puede omitir
    el parámetro `token` en el resto de funciones.
    """
    global _token
    _token = _check_str(token)


def configure(config) -> None:
    """
    Aplica un objeto de configuración (ver dropbox_fetch.config.Config).
    Un valor ausente (None o "") conserva el valor actual.
    """
    global _timeout, _content_endpoint, _api_endpoint
    token = getattr(config, "DROPBOX_TOKEN", None)
    if token:
        set_token(token)

    timeout = getattr(config, "DROPBOX_TIMEOUT", None)
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ValueError(f"invalid timeout {timeout!r} (expected: positive number)")
        _timeout = float(timeout)

    content_endpoint = getattr(config, "DROPBOX_CONTENT_ENDPOINT", None)
    if content_endpoint:
        _content_endpoint = _check_str(content_endpoint)
    api_endpoint = getattr(config, "DROPBOX_API_ENDPOINT", None)
    if api_endpoint:
        _api_endpoint = _check_str(api_endpoint)


def _send(method: str, url: str, headers: Dict[str, str], **kwargs) -> requests.Response:
    # Único punto de salida: log (sin token) + timeout
    logger.debug("%s %s", method, url)
    return getattr(requests, method.lower())(url, headers=headers, timeout=_timeout, **kwargs)


# -------------------- Llamadas genéricas --------------------
def post(
    api_method: str,
    api_args: Mapping,
    content: Any = None,
    endpoint: Optional[str] = None,
    token: Optional[str] = None,
) -> requests.Response:
    """
    POST genérico contra la API HTTP de Dropbox. Si no existe un wrapper para
    el método que necesitas, usa este.

    - api_args se envía serializado en el header Dropbox-API-Arg
    - content va tal cual en el cuerpo (bytes, str, archivo...)
    - endpoint por defecto: https://content.dropboxapi.com/ (operaciones de archivos)
    - token por defecto: el fijado con set_token()

    Devuelve la respuesta sin revisar el status; el llamador decide.
    """
    _check_api_method(api_method)
    _check_args(api_args)
    # content: sin validación, puede ser cualquier cosa
    endpoint = _check_str(_content_endpoint if endpoint is None else endpoint)
    token = _resolve_token(token)

    url = f"{endpoint}{API_VERSION}{api_method}"
    return _send("POST", url, _h(token, api_args, content_type="application/octet-stream"), data=content)


def get(
    api_method: str,
    api_args: Mapping,
    endpoint: Optional[str] = None,
    token: Optional[str] = None,
) -> requests.Response:
    """GET genérico; mismos argumentos que post() pero sin cuerpo."""
    _check_api_method(api_method)
    _check_args(api_args)
    endpoint = _check_str(_content_endpoint if endpoint is None else endpoint)
    token = _resolve_token(token)

    url = f"{endpoint}{API_VERSION}{api_method}"
    return _send("GET", url, _h(token, api_args))


# -------------------- Archivos --------------------
def upload(file: Mapping[str, Any], content: Any, token: Optional[str] = None) -> requests.Response:
    """
    Sube `content` al Dropbox. `file` describe el destino:
      - path: ruta en el Dropbox (se antepone "/" si falta)
      - mode: 'add' | 'overwrite' | 'update' (default 'add')
      - autorename: bool (default True)
      - mute: bool (default False)
    """
    if not isinstance(file, Mapping):
        raise TypeError(f"invalid argument {file!r} (expected: object)")
    path = _check_str(file.get("path"))
    mode = _check_str(file.get("mode", "add"))
    if mode not in WRITE_MODES:
        raise ValueError(f"unsupported write mode {mode!r} (expected one of {', '.join(WRITE_MODES)})")
    autorename = _check_bool(file.get("autorename", True))
    mute = _check_bool(file.get("mute", False))

    if not path.startswith("/"):
        path = "/" + path

    return post(
        "files/upload",
        {"path": path, "mode": mode, "autorename": autorename, "mute": mute},
        content,
        _content_endpoint,
        token,
    )


def download(path: str, token: Optional[str] = None) -> requests.Response:
    """Descarga el archivo en `path`; el contenido viene en el cuerpo de la respuesta."""
    _check_str(path)
    token = _resolve_token(token)
    return get("files/download", {"path": path}, _content_endpoint, token)


def get_metadata(
    path: str,
    token: Optional[str] = None,
    include_media_info: bool = False,
    include_deleted: bool = False,
) -> requests.Response:
    # Endpoint RPC: los argumentos van en el cuerpo JSON, no en Dropbox-API-Arg.
    # La raíz se pide con path "" así que no se normaliza.
    _check_str(path)
    _check_bool(include_media_info)
    _check_bool(include_deleted)
    token = _resolve_token(token)

    url = f"{_api_endpoint}{API_VERSION}files/get_metadata"
    body = {
        "path": path,
        "include_media_info": include_media_info,
        "include_deleted": include_deleted,
    }
    return _send("POST", url, _h(token, content_type="application/json"), json=body)
