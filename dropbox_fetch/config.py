# dropbox_fetch/config.py
import os
from dotenv import load_dotenv


def _normalize_endpoint(url: str | None) -> str | None:
    """
    Normaliza la URL base de un endpoint de Dropbox:
      - recorta espacios
      - garantiza la barra final (las rutas se concatenan: <endpoint>2/<metodo>)
    """
    if not url:
        return None
    url = url.strip()
    if not url:
        return None
    return url if url.endswith("/") else f"{url}/"


def _float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} debe ser numérico, no {raw!r}") from e


class Config:
    def __init__(self):
        # Token de acceso (bearer) de la app de Dropbox
        self.DROPBOX_TOKEN = os.getenv("DROPBOX_TOKEN", "")

        # Timeout de cada petición HTTP (segundos)
        self.DROPBOX_TIMEOUT = _float_env("DROPBOX_TIMEOUT", 60.0)

        # Overrides opcionales (proxy / servidor de pruebas)
        self.DROPBOX_CONTENT_ENDPOINT = _normalize_endpoint(os.getenv("DROPBOX_CONTENT_ENDPOINT"))
        self.DROPBOX_API_ENDPOINT = _normalize_endpoint(os.getenv("DROPBOX_API_ENDPOINT"))


def get_config():
    """
    Factory para init_client(). El entorno se lee aquí y no al importar:
    quien pasa token= explícito no depende de .env.
    """
    # En local carga .env; en CI/servidor las vars ya vienen del entorno
    load_dotenv()
    return Config()
