# dropbox_fetch/cli.py
import argparse
import json
import pathlib
import sys
from typing import List, Optional

import requests

from . import client, init_client


def _fail(r: requests.Response) -> int:
    print(f"[ERROR] {r.status_code} {r.text[:200]}", file=sys.stderr)
    return 1


def cmd_upload(args) -> int:
    src = pathlib.Path(args.local)
    if not src.is_file():
        print(f"[ERROR] No existe el archivo local: {src}", file=sys.stderr)
        return 1
    file = {
        "path": args.remote,
        "mode": args.mode,
        "autorename": not args.no_autorename,
        "mute": args.mute,
    }
    with open(src, "rb") as f:
        r = client.upload(file, f.read(), token=args.token)
    if not r.ok:
        return _fail(r)
    meta = r.json()
    print(f"[OK] {src} -> {meta.get('path_display', args.remote)} ({meta.get('size', '?')} bytes)")
    return 0


def cmd_download(args) -> int:
    r = client.download(args.remote, token=args.token)
    if not r.ok:
        return _fail(r)
    if not args.out:
        sys.stdout.buffer.write(r.content)
        sys.stdout.flush()
        return 0
    dest = pathlib.Path(args.out)
    dest.parent.mkdir(parents=True, exist_ok=True)
    with open(dest, "wb") as f:
        f.write(r.content)
    print(f"[OK] {args.remote} -> {dest}")
    return 0


def cmd_metadata(args) -> int:
    r = client.get_metadata(
        args.remote,
        token=args.token,
        include_media_info=args.media_info,
        include_deleted=args.deleted,
    )
    if not r.ok:
        return _fail(r)
    print(json.dumps(r.json(), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dropbox-fetch", description="Cliente mínimo de la API HTTP de Dropbox.")
    parser.add_argument("--token", type=str, default=None, help="Token de acceso (por defecto DROPBOX_TOKEN)")
    sub = parser.add_subparsers(dest="command", required=True)

    up = sub.add_parser("upload", help="Sube un archivo local")
    up.add_argument("local", help="Archivo local")
    up.add_argument("remote", help="Ruta destino en el Dropbox, e.g. /docs/a.txt")
    up.add_argument("--mode", choices=client.WRITE_MODES, default="add", help="Qué hacer si ya existe")
    up.add_argument("--no-autorename", action="store_true", help="No renombrar en caso de conflicto")
    up.add_argument("--mute", action="store_true", help="No notificar al usuario")
    up.set_defaults(func=cmd_upload)

    down = sub.add_parser("download", help="Descarga un archivo")
    down.add_argument("remote", help="Ruta del archivo en el Dropbox")
    down.add_argument("--out", type=str, default=None, help="Archivo local de salida (default: stdout)")
    down.set_defaults(func=cmd_download)

    meta = sub.add_parser("metadata", help="Muestra la metadata de un archivo o carpeta")
    meta.add_argument("remote", help="Ruta en el Dropbox (\"\" para la raíz)")
    meta.add_argument("--media-info", action="store_true", help="Incluir media info")
    meta.add_argument("--deleted", action="store_true", help="Incluir archivos borrados")
    meta.set_defaults(func=cmd_metadata)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        init_client()
    except (RuntimeError, ValueError) as e:
        print(f"[ERROR] Configuración inválida: {e}", file=sys.stderr)
        return 2
    try:
        return args.func(args)
    # RequestException primero: requests.JSONDecodeError también es ValueError
    except requests.RequestException as e:
        print(f"[ERROR] Falló la petición: {e}", file=sys.stderr)
        return 1
    except (TypeError, ValueError) as e:
        print(f"[ERROR] Argumento inválido: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
