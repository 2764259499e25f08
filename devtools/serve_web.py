#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Run the Alembic web calculator (FastAPI + Uvicorn).

Usage:
  python3 devtools/serve_web.py --host 0.0.0.0 --port 8000 --no-open
"""

from __future__ import annotations

import argparse
import os
import socket
import sys
import webbrowser
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import uvicorn  # type: ignore

from apps.alembic.app import create_app  # noqa: E402
from apps.alembic.settings import AlembicSettings  # noqa: E402
from core.alchemy import parse_player_params  # noqa: E402
from core.config import arcadia_config  # noqa: E402


def _detect_lan_ip() -> str:
    """Best-effort LAN IP discovery (no external network required)."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        # doesn't need to be reachable; used to pick outbound interface
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def main() -> None:
    defaults = AlembicSettings.from_config(arcadia_config)

    parser = argparse.ArgumentParser(description="Arcadia Alembic (FastAPI) server.")
    parser.add_argument("--catalog", default=os.environ.get("ARCADIA_CATALOG", str(defaults.catalog_path)))
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument("--root-path", default=defaults.root_path, help="Reverse proxy mount path, e.g. /alchemy")
    parser.add_argument("--reload-catalog", action="store_true", help="Auto-reload catalog when file changes")
    parser.add_argument("--max-sessions", type=int, default=defaults.max_sessions)
    parser.add_argument("--no-open", action="store_true", help="Do not open browser")
    parser.add_argument("--log-level", default="info", choices=["critical", "error", "warning", "info", "debug", "trace"])
    parser.add_argument("--cors-allow-origin", action="append", default=[], help="CORS allow origin (repeatable)")
    args = parser.parse_args()

    catalog_path = Path(args.catalog).expanduser().resolve()
    if not catalog_path.exists():
        # the app still starts with an empty catalog
        print(f"⚠️  Catalog not found: {catalog_path}")

    app = create_app(
        catalog_path=catalog_path,
        root_path=args.root_path,
        cors_allow_origins=(args.cors_allow_origin or None),
        gzip_minimum_size=defaults.gzip_minimum_size,
        auto_reload_catalog=bool(args.reload_catalog),
        max_sessions=int(args.max_sessions),
        default_params=parse_player_params(
            None,
            None,
            default_level=arcadia_config.get_int("PLAYER", "DEFAULT_LEVEL", 15),
            default_perks=arcadia_config.get_int("PLAYER", "DEFAULT_PERKS", 0),
        ),
    )

    host = str(args.host)
    port = int(args.port)

    # Print useful addresses
    rp = (args.root_path or "").rstrip("/")
    local_url = f"http://127.0.0.1:{port}{rp}/"
    if host == "0.0.0.0":
        lan_ip = _detect_lan_ip()
        lan_url = f"http://{lan_ip}:{port}{rp}/"
        print(f"Arcadia Alembic: {lan_url}")
        print(f"Open (local): {local_url}")
        print(f"Catalog: {catalog_path}")
        open_url = lan_url
    else:
        url = f"http://{host}:{port}{rp}/"
        print(f"Arcadia Alembic: {url}")
        print(f"Catalog: {catalog_path}")
        open_url = url

    if not args.no_open:
        webbrowser.open(open_url)

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=args.log_level,
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
