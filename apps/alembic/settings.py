# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from core.config import ConfigLoader


@dataclass(frozen=True)
class AlembicSettings:
    """Runtime settings for the Alembic web server.

    Notes
    - root_path is for reverse-proxy mount (e.g. '/alchemy')
    - max_sessions bounds the in-memory brew sessions (oldest evicted first)
    """

    catalog_path: Path
    host: str = "127.0.0.1"
    port: int = 8000
    root_path: str = ""
    cors_allow_origins: Optional[List[str]] = None
    gzip_minimum_size: int = 800
    max_sessions: int = 256

    @staticmethod
    def normalize_root_path(root_path: str) -> str:
        rp = (root_path or "").strip()
        if not rp:
            return ""
        if not rp.startswith("/"):
            rp = "/" + rp
        rp = rp.rstrip("/")
        return rp

    @classmethod
    def from_config(cls, cfg: ConfigLoader) -> "AlembicSettings":
        return cls(
            catalog_path=cfg.catalog_path(),
            host=cfg.get("WEB", "HOST", "127.0.0.1") or "127.0.0.1",
            port=cfg.get_int("WEB", "PORT", 8000),
            root_path=cls.normalize_root_path(cfg.get("WEB", "ROOT_PATH", "") or ""),
            max_sessions=cfg.get_int("WEB", "MAX_SESSIONS", 256),
        )
