# -*- coding: utf-8 -*-
"""Project version (read once from conf/version.json)."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict

VERSION_FILE = Path(__file__).resolve().parents[1] / "conf" / "version.json"


@lru_cache(maxsize=1)
def project_version() -> str:
    try:
        data = json.loads(VERSION_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return "unknown"
    ver = data.get("project_version") if isinstance(data, dict) else None
    if isinstance(ver, str) and ver.strip():
        return ver.strip()
    return "unknown"


def versions() -> Dict[str, str]:
    return {"project_version": project_version()}
