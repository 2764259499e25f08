#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

import argparse
import importlib.util
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from apps.cli.cli_common import (
    PROJECT_ROOT,
    env_hint,
    file_info,
    human_mtime,
    human_size,
)
from core.alchemy import load_ingredients
from core.config import ConfigLoader
from core.version import project_version

console = Console()

REQUIRED_MODULES = [
    ("rich", "CLI rendering"),
    ("fastapi", "web API"),
    ("uvicorn", "web server"),
    ("pydantic", "web request models"),
]


def _status(level: str) -> str:
    if level == "PASS":
        return "[green]PASS[/green]"
    if level == "WARN":
        return "[yellow]WARN[/yellow]"
    return "[red]FAIL[/red]"


def _check_path_exists(path: Path, kind: str, fix: str = ""):
    if kind == "file":
        ok = path.is_file()
    elif kind == "dir":
        ok = path.is_dir()
    else:
        ok = path.exists()
    level = "PASS" if ok else "WARN"
    return ok, level, str(path), fix


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Arcadia Doctor (config + catalog health check)")
    p.add_argument("--config", default="", help="settings.ini path (default: conf/settings.ini)")
    p.add_argument("--enforce", action="store_true", help="exit non-zero on failures (CI)")
    p.add_argument("--strict", action="store_true", help="treat WARN as FAIL (only when --enforce)")
    args = p.parse_args(argv)

    env_name, env_kind = env_hint()
    console.print(Panel(
        f"[bold cyan]Arcadia Doctor[/bold cyan] v{project_version()}\nEnv: {env_name} ({env_kind})",
        border_style="cyan",
    ))

    table = Table(title="Health Checks", box=None, show_header=True, header_style="bold cyan")
    table.add_column("Check", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Details", style="dim")
    table.add_column("Fix Hint", style="green")

    fail = 0
    warn = 0

    # 1) config file (optional: defaults apply when missing)
    cfg = ConfigLoader(args.config or None)
    ok, level, details, fix = _check_path_exists(cfg.config_path, "file", "Optional: copy conf/settings.ini to override defaults")
    table.add_row("conf/settings.ini", _status(level), details, fix if not ok else "")
    if not ok:
        warn += 1

    # 2) ingredient catalog
    catalog_path = cfg.catalog_path()
    info = file_info(catalog_path)
    if not info["exists"]:
        table.add_row("ingredient catalog", _status("FAIL"), str(catalog_path), "Set [PATHS] CATALOG in settings.ini")
        fail += 1
    else:
        items = load_ingredients(catalog_path)
        level = "PASS" if items else "FAIL"
        details = f"{len(items)} ingredients | {human_mtime(info['mtime'])} | {human_size(info['size'])}"
        table.add_row("ingredient catalog", _status(level), details, "Check JSON format" if not items else "")
        if not items:
            fail += 1
        else:
            no_effects = [i.name for i in items if not i.effects]
            if no_effects:
                table.add_row("ingredients w/o effects", _status("WARN"), ", ".join(no_effects[:5]), "Never contribute to a potion")
                warn += 1

    # 3) player defaults
    lvl = cfg.get_int("PLAYER", "DEFAULT_LEVEL", 15)
    perks = cfg.get_int("PLAYER", "DEFAULT_PERKS", 0)
    level = "PASS" if (1 <= lvl <= 100 and 0 <= perks <= 5) else "WARN"
    table.add_row("player defaults", _status(level), f"level={lvl} perks={perks}", "Values are clamped on use" if level != "PASS" else "")
    if level != "PASS":
        warn += 1

    # 4) python deps
    for mod, purpose in REQUIRED_MODULES:
        found = importlib.util.find_spec(mod) is not None
        table.add_row(f"module {mod}", _status("PASS" if found else "FAIL"), purpose, f"pip install {mod}" if not found else "")
        if not found:
            fail += 1

    console.print(table)
    console.print(f"[dim]Root: {PROJECT_ROOT} | Summary: FAIL={fail}, WARN={warn}[/dim]")

    if not args.enforce:
        return 0
    if fail:
        return 2
    if args.strict and warn:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
