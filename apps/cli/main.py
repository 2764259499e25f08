#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Unified CLI dispatcher for Arcadia-Lab."""

from __future__ import annotations

import runpy
import sys
from pathlib import Path
from typing import List, Optional, Tuple

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def _tool_path(tool: dict) -> Path:
    folder = tool.get("folder") or "apps/cli"
    if folder == "devtools":
        base = PROJECT_ROOT / "devtools"
    else:
        base = PROJECT_ROOT / folder
    return base / str(tool.get("file"))


def _print_tools() -> None:
    from rich.console import Console
    from rich.table import Table

    from apps.cli.registry import get_tools

    table = Table(title="Arcadia-Lab tools", box=None, header_style="bold cyan")
    table.add_column("Alias", style="bold")
    table.add_column("Type", style="dim")
    table.add_column("Description")
    table.add_column("Usage", style="green")
    for t in get_tools():
        table.add_row(t["alias"], t["type"], t["desc"], t["usage"])
    Console().print(table)


def _resolve_tool(alias: Optional[str]) -> Tuple[Optional[Path], List[str]]:
    from apps.cli.registry import get_tools

    tools = get_tools()
    brew = next((t for t in tools if t.get("alias") == "brew"), None)
    default_path = _tool_path(brew) if brew else (PROJECT_ROOT / "apps" / "cli" / "commands" / "brew.py")

    if not alias:
        return default_path, []

    key = str(alias).strip()
    if key in ("-h", "--help", "help", "tools"):
        return None, []

    for tool in tools:
        if tool.get("alias") == key or tool.get("file") == key:
            return _tool_path(tool), []

    # unknown alias: treat it as an ingredient name for brew
    return default_path, [key]


def main(argv: Optional[List[str]] = None) -> None:
    argv = list(argv) if argv is not None else list(sys.argv[1:])
    alias = argv[0] if argv else None
    path, injected = _resolve_tool(alias)
    if path is None:
        _print_tools()
        return

    if argv and alias:
        argv = argv[1:]
    argv = injected + argv

    sys.argv = [str(path)] + argv
    runpy.run_path(str(path), run_name="__main__")


if __name__ == "__main__":
    main()
