#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""apps/cli/commands/brew.py

Terminal front-end for the alchemy calculator.

Notes
- This module is a thin UI layer; selection + evaluation live in `core.alchemy`.
- Slots are shown 1..3 to the user and mapped to 0..2 internally.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from apps.cli.cli_common import setup_logging
from core.alchemy import (
    AlchemyError,
    BrewSession,
    Ingredient,
    IngredientCatalog,
    InvalidSlot,
    PlayerParams,
    PotionKind,
    PotionResult,
    UnknownIngredient,
    parse_player_params,
)
from core.config import arcadia_config

console = Console()

HELP_LINES = [
    ("list [query]", "show ingredients (optionally filtered by name)"),
    ("add <name|#>", "put an ingredient into the first empty slot"),
    ("rm <slot>", "empty slot 1..3"),
    ("clear", "empty all slots"),
    ("level <n>", "alchemy level (1-100)"),
    ("perks <n>", "alchemist perk rank (0-5)"),
    ("show", "show slots and current potion"),
    ("q", "quit"),
]


def render_result(result: PotionResult) -> Panel:
    if result.kind == PotionKind.NO_POTION:
        body = "[dim]Select ingredients to see effects...[/dim]\n[dim]1.00x Power[/dim]"
        return Panel(body, title="Unknown Potion", border_style="blue")

    if result.kind == PotionKind.FAILED:
        return Panel("[dim]No common effects found.[/dim]", title="Failed Potion ❌", border_style="yellow")

    style = "red" if result.is_poison else "blue"
    table = Table(box=None, show_header=False, padding=(0, 1))
    table.add_column("Effect", style="bold")
    table.add_column("Magnitude", justify="right", style="green")
    for e in result.effects:
        table.add_row(f"✨ {escape(e.name)}", f"{e.magnitude} pts")

    grid = Table.grid(padding=(0, 1))
    grid.add_row(f"💰 Value: [bold]{result.total_value}[/bold] Septims")
    grid.add_row(f"[cyan]{result.multiplier:.2f}x Power[/cyan]")
    grid.add_row(table)
    return Panel(grid, title=f"[bold {style}]{escape(result.display_name)}[/bold {style}]", border_style=style)


def render_slots(session: BrewSession) -> Table:
    p = session.params
    table = Table(
        title=f"Level {p.level} ({session.rank}) | Perks {p.perk_count}",
        box=None,
        header_style="bold cyan",
    )
    table.add_column("Slot", justify="right", style="dim", width=4)
    table.add_column("Ingredient", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Effects", style="dim")
    for i, ing in enumerate(session.selection.slots()):
        if ing is None:
            table.add_row(str(i + 1), "[dim]- empty -[/dim]", "", "")
        else:
            table.add_row(str(i + 1), f"🌿 {escape(ing.name)}", f"{ing.value:g}", escape(", ".join(ing.effects)))
    return table


def render_catalog(items: Sequence[Ingredient], numbering: Optional[List[int]] = None) -> Table:
    table = Table(box=None, show_header=True, header_style="bold dim")
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Ingredient", style="cyan")
    table.add_column("Value", justify="right")
    table.add_column("Effects", style="dim")
    for n, ing in enumerate(items):
        idx = numbering[n] if numbering else n + 1
        table.add_row(str(idx), escape(ing.name), f"{ing.value:g}", escape(", ".join(ing.effects)))
    return table


class BrewShell:
    def __init__(self, catalog: IngredientCatalog, session: Optional[BrewSession] = None, out: Optional[Console] = None):
        self.catalog = catalog
        self.session = session or BrewSession()
        self.out = out or console

    def resolve(self, token: str) -> Ingredient:
        """Resolve `#n` / `n` (catalog number), exact name, or a unique partial name."""
        key = str(token or "").strip()
        items = self.catalog.items()
        num = key.lstrip("#")
        if num.isdigit():
            n = int(num)
            if 1 <= n <= len(items):
                return items[n - 1]
            raise UnknownIngredient(key)

        ing = self.catalog.get(key)
        if ing is not None:
            return ing
        hits = self.catalog.search(key)
        if len(hits) == 1:
            return hits[0]
        raise UnknownIngredient(key)

    def show(self) -> None:
        self.out.print(render_slots(self.session))
        self.out.print(render_result(self.session.result))

    def _list(self, query: str) -> None:
        items = self.catalog.items()
        if not items:
            self.out.print("[yellow]Ingredient catalog is empty.[/yellow]")
            return
        hits = self.catalog.search(query)
        numbering = [items.index(h) + 1 for h in hits]
        self.out.print(render_catalog(hits, numbering))
        if query:
            self.out.print(f"[dim]{len(hits)} / {len(items)} match '{escape(query)}'[/dim]")

    def _help(self) -> None:
        table = Table(box=None, show_header=False)
        table.add_column(style="bold green")
        table.add_column(style="dim")
        for cmd, desc in HELP_LINES:
            table.add_row(escape(cmd), desc)
        self.out.print(table)

    def run_command(self, line: str) -> bool:
        """Run one REPL command. Returns False when the user quits."""
        parts = str(line or "").strip().split(None, 1)
        if not parts:
            return True
        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        try:
            if cmd in ("q", "quit", "exit"):
                return False
            if cmd in ("list", "ls", "search"):
                self._list(arg)
            elif cmd == "add":
                if not arg:
                    self.out.print("[red]Usage: add <name|#>[/red]")
                    return True
                self.session.add(self.resolve(arg))
                self.show()
            elif cmd in ("rm", "remove"):
                try:
                    slot = int(arg) - 1
                except ValueError:
                    raise InvalidSlot(arg) from None
                self.session.remove(slot)
                self.show()
            elif cmd in ("clear", "reset"):
                self.session.clear()
                self.show()
            elif cmd == "level":
                self.session.set_params(level=arg)
                self.show()
            elif cmd == "perks":
                self.session.set_params(perks=arg)
                self.show()
            elif cmd == "show":
                self.show()
            elif cmd in ("help", "h", "?"):
                self._help()
            else:
                self.out.print(f"[red]Unknown command: {escape(cmd)}[/red] (try 'help')")
        except AlchemyError as e:
            self.out.print(f"[red]{escape(str(e))}[/red]")
        return True

    def interactive(self) -> None:
        self.out.print(Panel("[bold cyan]Arcadia Alchemy Lab[/bold cyan]\nType 'help' for commands.", border_style="cyan"))
        self.show()
        while True:
            try:
                line = Prompt.ask("brew", console=self.out)
            except (KeyboardInterrupt, EOFError):
                break
            if not self.run_command(line):
                break


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Arcadia alchemy calculator")
    p.add_argument("ingredients", nargs="*", help="ingredient names or catalog numbers (one-shot mode)")
    p.add_argument("--level", default=None, help="alchemy level 1-100 (default from conf/settings.ini)")
    p.add_argument("--perks", default=None, help="alchemist perk rank 0-5")
    p.add_argument("--catalog", default="", help="ingredient catalog JSON path")
    p.add_argument("--json", action="store_true", help="print the session snapshot as JSON (one-shot mode)")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args(argv)

    setup_logging(args.verbose, console=console)

    catalog_path = Path(args.catalog).expanduser() if args.catalog else arcadia_config.catalog_path()
    catalog = IngredientCatalog(catalog_path)

    params: PlayerParams = parse_player_params(
        args.level,
        args.perks,
        default_level=arcadia_config.get_int("PLAYER", "DEFAULT_LEVEL", 15),
        default_perks=arcadia_config.get_int("PLAYER", "DEFAULT_PERKS", 0),
    )
    shell = BrewShell(catalog, BrewSession(params))

    if not args.ingredients:
        shell.interactive()
        return 0

    rc = 0
    for token in args.ingredients:
        try:
            shell.session.add(shell.resolve(token))
        except AlchemyError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            rc = 1

    if args.json:
        console.print_json(data=shell.session.snapshot())
    else:
        shell.show()
    return rc


if __name__ == "__main__":
    sys.exit(main())
