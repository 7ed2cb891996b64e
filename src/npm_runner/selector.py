"""Interactive script selection rendered with rich."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from rich import box
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

PROMPT = "Script number or filter text (empty to cancel)"


def matches(query: str, label: str) -> bool:
    """Case-insensitive subsequence match of ``query`` against ``label``."""
    remaining = iter(label.lower())
    return all(char in remaining for char in query.lower() if not char.isspace())


def _render(console: Console, labels: Sequence[str], candidates: Sequence[int]) -> None:
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Script")
    for position, index in enumerate(candidates, start=1):
        table.add_row(str(position), labels[index])
    console.print(table)


def select_script(
    labels: Sequence[str],
    console: Console | None = None,
    stream: TextIO | None = None,
) -> int | None:
    """Let the user pick one of ``labels``.

    Typing a number selects the entry with that position in the current
    listing; any other text narrows the listing to matching labels.

    Returns: the index into ``labels``, or None when the user cancels (empty
        answer, end of input or Ctrl-C)
    """
    console = console or Console(stderr=True)
    candidates = list(range(len(labels)))
    if not candidates:
        return None

    while True:
        _render(console, labels, candidates)
        try:
            answer = Prompt.ask(
                PROMPT, console=console, stream=stream, default="", show_default=False
            )
        except (EOFError, KeyboardInterrupt):
            return None

        answer = answer.strip()
        if not answer:
            return None

        if answer.isdigit():
            position = int(answer)
            if 1 <= position <= len(candidates):
                return candidates[position - 1]
            console.print(f"[red]No entry numbered {position}[/red]")
            continue

        filtered = [index for index, label in enumerate(labels) if matches(answer, label)]
        if not filtered:
            console.print(f"[yellow]Nothing matches {answer!r}[/yellow]")
            continue
        candidates = filtered
