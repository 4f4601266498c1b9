from __future__ import annotations

import re

import attrs
from rich.console import Console
from rich.prompt import Confirm, Prompt

_JUMP_PATTERN = re.compile(r"^(?:j|jump)\s*(\d+)$")
_CHOICES_PATTERN = re.compile(r"^\d+(?:[\s,]+\d+)*$")

_KEYWORDS = {
    "": "next",
    "n": "next",
    "next": "next",
    "b": "back",
    "back": "back",
    "f": "flag",
    "flag": "flag",
    "p": "pause",
    "pause": "pause",
    "s": "submit",
    "submit": "submit",
    "q": "quit",
    "quit": "quit",
    "?": "help",
    "h": "help",
    "help": "help",
}

HELP_TEXT = (
    "Answer with the choice number (multi-select: 1,3). "
    "Commands: next (n/enter), back (b), jump (j <number>), flag (f), "
    "pause (p), submit (s), quit (q)."
)


@attrs.frozen(slots=True)
class Command:
    """A parsed line of user input. ``choices`` are 0-based; ``target`` is 0-based."""

    kind: str
    choices: tuple[int, ...] = ()
    target: int | None = None


def parse_command(text: str) -> Command | None:
    normalized = text.strip().lower()
    if normalized in _KEYWORDS:
        return Command(kind=_KEYWORDS[normalized])
    jump = _JUMP_PATTERN.match(normalized)
    if jump:
        return Command(kind="jump", target=int(jump.group(1)) - 1)
    if _CHOICES_PATTERN.match(normalized):
        numbers = [int(part) for part in re.split(r"[\s,]+", normalized) if part]
        if any(number < 1 for number in numbers):
            return None
        return Command(kind="answer", choices=tuple(number - 1 for number in numbers))
    return None


def ask_command(console: Console) -> Command:
    while True:
        response = Prompt.ask("Answer or command (? for help)", default="", console=console)
        command = parse_command(response)
        if command is None:
            console.print(f"[red]Unrecognized input.[/red] [dim]{HELP_TEXT}[/dim]")
            continue
        if command.kind == "help":
            console.print(f"[dim]{HELP_TEXT}[/dim]")
            continue
        return command


def confirm_submit(console: Console, unanswered: int) -> bool:
    if unanswered:
        console.print(f"[yellow]{unanswered} question(s) are still unanswered.[/yellow]")
    return Confirm.ask("Submit and finish this session?", default=False, console=console)


def wait_while_paused(console: Console) -> None:
    Prompt.ask("[yellow]Paused.[/yellow] Press enter to resume", default="", console=console)
