from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from mockexam.cli.runtime import load_bank_or_exit


def domains_command(bank_path: Path) -> None:
    console = Console()
    bank = load_bank_or_exit(bank_path, console)
    table = Table(title="Domains and Sections")
    table.add_column("Domain ID")
    table.add_column("Domain")
    table.add_column("Section")
    table.add_column("Questions", justify="right")
    for domain_id, name in bank.domains():
        for section in bank.sections(domain_id):
            count = len(bank.filter(domain_id=domain_id, section=section))
            table.add_row(domain_id, name, section, str(count))
    console.print(table)
    console.print(f"[bold]Total questions:[/bold] {len(bank)}")
