"""CLI entry point for pubtrust."""

import json
import logging
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pubtrust.adapters import JsonFileSource, RecordLoadError
from pubtrust.analyzers import ContributionScorer, PublisherSelector, is_automation_account
from pubtrust.config import Settings
from pubtrust.models import InvalidRecordError

app = typer.Typer(help="Verified publisher scoring for open-source contributors.")

console = Console()


def setup_logging(level: str) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_settings(**overrides) -> Settings:
    """Load settings from the environment, exiting on invalid values."""
    try:
        settings = Settings.from_env(**overrides)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    setup_logging(settings.log_level)
    return settings


@app.command()
def rank(
    input_file: Path = typer.Argument(..., help="JSON file with contributor records"),
    allowlist: Path | None = typer.Option(
        None, "--allowlist", "-a", help="JSON file with manually trusted publishers"
    ),
    top_n: int | None = typer.Option(None, "--top-n", "-n", help="Publishers admitted unconditionally"),
    threshold: float | None = typer.Option(None, "--threshold", "-t", help="Admission score threshold"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output JSON file"),
    audit_file: Path | None = typer.Option(None, "--audit", help="Write the audit log to this JSON file"),
) -> None:
    """Rank contributors and print the verified publisher leaderboard."""
    settings = load_settings(
        top_n=top_n, admission_threshold=threshold, allowlist_path=allowlist
    )

    try:
        source = JsonFileSource(input_file)
        contributors = source.load_contributors()
        trusted = source.load_publishers()
        profiles = source.load_profiles()
        if settings.allowlist_path:
            trusted += JsonFileSource(
                settings.allowlist_path, list_key="trusted_publishers"
            ).load_publishers()
    except RecordLoadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    selector = PublisherSelector(settings=settings, trusted_publishers=trusted)
    result = selector.select(contributors, profiles=profiles)

    table = Table(title=f"Verified Publishers ({len(result.publishers)})")
    table.add_column("Rank", style="dim", width=6)
    table.add_column("Publisher", style="cyan")
    table.add_column("Reason", style="white")
    table.add_column("Code", justify="right")
    table.add_column("Trust", justify="right", style="green")
    table.add_column("Score", justify="right", style="bold")

    for i, publisher in enumerate(result.leaderboard(), 1):
        table.add_row(
            str(i),
            publisher.user_name,
            publisher.reason.value,
            f"{publisher.base_score:,.1f}",
            f"{publisher.trust_bonus:,.1f}",
            f"{publisher.score:,.1f}",
        )

    console.print(table)

    if result.excluded:
        console.print()
        console.print(f"[bold yellow]Excluded ({len(result.excluded)}):[/bold yellow]")
        for name in result.excluded[:10]:
            excluded_score = result.contribution_scores[name].score
            console.print(f"  [dim]-[/dim] {name} [dim]({excluded_score:.1f})[/dim]")
        if len(result.excluded) > 10:
            console.print(f"  [dim]... and {len(result.excluded) - 10} more[/dim]")

    if output:
        output.write_text(result.model_dump_json(indent=2))
        console.print(f"\n[green]Saved to {output}[/green]")

    if audit_file:
        result.audit.save(audit_file)
        console.print(f"[green]Audit log saved to {audit_file}[/green]")


@app.command()
def score(
    input_file: Path = typer.Argument(..., help="JSON file with contributor records"),
    user: str | None = typer.Option(None, "--user", "-u", help="Only score this contributor"),
    as_json: bool = typer.Option(False, "--json", help="Print breakdowns as JSON"),
) -> None:
    """Show the code contribution score breakdown per contributor."""
    settings = load_settings()

    try:
        contributors = JsonFileSource(input_file).load_contributors()
    except RecordLoadError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if user:
        contributors = [c for c in contributors if c.user_name == user]
        if not contributors:
            console.print(f"[red]No contributor named {user}[/red]")
            raise typer.Exit(1)

    scorer = ContributionScorer(
        automation_classifier=lambda name: is_automation_account(name, settings.automation_marker),
        score_cap=settings.score_cap,
    )
    breakdowns = []
    for contributor in contributors:
        try:
            breakdowns.append(scorer.score_breakdown(contributor))
        except InvalidRecordError as e:
            console.print(f"[red]{e}[/red]")

    if as_json:
        console.print_json(json.dumps([b.model_dump() for b in breakdowns]))
        return

    table = Table(title="Contribution Scores")
    table.add_column("Contributor", style="cyan")
    table.add_column("Base", justify="right")
    table.add_column("Recency", justify="right")
    table.add_column("Longevity", justify="right")
    table.add_column("Abuse", justify="right", style="yellow")
    table.add_column("Score", justify="right", style="bold")

    for b in breakdowns:
        if b.is_automation:
            table.add_row(b.user_name, "-", "-", "-", "-", "[dim]bot[/dim]")
            continue
        table.add_row(
            b.user_name,
            f"{b.base_score:,.1f}",
            f"{b.recency_factor:.2f}",
            f"{b.longevity_factor:.2f}",
            f"{b.abuse_penalty:.2f}" if b.abuse_penalty is not None else "-",
            f"{b.score:,.1f}",
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from pubtrust import __version__

    console.print(f"pubtrust v{__version__}")


if __name__ == "__main__":
    app()
