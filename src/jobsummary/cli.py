import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from jobsummary.extractor import extract_job_text
from jobsummary.logger import configure_logging
from jobsummary.models import SummaryOptions
from jobsummary.panel import PanelSession, PanelState
from jobsummary.settings import settings

app = typer.Typer(help="Summarize job postings with a language model.")


def _read_page(page: Path) -> str:
    if not page.is_file():
        typer.echo(f"ERROR: Page not found: {page}", err=True)
        raise typer.Exit(1)
    return page.read_text(encoding="utf-8")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (defaults to PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Run the summary API."""
    from jobsummary.main import run

    run(host=host, port=port, reload=reload)


@app.command()
def extract(
    page: Path = typer.Argument(..., help="Saved HTML page"),
    url: str = typer.Option("", help="URL to record with the extraction"),
):
    """Print the text the extension would send for a saved page."""
    result = extract_job_text(_read_page(page), url=url or page.resolve().as_uri())
    typer.echo(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))


@app.command()
def summarize(
    page: Path = typer.Argument(..., help="Saved HTML page"),
    length: str = typer.Option("medium", help="short | medium | detailed"),
    focus: str = typer.Option("balanced", help="skills | qualifications | responsibilities | balanced"),
    format: str = typer.Option("bullets", "--format", help="bullets | paragraph"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Summary API base URL"),
    html: bool = typer.Option(False, "--html", help="Print the rendered panel HTML"),
):
    """Extract a saved page and summarize it through a running API."""
    configure_logging(settings.log_level)
    try:
        options = SummaryOptions(length=length, focus=focus, format=format)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(2)

    session = PanelSession(api_base_url=api_url, options=options)
    session.receive_job_data(extract_job_text(_read_page(page), url=page.resolve().as_uri()))
    asyncio.run(session.summarize())

    if session.state is not PanelState.SUCCESS:
        typer.echo(f"ERROR: {session.error_message}", err=True)
        raise typer.Exit(1)
    if html:
        typer.echo(session.html)
    else:
        typer.echo(json.dumps(session.summary.to_wire(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
