import logging
import typer
from pathlib import Path

from singlehtml import __version__
from singlehtml.core.errors import ExportError
from singlehtml.core.exporter import export_report

DEFAULT_REPORT_DIR = Path("allure-report")
DEFAULT_OUTPUT = Path("AllureReport.html")

app = typer.Typer()

@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """singlehtml: bundle an Allure report folder into one offline HTML file."""
    # bare `singlehtml` exports allure-report -> AllureReport.html
    if ctx.invoked_subcommand is None:
        _run_export(DEFAULT_REPORT_DIR, DEFAULT_OUTPUT, verbose=False)

@app.command()
def version() -> None:
    """Print version."""
    typer.echo(f"singlehtml {__version__}")

@app.command()
def export(
    report_dir: Path = typer.Argument(DEFAULT_REPORT_DIR, help="Generated report folder (must contain index.html)."),
    output: Path = typer.Argument(DEFAULT_OUTPUT, help="Single HTML file to write."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every embedded file and inlined reference."),
) -> None:
    """
    Embeds the report's data files, stylesheets and scripts into one HTML file
    that opens straight from disk, without a web server.
    """
    _run_export(report_dir, output, verbose)


def _run_export(report_dir: Path, output: Path, verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        result = export_report(report_dir, output)
    except ExportError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Embedded {len(result.embedded_paths)} data files, inlined {result.inlined_count} assets.")
    typer.echo(f"Single-file report ready: {result.output_path}")
    typer.echo("Open it with a double click; no server or setup needed.")


if __name__ == "__main__":
    app()
