import typer
from typing import List

from rich.table import Table
from rich.markup import escape

from selectorkit import __version__
from selectorkit.logging_config import logger, setup_logging, reset_logging
from selectorkit.cli.config import CLIConfig
from selectorkit.cli.output import print_json, print_table, print_error
from selectorkit.discovery import SelectorFactory, resolve_all
from selectorkit.exceptions import SelectorKitError
from selectorkit.schemas import ClassificationEntry, ResolutionReport

app = typer.Typer()


@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: tables and colors instead of JSON (also via SELECTORKIT_HUMAN_MODE env var)"
    ),
):
    """
    selectorkit: resolve test selectors to classes, methods and locations.

    Machine mode is the default (JSON output). Use --human/-H for tables.
    """
    if human:
        CLIConfig.set_machine_mode(False)
    else:
        CLIConfig.reset()
        reset_logging()
        setup_logging(suppress_console=True)


@app.command()
def resolve(
    selectors: List[str] = typer.Argument(..., help="Selector text: Class, Class#method(types) or a [engine:...] unique ID."),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Build and resolve selectors, reporting each one independently.
    Exits with code 1 if any selector fails to build or resolve.
    """
    factory = SelectorFactory()
    reports: List[ResolutionReport] = []

    for text in selectors:
        try:
            selector = factory.build(text)
        except SelectorKitError as e:
            logger.debug(f"Rejected selector {text!r}: {e}")
            reports.append(ResolutionReport(
                selector=text,
                kind="invalid",
                resolved=False,
                error_type=type(e).__name__,
                error_message=str(e),
            ))
            continue
        reports.extend(resolve_all([selector]))

    failed = [r for r in reports if not r.resolved]

    if CLIConfig.is_machine_mode() or json_output:
        print_json([r.model_dump() for r in reports])
    else:
        table = Table(title="Selector resolution")
        table.add_column("Selector", style="cyan")
        table.add_column("Kind", style="magenta")
        table.add_column("Result", style="green")
        for r in reports:
            result = escape(r.target) if r.resolved else f"[red]{escape(r.error_type)}: {escape(r.error_message)}[/red]"
            table.add_row(escape(r.selector), r.kind, result)
        print_table(table)

    if failed:
        raise typer.Exit(code=1)


@app.command()
def classify(
    names: List[str] = typer.Argument(..., help="Ambiguous names: classes, Class#method references or packages."),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Classify free-text names into class, method or package selectors.
    """
    factory = SelectorFactory()
    entries: List[ClassificationEntry] = []

    for name in names:
        try:
            selector = factory.classify_name(name)
        except SelectorKitError as e:
            print_error(str(e), code=type(e).__name__, input_value=name)
            raise typer.Exit(code=1)
        entries.append(ClassificationEntry(name=name, kind=selector.kind.value, selector=selector.to_text()))

    if CLIConfig.is_machine_mode() or json_output:
        print_json([e.model_dump() for e in entries])
        return

    table = Table(title="Name classification")
    table.add_column("Name", style="cyan")
    table.add_column("Kind", style="magenta")
    for e in entries:
        table.add_row(escape(e.name), e.kind)
    print_table(table)


@app.command()
def version():
    """
    Prints the current version of selectorkit.
    """
    typer.echo(f"selectorkit v{__version__}")


if __name__ == "__main__":
    app()
