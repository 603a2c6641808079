# bibnet/cli/main.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bibnet.config.settings import LabelCase, get_settings
from bibnet.errors import InputError, OutputError, UsageError
from bibnet.graph.builder import CooccurrenceGraph, build_graph
from bibnet.graph.io import EXPORT_FORMATS, edge_rows, export_graph, write_edge_csv, write_node_csv
from bibnet.graph.schema import Relation
from bibnet.ingest.loader import load_records
from bibnet.ingest.normalize import LabelNormalizer

app = typer.Typer(
    help="Build weighted co-occurrence graphs (CSV edge lists) from bibliographic JSON records.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

USAGE = """\
Usage: bibnet MODE INPUT_FILE [OUTPUT_FILE]   (OUTPUT_FILE defaults to output.csv)

Modes:
  1 - authors linked by the number of papers they co-authored
  2 - keywords linked by the number of papers in which they co-occur
  3 - two-mode network linking authors to the keywords of their papers

The input file must be a JSON array of papers:
  [ { "authors": ["name_1", "name_2"], "title": "title_of_article",
      "venue": "name_of_venue", "year": 1988, "keywords": ["keyword1", "keyword2"] }, ... ]

Examples:
  bibnet 1 input.json
  bibnet 3 input.json authors_keywords.csv --nodes nodes.csv
"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _configure_logging(level_name: str, verbose: bool) -> None:
    level = logging.INFO if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("bibnet").setLevel(level)


def _fail(message: str, code: int, show_usage: bool = True) -> NoReturn:
    err_console.print(f"[red]{escape(message)}[/red]")
    if show_usage:
        err_console.print(escape(USAGE))
    raise typer.Exit(code=code)


def _parse_mode(raw: str) -> Relation:
    try:
        return Relation.parse(raw)
    except ValueError as exc:
        raise UsageError(
            f"Invalid operation mode {raw!r}: indicate with a single digit (1, 2 or 3) "
            f"which mode to run."
        ) from exc


def _check_output_path(raw: str) -> Path:
    """
    Reject output names that can never be created as a file.

    Empty or blank names, names with NUL bytes, and existing directories fail.
    """
    if not raw or not raw.strip() or "\x00" in raw:
        raise UsageError(f"The provided output file name {raw!r} is not a valid path.")
    path = Path(raw)
    if path.is_dir():
        raise UsageError(f"The provided output file name {raw!r} is a directory.")
    return path


def _check_export_path(raw: Optional[Path]) -> Optional[Path]:
    if raw is None:
        return None
    if raw.suffix.lower() not in EXPORT_FORMATS:
        supported = ", ".join(sorted(EXPORT_FORMATS))
        raise UsageError(f"--export must end in one of {supported}, got {str(raw)!r}.")
    return raw


def _print_top_edges(graph: CooccurrenceGraph, top: int, min_weight: int) -> None:
    rows = sorted(edge_rows(graph, min_weight=min_weight), key=lambda r: (-r[2], r[0], r[1]))
    table = Table(title=f"Top {min(top, len(rows))} edges ({graph.relation.description})")
    table.add_column("Source")
    table.add_column("Target")
    table.add_column("Weight", justify="right")
    for source, target, weight in rows[:top]:
        table.add_row(escape(source), escape(target), str(weight))
    console.print(table)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@app.command()
def run(
    mode: str = typer.Argument(
        ...,
        help="1 = co-authorship, 2 = keyword co-occurrence, 3 = authors x keywords.",
    ),
    input_file: Path = typer.Argument(
        ...,
        help="JSON array of papers with 'authors' and 'keywords' arrays.",
    ),
    output_file: Optional[str] = typer.Argument(
        None,
        help="Edge-list CSV to write (default: output.csv).",
    ),
    nodes_file: Optional[Path] = typer.Option(
        None,
        "--nodes",
        help="Also write the full node list (isolated nodes included) to this CSV.",
    ),
    export_file: Optional[Path] = typer.Option(
        None,
        "--export",
        help="Also export the graph as GraphML (.graphml) or GEXF (.gexf).",
    ),
    case: Optional[LabelCase] = typer.Option(
        None,
        "--case",
        help="Label case policy (default from BIBNET_LABEL_CASE, normally 'upper').",
    ),
    min_weight: Optional[int] = typer.Option(
        None,
        "--min-weight",
        min=1,
        help="Leave out edges lighter than this (default from BIBNET_MIN_WEIGHT).",
    ),
    top: int = typer.Option(
        0,
        "--top",
        "-t",
        min=0,
        help="Print the N heaviest edges after writing.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress at INFO level."),
) -> None:
    """
    Build a weighted co-occurrence graph from INPUT_FILE and write it as CSV.

    Example:
        bibnet 1 papers.json coauthors.csv --top 10
    """
    settings = get_settings()
    _configure_logging(settings.LOG_LEVEL, verbose)

    try:
        relation = _parse_mode(mode)
        output_path = _check_output_path(
            output_file if output_file is not None else settings.DEFAULT_OUTPUT
        )
        export_path = _check_export_path(export_file)
    except UsageError as exc:
        _fail(str(exc), code=2)

    normalizer = LabelNormalizer.from_settings(settings, case=case)
    try:
        records = load_records(input_file, normalizer)
    except InputError as exc:
        _fail(str(exc), code=1)

    console.print(f"The file {escape(str(input_file))} was successfully parsed!")
    console.print(
        f"Creating a dataset based on {relation.description}: {escape(str(output_path))}"
    )

    graph = build_graph(records, relation)
    threshold = min_weight if min_weight is not None else settings.MIN_WEIGHT

    try:
        write_edge_csv(graph, output_path, delimiter=settings.CSV_DELIMITER, min_weight=threshold)
        if nodes_file is not None:
            write_node_csv(graph, nodes_file, delimiter=settings.CSV_DELIMITER)
        if export_path is not None:
            export_graph(graph, export_path)
    except OutputError as exc:
        _fail(str(exc), code=1, show_usage=False)

    written = len(graph.edges(min_weight=threshold))
    console.print(
        f"[green]Wrote {written} edges over {graph.number_of_nodes()} nodes "
        f"({len(graph.isolated_nodes())} isolated).[/green]"
    )

    if top:
        _print_top_edges(graph, top, threshold)


if __name__ == "__main__":
    app()
