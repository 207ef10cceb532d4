"""uno-groups CLI entry point."""

from __future__ import annotations

import json
import logging
from typing import Annotated, Optional

import typer

from uno_groups.engine.config import DEFAULT_OUTPUT_PATH, GroupingConfig
from uno_groups.engine.pipeline import GroupingError, GroupingPipeline, GroupingResult

app = typer.Typer(
    name="uno-groups",
    help="Group ';'-delimited records that share any same-position field value",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from uno_groups import __version__

        typer.echo(f"uno-groups v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def output_result(result: GroupingResult, as_json: bool = False) -> None:
    """Print the run summary."""
    stats = result.stats
    if as_json:
        data = {
            "groups_count": result.group_count,
            "output": str(result.output_path) if result.output_path else None,
            **stats.to_dict(),
        }
        typer.echo(json.dumps(data, indent=2))
        return

    typer.echo(f"Groups count: {result.group_count}")
    typer.echo(f"Time: {stats.elapsed_ms:.0f} ms")


@app.command(no_args_is_help=True)
def run(
    input_file: Annotated[str, typer.Argument(help="Input file, one ';'-delimited record per line")],
    output: Annotated[
        str, typer.Option("--output", "-o", help="Report file to write")
    ] = DEFAULT_OUTPUT_PATH,
    spool: Annotated[
        bool,
        typer.Option("--spool", help="Keep unique lines in a temp file between passes"),
    ] = False,
    spool_dir: Annotated[
        Optional[str],
        typer.Option("--spool-dir", help="Directory for the spool file (default: system temp)"),
    ] = None,
    memory_guard: Annotated[
        bool,
        typer.Option(
            "--memory-guard/--no-memory-guard",
            help="Force garbage collection when memory use passes --memory-limit",
        ),
    ] = True,
    memory_limit: Annotated[
        int, typer.Option("--memory-limit", min=1, help="Memory guard threshold in MB")
    ] = 900,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Print the run summary as JSON")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version information and exit",
        ),
    ] = None,
) -> None:
    """Group records sharing a field value and write them to a report.

    Only groups with more than one member are written, largest first.

    Examples:
        uno-groups lng.txt
        uno-groups lng.txt -o out/groups.txt --spool
    """
    configure_logging(verbose)

    config = GroupingConfig(
        output_path=output,
        spool_to_disk=spool,
        spool_dir=spool_dir,
        memory_guard=memory_guard,
        memory_limit_mb=memory_limit,
    )

    try:
        result = GroupingPipeline(config).run(input_file)
    except GroupingError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1) from e

    output_result(result, json_output)


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
