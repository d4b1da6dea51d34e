"""CLI for gqlv."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import config, parser, schema_loader
from .report import FileSummary, emit, print_kv
from .validator import validate_operation

app = typer.Typer(help="GraphQL query validator")
schema_app = typer.Typer(help="Schema operations")
config_app = typer.Typer(help="Configuration")
app.add_typer(schema_app, name="schema")
app.add_typer(config_app, name="config")

console = Console()


@dataclass
class ValidateOptions:
    """Options for validate command."""

    url: Optional[str] = None
    schema_file: Optional[str] = None
    token: Optional[str] = None
    output: Literal["console", "json"] = "console"
    skip_unknown_types: bool = False


def setup_logging(verbose: bool) -> None:
    """Route log records through rich when --verbose is given."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    out: Optional[str] = typer.Option(None, help="Output file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Fetch and cache the GraphQL schema."""
    setup_logging(verbose)
    try:
        cfg = config.load()
        full_url = url or cfg.default_url

        if not full_url:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        console.print(f"[cyan]Fetching schema from {full_url}...[/cyan]")
        profile = schema_loader.load_schema(
            url=full_url, cfg=cfg, allow_cache=True, refresh=True, token=token or cfg.token
        )

        # Fail early on documents the validator cannot use
        schema = profile.build()

        # If custom output path specified, write just the schema JSON
        if out:
            Path(out).write_text(json.dumps(profile.schema_json, indent=2))
            path = out
        else:
            path = schema_loader.cache_path_for(profile.source, cfg)

        print_kv(
            "Schema pulled",
            {"url": profile.source, "fingerprint": profile.fingerprint, "types": len(schema.types), "path": path},
        )
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@schema_app.command("show")
def schema_show(
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    schema: Optional[str] = typer.Option(None, help="Schema file path"),
):
    """Show root types and the types declared by a schema."""
    try:
        cfg = config.load()
        profile = schema_loader.load_schema(
            url=url or cfg.default_url, schema_file=schema, cfg=cfg, allow_cache=True, token=cfg.token
        )
        model = profile.build()
        print_kv(
            "Schema",
            {
                "source": profile.source,
                "fingerprint": profile.fingerprint,
                "query": model.query_type,
                "mutation": model.mutation_type,
                "subscription": model.subscription_type,
            },
        )
        print_kv("Types", {t.name: t.kind for t in model.types if not t.name.startswith("__")})
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("validate")
def validate_cmd(
    query_file: str = typer.Argument(..., help="GraphQL query file"),
    url: Optional[str] = typer.Option(None, help="GraphQL endpoint URL"),
    schema: Optional[str] = typer.Option(None, help="Schema file path"),
    token: Optional[str] = typer.Option(None, help="Bearer token"),
    output: str = typer.Option("console", help="Output format (console|json)"),
    skip_unknown_types: bool = typer.Option(
        False, help="Do not type-check values of custom scalars"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Validate a GraphQL query file against the schema."""
    setup_logging(verbose)
    try:
        opts = ValidateOptions(
            url=url,
            schema_file=schema,
            token=token,
            output=output,
            skip_unknown_types=skip_unknown_types,
        )

        summary = run_validate(query_file, opts)
        emit(summary, output)

        # Exit 2 on findings, like other failing checks
        if not summary.valid:
            raise typer.Exit(2)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@config_app.command("init")
def config_init(path: Optional[str] = typer.Option(None, help="Config file path")):
    """Write an example configuration file."""
    written = config.create_example_config(path)
    console.print(f"[green]Wrote {written}[/green]")


def run_validate(query_path: str, opts: ValidateOptions) -> FileSummary:
    """
    Run validation on a query file.

    Args:
        query_path: Path to GraphQL query file
        opts: Validation options

    Returns:
        FileSummary with one report per operation
    """
    cfg = config.load()

    profile = schema_loader.load_schema(
        url=opts.url or cfg.default_url,
        schema_file=opts.schema_file,
        cfg=cfg,
        allow_cache=True,
        token=opts.token or cfg.token,
    )
    check_unknown = cfg.validate_unknown_types and not opts.skip_unknown_types
    schema = profile.build(validate_unknown_types=check_unknown)

    operations = parser.parse_operations(Path(query_path).read_text())

    summary = FileSummary(path=query_path)
    for op in operations:
        summary.reports.append(validate_operation(schema, op))
    return summary


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
