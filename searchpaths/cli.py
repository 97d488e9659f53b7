"""Command-line interface for searchpaths."""

import sys
from pathlib import Path

import click

from .compiler.compiler import compile_paths
from .errors import CompilationError
from .graph.builder import build_graph
from .graph.relation_graph import RelationGraph
from .introspection import build_graph_from_classes, entity_name, load_class
from .log import configure_logging
from .output.formatter import format_diagnostics, format_paths
from .schema.errors import SchemaLoadError, SchemaValidationError
from .schema.loader import parse_schemas
from .schema.models import SchemaModel
from .schema.scanner import find_schema_files
from .validators.runner import validate_schema_files

DEFAULT_CONFIG_DIR = "config/searchpaths"


def _report_schema_error(e: SchemaValidationError) -> None:
    click.echo(f"Schema validation error: {e}", err=True)
    for err in e.errors:
        click.echo(f"  - {err['loc']}: {err['msg']}", err=True)


def _load_graph(
    entities: tuple[str, ...],
    schema_files: tuple[str, ...],
    directories: tuple[str, ...],
) -> tuple[RelationGraph, list[str]]:
    """Build the relation graph and pick the roots to compile."""
    class_refs = [e for e in entities if ":" in e]
    if class_refs:
        if len(class_refs) != len(entities):
            raise click.UsageError("Cannot mix 'module:Class' references with entity names")
        classes = [load_class(ref) for ref in class_refs]
        return build_graph_from_classes(classes), [entity_name(cls) for cls in classes]

    files = list(schema_files) + find_schema_files(directories)
    if entities and not files:
        raise click.UsageError("Entity names need --schema or --dir to look them up")

    schema = parse_schemas(files) if files else SchemaModel()
    roots = list(entities) if entities else schema.get_searchable_entity_names()
    return build_graph(schema), roots


@click.group()
@click.version_option()
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug)")
def main(verbose: int):
    """searchpaths: compile relation paths for search indexing."""
    configure_logging(verbose)


@main.command()
@click.argument("entities", nargs=-1)
@click.option(
    "--schema",
    "schema_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    envvar="SEARCHPATHS_SCHEMA",
    help="Schema file defining entity types (repeatable)",
)
@click.option(
    "--dir",
    "directories",
    multiple=True,
    type=click.Path(exists=True, file_okay=False),
    help="Directory to scan for schema files with searchable entities (repeatable)",
)
@click.option(
    "--relations",
    is_flag=True,
    default=False,
    help="Include related entity types",
)
@click.option(
    "--write-config",
    is_flag=True,
    default=False,
    help="Write the compiled paths to paths.json in the config directory",
)
@click.option(
    "--config-dir",
    default=DEFAULT_CONFIG_DIR,
    envvar="SEARCHPATHS_CONFIG_DIR",
    show_default=True,
    help="Configuration directory receiving paths.json",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="json",
    help="Output format when not writing the config",
)
def paths(
    entities: tuple[str, ...],
    schema_files: tuple[str, ...],
    directories: tuple[str, ...],
    relations: bool,
    write_config: bool,
    config_dir: str,
    output_format: str,
):
    """Generate forward and reverse relation paths.

    ENTITIES are entity type names from the given schemas, or
    'module:Class' references to Searchable Python classes. Without
    ENTITIES, every searchable entity in --schema files and under --dir
    is compiled.

    Exit codes:
      0 - Success (or nothing to do)
      1 - Paths compiled with errors
      2 - File, schema, or compilation error
    """
    if not entities and not directories and not schema_files:
        click.echo("No directories or entity specified. Nothing to do!", err=True)
        sys.exit(2)

    try:
        graph, roots = _load_graph(entities, schema_files, directories)
        if not roots:
            click.echo("No searchable entity types found. Nothing to do!")
            sys.exit(0)
        result = compile_paths(graph, roots, follow_relations=relations)
    except SchemaLoadError as e:
        click.echo(f"Error loading schema: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        _report_schema_error(e)
        sys.exit(2)
    except CompilationError as e:
        click.echo(f"Compilation error: {e.kind.value}: {e}", err=True)
        sys.exit(2)

    if result.diagnostics.issues:
        click.echo(format_diagnostics(result.diagnostics, subject="Compilation"), err=True)

    if write_config:
        config_path = Path(config_dir)
        if not config_path.is_dir():
            if not click.confirm(
                f"It appears that the config directory '{config_path}' does not exist yet. "
                "Would you like to create it now?",
                default=False,
            ):
                sys.exit(0)
            config_path.mkdir(parents=True)

        target = config_path / "paths.json"
        target.write_text(format_paths(result, "json"), encoding="utf-8")
        click.echo(f"Paths file written to {target}")
    else:
        click.echo(format_paths(result, output_format))  # type: ignore

    sys.exit(1 if result.diagnostics.has_errors else 0)


@main.command()
@click.argument("schema_files", nargs=-1, required=True, type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def check(schema_files: tuple[str, ...], output_format: str, strict: bool):
    """Check schema files for problems that affect path compilation.

    SCHEMA_FILES are YAML schema files; directories are scanned.

    Exit codes:
      0 - Check passed
      1 - Check failed (errors found)
      2 - File or schema error
    """
    files: list[Path] = []
    try:
        for item in schema_files:
            path = Path(item)
            files.extend(find_schema_files([path]) if path.is_dir() else [path])
        report = validate_schema_files(files)
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        _report_schema_error(e)
        sys.exit(2)

    click.echo(format_diagnostics(report, output_format))  # type: ignore

    if report.has_errors:
        sys.exit(1)
    elif strict and report.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


if __name__ == "__main__":
    main()
