"""
Command-line interface for component code generation.

Loads a design node dump, builds the canonical model once and renders it
for one or all targets with rich output (or JSON for tooling).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    GeneratorConfig,
    RegistryError,
    build_model,
    generate_code,
    get_generator,
    list_all_language_info,
    list_supported_languages,
    load_config,
)
from .codegen.registry import get_registry
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.core.generator import GenerationResult
from .logging_config import configure_logging, get_logger
from .nodes import NodeIndex
from .utils import NodeLoaderError, load_nodes, parse_nodes

logger = get_logger(__name__)

ALL_TARGETS = "all"

# Pygments lexers for the code block languages
LEXERS = {"jsx": "jsx", "tsx": "tsx", "vue": "html"}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="component-props",
        description="Generate React and Vue code from design component properties",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  component-props document.json
  component-props -t vue --options-api document.json
  component-props --node 1:2 --node 1:7 --show-defaults document.json
  component-props --json --stdin < document.json
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="JSON node dump to read")
    input_group.add_argument("--url", help="URL to fetch the node dump from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the node dump from standard input"
    )

    parser.add_argument("--token", help="API token sent with --url requests")

    parser.add_argument(
        "--target",
        "-t",
        default=ALL_TARGETS,
        help="Target framework: react, vue or all (default: all)",
    )
    parser.add_argument(
        "--node",
        action="append",
        metavar="ID",
        dest="nodes",
        help="Only format this node (repeatable; default: every component node)",
    )

    settings_group = parser.add_argument_group("settings")
    settings_group.add_argument(
        "--show-defaults",
        action="store_true",
        help="Include properties that hold their default value",
    )
    settings_group.add_argument(
        "--explicit-boolean",
        action="store_true",
        help="Spell out boolean attribute values",
    )
    settings_group.add_argument(
        "--options-api",
        action="store_true",
        help="Vue definitions with defineComponent instead of withDefaults",
    )
    settings_group.add_argument("--config", help="Configuration file path (JSON)")
    settings_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comment headers to definitions",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--json", action="store_true", help="Emit the format results as JSON"
    )
    output_group.add_argument("--output", "-o", help="Output file (default: stdout)")
    output_group.add_argument(
        "--verbose", action="store_true", help="Show metadata and debug logging"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-targets", action="store_true", help="List supported targets and exit"
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Entry point for the ``component-props`` command.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = create_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        if args.list_targets:
            return _list_targets()

        targets = _resolve_targets(args.target)
        source, index = _load_input(args)
        if not args.json:
            console.print(f"[dim]Loaded {source}[/dim]", highlight=False)

        nodes = index.relevant_nodes(args.nodes)
        if not nodes:
            raise CLIError("No component, component set or instance nodes to format")

        model = build_model(nodes)
        results = []
        for target in targets:
            config = _build_config(args, target)
            generator = get_generator(target, config, lookup=index.resolve)
            result = generate_code(
                generator,
                model,
                config.instance_settings(),
                config.definition_settings(),
            )
            if not result.success:
                console.print(
                    f"[red]✗ Code generation failed:[/red] {result.error_message}"
                )
                return 1
            results.append(result)

        return _output(results, args)

    except (CLIError, NodeLoaderError, ConfigError, RegistryError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.debug("CLI run failed", exc_info=True)
        return 1


def _resolve_targets(target: str) -> list[str]:
    """Targets named by ``--target``."""
    supported = list_supported_languages()
    if target.lower() == ALL_TARGETS:
        return supported
    if target.lower() in supported:
        return [target.lower()]
    try:
        return [get_registry().resolve_name(target)]
    except RegistryError as e:
        raise CLIError(
            f"Unsupported target '{target}'. Supported: {', '.join(supported)}, {ALL_TARGETS}"
        ) from e


def _load_input(args: argparse.Namespace) -> tuple[str, NodeIndex]:
    """Load the node index from the selected input source."""
    if args.file:
        return load_nodes(file_path=args.file)
    if args.url:
        return load_nodes(url=args.url, token=args.token)
    if args.stdin:
        return parse_nodes(sys.stdin.read())
    raise CLIError("Input source required (file, --url, or --stdin)")


def _build_config(args: argparse.Namespace, language: str) -> GeneratorConfig:
    """Merge per-target defaults, the config file and CLI flags."""
    overrides: dict[str, Any] = {}
    if args.show_defaults:
        overrides["show_defaults"] = True
    if args.explicit_boolean:
        overrides["explicit_boolean"] = True
    if args.options_api and language == "vue":
        overrides["options_api"] = True
    if args.no_comments:
        overrides["add_comments"] = False

    config = load_config(language, custom_config=overrides, config_file=args.config)

    for warning in get_config_manager().validate_config(config, language):
        logger.warning("Config: %s", warning)

    return config


def _list_targets() -> int:
    """List supported targets with details."""
    table = Table(title="📋 Supported Targets", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Label", style="cyan")
    table.add_column("Extension", style="cyan")
    table.add_column("Named Slots", style="magenta")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            name,
            info["label"],
            info["file_extension"],
            "yes" if info["named_slots"] else "no",
            aliases,
        )

    console.print()
    console.print(table)
    console.print()
    return 0


def _output(results: list[GenerationResult], args: argparse.Namespace) -> int:
    """Write results to stdout or the output file."""
    if args.json:
        text = json.dumps([result.result.to_dict() for result in results], indent=2, ensure_ascii=False)
    else:
        text = _plain_text(results)

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(f"[green]✓[/green] Saved to [cyan]{output_path}[/cyan]")
    elif args.json:
        # Machine-readable output bypasses rich formatting
        sys.stdout.write(text + "\n")
    else:
        _print_results(results)

    if args.verbose and not args.json:
        _print_metadata(results)

    warnings = [warning for result in results for warning in result.warnings]
    if warnings and not args.json:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in dict.fromkeys(warnings):
            console.print(f"  [yellow]•[/yellow] {warning}", highlight=False)
        console.print()

    return 0


def _plain_text(results: list[GenerationResult]) -> str:
    sections = []
    for result in results:
        for item in result.result.items:
            for block in item.code:
                sections.append("\n\n".join(block.lines))
    return "\n\n".join(sections)


def _print_results(results: list[GenerationResult]) -> None:
    """Syntax-highlighted panel per target pass."""
    for result in results:
        for item in result.result.items:
            for block in item.code:
                code = "\n\n".join(block.lines)
                syntax = Syntax(code, LEXERS.get(block.language, block.language), theme="monokai")
                console.print(
                    Panel(
                        syntax,
                        title=f"{result.result.label} · {item.label}",
                        border_style="green",
                    )
                )


def _print_metadata(results: list[GenerationResult]) -> None:
    for result in results:
        metadata_table = Table(
            title=f"📊 {result.result.label} Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print(metadata_table)


if __name__ == "__main__":
    sys.exit(main())
