"""
Command-line interface for json2zig.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from tqdm import tqdm

from .errors import ConfigError, Json2ZigError, OutputError
from .inference import Parsed, TypeBuilder
from .reader import JsonSource
from .render import RenderOptions, render, render_declaration
from .types import to_dict

console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json2zig",
        description="Infer a Zig type declaration from JSON documents",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="JSON files to read (default: stdin). Several files are merged into one type",
    )

    types_group = parser.add_argument_group("type spellings")
    types_group.add_argument("-s", "--string", help="Type to use for strings")
    types_group.add_argument("-i", "--int", dest="integer", help="Type to use for integers")
    types_group.add_argument("-f", "--float", help="Type to use for floats")
    types_group.add_argument("-b", "--bool", help="Type to use for bools")
    types_group.add_argument("-a", "--any", help="Type to use for fields of multiple types")
    types_group.add_argument("-u", "--unknown", help="Type to use for fields of unknown type")

    parser.add_argument(
        "--items",
        action="store_true",
        help="Stream the elements of each top-level array and infer their common type",
    )
    parser.add_argument(
        "-n", "--name",
        help="Emit a named declaration: pub const NAME = ...;",
    )
    parser.add_argument(
        "--format",
        default="zig",
        choices=["zig", "yaml", "json"],
        help="Output format; yaml and json dump the inferred schema with ranges (default: zig)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output path. If omitted, writes to stdout",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _infer(args: argparse.Namespace) -> Parsed:
    source = JsonSource(args.files)
    builder = TypeBuilder()

    if not args.items:
        return builder.parse_many(source.documents())

    with tqdm(desc="Inferring items", unit=" items", file=sys.stderr) as pbar:
        def counted():
            for item in source.items():
                pbar.update(1)
                yield item

        parsed = builder.parse_many(counted())
        total = pbar.n

    if total == 0:
        console.print("[yellow]No array items found in the input.[/yellow]")
    else:
        console.print(f"[bold green]Merged {total:,} items from {len(source.describe())} source(s)[/bold green]")
    return parsed


def _format_output(args: argparse.Namespace, parsed: Parsed) -> str:
    if args.format == "yaml":
        return yaml.dump(to_dict(parsed.root), default_flow_style=False, sort_keys=False, allow_unicode=True)
    if args.format == "json":
        return json.dumps(to_dict(parsed.root), indent=2, ensure_ascii=False) + "\n"

    options = RenderOptions().with_overrides(
        string=args.string,
        integer=args.integer,
        float=args.float,
        bool=args.bool,
        any=args.any,
        unknown=args.unknown,
    )
    if args.name is not None:
        if not args.name:
            raise ConfigError("--name must not be empty")
        return render_declaration(parsed.root, args.name, options)
    return render(parsed.root, options)


def _write_output(text: str, output: Optional[Path]) -> None:
    try:
        if output is None:
            sys.stdout.write(text)
            sys.stdout.flush()
        else:
            with open(output, "w", encoding="utf-8") as f:
                f.write(text)
    except OSError as e:
        raise OutputError(f"failed to write output: {e}") from e

    if output is not None:
        console.print(f"[bold green]Wrote type definition to {escape(str(output))}[/bold green]")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        from . import __version__
        console.print(f"json2zig version {__version__}")
        return 0

    _configure_logging(args.verbose)

    try:
        parsed = _infer(args)
        text = _format_output(args, parsed)
        _write_output(text, args.output)

    except FileNotFoundError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1
    except Json2ZigError as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        return 130
    except Exception as e:
        console.print(f"[bold red]Error: {escape(str(e))}[/bold red]")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
