"""CLI entry point for recordkit."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from typing import Any

from .field_spec import FieldSpec
from .logging_config import configure_logging
from .missing import MISSING
from .schema import RecordSchema
from .settings import get_settings
from .synthesizer import Record

logger = logging.getLogger(__name__)

# ANSI escape sequences
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"


class TargetError(Exception):
    """Raised when a ``module:attribute`` target cannot be resolved."""


def _resolve_target(target: str) -> tuple[str, RecordSchema]:
    """
    Import ``module:attribute`` and return a display name and its schema.

    The attribute may be a RecordSchema or a derived record type, and may be dotted.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        msg = f"target must look like 'package.module:attribute', got {target!r}"
        raise TargetError(msg)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"cannot import module {module_name!r}: {e}"
        raise TargetError(msg) from e

    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            msg = f"{module_name!r} has no attribute {attribute!r}"
            raise TargetError(msg) from e

    if isinstance(obj, RecordSchema):
        return attribute, obj
    if isinstance(obj, type) and issubclass(obj, Record) and obj is not Record:
        return obj.__name__, obj.__record_schema__
    msg = f"{target!r} is neither a RecordSchema nor a record type (got {type(obj).__name__})"
    raise TargetError(msg)


def _type_name(declared_type: Any) -> str:
    if declared_type is Any:
        return "Any"
    if isinstance(declared_type, type):
        return declared_type.__name__
    return str(declared_type).replace("typing.", "")


def _default_text(spec: FieldSpec) -> str:
    if spec.default_factory is not MISSING:
        factory = getattr(spec.default_factory, "__qualname__", repr(spec.default_factory))
        return f"default_factory={factory}"
    if spec.default is not MISSING:
        return f"default={spec.default!r}"
    return "required"


def _describe_field(spec: FieldSpec) -> dict[str, Any]:
    return {
        "name": spec.name,
        "type": _type_name(spec.declared_type),
        "default": _default_text(spec),
        "init": spec.include_in_init,
        "repr": spec.include_in_repr,
        "compare": spec.include_in_compare,
        "hash": spec.hashed,
        "metadata": {str(k): repr(v) for k, v in spec.metadata.items()},
    }


def _describe(name: str, schema: RecordSchema) -> dict[str, Any]:
    return {
        "name": name,
        "flags": schema.flags(),
        "hashable": schema.hashable,
        "fields": [_describe_field(f) for f in schema.fields],
    }


def _format_text(description: dict[str, Any], *, color: bool = False) -> str:
    """Format a schema description as an aligned field table."""
    enabled = [flag for flag, on in description["flags"].items() if on]
    if description["hashable"]:
        enabled.append("hashable")
    header = f"{description['name']} ({', '.join(enabled) or 'no flags'})"
    lines = [f"{_BOLD}{header}{_RESET}" if color else header]

    rows = description["fields"]
    if not rows:
        lines.append("  (no fields)")
        return "\n".join(lines)

    name_width = max(len(r["name"]) for r in rows)
    type_width = max(len(r["type"]) for r in rows)
    for row in rows:
        excluded = [flag for flag in ("init", "repr", "compare", "hash") if not row[flag]]
        suffix = f"  [no {', no '.join(excluded)}]" if excluded else ""
        if color and suffix:
            suffix = f"{_DIM}{suffix}{_RESET}"
        lines.append(f"  {row['name']:<{name_width}}  {row['type']:<{type_width}}  {row['default']}{suffix}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the recordkit CLI."""
    parser = argparse.ArgumentParser(prog="recordkit", description="Inspect record schemas and record types.")
    subparsers = parser.add_subparsers(dest="command")

    describe_parser = subparsers.add_parser("describe", help="Describe the fields of a schema or record type.")
    describe_parser.add_argument("target", help="Import path of the schema or record type: package.module:attribute.")
    describe_parser.add_argument(
        "--output-format",
        choices=["text", "json"],
        default="text",
        dest="output_format",
        help="Output format: text (default) or json.",
    )

    args = parser.parse_args(argv)

    if args.command != "describe":
        parser.print_help()
        sys.exit(2)

    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.json_logs)
    _run_describe(args)


def _run_describe(args: argparse.Namespace) -> None:
    """Execute the describe subcommand."""
    try:
        name, schema = _resolve_target(args.target)
    except TargetError as e:
        logger.debug("Failed to resolve %s", args.target, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    description = _describe(name, schema)
    if args.output_format == "json":
        print(json.dumps(description, indent=2))
        return

    use_color = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
    print(_format_text(description, color=use_color))
