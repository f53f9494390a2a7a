from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .patient_context import to_patient_context
from .sections import SCHEMAS, combine_sections, parse_sections
from .shortcuts import ExpansionEngine, list_shortcuts, load_registry

logger = logging.getLogger("notecore.cli")


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _read_json(path: str) -> Dict[str, Any]:
    data = json.loads(_read(path))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return data


def _cmd_parse(args: argparse.Namespace) -> int:
    sections = parse_sections(_read(args.file), schema=SCHEMAS[args.schema])
    print(json.dumps(sections.to_form(), ensure_ascii=False, indent=2))
    return 0


def _cmd_combine(args: argparse.Namespace) -> int:
    include = [k.strip() for k in args.include.split(",") if k.strip()] if args.include else None
    text = combine_sections(
        _read_json(args.file),
        include=include,
        placeholder_mode=args.placeholders,
        schema=SCHEMAS[args.schema],
    )
    print(text)
    return 0


def _cmd_expand(args: argparse.Namespace) -> int:
    ctx = to_patient_context(_read_json(args.patient))
    engine = ExpansionEngine(
        registry=load_registry(args.custom),
        first_occurrence_only=False if args.all_occurrences else None,
    )
    print(engine.expand(_read(args.file), ctx))
    return 0


def _cmd_shortcuts(args: argparse.Namespace) -> int:
    print(json.dumps(list_shortcuts(load_registry(args.custom)), ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notecore", description="Clinical note sections and shortcut expansion")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Split a note into section fields (JSON)")
    p.add_argument("file", help="Note text file, or - for stdin")
    p.add_argument("--schema", choices=sorted(SCHEMAS), default="full")
    p.set_defaults(func=_cmd_parse)

    p = sub.add_parser("combine", help="Render section fields (JSON) as note text")
    p.add_argument("file", help="JSON object of section fields, or - for stdin")
    p.add_argument("--schema", choices=sorted(SCHEMAS), default="full")
    p.add_argument("--include", default="", help="Comma-separated section keys")
    p.add_argument("--placeholders", action="store_true", help="Fill empty sections with a placeholder")
    p.set_defaults(func=_cmd_combine)

    p = sub.add_parser("expand", help="Expand #shortcuts and @macros in note text")
    p.add_argument("file", help="Note text file, or - for stdin")
    p.add_argument("--patient", required=True, help="Patient record JSON file")
    p.add_argument("--custom", default=None, help="Custom shortcuts JSON file")
    p.add_argument("--all-occurrences", action="store_true", help="Expand every occurrence of a key")
    p.set_defaults(func=_cmd_expand)

    p = sub.add_parser("shortcuts", help="List available shortcuts and macros")
    p.add_argument("--custom", default=None, help="Custom shortcuts JSON file")
    p.set_defaults(func=_cmd_shortcuts)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO)
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValueError) as e:
        logger.error("notecore %s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
