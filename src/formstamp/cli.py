"""
Module: cli

Purpose:
    Command-line entry point.

Usage:
    # Fill one template
    formstamp render template.json record.json -o out/

    # Fill every stored template (optionally one layout family) into a zip
    formstamp render-all templates/ record.json -o out/ --country kuwait --zip

    # Check a template file
    formstamp validate template.json --strict
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from . import __version__
from .composer import DirectorySink, RenderConfig, ZipSink, deliver_document, generate_all
from .composer.forms import templates_for_country
from .composer.layout.config import DEFAULT_BULK_DELAY_SECONDS
from .core.models.records import DataRecord
from .core.schemas import validate_template
from .core.utils.serialization import load_template_json
from .errors import FormstampError
from .logging_utils import configure_logging
from .storage import JsonTemplateRepository

logger = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _load_record(path: Path, form_input: bool) -> DataRecord:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise FormstampError(f"Record file must contain a JSON object: {path}")
    return DataRecord.from_form_input(data) if form_input else DataRecord.from_dict(data)


def cmd_render(args: argparse.Namespace) -> int:
    template = load_template_json(args.template, strict=args.strict)
    record = _load_record(args.record, args.uppercase)
    generated = deliver_document(template, record, DirectorySink(args.output))
    logger.info(f"Rendered {generated.page_count} pages to {args.output / generated.filename}")
    return 0


def cmd_render_all(args: argparse.Namespace) -> int:
    templates = JsonTemplateRepository(args.templates_dir).list(owner_id=args.owner)
    if args.country:
        templates = templates_for_country(templates, args.country)
    record = _load_record(args.record, args.uppercase)

    config = RenderConfig(bulk_delay_seconds=args.delay)
    sink = ZipSink(args.output / args.zip) if args.zip else DirectorySink(args.output)
    result = generate_all(templates, record, sink, config)
    logger.info(f"Generated {result.count} documents in {result.elapsed_seconds:.2f}s")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    validate_template(_read_json(args.template), strict=args.strict)
    logger.info(f"{args.template}: OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formstamp",
        description="Fill page-background templates with record data and write PDFs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s render template.json record.json -o out/
  %(prog)s render-all templates/ record.json -o out/ --delay 0
  %(prog)s validate template.json --strict
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped fields and other debug detail")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Fill one template")
    render.add_argument("template", type=Path, help="Template JSON file")
    render.add_argument("record", type=Path, help="Record JSON file")
    render.add_argument("-o", "--output", type=Path, default=Path("."), help="Output directory (default: .)")
    render.add_argument("--strict", action="store_true", help="Validate the template against the JSON schema")
    render.add_argument("--uppercase", action="store_true", help="Upper-case typed record values")
    render.set_defaults(func=cmd_render)

    render_all = sub.add_parser("render-all", help="Fill every template in a directory")
    render_all.add_argument("templates_dir", type=Path, help="Directory of template JSON files")
    render_all.add_argument("record", type=Path, help="Record JSON file")
    render_all.add_argument("-o", "--output", type=Path, default=Path("."), help="Output directory (default: .)")
    render_all.add_argument("--country", help="Only templates of this layout family")
    render_all.add_argument("--owner", help="Only templates of this owner")
    render_all.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_BULK_DELAY_SECONDS,
        help="Seconds between documents (default: %(default)s)",
    )
    render_all.add_argument("--zip", metavar="NAME", help="Collect the documents into NAME.zip in the output directory")
    render_all.add_argument("--uppercase", action="store_true", help="Upper-case typed record values")
    render_all.set_defaults(func=cmd_render_all)

    validate = sub.add_parser("validate", help="Check a template JSON file")
    validate.add_argument("template", type=Path, help="Template JSON file")
    validate.add_argument("--strict", action="store_true", help="Also validate against the JSON schema")
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return args.func(args)
    except FormstampError as e:
        logger.error(str(e))
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
