# src/remediator/app.py
"""
Remediator command line.

Usage:
  remediator fix page.html                 # Remediated page on stdout
  remediator fix page.html -o fixed.html   # Write to a file
  remediator fix *.html --in-place         # Rewrite several files
  remediator block core/heading part.html  # Run the block render filters
  remediator editor-settings               # Effective editor settings as JSON
  remediator --set remediation.document_marker=<body fix part.html
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from tqdm import tqdm

from remediator.controllers.block_controller import BlockController
from remediator.controllers.remediation_controller import RemediationController
from remediator.managers.config_manager import config_manager
from remediator.model import BlockContext, RemediationSettings
from remediator.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)


def _override(text: str) -> Tuple[str, Any]:
    """Parses KEY=VALUE; the value is read as JSON when it is valid JSON, else kept as text."""
    key, sep, raw = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key.strip(), value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="remediator", description="Fix common accessibility defects in HTML.")
    parser.add_argument("--settings", type=str, help="Path to an alternative settings.json")
    parser.add_argument("--log-level", type=str, help="Overrides the configured log level")
    parser.add_argument(
        "--plugin", action="append", default=[], metavar="NAME",
        help="Enable a plugin in addition to the configured ones (repeatable)"
    )
    parser.add_argument(
        "--set", action="append", default=[], type=_override, dest="overrides", metavar="KEY=VALUE",
        help="Override a settings.json value, e.g. remediation.document_marker=<body (repeatable)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    fix = subparsers.add_parser("fix", help="Remediate full HTML pages")
    fix.add_argument("paths", nargs="+", help="HTML files, or '-' for stdin")
    fix.add_argument("-o", "--output", type=str, help="Output file (single input only)")
    fix.add_argument("--in-place", action="store_true", help="Overwrite the input files")

    block = subparsers.add_parser("block", help="Render-time filters for one content block")
    block.add_argument("block_name", help="Block type, e.g. core/heading")
    block.add_argument("path", help="File with the rendered block, or '-' for stdin")
    block.add_argument("--attrs", type=str, default="{}", help="Block attributes as a JSON object")

    subparsers.add_parser("editor-settings", help="Print the editor settings as JSON")
    return parser


def _read(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _load_settings(args: argparse.Namespace) -> RemediationSettings:
    if args.settings:
        config_manager.settings_path = args.settings
    if args.settings or args.overrides:
        config_manager.reset()
    for key, value in args.overrides:
        config_manager.set_nested(key, value)
    settings = config_manager.load_settings()
    if args.plugin:
        settings.plugins = list(dict.fromkeys(settings.plugins + args.plugin))
    return settings


def handle_fix(args: argparse.Namespace, settings: RemediationSettings) -> int:
    if len(args.paths) > 1 and not args.in_place:
        logger.error("Multiple inputs require --in-place.")
        return 1
    if args.in_place and "-" in args.paths:
        logger.error("stdin cannot be rewritten in place.")
        return 1

    controller = RemediationController.from_settings(settings)

    if not args.in_place:
        html = _read(args.paths[0])
        result = controller.process(html)
        if args.output:
            Path(args.output).write_text(result, encoding="utf-8")
        else:
            sys.stdout.write(result)
        return 0

    changed = 0
    for path in tqdm(args.paths, desc="Remediating", unit="file", disable=len(args.paths) < 2):
        file_path = Path(path)
        html = file_path.read_text(encoding="utf-8")
        result = controller.process(html)
        if result != html:
            file_path.write_text(result, encoding="utf-8")
            changed += 1
    logger.info("Remediated %d of %d file(s).", changed, len(args.paths))
    return 0


def handle_block(args: argparse.Namespace, settings: RemediationSettings) -> int:
    try:
        attrs = json.loads(args.attrs)
    except json.JSONDecodeError as e:
        logger.error("--attrs is not valid JSON: %s", e)
        return 1
    if not isinstance(attrs, dict):
        logger.error("--attrs must be a JSON object.")
        return 1

    controller = BlockController(settings)
    sys.stdout.write(controller.render_block(_read(args.path), BlockContext(name=args.block_name, attrs=attrs)))
    return 0


def handle_editor_settings(args: argparse.Namespace, settings: RemediationSettings) -> int:
    print(settings.editor.model_dump_json(indent=2))
    return 0


HANDLERS = {
    "fix": handle_fix,
    "block": handle_block,
    "editor-settings": handle_editor_settings,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _load_settings(args)

    configure_logger(settings.logging, override_level=args.log_level)

    try:
        return HANDLERS[args.command](args, settings)
    except OSError as e:
        logger.error("I/O error: %s", e)
        return 1
    except UnicodeDecodeError as e:
        logger.error("Input is not valid UTF-8: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
