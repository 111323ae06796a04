#!/usr/bin/env python3
"""
cardguard command line
Validates flashcard and deck fields from a JSON document
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ConfigurationError, ConfigurationManager, SecuritySettings, build_components
from .security import sanitize_for_display
from .security.content_validator import FIELD_LABELS

logger = logging.getLogger(__name__)


def load_settings(config_path: Optional[Path]) -> SecuritySettings:
    """Settings from the config file, or defaults when none is given"""
    if config_path is None:
        return SecuritySettings()
    return ConfigurationManager(config_path).load()


def read_fields(source: str) -> Dict[str, Any]:
    """Read the JSON object of fields from a file path or '-' for stdin"""
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with Path(source).open('r') as f:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Input must be a JSON object of field names to values")
    if bad := sorted(name for name, value in data.items() if value is not None and not isinstance(value, str)):
        raise ValueError(f"Field values must be strings: {', '.join(bad)}")
    return data


def validate_command(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    monitor, _, validator = build_components(settings)

    fields = read_fields(args.input)
    if unknown := sorted(set(fields) - set(FIELD_LABELS)):
        logger.warning(f"Ignoring unknown fields: {', '.join(unknown)}")

    results = {
        name: validator.validate(name, value, args.user_id)
        for name, value in fields.items()
        if name in FIELD_LABELS
    }

    output = {
        "valid": all(r.is_valid for r in results.values()),
        "fields": {name: r.to_dict() for name, r in results.items()},
        "security": monitor.get_summary(settings.recent_events_window_seconds)
    }
    print(json.dumps(output, indent=2))
    return 0 if output["valid"] else 1


def decode_command(args: argparse.Namespace) -> int:
    print(sanitize_for_display(args.text))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cardguard", description="cardguard content validation")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Validate fields from a JSON file")
    validate.add_argument("input", help="JSON file with field values, or '-' for stdin")
    validate.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file path (default: built-in settings)"
    )
    validate.add_argument("--user-id", default=None, help="User to attribute security events to")
    validate.set_defaults(handler=validate_command)

    decode = subparsers.add_parser("decode", help="Decode sanitized text for display")
    decode.add_argument("text", help="Entity-encoded text")
    decode.set_defaults(handler=decode_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    try:
        return args.handler(args)
    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        # JSONDecodeError is a ValueError
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
