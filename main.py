import argparse
import json
import logging
import sys

import config
from opdi.property_codec import format_properties
from opdi.property_parser import parse_properties
from opdi.units_loader import UnitConfigError, UnitRegistry

logger = logging.getLogger("main")


def _cmd_parse(args) -> int:
    print(json.dumps(parse_properties(args.text), ensure_ascii=False, indent=2))
    return 0


def _cmd_format(args) -> int:
    properties = {}
    for pair in args.pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            logger.error(f"Expected KEY=VALUE, got: {pair}")
            return 1
        properties[key] = value
    try:
        print(format_properties(properties))
    except ValueError as e:
        logger.error(str(e))
        return 1
    return 0


def _cmd_unit(args) -> int:
    try:
        registry = UnitRegistry.from_yaml(args.units_file)
        unit_format = registry.default_format(args.unit)
        print(unit_format.format(args.value))
    except UnitConfigError as e:
        logger.error(f"Unit configuration error: {e}")
        return 1
    except (ValueError, TypeError, OverflowError, OSError) as e:
        # bad formatString or timestamp out of range
        logger.error(f"Cannot format {args.value} as unit {args.unit}: {e}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OPDI property string tool")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Decode a property string and print it as JSON")
    p_parse.add_argument("text")
    p_parse.set_defaults(func=_cmd_parse)

    p_format = sub.add_parser("format", help="Encode KEY=VALUE pairs into a property string")
    p_format.add_argument("pairs", nargs="+", metavar="KEY=VALUE")
    p_format.set_defaults(func=_cmd_format)

    p_unit = sub.add_parser("unit", help="Format a raw port value with the default format of a unit")
    p_unit.add_argument("unit")
    p_unit.add_argument("value", type=int)
    p_unit.add_argument(
        "--units-file",
        default=config.UNITS_CONFIG_PATH,
        help=f"YAML unit definitions (default: {config.UNITS_CONFIG_PATH})",
    )
    p_unit.set_defaults(func=_cmd_unit)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
