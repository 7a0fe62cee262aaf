#!/usr/bin/env python3
"""Command line access to scoped INI configuration.

Usage:
    confscope dump [FILE] [--env ENV] [--instance N] [--indent N]
    confscope get FILE KEY [--section NAME] [--type str|int|bool] [--default VALUE]

Examples:
    # Show what instance 2 of the prod deployment sees
    confscope dump service.ini --env prod --instance 2 --indent 2

    # Read a single value, typed
    confscope get service.ini port --section database --type int --env prod

Environment Variables:
    CONFSCOPE_ENV          Default for --env (default: dev)
    CONFSCOPE_INSTANCE     Default for --instance (default: 0)
    CONFSCOPE_CONFIG_FILE  Default for FILE
"""

import argparse
import sys
from typing import List, Optional

from confscope.config import ConfigSection, LoaderSettings
from confscope.config.section import parse_bool, parse_int
from confscope.exceptions import ConfscopeError

EXIT_OK = 0
EXIT_ERROR = 1


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def cmd_dump(root: ConfigSection, args: argparse.Namespace) -> int:
    print(root.to_json(indent=args.indent))
    return EXIT_OK


def cmd_get(root: ConfigSection, args: argparse.Namespace) -> int:
    section = root.get_last_section(args.section) if args.section else root

    if args.default is not None and not section.has_key(args.key):
        raw = args.default
    else:
        raw = section.get_as_string(args.key)

    if args.type == "int":
        value: object = parse_int(args.key, raw)
    elif args.type == "bool":
        value = parse_bool(args.key, raw)
    else:
        value = raw

    print(_format_value(value))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="confscope",
        description="Load an INI file for one environment and instance and query it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-e", "--env", help="Target environment (default: $CONFSCOPE_ENV or dev)")
    common.add_argument(
        "-i", "--instance", type=int, help="Target instance (default: $CONFSCOPE_INSTANCE or 0)"
    )
    common.add_argument("--env-file", help="Read CONFSCOPE_* defaults from this .env file")

    subparsers = parser.add_subparsers(dest="command", required=True)

    dump = subparsers.add_parser("dump", parents=[common], help="Print the loaded tree as JSON")
    dump.add_argument("file", nargs="?", help="INI file (default: $CONFSCOPE_CONFIG_FILE)")
    dump.add_argument("--indent", type=int, default=None, help="JSON indentation")
    dump.set_defaults(func=cmd_dump)

    get = subparsers.add_parser("get", parents=[common], help="Print a single value")
    get.add_argument("file", help="INI file")
    get.add_argument("key", help="Base key name, e.g. timeout")
    get.add_argument("-s", "--section", help="Section holding the key (default: top level)")
    get.add_argument(
        "-t", "--type", choices=["str", "int", "bool"], default="str", help="Value type"
    )
    get.add_argument("-d", "--default", help="Printed when the key is absent")
    get.set_defaults(func=cmd_get)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        overrides = {}
        if args.env is not None:
            overrides["CONFSCOPE_ENV"] = args.env
        if args.instance is not None:
            overrides["CONFSCOPE_INSTANCE"] = str(args.instance)
        if args.file:
            overrides["CONFSCOPE_CONFIG_FILE"] = args.file

        settings = LoaderSettings.from_env(env_file=args.env_file, overrides=overrides)
        root = settings.load()
        return args.func(root, args)
    except ConfscopeError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
