# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import sys
from collections.abc import Sequence
from pprint import pprint

import exitcode

from argstore import store
from argstore.config import LoadedSettings, load_settings
from argstore.log import setup_logging

HELP_TEXT = """\
Usage: argstore-example [options]
Options:
  -h, --help, help                                 Show this help message
  -i=<number>, --int=<number>, int=<number>        Print an integer
  -f=<number>, --float=<number>, float=<number>    Print a floating point number
  -s=<string>, --string=<string>, string=<string>  Print a string
  --print-args                                     Print all command line arguments
  --show-config                                    Show information about the loaded config
"""


def show_help_message() -> None:
    print(HELP_TEXT, end="")


def cmd_show_config(loaded: LoadedSettings) -> None:
    if loaded.path is not None:
        print(f"loaded config: {loaded.path}")
        pprint(loaded.document)
    else:
        print("no config file found")


def main(argv: Sequence[str] | None = None) -> None:
    try:
        setup_logging()
        loaded = load_settings()
    except (ValueError, FileNotFoundError) as e:
        print(f"invalid config: {e}", file=sys.stderr)
        sys.exit(exitcode.CONFIG)

    store.configure(loaded.settings)
    store.initialize(argv)

    show_help = store.query_bool("-h|--help|help")
    int_number = store.query_int("-i|--int|int")
    float_number = store.query_float("-f|--float|float")
    string = store.query_string("-s|--string|string")

    if show_help:
        show_help_message()
        sys.exit(exitcode.OK)

    if store.query_bool("--show-config"):
        cmd_show_config(loaded)
        sys.exit(exitcode.OK)

    if store.query_bool("--print-args"):
        store.print_arguments()

    if int_number:
        print(f"Int: {int_number}")
    if float_number:
        print(f"Float: {float_number:f}")
    if string:
        print(f"String: {string}")

    sys.exit(exitcode.OK)


if __name__ == "__main__":
    main()
