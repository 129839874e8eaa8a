# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

ALIAS_SEPARATOR = "|"

TRUE_VALUES = ("true", "on", "yes", "y", "1")
FALSE_VALUES = ("false", "off", "no", "n", "0")


def split_aliases(spec: str) -> list[str]:
    """Splits an alias spec such as ``"-h|--help|help"`` into its aliases.

    Empty aliases never match anything, so they are dropped here.
    """
    return [alias for alias in spec.split(ALIAS_SEPARATOR) if alias != ""]


def _ascii_lower(value: str) -> str:
    # str.lower() folds non-ASCII characters as well.
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in value)


def bool_token(value: str, casefold: bool) -> bool | None:
    """Maps ``value`` to True or False if it is a known boolean token.

    :param casefold: Compare ASCII case-insensitively.
    :return: None if ``value`` is neither a true nor a false token.
    """
    if casefold:
        value = _ascii_lower(value)
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True)
class Match:
    """A stored argument matched by one alias.

    ``follower`` is the next stored argument when ``exact`` is set and one
    exists. ``assigned`` is the text after the first ``=`` when the argument
    starts with the alias and contains a ``=``.
    """

    alias: str
    index: int
    argument: str
    exact: bool
    follower: str | None = None
    assigned: str | None = None


def match_argument(args: Sequence[str], index: int, alias: str) -> Match | None:
    arg = args[index]
    exact = arg == alias
    follower = args[index + 1] if exact and index + 1 < len(args) else None

    assigned = None
    if arg.startswith(alias) and (pos := arg.find("=")) != -1:
        assigned = arg[pos + 1 :]

    if not exact and assigned is None:
        return None
    return Match(alias, index, arg, exact, follower, assigned)


def scan(args: Sequence[str], spec: str) -> Iterator[Match]:
    """Yields all matches of ``spec`` in resolution order.

    Aliases are visited in the order they are listed; for each alias the
    arguments are visited by ascending index. Index 0 holds the program name
    and is skipped. Consumers let later matches override earlier ones.
    """
    for alias in split_aliases(spec):
        for index in range(1, len(args)):
            if (m := match_argument(args, index, alias)) is not None:
                yield m
