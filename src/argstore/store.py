# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Typed lookups of command line flags.

Every query takes an alias spec such as ``"-p|--port"`` and scans the stored
argument vector once per alias, in the listed order. Each match replaces the
result of the previous one, so the last listed alias that matches, at its
last matching position, determines the value. Two argument forms are
recognized::

    --port 8080     (flag, followed by its value)
    --port=8080     (any argument starting with the flag and containing "=")

Queries never raise. Absent flags and malformed values produce the
defaults ``False``, ``0``, ``0.0`` and ``None``. The ``try_*`` variants
return a :class:`~argstore.lookup.Lookup` telling the two cases apart.
"""

import sys
import threading
from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

from argstore.config import StoreSettings
from argstore.log import get_logger
from argstore.lookup import Lookup
from argstore.numbers import parse_float_prefix, parse_int_prefix, starts_with_digit
from argstore.tokens import Match, bool_token, scan

N = TypeVar("N", int, float)

logger = get_logger(__name__)

QUOTE = '"'


class ArgStore:
    """A snapshot of a process' arguments. Index 0 is the program name
    and never matches a flag.
    """

    def __init__(self, args: Sequence[str] = (), settings: StoreSettings | None = None) -> None:
        self._args = list(args)
        self.settings = settings if settings is not None else StoreSettings()
        self._lock = threading.Lock()

    @property
    def arguments(self) -> tuple[str, ...]:
        return tuple(self._args)

    def __len__(self) -> int:
        return len(self._args)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._args!r})"

    def print_arguments(self) -> None:
        for i, arg in enumerate(self._args):
            print(f"Argument {i}: {arg}")

    def _scan(self, spec: str) -> Iterator[Match]:
        for m in scan(self._args, spec):
            logger.trace(
                f"alias {m.alias!r} matched argument {m.index}: {m.argument!r}",
                extra={"spec": spec},
            )
            yield m

    def try_bool(self, spec: str) -> Lookup[bool]:
        result = Lookup(False)

        for m in self._scan(spec):
            if m.exact:
                if m.follower is not None and (token := bool_token(m.follower, casefold=True)) is not None:
                    result = Lookup(token, True, m.index, m.follower, True)
                else:
                    # A bare flag means true.
                    result = Lookup(True, True, m.index, None, True)
            elif m.assigned is not None:
                # key=value tokens are matched case-sensitively.
                if (token := bool_token(m.assigned, casefold=False)) is not None:
                    result = Lookup(token, True, m.index, m.assigned, True)

        return result

    def _try_number(
        self,
        spec: str,
        default: N,
        parse: Callable[[str], tuple[N, bool]],
    ) -> Lookup[N]:
        result = Lookup(default)

        for m in self._scan(spec):
            if m.exact:
                # The separate value form only accepts values starting with a digit,
                # so "--n -5" is not picked up, while "--n=-5" is.
                if m.follower is not None and starts_with_digit(m.follower):
                    value, ok = parse(m.follower)
                    result = Lookup(value, True, m.index, m.follower, ok)
            elif m.assigned is not None:
                value, ok = parse(m.assigned)
                result = Lookup(value, True, m.index, m.assigned, ok)

        return result

    def try_int(self, spec: str) -> Lookup[int]:
        return self._try_number(spec, 0, parse_int_prefix)

    def try_float(self, spec: str) -> Lookup[float]:
        return self._try_number(spec, 0.0, parse_float_prefix)

    def try_string(self, spec: str) -> Lookup[str | None]:
        result: Lookup[str | None] = Lookup(None)

        for m in self._scan(spec):
            if m.exact and m.follower is not None:
                result = Lookup(m.follower, True, m.index, m.follower, True)
            elif m.assigned is not None:
                if m.assigned.startswith(QUOTE):
                    value, ok = self._unquote(m)
                    result = Lookup(value, True, m.index, m.assigned, ok)
                else:
                    result = Lookup(m.assigned, True, m.index, m.assigned, True)

        return result

    def _unquote(self, m: Match) -> tuple[str, bool]:
        """Extracts the value of ``--flag="some value"``.

        The value ends at the next quote or at the end of the argument.
        Unless ``copy_on_read`` is set, the stored argument is cut off at
        the closing quote, which later queries will observe.
        """
        assert m.assigned is not None

        body = m.assigned[1:]
        end = body.find(QUOTE)
        if end == -1:
            return body, False

        if not self.settings.copy_on_read:
            cut = len(m.argument) - len(body) + end
            with self._lock:
                if self._args[m.index] == m.argument:
                    self._args[m.index] = m.argument[:cut]
                    logger.debug(f"truncated argument {m.index} to {self._args[m.index]!r}")

        return body[:end], True

    def query_bool(self, spec: str) -> bool:
        return self.try_bool(spec).value

    def query_int(self, spec: str) -> int:
        return self.try_int(spec).value

    def query_float(self, spec: str) -> float:
        return self.try_float(spec).value

    def query_string(self, spec: str) -> str | None:
        return self.try_string(spec).value


_settings = StoreSettings()
_store: ArgStore | None = None


def initialize(args: Sequence[str] | None = None) -> None:
    """Stores the process arguments for all module level queries.
    Must be called before any query; ``sys.argv`` is used if
    ``args`` is None.
    """
    global _store

    if args is None:
        args = sys.argv
    if _store is not None:
        logger.warning("argument store initialized twice, replacing stored arguments")

    _store = ArgStore(args, _settings)
    logger.debug(f"stored {len(_store)} arguments")


def configure(settings: StoreSettings) -> None:
    global _settings

    _settings = settings
    if _store is not None:
        _store.settings = settings


def default_store() -> ArgStore:
    if _store is None:
        logger.debug("argument store queried before initialize(), using empty arguments")
        return ArgStore((), _settings)
    return _store


def print_arguments() -> None:
    default_store().print_arguments()


def query_bool(spec: str) -> bool:
    return default_store().query_bool(spec)


def query_int(spec: str) -> int:
    return default_store().query_int(spec)


def query_float(spec: str) -> float:
    return default_store().query_float(spec)


def query_string(spec: str) -> str | None:
    return default_store().query_string(spec)


def try_bool(spec: str) -> Lookup[bool]:
    return default_store().try_bool(spec)


def try_int(spec: str) -> Lookup[int]:
    return default_store().try_int(spec)


def try_float(spec: str) -> Lookup[float]:
    return default_store().try_float(spec)


def try_string(spec: str) -> Lookup[str | None]:
    return default_store().try_string(spec)
