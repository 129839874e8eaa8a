# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Result of a ``try_*`` query.

    ``value`` is always what the corresponding ``query_*`` function returns.
    The remaining fields tell callers whether the value was actually
    supplied on the command line.

    :ivar present: Some argument determined ``value``.
    :ivar index: Position of that argument in the stored argument vector.
    :ivar raw: The text ``value`` was derived from. None if the flag was
               given without a value, e.g. a bare ``--verbose``.
    :ivar ok: The value was supplied and well-formed for the requested type.
    """

    value: T
    present: bool = False
    index: int | None = None
    raw: str | None = None
    ok: bool = False

    def __bool__(self) -> bool:
        return self.present
