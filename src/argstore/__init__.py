# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Typed lookups of command line flags.

Usage::

    import argstore

    argstore.initialize(sys.argv)

    verbose = argstore.query_bool("-v|--verbose")
    port = argstore.query_int("-p|--port")
    name = argstore.query_string("-n|--name")
"""

from argstore.config import StoreSettings
from argstore.lookup import Lookup
from argstore.store import (
    ArgStore,
    configure,
    initialize,
    print_arguments,
    query_bool,
    query_float,
    query_int,
    query_string,
    try_bool,
    try_float,
    try_int,
    try_string,
)

__all__ = [
    "ArgStore",
    "Lookup",
    "StoreSettings",
    "configure",
    "initialize",
    "print_arguments",
    "query_bool",
    "query_float",
    "query_int",
    "query_string",
    "try_bool",
    "try_float",
    "try_int",
    "try_string",
]
