from __future__ import annotations

import re

_LEADING_INVALID = re.compile(r"^[^A-Za-z_]+")
_INVALID = re.compile(r"[^A-Za-z0-9_]+")


def _ascii_upper(raw: str) -> str:
    return "".join(ch.upper() if ch.isascii() else ch for ch in raw)


def sanitize_variable_name(raw: str) -> str:
    """Return ``raw`` as an uppercase constant name.

    Leading characters that cannot start an identifier are dropped, then every
    non-ASCII or non-alphanumeric character (other than ``_``) is removed.
    The result may be empty.
    """

    name = _ascii_upper(raw).replace("-", "_")
    name = _LEADING_INVALID.sub("", name)
    return _INVALID.sub("", name)
