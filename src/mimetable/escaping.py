"""String codec for the generated data module.

Every string written to the artifact goes through :func:`quote`; the loader
reads each one back with :func:`unquote`. Output is a single-quoted Python
literal that always fits on one line.
"""

from __future__ import annotations

import ast

QUOTE = "'"

_ESCAPES = str.maketrans(
    {
        "\\": "\\\\",
        QUOTE: "\\" + QUOTE,
        "\n": "\\n",
        "\r": "\\r",
        "\0": "\\x00",
    }
)


def escape(value: str) -> str:
    return value.translate(_ESCAPES)


def quote(value: str) -> str:
    return QUOTE + escape(value) + QUOTE


def unquote(literal: str) -> str:
    """Decode a literal produced by :func:`quote`.

    Only the exact form :func:`quote` emits is accepted; anything else
    (prefixes, implicit concatenation, other escape spellings, other types)
    raises ``ValueError``.
    """
    if len(literal) < 2 or literal[0] != QUOTE or literal[-1] != QUOTE:
        raise ValueError(f"not a quoted string literal: {literal!r}")
    try:
        value = ast.literal_eval(literal)
    except (SyntaxError, ValueError) as exc:
        raise ValueError(f"not a quoted string literal: {literal!r}") from exc
    if not isinstance(value, str) or quote(value) != literal:
        raise ValueError(f"not a quoted string literal: {literal!r}")
    return value
