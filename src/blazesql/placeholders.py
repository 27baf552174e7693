"""
Conversion of ``?`` markers into a dialect's native placeholder syntax.
"""

from __future__ import annotations

from typing import List, Optional

from .dialects.registry import get_dialect

QMARK = "qmark"


def convert_placeholders(sql: str, dialect: Optional[str]) -> str:
    """
    Rewrite every ``?`` outside single-quoted literals using ``dialect``.

    Without a dialect, or for a dialect whose ``param_style`` is already
    ``qmark``, the SQL is returned unchanged.
    """

    if not dialect:
        return sql
    strategy = get_dialect(dialect)
    if strategy.param_style == QMARK:
        return sql
    parts: List[str] = []
    position = 0
    in_literal = False
    for char in sql:
        if char == "'":
            # A doubled quote inside a literal toggles twice and stays inside.
            in_literal = not in_literal
            parts.append(char)
        elif char == "?" and not in_literal:
            position += 1
            parts.append(strategy.parameter_placeholder(position))
        else:
            parts.append(char)
    return "".join(parts)
