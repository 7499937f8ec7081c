from __future__ import annotations

import re
from dataclasses import dataclass


# One pass, leftmost opener wins; an unterminated block runs to end of input.
# String literals are not recognized, so "--" inside quotes is blanked too.
_COMMENT_RE = re.compile(r"--[^\n]*|/\*.*?(?:\*/|\Z)", re.DOTALL)


@dataclass(frozen=True)
class Position:
    line: int
    column: int
    snippet: str


def _blank(match: re.Match[str]) -> str:
    return " " * len(match.group(0))


def neutralize_comments(sql: str) -> str:
    """Replace every comment character with a space, keeping all offsets intact."""
    return _COMMENT_RE.sub(_blank, sql)


def resolve_position(sql: str, offset: int) -> Position:
    line_start = sql.rfind("\n", 0, offset) + 1
    line_end = sql.find("\n", offset)
    if line_end == -1:
        line_end = len(sql)
    return Position(
        line=sql.count("\n", 0, offset) + 1,
        column=offset - line_start + 1,
        snippet=sql[line_start:line_end].strip(),
    )
