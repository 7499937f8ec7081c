from __future__ import annotations

from dataclasses import dataclass, field

from ..schemas import Diagnostic
from .common import neutralize_comments, resolve_position
from .rules_catalog import RULES
from .types import Rule


@dataclass
class ScanContext:
    sql: str
    sanitized: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    seen: set[tuple[str, int]] = field(default_factory=set)

    def add(self, rule: Rule, offset: int) -> None:
        key = (rule.code, offset)
        if key in self.seen:
            return
        self.seen.add(key)
        pos = resolve_position(self.sql, offset)
        self.diagnostics.append(
            Diagnostic(
                code=rule.code,
                message=rule.message,
                line=pos.line,
                column=pos.column,
                snippet=pos.snippet,
            )
        )


def _scan_end(sanitized: str, rule: Rule) -> int:
    """End of the region a match of `rule` can occupy, or 0 if it cannot match."""
    if rule.tail is None:
        return len(sanitized)
    end = 0
    for match in rule.tail.finditer(sanitized):
        end = match.end()
    return end


def scan_rule(ctx: ScanContext, rule: Rule) -> None:
    # lazy multi-line patterns would otherwise rescan to end of input from every unmatched start
    endpos = _scan_end(ctx.sanitized, rule)
    if endpos == 0:
        return
    # finditer owns its cursor, so concurrent calls never share search state
    for match in rule.pattern.finditer(ctx.sanitized, 0, endpos):
        ctx.add(rule, match.start())


def validate(sql: str) -> list[Diagnostic]:
    """Lint declarative schema SQL and return diagnostics ordered by position.

    Comments are blanked before scanning; positions and snippets always refer
    to the original text. Never raises for string input.
    """
    ctx = ScanContext(sql=sql, sanitized=neutralize_comments(sql))
    for rule in RULES:
        scan_rule(ctx, rule)
    return sorted(ctx.diagnostics, key=lambda d: (d.line, d.column))
