from __future__ import annotations

from typing import Iterable, Optional

from .schemas import Decision, Diagnostic, Issue, Trace


def make_system_issue(*, code: str, message: str, source: Optional[str] = None, category: str = 'unknown', severity: str = 'error', hint: Optional[str] = None) -> Issue:
    return Issue(
        severity=severity,
        domain='system',
        category=category,
        code=code,
        message=message,
        source=source,
        hint=hint,
    )



def _distinct_codes(diagnostics: Iterable[Diagnostic]) -> list[str]:
    codes: list[str] = []
    for d in diagnostics:
        if d.code not in codes:
            codes.append(d.code)
    return codes



def build_decision(diagnostics: list[Diagnostic]) -> Decision:
    if not diagnostics:
        return Decision(status='ok', passed=True, violation_count=0, codes=[], summary='No forbidden constructs found.')
    count = len(diagnostics)
    noun = 'violation' if count == 1 else 'violations'
    return Decision(
        status='error',
        passed=False,
        violation_count=count,
        codes=_distinct_codes(diagnostics),
        summary=f'Found {count} {noun}: the file is not safe for declarative apply.',
    )



def build_error_decision(issues: list[Issue]) -> Decision:
    return Decision(status='error', passed=False, violation_count=0, codes=[i.code for i in issues], summary='The request could not be linted.')



def build_trace(request_id: str, timings_ms: dict[str, int]) -> Trace:
    return Trace(request_id=request_id, timings_ms=timings_ms)



def format_diagnostic(d: Diagnostic, path: Optional[str] = None) -> str:
    where = f'{path}:{d.line}:{d.column}' if path else f'{d.line}:{d.column}'
    return f'{where}: {d.code} {d.message}\n    {d.snippet}'
