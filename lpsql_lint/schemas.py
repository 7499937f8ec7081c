from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Optional, List, Literal, Dict


DiagnosticCode = Literal[
    "CREATE_OR_REPLACE",       # CREATE OR REPLACE ...
    "DROP_STATEMENT",          # DROP TABLE/SCHEMA/VIEW/INDEX/SEQUENCE/FUNCTION/TRIGGER
    "TRANSACTION_CONTROL",     # BEGIN / COMMIT / ROLLBACK
    "CONDITIONAL_DEFINITION",  # IF [NOT] EXISTS
    "ALTER_DROP",              # ALTER TABLE ... DROP COLUMN
]


class Diagnostic(BaseModel):
    code: DiagnosticCode
    message: str
    line: int = Field(..., ge=1, description="1-based line in the original text")
    column: int = Field(..., ge=1, description="1-based column within the line")
    snippet: str = Field("", description="Offending source line, trimmed")


class RuleInfo(BaseModel):
    code: DiagnosticCode
    message: str


class LintRequest(BaseModel):
    sql: str = Field(..., description="Full contents of a declarative schema file")
    filename: Optional[str] = Field(None, description="Source file name, echoed back")


class Issue(BaseModel):
    severity: Literal["error", "warn", "info"] = "error"
    domain: Literal["system"] = "system"
    category: str = "unknown"
    code: str
    message: str
    source: Optional[str] = None
    hint: Optional[str] = None


class Decision(BaseModel):
    status: Literal["ok", "error"] = "ok"
    passed: bool = True
    violation_count: int = 0
    codes: List[str] = Field(default_factory=list)
    summary: str = ""


class Trace(BaseModel):
    request_id: str
    timings_ms: Dict[str, int] = Field(default_factory=dict)


class LintResponse(BaseModel):
    filename: Optional[str] = None
    rules_version: str
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    decision: Decision
    trace: Trace
