from __future__ import annotations

import re

from .types import Rule


RULESET_VERSION = "lp-sql-1.0"

_FLAGS = re.IGNORECASE | re.ASCII

RULES: tuple[Rule, ...] = (
    Rule(
        "CREATE_OR_REPLACE",
        "Declarative .lp.sql files must not use CREATE OR REPLACE statements. Remove OR REPLACE or split into separate migrations.",
        re.compile(r"\bCREATE\s+OR\s+REPLACE\b", _FLAGS),
    ),
    Rule(
        "DROP_STATEMENT",
        "Declarative .lp.sql files must not include DROP statements. Use migrations to drop schema objects.",
        re.compile(r"\bDROP\s+(TABLE|SCHEMA|VIEW|INDEX|SEQUENCE|FUNCTION|TRIGGER)\b", _FLAGS),
    ),
    Rule(
        "TRANSACTION_CONTROL",
        "Declarative .lp.sql files must not include transaction control statements such as BEGIN, COMMIT, or ROLLBACK.",
        re.compile(r"\b(BEGIN|COMMIT|ROLLBACK)\b", _FLAGS),
    ),
    Rule(
        "CONDITIONAL_DEFINITION",
        "Declarative .lp.sql files must not use conditional clauses like IF EXISTS or IF NOT EXISTS.",
        re.compile(r"\bIF\s+(NOT\s+)?EXISTS\b", _FLAGS),
    ),
    Rule(
        "ALTER_DROP",
        "Declarative .lp.sql files must not drop columns via ALTER TABLE ... DROP COLUMN.",
        # lazy and may cross statements: reaches the first DROP COLUMN after any ALTER TABLE
        re.compile(r"\bALTER\s+TABLE\b.*?\bDROP\s+COLUMN\b", _FLAGS | re.DOTALL),
        re.compile(r"\bDROP\s+COLUMN\b", _FLAGS),
    ),
)

