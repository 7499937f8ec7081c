import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from lpsql_lint.linter.rules_catalog import RULES, RULESET_VERSION


def test_registry_order_is_fixed():
    assert [r.code for r in RULES] == [
        "CREATE_OR_REPLACE",
        "DROP_STATEMENT",
        "TRANSACTION_CONTROL",
        "CONDITIONAL_DEFINITION",
        "ALTER_DROP",
    ]


def test_codes_and_messages_are_one_to_one():
    assert len({r.code for r in RULES}) == len(RULES)
    assert len({r.message for r in RULES}) == len(RULES)
    assert all(r.message.startswith("Declarative .lp.sql files must not") for r in RULES)


def test_patterns_are_case_insensitive():
    assert all(r.pattern.search("create or replace drop table begin if exists alter table x drop column y") for r in RULES)


def test_ruleset_version_constant_present():
    assert RULESET_VERSION.startswith("lp-sql-")
