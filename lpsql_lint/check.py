"""
CI check for declarative schema files.

Usage:
    lpsql-check db/schema                 Lint every *.lp.sql file under db/schema
    lpsql-check a.lp.sql b.lp.sql         Lint the given files
    lpsql-check --format json db/schema   Emit findings as JSON

Exit: 0 when clean, 1 when any diagnostic is reported, 2 on bad paths.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .issues import build_decision, format_diagnostic
from .linter.engine import validate
from .linter.rules_catalog import RULESET_VERSION
from .schemas import Diagnostic
from .settings import get_settings

logger = logging.getLogger(__name__)


def collect_files(paths: Sequence[str], suffix: str) -> tuple[list[Path], list[str]]:
    """Expand directories into matching files. Explicit files are kept as given.

    A file reached more than once (repeated argument, or a file plus its
    directory) is kept only at its first position.
    """
    files: list[Path] = []
    missing: list[str] = []
    seen: set[Path] = set()

    def add(path: Path) -> None:
        key = path.resolve()
        if key not in seen:
            seen.add(key)
            files.append(path)

    for raw in paths:
        path = Path(raw)
        if path.is_file():
            add(path)
        elif path.is_dir():
            for found in sorted(p for p in path.rglob(f"*{suffix}") if p.is_file()):
                add(found)
        else:
            missing.append(raw)
    return files, missing


def lint_file(path: Path) -> list[Diagnostic]:
    return validate(path.read_text(encoding="utf-8", errors="replace"))


def build_parser(default_suffix: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lpsql-check",
        description="Fail the build when declarative schema SQL contains forbidden constructs.",
    )
    parser.add_argument("paths", nargs="+", help="Files or directories to lint")
    parser.add_argument("--suffix", default=default_suffix, help=f"File suffix collected from directories (default: {default_suffix})")
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Output format")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = build_parser(settings.LINT_FILE_SUFFIX).parse_args(argv)

    files, missing = collect_files(args.paths, args.suffix)
    for raw in missing:
        print(f"No such file or directory: {raw}", file=sys.stderr)
    if missing:
        return 2
    if not files:
        print(f"No {args.suffix} files found.", file=sys.stderr)
        return 2

    findings: list[tuple[Path, list[Diagnostic]]] = []
    all_diagnostics: list[Diagnostic] = []
    for path in files:
        diagnostics = lint_file(path)
        if diagnostics:
            findings.append((path, diagnostics))
            all_diagnostics.extend(diagnostics)

    if args.format == "json":
        payload = [{"path": str(p), "diagnostics": [d.model_dump() for d in ds]} for p, ds in findings]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for path, diagnostics in findings:
            for d in diagnostics:
                print(format_diagnostic(d, str(path)))

    decision = build_decision(all_diagnostics)
    logger.info(
        "checked %d file(s) with ruleset %s: %d violation(s) in %d file(s)",
        len(files),
        RULESET_VERSION,
        decision.violation_count,
        len(findings),
    )
    return 0 if decision.passed else 1


if __name__ == "__main__":
    sys.exit(main())
