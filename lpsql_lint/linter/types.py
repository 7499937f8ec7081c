from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..schemas import DiagnosticCode


@dataclass(frozen=True)
class Rule:
    code: DiagnosticCode
    message: str
    pattern: re.Pattern[str]
    # every match of `pattern` ends with a match of `tail`; no match can end past the last one
    tail: Optional[re.Pattern[str]] = None
