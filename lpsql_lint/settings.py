from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel


class Settings(BaseModel):
    APP_ENV: str = 'dev'
    LOG_LEVEL: str = 'INFO'

    MAX_UPLOAD_KB: int = 512
    LINT_FILE_SUFFIX: str = '.lp.sql'

    @property
    def MAX_SQL_BYTES(self) -> int:
        return int(self.MAX_UPLOAD_KB) * 1024


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or str(v).strip() == '':
        return default
    try:
        return int(v)
    except ValueError:
        return default


@lru_cache
def get_settings() -> Settings:
    load_dotenv(dotenv_path='.env')
    data = {
        'APP_ENV': os.getenv('APP_ENV', 'dev'),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO'),
        'MAX_UPLOAD_KB': _env_int('MAX_UPLOAD_KB', 512),
        'LINT_FILE_SUFFIX': os.getenv('LINT_FILE_SUFFIX', '.lp.sql'),
    }
    settings = Settings(**data)
    if not settings.LINT_FILE_SUFFIX.startswith('.'):
        raise RuntimeError('LINT_FILE_SUFFIX must start with a dot, e.g. ".lp.sql"')
    return settings
