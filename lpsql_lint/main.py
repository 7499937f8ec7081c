from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Any, Optional

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .issues import build_decision, build_error_decision, build_trace, make_system_issue
from .linter.engine import validate
from .linter.rules_catalog import RULES, RULESET_VERSION
from .schemas import LintRequest, LintResponse, RuleInfo
from .settings import get_settings

settings = get_settings()
logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Declarative SQL Linter")


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-Id"] = request_id
    return response


@app.get("/api/health")
async def api_health():
    return {"status": "ok"}


@app.get("/api/rules")
async def api_rules():
    return {
        "rules_version": RULESET_VERSION,
        "rules": [RuleInfo(code=r.code, message=r.message).model_dump() for r in RULES],
    }


def _check_size(size: int) -> None:
    if size > settings.MAX_SQL_BYTES:
        raise HTTPException(status_code=413, detail=f"SQL is too large. Limit: {settings.MAX_UPLOAD_KB} KB.")


async def _read_sql_upload(file: UploadFile) -> tuple[str, str]:
    filename = file.filename or f"upload{settings.LINT_FILE_SUFFIX}"
    if not filename.lower().endswith(settings.LINT_FILE_SUFFIX):
        raise HTTPException(status_code=400, detail=f"Please upload a {settings.LINT_FILE_SUFFIX} file.")
    data = await file.read()
    _check_size(len(data))
    return filename, data.decode("utf-8", errors="replace")


def _sanitize_error_message(err: Exception) -> str:
    message = re.sub(r"<[^>]+>", " ", str(err or "")).strip()
    message = re.sub(r"\s+", " ", message).strip(" .,:;-")
    return message[:320] if message else f"Processing error: {type(err).__name__}"


def _http_exception_to_issue_and_status(err: HTTPException, where: str):
    status = int(err.status_code)
    detail = str(err.detail or '')
    if status == 413:
        return status, make_system_issue(
            code='payload_too_large',
            category='validation',
            source=where,
            message='The SQL file is too large to lint.',
            hint=f'Split the schema into files under {settings.MAX_UPLOAD_KB} KB.',
        )
    if status == 400 and settings.LINT_FILE_SUFFIX in detail:
        return status, make_system_issue(
            code='invalid_file_type',
            category='validation',
            source=where,
            message='The uploaded file is not a declarative schema file.',
            hint=f'Upload a file ending with {settings.LINT_FILE_SUFFIX}.',
        )
    return status, make_system_issue(
        code='request_validation_error',
        category='validation',
        source=where,
        message='The request could not be validated.',
        hint='Check the request body and try again.',
    )


def _build_error_payload(err: Exception, where: str, request_id: str) -> tuple[int, dict[str, Any]]:
    if isinstance(err, HTTPException):
        status, issue = _http_exception_to_issue_and_status(err, where)
    elif isinstance(err, RequestValidationError):
        status = 422
        issue = make_system_issue(
            code='request_validation_error',
            category='validation',
            source=where,
            message='The request could not be validated.',
            hint='Send {"sql": "..."} as JSON, or upload the schema file in the "file" form field.',
        )
    else:
        logger.exception("Unhandled error in %s (request_id=%s)", where, request_id)
        status = 500
        issue = make_system_issue(code='internal_error', source=where, message='Internal service error.', hint='Retry the request. If it keeps failing, report the request_id.')

    issues = [issue]
    trace = build_trace(request_id=request_id, timings_ms={}).model_dump()
    return status, {
        'error': 'Failed to lint SQL.',
        'status': status,
        'detail': _sanitize_error_message(err),
        'issues': [i.model_dump() for i in issues],
        'decision': build_error_decision(issues).model_dump(),
        'trace': trace,
    }


async def _lint(sql: str, filename: Optional[str], request_id: str, started: float) -> dict[str, Any]:
    diagnostics = await run_in_threadpool(validate, sql)
    decision = build_decision(diagnostics)
    trace = build_trace(request_id=request_id, timings_ms={'total_ms': int((time.perf_counter() - started) * 1000)})
    logger.info("lint request_id=%s file=%s violations=%d", request_id, filename or '-', decision.violation_count)
    return LintResponse(
        filename=filename,
        rules_version=RULESET_VERSION,
        diagnostics=diagnostics,
        decision=decision,
        trace=trace,
    ).model_dump()


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, 'request_id', None) or str(uuid.uuid4())
    status, payload = _build_error_payload(exc, request.url.path, request_id)
    return JSONResponse(status_code=status, content=payload)


@app.post('/api/lint')
async def api_lint(request: Request, body: LintRequest):
    started = time.perf_counter()
    try:
        _check_size(len(body.sql.encode('utf-8', errors='surrogatepass')))
        return await _lint(body.sql, body.filename, request.state.request_id, started)
    except Exception as e:
        status, payload = _build_error_payload(e, 'api_lint', request.state.request_id)
        return JSONResponse(status_code=status, content=payload)


@app.post('/api/lint/file')
async def api_lint_file(request: Request, file: UploadFile = File(...)):
    started = time.perf_counter()
    try:
        filename, sql = await _read_sql_upload(file)
        return await _lint(sql, filename, request.state.request_id, started)
    except Exception as e:
        status, payload = _build_error_payload(e, 'api_lint_file', request.state.request_id)
        return JSONResponse(status_code=status, content=payload)


@app.get('/api/version')
async def api_version():
    return {
        'APP_ENV': settings.APP_ENV,
        'rules_version': RULESET_VERSION,
    }
