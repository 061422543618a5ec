# pickbook/middleware/audit.py
# One JSON log line per request: method / path / query / status / client / duration.
# Health probes are not logged. Storage is never touched here; the
# reservation audit trail lives in services.store.

import json
import logging
import time

from fastapi import Request

logger = logging.getLogger("pickbook.access")

SKIP_PATHS = {"/health"}


async def audit_middleware(request: Request, call_next):
    started = time.perf_counter()

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 1)
    response.headers["X-Process-Time-Ms"] = str(duration_ms)

    if request.url.path in SKIP_PATHS:
        return response

    record = {
        "method": request.method,
        "path": request.url.path,
        "query": request.url.query or None,
        "status": response.status_code,
        "client": request.headers.get("X-Real-IP") or (request.client.host if request.client else None),
        "duration_ms": duration_ms,
    }
    log = logger.warning if response.status_code >= 500 else logger.info
    log(json.dumps(record, ensure_ascii=False))

    return response
