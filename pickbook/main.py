import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError

from .config import settings
from .dependencies import get_store
from .exceptions import ConfigurationError, PersistenceFailure
from .middleware.audit import audit_middleware
from .routers import audit_log, products, reservations, slots
from .routers import settings as settings_router
from .services.store import ReservationStore

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Pick Reservation API")

app.middleware("http")(audit_middleware)

app.include_router(products.router)
app.include_router(settings_router.router)
app.include_router(slots.router)
app.include_router(reservations.router)
app.include_router(audit_log.router)


# ===== Errors shared by all routers =====

@app.exception_handler(PersistenceFailure)
async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
    # nothing was committed; the client may retry
    logger.error(f"Persistence failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Service temporarily unavailable"})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Stored settings rejected: {exc}")
    return JSONResponse(status_code=500, content={"detail": f"Invalid settings: {exc}"})


@app.get("/health")
def health(store: ReservationStore = Depends(get_store)):
    try:
        return {"redis": store.redis.ping()}
    except RedisError:
        logger.warning("Redis ping failed")
        return {"redis": False}
