import logging
import time
from fastapi import FastAPI, Request
from .settings import LOG_LEVEL
from .db import Base, engine
from .auth import router as auth_router
from .wallet import router as wallet_router
from .errors import ChipsError, AccountNotFound, PersistenceFailure, Unauthenticated
from .security import clear_session_cookie
from .views import redirect
from . import models  # ensure models import for table creation

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Casino Chips")

Base.metadata.create_all(bind=engine)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

@app.exception_handler(ChipsError)
async def chips_error_handler(request: Request, exc: ChipsError):
    # Every failure becomes a redirect with a one-line flash; internals stay in the log.
    if isinstance(exc, PersistenceFailure):
        logger.error("persistence failure on %s %s", request.method, request.url.path, exc_info=exc)
    else:
        logger.info("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    resp = redirect(exc.redirect_to, "error", exc.message)
    if isinstance(exc, (Unauthenticated, AccountNotFound)):
        clear_session_cookie(resp)
    return resp

@app.get("/healthz")
def healthz(): return {"ok": True}

@app.get("/")
def root():
    return redirect("/dashboard")

app.include_router(auth_router)
app.include_router(wallet_router)
