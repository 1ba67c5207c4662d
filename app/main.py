from contextlib import asynccontextmanager
import asyncio, logging
from fastapi import FastAPI

from app import settings
from .routers.auth import router as auth_router
from .routers.stores import router as stores_router
from .routers.orders import router as orders_router
from .routers.dashboard import router as dashboard_router
from app.sheet_client import is_configured
from app.setup_logging import setup_logging
from app.nl.model_loader import load_model

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging
log = logging.getLogger(__name__)

if not is_configured(settings.SHEET_API_URL):
    log.warning("SHEET_API_URL is not set; store and order lists will be empty")

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Optionally warm up the summary model in the background so the first
    /dashboard/analysis call doesn't pay the download + load cost.
    """
    app.state.model_ready = False
    app.state.model_error = None

    async def _warmup():
        try:
            await asyncio.to_thread(load_model)
            app.state.model_ready = True
        except Exception as e:
            # Keep serving; /healthz reports the error and analysis falls back to a message
            log.exception("summary model warmup failed")
            app.state.model_error = str(e)

    if settings.SUMMARY_ENABLED and settings.PRELOAD_SUMMARY_MODEL:
        # Keep a reference so the task isn't garbage-collected mid-load
        app.state.warmup_task = asyncio.create_task(_warmup())

    yield

app = FastAPI(title="Sheet OMS", lifespan=lifespan)

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """
    Health probe.
    Returns:
      - ok: static True if the app is alive
      - sheet_configured: whether SHEET_API_URL points somewhere real
      - model_ready / model_error: state of the optional summary model warmup
    """
    return {
        "ok": True,
        "service": "oms",
        "version": 1,
        "sheet_configured": is_configured(settings.SHEET_API_URL),
        "model_ready": bool(getattr(app.state, "model_ready", False)),
        "model_error": getattr(app.state, "model_error", None),
    }

# Register API routers:
app.include_router(auth_router)
app.include_router(stores_router)
app.include_router(orders_router)
app.include_router(dashboard_router)
