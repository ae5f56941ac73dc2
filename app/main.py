# app/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from sqlalchemy import exc as sa_exc

from app.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.database import engine, init_models
from app.routers import admin, auth, performance

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # create tables (for demo only, use Alembic in prod).
    # ignore duplicate-object errors from previous partial runs.
    try:
        await init_models()
    except sa_exc.IntegrityError as e:
        msg = str(getattr(e, "orig", e))
        if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
            logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
        else:
            raise
    logger.info("Sales performance API started (%s)", settings.ENVIRONMENT)
    yield
    await engine.dispose()


app = FastAPI(title="Sales Performance API", version="1.0", lifespan=lifespan)
register_exception_handlers(app)

# Include Routers
app.include_router(auth.router)
app.include_router(performance.router)
app.include_router(admin.router)


@app.get("/health")
def health():
    return {
        "success": True,
        "message": "Sales performance API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
