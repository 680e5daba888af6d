# kpitracker/main.py
import logging
from fastapi import FastAPI
from sqlalchemy import exc as sa_exc
from kpitracker.config import settings
from kpitracker.database import engine, Base
from kpitracker.models import member, kpi, target, performance  # noqa: F401  (register tables)
from kpitracker.routers import performance as performance_router, targets as targets_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="KPI Tracker - Target Resolution & Period Aggregation", version="1.0")

# Include Routers
app.include_router(performance_router.router)
app.include_router(targets_router.router)

# Tables for local runs; deployments migrate with alembic
@app.on_event("startup")
async def startup_event():
    # ignore duplicate-object errors from previous partial runs
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except sa_exc.IntegrityError as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise

@app.get("/")
def read_root():
    return {"message": "Welcome to KPI Tracker"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("kpitracker.main:app", host="0.0.0.0", port=8000, reload=True)
