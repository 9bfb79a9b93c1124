from fastapi import FastAPI
from sqlalchemy import text

from tourism_api.core.db import engine
from tourism_api.core.errors import register_error_handlers
from tourism_api.core.logging import init_logging
from tourism_api.routers.ask import router as ask_router
from tourism_api.routers.auth import router as auth_router
from tourism_api.routers.entities import router as entities_router
from tourism_api.routers.onboarding import router as onboarding_router

init_logging()

app = FastAPI(title="Isle Tourism Assistant API")
register_error_handlers(app)
app.include_router(ask_router, tags=["assistant"])
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(entities_router, prefix="/api", tags=["entities"])
app.include_router(
    onboarding_router, prefix="/api/tourism-onboarding", tags=["onboarding"]
)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.get("/db-ping")
def db_ping() -> dict[str, int]:
    with engine.connect() as conn:
        value = conn.execute(text("SELECT 1")).scalar_one()
    return {"db": value}
