import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from extraction_hub.core.config import settings
from extraction_hub.core.database import Base, engine, SessionLocal
from extraction_hub.core.exceptions import HubError
from extraction_hub.core.logging_config import setup_logging
from extraction_hub.scheduler import start_scheduler, shutdown_scheduler
from extraction_hub.services.permission_service import seed_permissions
from extraction_hub.api import (
    auth,
    admin,
    config_transfer,
    credentials,
    dashboard,
    executions,
    jobs,
    permissions,
)

from extraction_hub.models import *

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Data Extraction Hub")

# -------------------------
# CORS (Allow Frontend Cookies)
# -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------
# Include Routers
# -------------------------
app.include_router(auth.router)
app.include_router(credentials.router)
app.include_router(jobs.router)
app.include_router(executions.router)
app.include_router(dashboard.router)
app.include_router(permissions.router)
app.include_router(admin.router)
app.include_router(config_transfer.router)

# -------------------------
# Error handling
# -------------------------
@app.exception_handler(HubError)
async def hub_error_handler(request: Request, exc: HubError):
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# -------------------------
# DB INIT
# -------------------------
Base.metadata.create_all(bind=engine)

# -------------------------
# FastAPI lifecycle
# -------------------------

@app.on_event("startup")
def startup():
    db = SessionLocal()
    try:
        seed_permissions(db)
    finally:
        db.close()

    if settings.SCHEDULER_ENABLED:
        start_scheduler()
        logger.info("Scheduler started")

@app.on_event("shutdown")
def shutdown():
    shutdown_scheduler()

# -------------------------
# Routes
# -------------------------

@app.get("/")
def root():
    return {"status": "running"}
