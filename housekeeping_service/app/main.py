import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shared.core.config import settings
from shared.core.database import housekeeping_engine, Base
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware

from .models import hotels, housekeeping
from .router.housekeeping import housekeeping_tasks_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# Create all tables
Base.metadata.create_all(bind=housekeeping_engine)

app = FastAPI(title="Housekeeping Service API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Wrap plain JSON bodies into the JsonOutResult envelope
app.add_middleware(JsonResponseMiddleware)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(housekeeping_tasks_router.router)


@app.get("/api/housekeeping/health")
def health():
    return {"status": "healthy"}
