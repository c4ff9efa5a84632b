from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dart_export.core.logging import init_logging
from dart_export.core.config import get_settings
from .routers.health import router as health_router
from .routers.exports import router as exports_router

# Initialize infra bits at import time
init_logging()

app = FastAPI(title="KT&G Financials CSV Export", version="1.0.0")
settings = get_settings()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(health_router)
app.include_router(exports_router)
