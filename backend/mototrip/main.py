"""
FastAPI entrypoint for the MotoTrip Organizer backend.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mototrip.core.config import settings
from mototrip.core.errors import register_exception_handlers
from mototrip.core.logging import init_logging, request_context_middleware
from mototrip.api.router import api_router

init_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON, debug=settings.DEBUG)

app = FastAPI(
    title="MotoTrip Organizer API",
    description="Backend API for planning motorcycle trips",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request id / access logging
app.middleware("http")(request_context_middleware)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "MotoTrip Organizer API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
