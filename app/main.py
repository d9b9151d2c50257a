import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from app.api.routes.analyze import router as analyze_router
from app.api.routes.parse import router as parse_router
from app.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="Heuristic profile parsing service that turns PDF, DOCX, OCR or scraped text into a structured professional profile",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)
app.include_router(analyze_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "profile-parser", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

def custom_openapi():
    """Generate OpenAPI schema with custom settings."""
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=f"{settings.app_name} API",
        version=settings.app_version,
        description="Profile parsing API: free text in, structured profile record out",
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi
