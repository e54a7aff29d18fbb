"""
Listing Reel Backend - Unified Application Entry Point
Mounts the sequencing and script writer services under a single FastAPI application
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from services.script_writer.app import app as script_writer_app
from services.sequencing.app import app as sequencing_app
from shared.utils import config, setup_logging

logger = setup_logging("listing-reel-backend")

SERVICE_MOUNTS = [
    (sequencing_app, "/api/v1/sequencing", "Sequencing", "seq"),
    (script_writer_app, "/api/v1/scripts", "Script Writer", "script"),
]

# Routes to exclude (internal FastAPI docs routes)
EXCLUDED_PATHS = {"/openapi.json", "/docs", "/docs/oauth2-redirect", "/redoc"}

app = FastAPI(
    title="Listing Reel Backend API",
    description="""
    Unified API for listing video preparation: narration scripts, photo ordering,
    caption timing and slide timing.
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Health",
            "description": "Service health and status endpoints",
        },
        {
            "name": "Sequencing",
            "description": "Photo ordering, captions and timing - mounted at /api/v1/sequencing",
        },
        {
            "name": "Script Writer",
            "description": "Listing narration scripts - mounted at /api/v1/scripts",
        },
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for service_app, prefix, tag, name_prefix in SERVICE_MOUNTS:
    for route in service_app.routes:
        if hasattr(route, "path") and hasattr(route, "endpoint"):
            # Skip internal documentation routes
            if route.path in EXCLUDED_PATHS:
                continue
            route_kwargs = {
                "path": f"{prefix}{route.path}",
                "endpoint": route.endpoint,
                "methods": route.methods,
                "tags": [tag],
            }
            if hasattr(route, "name"):
                route_kwargs["name"] = f"{name_prefix}_{route.name}"
            if hasattr(route, "response_model"):
                route_kwargs["response_model"] = route.response_model
            app.add_api_route(**route_kwargs)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with service information and API navigation"""
    return {
        "service": "Listing Reel Backend API",
        "version": "1.0.0",
        "services": {
            "sequencing": {
                "base_url": "/api/v1/sequencing",
                "health": "/api/v1/sequencing/health",
            },
            "scripts": {
                "base_url": "/api/v1/scripts",
                "health": "/api/v1/scripts/health",
            },
        },
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for all services"""
    return {
        "status": "healthy",
        "services": {
            "api_gateway": "operational",
            "sequencing": "operational",
            "script_writer": "operational",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Listing Reel Backend on http://0.0.0.0:8000")
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
