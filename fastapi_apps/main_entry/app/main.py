"""Main Entry FastAPI Application.

Serves the cacheability explainer and the schema dereference helper.
"""

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routes import cacheability, schema

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Application startup event."""
    print(f"""
╔════════════════════════════════════════════════════════════╗
║                  Cache Explain FastAPI Server              ║
╠════════════════════════════════════════════════════════════╣
║  Server running at: http://{settings.HOST}:{settings.PORT:<25}║
║                                                            ║
║  Endpoints:                                                ║
║    GET  /health                        - Health check      ║
║    POST /api/fastapi/cacheability      - Explain exchange  ║
║    POST /api/fastapi/schema/dereference - Resolve $refs    ║
║    GET  /docs                          - Swagger UI        ║
║    GET  /redoc                         - ReDoc             ║
╚════════════════════════════════════════════════════════════╝
    """)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
    }


# Register API routes
app.include_router(cacheability.router, prefix="/api/fastapi/cacheability", tags=["cacheability"])
app.include_router(schema.router, prefix="/api/fastapi/schema", tags=["schema"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
