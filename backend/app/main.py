"""
FastAPI Main Application

ChainLab API: calculators and step-through tables for the course diagrams.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from datetime import datetime

from chainlab.data.fixtures import FIXTURE_DIR
from chainlab.diagrams.steps import list_sequences

from app.config import settings
from app.api.v1 import health, crypto, defi, zk, diagrams

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(crypto.router, prefix="/api/v1", tags=["Crypto"])
app.include_router(defi.router, prefix="/api/v1", tags=["DeFi"])
app.include_router(zk.router, prefix="/api/v1", tags=["ZK"])
app.include_router(diagrams.router, prefix="/api/v1", tags=["Diagrams"])


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    """Anything a router did not translate becomes a 500"""
    print(f"[API] Error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": f"Internal error: {exc}"}
    )


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.API_TITLE,
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION,
        "docs": "/docs",
        "health": "/api/v1/health",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.on_event("startup")
async def startup_event():
    """Actions to perform on application startup"""
    print(f"🚀 Starting {settings.API_TITLE} v{settings.API_VERSION}")
    print(f"📂 Fixture dir: {settings.FIXTURE_DIR or FIXTURE_DIR}")
    print(f"🧮 Diagram sequences: {', '.join(list_sequences())}")


@app.on_event("shutdown")
async def shutdown_event():
    """Actions to perform on application shutdown"""
    print("👋 Shutting down ChainLab API")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
