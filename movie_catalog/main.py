from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from dotenv import load_dotenv
import os
import logging

from movie_catalog.database import Base, engine
from movie_catalog.middleware.security import SecurityHeadersMiddleware
from movie_catalog.routes import auth, catalog, movies
from movie_catalog.utils.exceptions import CatalogError
import movie_catalog.models  # noqa: F401  (registers every model on Base.metadata)

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# ============================================
# Application Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup:
    - Create missing tables (unless AUTO_CREATE_TABLES=false)
    - Log configuration

    Shutdown:
    - Dispose the connection pool
    """
    logger.info("=" * 60)
    logger.info("🎬 Movie Catalog API Starting...")
    logger.info(f"   Environment: {os.getenv('ENVIRONMENT', 'development')}")
    logger.info(f"   CORS Origins: {len(allowed_origins)} configured")
    logger.info("=" * 60)

    if os.getenv("AUTO_CREATE_TABLES", "true").lower() == "true":
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("   Database tables ready")
        except Exception as e:
            logger.error(f"Failed to create tables: {str(e)}")

    yield

    logger.info("=" * 60)
    logger.info("🛑 Movie Catalog API Shutting Down...")
    engine.dispose()
    logger.info("=" * 60)


app = FastAPI(
    title="Movie Catalog API",
    description="Movies, actors, genres, streaming platforms and trailers",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# ============================================
# Security Configuration
# ============================================

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _cors_origins() -> list:
    """CORS_ORIGINS (comma separated) plus FRONTEND_URL, without duplicates"""
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()]
    frontend_url = os.getenv("FRONTEND_URL")
    if frontend_url and frontend_url not in origins:
        origins.append(frontend_url)
    return origins


allowed_origins = _cors_origins()

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,  # Auth travels in a cookie
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(
    SecurityHeadersMiddleware,
    enable_hsts=os.getenv("ENVIRONMENT") == "production",
)

# Trusted Hosts - Production only
if os.getenv("ENVIRONMENT") == "production":
    if trusted_hosts := [h for h in os.getenv("TRUSTED_HOSTS", "").split(",") if h]:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=trusted_hosts)


# ============================================
# Exception Handlers - CORS headers on every error response
# ============================================

def _with_cors(request: Request, response: JSONResponse) -> JSONResponse:
    origin = request.headers.get("origin")
    if origin in allowed_origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
    return response


@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError):
    """Map catalog errors (validation, not found, query failure) to JSON"""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    response = JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
    return _with_cors(request, response)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Keep CORS headers on auth errors (401/403) so the browser can read them"""
    response = JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return _with_cors(request, response)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all: log the traceback, hide internals from the caller"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    response = JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return _with_cors(request, response)


# ============================================
# Routes
# ============================================

@app.get("/", tags=["Health"])
async def root():
    """Service info"""
    return {
        "message": "Movie Catalog API",
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "movies": "/api/movies",
            "genres": "/api/genres",
            "streaming_platforms": "/api/streaming-platforms",
            "auth": "/api/auth",
        },
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check for monitoring"""
    return {
        "status": "healthy",
        "api_version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(auth.router)
app.include_router(movies.router)
app.include_router(catalog.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        log_level="info"
    )
