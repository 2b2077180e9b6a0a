from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cueroom.core.config import settings
from cueroom.db.init_db import create_all_tables
from cueroom.middleware.request_logging import RequestLoggingMiddleware
from cueroom.middleware.auth_logging import AuthLoggingMiddleware
from cueroom.modules.auth.api.router import router as auth_router
from cueroom.modules.posts.api.router import router as posts_router
from cueroom.modules.posts.comments.api.router import router as comments_router
from cueroom.modules.posts.reactions.api.router import router as reactions_router
from cueroom.modules.bot.api.router import router as bot_router
from cueroom.modules.realtime.api.router import router as realtime_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("cueroom")

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    create_all_tables()
    yield
    logger.info("Server shutting down")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    debug=settings.DEBUG,
    description="Community backend for underground electronic music artists",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"message": ...} bodies, merging structured details"""
    if isinstance(exc.detail, dict):
        content = dict(exc.detail)
    else:
        content = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors: 400 with the first problem as the message"""
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"message": "Invalid request"})
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"message": message, "errors": jsonable_encoder(errors)})

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"message": "Internal server error"})

# Add middleware
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(AuthLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(auth_router, prefix=f"{settings.API_PREFIX}/auth", tags=["authentication"])
app.include_router(posts_router, prefix=f"{settings.API_PREFIX}/posts", tags=["posts"])
app.include_router(comments_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/comments", tags=["comments"])
app.include_router(reactions_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}", tags=["reactions"])
app.include_router(bot_router, prefix=settings.API_PREFIX, tags=["bot"])
app.include_router(realtime_router, tags=["realtime"])

@app.get("/")
async def root():
    return {
        "message": "Welcome to TheCueRoom",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "documentation": "/docs" if settings.DEBUG else None,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("cueroom.main:app", host="0.0.0.0", port=8000, reload=True)
