import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from redis.asyncio import Redis
import uvicorn

import config

# Validate critical configuration before the app is built
from utils.config_validator import validate_or_exit
validate_or_exit(config)

from db import create_db_and_tables
from middleware.security_headers import SecurityHeadersMiddleware
from web.admin_router import admin_router
from web.api_router import api_router
from web.cart_router import cart_router
from web.catalog_router import catalog_router
from web.checkout_router import checkout_router
from web.errors import register_exception_handlers

redis = Redis(host=config.REDIS_HOST, port=config.REDIS_PORT, password=config.REDIS_PASSWORD,
              decode_responses=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    await create_db_and_tables()
    Path(config.MEDIA_ROOT).mkdir(parents=True, exist_ok=True)
    logging.info(f"[Startup] Store API ready (env={config.RUNTIME_ENVIRONMENT.value}, "
                 f"default language={config.DEFAULT_LANGUAGE.value})")

    yield

    # Shutdown
    logging.warning('Shutting down..')
    await redis.aclose()
    logging.warning('Bye!')


app = FastAPI(title="Perfume Store API", lifespan=lifespan)
app.state.redis = redis

if config.SECURITY_HEADERS_ENABLED:
    app.add_middleware(SecurityHeadersMiddleware)
    logging.info("[Startup] Security headers middleware enabled")
else:
    logging.debug("[Startup] Security headers middleware disabled")

if config.CORS_ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "Accept-Language", "X-Client-Id"],
    )
    logging.info(f"[Startup] CORS middleware enabled for origins: {config.CORS_ALLOWED_ORIGINS}")
else:
    logging.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

register_exception_handlers(app)

app.include_router(catalog_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(api_router)
app.include_router(admin_router)

# Uploaded images (categories/, products/, settings/)
app.mount(config.MEDIA_URL.rstrip("/") or "/media",
          StaticFiles(directory=config.MEDIA_ROOT, check_dir=False), name="media")


# Health check endpoint (for Docker container monitoring)
@app.get("/health")
async def health_check():
    """Health check endpoint for Docker healthcheck."""
    return {"status": "healthy"}


def main() -> None:
    uvicorn.run(app, host=config.WEB_HOST, port=config.WEB_PORT)
