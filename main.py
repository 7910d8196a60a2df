"""CH Proxy: FastAPI entry point."""
import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app import ch_client
from app.auth import HEALTH_PATH, shared_secret_guard
from app.config import Settings, settings
from app.pipeline import origin_guard, rate_limit_guard, run_guards
from app.rate_limiter import RateLimiter
from app.routers import companies_house

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CLEANUP_INTERVAL_SECONDS = 300


def create_app(config: Settings = settings) -> FastAPI:
    rate_limiter = RateLimiter(limit=config.rate_limit_rpm)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not config.ch_api_key:
            logger.warning("CH_API_KEY not set; Companies House calls will fail.")
        if not config.shared_secret:
            logger.warning("SHARED_SECRET not set; protected routes will return 500.")

        ch_client.init_client(config)

        async def _cleanup_loop():
            while True:
                await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)
                try:
                    await rate_limiter.cleanup()
                except Exception:
                    logger.exception("Rate limiter cleanup failed")

        cleanup_task = asyncio.create_task(_cleanup_loop())
        cleanup_task.add_done_callback(lambda t: logger.error("Cleanup task terminated: %s", t.exception()) if not t.cancelled() and t.exception() else None)

        logger.info("CH proxy listening on :%d", config.port)
        yield

        cleanup_task.cancel()
        await ch_client.close_client()

    app = FastAPI(
        title="CH Proxy",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.rate_limiter = rate_limiter
    app.state.guards = [
        origin_guard(config.allowed_origins),
        rate_limit_guard(rate_limiter),
        shared_secret_guard(config.shared_secret, config.auth_header),
    ]

    @app.middleware("http")
    async def request_pipeline(request: Request, call_next):
        rejection = await run_guards(request.app.state.guards, request)
        if rejection is not None:
            return rejection
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        # Upstream data is never cached, here or downstream
        response.headers["Cache-Control"] = "no-store"
        return response

    # Added last so it wraps everything: preflights and rejections get CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=sorted(config.allowed_origins) or ["*"],
        allow_methods=["GET"],
        allow_headers=[config.auth_header.lower()],
        allow_credentials=False,
    )

    app.include_router(companies_house.router)

    @app.get(HEALTH_PATH)
    async def health():
        return {"ok": True}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
