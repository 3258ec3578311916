import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from newsdesk.api.v1.router import router as v1_router
from newsdesk.core.config import Settings, settings
from newsdesk.core.errors import install_error_handlers
from newsdesk.core.http_hardening import install_http_hardening
from newsdesk.core.logging_config import configure_logging
from newsdesk.core.telemetry import Telemetry
from newsdesk.schemas.common import envelope
from newsdesk.services.push_notifications import PushNotificationService
from newsdesk.services.rate_limit import build_rate_limiter


def create_app(app_settings: Settings | None = None) -> FastAPI:
    cfg = app_settings or settings
    configure_logging(cfg.LOG_LEVEL)

    app = FastAPI(title=cfg.APP_NAME, version="0.1.0")
    app.state.settings = cfg
    app.state.telemetry = Telemetry(cfg.TELEMETRY_ENABLED, service_name=cfg.APP_NAME)
    app.state.rate_limiter = build_rate_limiter(cfg.REDIS_URL) if cfg.RATE_LIMIT_REQUESTS > 0 else None
    app.state.push_service = PushNotificationService.from_settings(cfg)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    install_http_hardening(app)
    install_error_handlers(app)

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    def landing():
        return envelope(200, "All is well!")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/metrics")
    def metrics():
        return envelope(200, "Telemetry snapshot", app.state.telemetry.snapshot())

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("newsdesk.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
