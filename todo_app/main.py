# todo_app/main.py

# ------------------------
# imports
# ------------------------
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from todo_app.config import Settings, get_settings
from todo_app.db.base import Base, build_engine, build_session_factory
from todo_app.errors import INTERNAL_ERROR_MESSAGE, error_response, register_exception_handlers
from todo_app.routers import todos as todos_router
from todo_app.routers import users as users_router

logger = logging.getLogger("todo_app")


def configure_logging(level: str = "INFO") -> None:
    pkg_logger = logging.getLogger("todo_app")
    if not pkg_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        pkg_logger.addHandler(handler)
    pkg_logger.setLevel(level.upper())
    pkg_logger.propagate = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if settings.auto_create_tables:
        Base.metadata.create_all(bind=app.state.engine)
    logger.info("server started (env=%s)", settings.app_env)
    yield
    # uvicorn has stopped accepting connections and drained in-flight
    # requests by now, so the pool can be released
    logger.info("shutting down server")
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    # ------------------------
    # 1) settings / storage
    # ------------------------
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Todo API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings)
    app.state.session_factory = build_session_factory(app.state.engine)

    # ------------------------
    # 2) middleware
    #    - recovery: any unhandled exception becomes a JSON 500
    # ------------------------
    @app.middleware("http")
    async def recover(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Request panic: %s %s", request.method, request.url.path)
            return error_response(500, INTERNAL_ERROR_MESSAGE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,  # bearer tokens, no cookies
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ------------------------
    # 3) routers
    # ------------------------
    app.include_router(users_router.router)
    app.include_router(todos_router.router)

    @app.get("/v1/health")
    def health():
        return {"status": "server is running"}

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "todo_app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
