"""Entrypoint da aplicação agenda-marketplace.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request

from api.routes import create_api_router, register_exception_handlers
from app.bootstrap import build_container, initialize_app, validate_runtime_settings
from app.bootstrap.clients import create_async_redis_client
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.logging import get_logger
from config.settings import get_scheduling_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import Response

    from app.bootstrap.dependencies import SchedulingContainer

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _make_lifespan(container: SchedulingContainer | None):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Startup: valida settings e monta dependências. Shutdown: drena tasks."""
        logger.info("app_starting")
        app.state.redis_client = None
        if container is None:
            validate_runtime_settings()
            if get_scheduling_settings().booking_lock_backend == "redis":
                app.state.redis_client = create_async_redis_client()
            app.state.container = build_container()
        else:
            app.state.container = container

        yield

        logger.info("app_shutting_down")
        await app.state.container.tasks.drain(timeout_seconds=30.0)
        redis_client = app.state.redis_client
        if redis_client is not None:
            await redis_client.aclose()

    return lifespan


async def correlation_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Propaga X-Correlation-ID (ou gera um) por requisição."""
    token = set_correlation_id(request.headers.get(CORRELATION_HEADER))
    try:
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = get_correlation_id()
        return response
    finally:
        reset_correlation_id(token)


def create_app(container: SchedulingContainer | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        container: Dependências prontas (testes); sem ele, montadas no startup.
    """
    fastapi_app = FastAPI(
        title="agenda-marketplace",
        description="Núcleo de agendamento do marketplace de serviços",
        version="1.0.0",
        lifespan=_make_lifespan(container),
    )
    fastapi_app.middleware("http")(correlation_middleware)
    register_exception_handlers(fastapi_app)
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured")
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("app_dev_server_starting")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
