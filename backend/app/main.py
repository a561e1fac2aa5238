from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from apimesh.errors import FlowNotFound, InvalidTransition, StepFailure, UnknownAction

from backend.app.config import AppConfig
from backend.app.api.routes_graph import router as graph_router
from backend.app.api.routes_embeddings import router as embeddings_router
from backend.app.api.routes_flows import router as flows_router
from backend.app.api.routes_symbols import router as symbols_router
from backend.app.dependencies import get_mesh_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle hooks.

    Loads descriptors and builds the initial graph once at startup.
    """
    get_mesh_service().refresh()

    yield


def _error(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app(config: AppConfig) -> FastAPI:
    app = FastAPI(
        title=config.app_name,
        lifespan=lifespan,
    )

    app.add_exception_handler(FlowNotFound, _error(404))
    app.add_exception_handler(InvalidTransition, _error(409))
    app.add_exception_handler(UnknownAction, _error(422))
    app.add_exception_handler(StepFailure, _error(502))

    app.include_router(
        graph_router,
        prefix=f"{config.api_prefix}/graph",
        tags=["graph"],
    )

    app.include_router(
        embeddings_router,
        prefix=f"{config.api_prefix}/embeddings",
        tags=["embeddings"],
    )

    app.include_router(
        flows_router,
        prefix=f"{config.api_prefix}/flows",
        tags=["flows"],
    )

    app.include_router(
        symbols_router,
        prefix=f"{config.api_prefix}/symbols",
        tags=["symbols"],
    )

    return app


config = AppConfig()
app = create_app(config)
