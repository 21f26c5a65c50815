import asyncio
import contextlib

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from todosync.config import get_settings
from todosync.exceptions import EditSessionError, TodoNotFoundError
from todosync.http_client import close_session
from todosync.logging_setup import setup_logging
from todosync.mcp_server import mcp
from todosync.routers.todos import router as todos_router
from todosync.services.synchronizer import TodoSynchronizer, get_synchronizer


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Todosync", version="0.1.0")
api.include_router(todos_router)


@api.get("/api/status")
def api_status(sync: TodoSynchronizer = Depends(get_synchronizer)) -> dict:
    return {
        "remote": get_settings().todos_api_base,
        "todo_count": len(sync.store),
        "editing": sync.editing is not None,
    }


# --- Exception handlers ---

@api.exception_handler(TodoNotFoundError)
async def not_found_error_handler(request: Request, exc: TodoNotFoundError):
    return JSONResponse(status_code=404, content={"error_code": "not_found", "message": str(exc)})


@api.exception_handler(EditSessionError)
async def edit_session_error_handler(request: Request, exc: EditSessionError):
    return JSONResponse(status_code=409, content={"error_code": "edit_session", "message": str(exc)})


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    settings = get_settings()
    setup_logging(settings.log_level)
    # the initial load runs in the background so a stalled remote never holds up startup
    load_task = asyncio.create_task(get_synchronizer().load()) if settings.load_on_startup else None
    try:
        async with mcp_app.lifespan(app):
            yield
    finally:
        if load_task is not None:
            load_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await load_task
        close_session()


app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=lifespan,
)


def run():
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "todosync.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
