import inspect
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from openai import AsyncOpenAI
import uvicorn

from routes.chat_route import router as chat_router
from routes.editor_route import router as editor_router
from routes.generator_ws import router as generator_ws_router
from routes.prompt_route import router as prompt_router
from routes.upload_route import router as upload_router
from services.openai.gateway import AIGateway
from services.workspace_store import WorkspaceStore
from utils.logging_setup import configure_logging
from utils.settings import get_settings

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager to initialize:
      - settings and logging
      - the OpenAI async client and the AI gateway wrapping it
      - the in-memory workspace store (uploads, edits, chats)
    and attach them to `app.state`.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings

    if not settings.openai_api_key:
        raise RuntimeError("OPENAI_API_KEY environment variable is not set")

    try:
        openai_client = AsyncOpenAI(api_key=settings.openai_api_key)
    except Exception as exc:
        raise RuntimeError("Failed to initialize OpenAI Async client") from exc

    app.state.openai_client = openai_client
    app.state.gateway = AIGateway(openai_client, settings)
    app.state.workspace_store = WorkspaceStore(app.state.gateway)

    try:
        yield
    finally:
        # Gracefully close the OpenAI client if it exposes a close/aclose method.
        client = getattr(app.state, "openai_client", None)
        if client is not None:
            aclose = getattr(client, "aclose", None) or getattr(client, "close", None)
            if aclose is not None:
                result = aclose()
                if inspect.isawaitable(result):
                    await result


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(lifespan=lifespan)

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that verifies the gateway and workspace store are present.
        """
        has_gateway = getattr(request.app.state, "gateway", None) is not None
        has_store = getattr(request.app.state, "workspace_store", None) is not None
        return {"ok": True, "gateway_available": has_gateway, "workspace_ready": has_store}

    # Register application routers
    app.include_router(upload_router)
    app.include_router(prompt_router)
    app.include_router(editor_router)
    app.include_router(chat_router)
    app.include_router(generator_ws_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
    )
