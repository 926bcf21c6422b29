"""Accessors for shared services attached to `app.state`."""

from fastapi import HTTPException, Request

from services.openai.gateway import AIGateway
from services.workspace_store import WorkspaceStore


def get_gateway(request: Request) -> AIGateway:
    """Retrieve the shared AI gateway from the app state."""
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise HTTPException(status_code=500, detail="AI gateway not initialized.")
    return gateway


def get_store(request: Request) -> WorkspaceStore:
    """Retrieve the in-memory workspace store from the app state."""
    store = getattr(request.app.state, "workspace_store", None)
    if store is None:
        raise HTTPException(status_code=500, detail="Workspace store unavailable.")
    return store
