"""
FastAPI web server for setli.

Provides the REST API the front end uses to edit the set list, connect to the
renderer and apply style settings.
"""

import logging
from dataclasses import asdict
from typing import Union

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, field_validator

from ..config_manager import ConfigManager
from ..errors import (
    FontEnumerationError,
    IndexOutOfBoundsError,
    MalformedRemoteSettingsError,
    NotConnectedError,
    RemoteFetchError,
    RemoteWriteError,
    SetliError,
)
from ..fonts import list_font_families
from ..models import StyleSettings
from ..state import AppState
from ..style import hex_to_obs_color
from ..sync import SyncEngine

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    NotConnectedError: 409,
    IndexOutOfBoundsError: 404,
    RemoteFetchError: 502,
    RemoteWriteError: 502,
    MalformedRemoteSettingsError: 502,
    FontEnumerationError: 500,
}


# Request models
class AddSongRequest(BaseModel):
    title: str


class ConnectRequest(BaseModel):
    host: str = "localhost"
    port: int = 4455
    password: str = ""


class StyleSettingsRequest(BaseModel):
    """Style settings; colors may be packed integers or "#RRGGBB" strings."""

    target_scene: str
    target_text_element: str
    font_family: str
    font_color: Union[int, str] = 0
    outline_enabled: bool = True
    outline_width: int = 1
    outline_color: Union[int, str] = 0
    line_break_count: int = 1

    @field_validator("font_color", "outline_color")
    @classmethod
    def convert_color(cls, value):
        if isinstance(value, str):
            return hex_to_obs_color(value)
        return value

    def to_settings(self) -> StyleSettings:
        return StyleSettings(**self.model_dump())


def http_error(error: SetliError) -> HTTPException:
    """Map a setli exception onto an HTTPException."""
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


# Dependency to get components
def get_state(request: Request) -> AppState:
    """Get AppState from app state."""
    return request.app.state.setli_state


def get_sync_engine(request: Request) -> SyncEngine:
    """Get SyncEngine from app state."""
    return request.app.state.sync_engine


def get_config_manager(request: Request) -> ConfigManager:
    """Get ConfigManager from app state."""
    return request.app.state.config_manager


def create_app(
    state: AppState,
    sync_engine: SyncEngine,
    config_manager: ConfigManager,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Renderer-facing endpoints are plain functions so FastAPI runs them in its
    worker threads; each blocks until its remote round trip has finished.

    Args:
        state: Shared AppState
        sync_engine: SyncEngine bound to the same state
        config_manager: ConfigManager instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="setli", version="0.1.0")

    app.state.setli_state = state
    app.state.sync_engine = sync_engine
    app.state.config_manager = config_manager

    # Song endpoints
    @app.get("/api/songs")
    def get_songs(
        app_state: AppState = Depends(get_state),
        engine: SyncEngine = Depends(get_sync_engine),
    ):
        """Sync the set list to the renderer, then return it."""
        result = engine.try_sync_display()
        songs = [asdict(song) for song in app_state.songs.list()]
        return {"songs": songs, **result}

    @app.post("/api/songs")
    async def add_song(request_data: AddSongRequest, app_state: AppState = Depends(get_state)):
        """Append a song to the set list."""
        success = app_state.songs.append(request_data.title)
        return {"status": "added", "success": success}

    @app.delete("/api/songs/{index}")
    async def delete_song(index: int, app_state: AppState = Depends(get_state)):
        """Remove the song at a zero-based position."""
        try:
            song = app_state.songs.remove(index)
        except IndexOutOfBoundsError as e:
            raise http_error(e) from e
        return {"status": "removed", "success": True, "song": asdict(song)}

    # Connection endpoints
    @app.post("/api/connection")
    def connect(request_data: ConnectRequest, app_state: AppState = Depends(get_state)):
        """Connect to the renderer, replacing any current session on success."""
        connected = app_state.connection.connect(
            request_data.host, request_data.port, request_data.password
        )
        return {"connected": connected}

    @app.get("/api/connection")
    async def connection_status(app_state: AppState = Depends(get_state)):
        """Report whether a renderer session exists."""
        info = app_state.connection.info()
        return {
            "connected": info is not None,
            "host": info.host if info else None,
            "port": info.port if info else None,
        }

    # Style settings endpoints
    @app.get("/api/settings")
    async def get_settings(app_state: AppState = Depends(get_state)):
        """Get the current style settings."""
        return asdict(app_state.style.get())

    @app.put("/api/settings")
    def apply_settings(
        request_data: StyleSettingsRequest,
        engine: SyncEngine = Depends(get_sync_engine),
    ):
        """Apply style settings to the text element and resync the set list."""
        settings = request_data.to_settings()
        try:
            display_text = engine.apply_style_settings(settings)
        except SetliError as e:
            raise http_error(e) from e
        except Exception as e:
            logger.error("Error applying style settings: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail=str(e))
        return {"status": "applied", "settings": asdict(settings), "text": display_text}

    # Font endpoints
    @app.get("/api/fonts")
    def get_fonts():
        """List font families installed on the host."""
        try:
            fonts = list_font_families()
        except FontEnumerationError as e:
            logger.error("Font enumeration failed: %s", e)
            raise http_error(e) from e
        return {"fonts": fonts}

    # Configuration endpoints
    @app.get("/api/config")
    async def get_config(config: ConfigManager = Depends(get_config_manager)):
        """Get configuration values with schema metadata."""
        return config.get_full_config()

    return app
