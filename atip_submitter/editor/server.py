"""
Configuration editor - local web UI that edits form_data.json and starts runs

  GET  /       current configuration as an editable form
  POST /save   persist the posted form fields
  POST /start  {"mode": "test" | "live", "headless": bool} -> start a pipeline run
"""

import asyncio
import webbrowser
from contextlib import asynccontextmanager
from typing import Literal

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

import atip_submitter.config as config
from atip_submitter.browser.session import BrowserRegistry
from atip_submitter.data.form_data import (
    KNOWN_FIELDS,
    ConfigError,
    read_form_data,
    save_form_data,
    validate_config,
)
from atip_submitter.editor.templates import render_config_page
from atip_submitter.utils.logging import log_error, log_info


class StartRequest(BaseModel):
    mode: Literal["test", "live"] = "test"
    headless: bool = False


def _default_runner(config_path, max_pages, registry):
    async def _run(mode, headless):
        from atip_submitter.main import run_pipeline_safely

        await run_pipeline_safely(
            mode=mode,
            headless=headless,
            interactive=not headless,
            max_pages=max_pages,
            config_path=config_path,
            registry=registry,
        )

    return _run


def create_app(
    config_path=None,
    on_start=None,
    max_pages=config.DEFAULT_MAX_PAGES,
    open_browser_at=None,
):
    """
    Build the editor app.
    `on_start(mode, headless)` is awaited in a background task per run.
    """
    config_path = config_path or config.CONFIG_FILE
    registry = BrowserRegistry()
    on_start = on_start or _default_runner(config_path, max_pages, registry)

    @asynccontextmanager
    async def lifespan(app):
        if open_browser_at:
            webbrowser.open(open_browser_at)
        yield
        task = app.state.run_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        await registry.close_all()

    app = FastAPI(title="ATIP Submitter Configuration", lifespan=lifespan)
    app.state.run_task = None
    app.state.registry = registry

    @app.get("/", response_class=HTMLResponse)
    async def show_config():
        try:
            data = read_form_data(config_path)
        except (OSError, ValueError) as e:
            log_error(f"Error reading config: {e}")
            return HTMLResponse(
                render_config_page({}, f"Could not read {config_path}: {e}", error=True)
            )
        return HTMLResponse(render_config_page(data))

    @app.post("/save", response_class=HTMLResponse)
    async def save_config(request: Request):
        form = await request.form()
        data = {
            key: str(value).strip()
            for key, value in form.items()
            if key in KNOWN_FIELDS
        }
        if not data.get("countdown_seconds"):
            data.pop("countdown_seconds", None)

        try:
            validate_config(data)
        except ConfigError as e:
            return HTMLResponse(render_config_page(data, str(e), error=True), status_code=400)

        try:
            save_form_data(data, config_path)
        except OSError as e:
            log_error(f"Error saving config: {e}")
            return HTMLResponse(
                render_config_page(data, f"Error saving: {e}", error=True),
                status_code=500,
            )

        log_info(f"Configuration saved to {config_path}")
        return HTMLResponse(
            render_config_page(
                data,
                "Configuration Saved Successfully! Start a test or live run below.",
            )
        )

    @app.post("/start", status_code=202)
    async def start_run(body: StartRequest):
        task = app.state.run_task
        if task is not None and not task.done():
            raise HTTPException(status_code=409, detail="A run is already in progress")

        log_info(f"Run requested from editor (mode={body.mode}, headless={body.headless})")
        app.state.run_task = asyncio.create_task(on_start(body.mode, body.headless))
        return JSONResponse(
            {"status": "started", "mode": body.mode, "headless": body.headless},
            status_code=202,
        )

    return app


def serve_editor(
    config_path=None,
    host=config.EDITOR_HOST,
    port=config.EDITOR_PORT,
    max_pages=config.DEFAULT_MAX_PAGES,
    open_browser=True,
):
    import uvicorn

    url = f"http://localhost:{port}"
    app = create_app(
        config_path=config_path,
        max_pages=max_pages,
        open_browser_at=url if open_browser else None,
    )
    print(f"Config Editor running at {url}")
    uvicorn.run(app, host=host, port=port)
