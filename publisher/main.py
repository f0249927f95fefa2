from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from publisher.api import api_router
from publisher.api.deps import get_app_settings
from publisher.config import Settings, settings
from publisher.storage import ensure_dir


def create_app(config: Optional[Settings] = None) -> FastAPI:
    config = config or settings
    app = FastAPI(
        title="Build Publisher",
        version="0.1.0",
        description="Publishes application builds into a local output root and serves them.",
    )

    @app.get("/healthz", tags=["health"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api_router)
    app.dependency_overrides[get_app_settings] = lambda: config

    # Published artifacts are served from here, so `remote_url` may point at `<host>/files/`.
    out_path = ensure_dir(config.out_path)
    app.mount("/files", StaticFiles(directory=str(out_path)), name="files")

    return app


def run() -> None:
    import uvicorn

    uvicorn.run(create_app(), host=settings.api_host, port=settings.api_port)
