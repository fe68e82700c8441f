import os

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from festival.api.generation import generation_controller
from festival.config import Settings, get_settings


def _mount_frontend(app: FastAPI, static_dir: str) -> None:
    root = os.path.abspath(static_dir)
    index = os.path.join(root, "index.html")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = os.path.abspath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        if not os.path.isfile(index):
            raise HTTPException(status_code=404, detail="Frontend bundle not built")
        return FileResponse(index)


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="AI New Year API",
        version="1.0.0",
        description="Couplet and fortune generation for the New Year festival app",
    )
    if settings is None:
        settings = get_settings()
    else:
        app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(generation_controller.router)

    # catch-all, must stay after the API routers
    if settings.serve_static:
        _mount_frontend(app, settings.static_dir)

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    print(f"Server running on http://localhost:{settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
