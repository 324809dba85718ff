from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sasurl.api.routes import urls
from sasurl.core.config import Settings, get_settings
from sasurl.core.errors import ApiError
from sasurl.core.logging_config import setup_logging
from sasurl.services.issuer import SignedUrlIssuer


async def handle_api_error(_, exc: ApiError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def create_app(settings: Settings | None = None, issuer: SignedUrlIssuer | None = None) -> FastAPI:
    """
    Build the HTTP app. Run with:
        uvicorn --factory sasurl.main:create_app
    """
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    issuer = issuer or SignedUrlIssuer.from_settings(settings)

    app = FastAPI(title=settings.app_name, version="0.1.0")
    app.state.settings = settings
    app.state.issuer = issuer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, handle_api_error)

    @app.get("/healthz")
    def healthz() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(urls.router)
    # Must stay last: mounted at "/" the redirect route matches every GET path.
    app.include_router(issuer.install_redirect_route())

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("sasurl.main:create_app", factory=True, host="0.0.0.0", port=settings.app_port)
