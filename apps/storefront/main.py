from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from . import config
from .core.content_store import ContentStoreError
from .routers import catalog, filters

config.configure_logging()

app = FastAPI(title="Laptop Storefront API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ContentStoreError)
async def content_store_error(request: Request, exc: ContentStoreError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.get("/")
def root() -> dict[str, str]:
    """Provide a friendly landing response for the API root."""
    return {
        "message": "Laptop Storefront API is running. Visit /docs for the OpenAPI UI.",
        "health": "/healthz",
    }


@app.get("/favicon.ico", include_in_schema=False)
def favicon() -> Response:
    """Return an empty response to suppress missing favicon errors in development."""
    return Response(status_code=204)

app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
app.include_router(filters.router, prefix="/filters", tags=["filters"])


@app.get("/healthz")
def healthcheck() -> dict[str, str]:
    """Basic healthcheck endpoint for orchestration and tests."""
    return {"status": "ok"}
