from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from explainer.api.public.explain import router as explain_router
from explainer.core.config import get_settings
from explainer.core.logging import configure_logging
from explainer.services.explain.error_policy import build_http_error_payload, build_unexpected_error_detail


settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(
    title="Explainer API",
    version="0.1.0",
    description="Mode-aware explanations and learning roadmaps backed by an LLM",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Session-Id"],
)


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok", "env": settings.env}


@app.exception_handler(HTTPException)
async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
    payload = build_http_error_payload(exc)
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content=build_unexpected_error_detail(exc))


app.include_router(explain_router)


def run() -> None:
    import uvicorn

    uvicorn.run("explainer.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
