from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ...api.models import ChatRequestPayload, ErrorPayload, ProviderConfigPayload
from ...config import get_settings
from ..model_gateway import ChatModelGateway, ModelCallFailed, ModelNotConfigured

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_gateway() -> ChatModelGateway:
    return ChatModelGateway()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ErrorPayload(error=message).model_dump(), status_code=status_code)


def create_app() -> FastAPI:
    app = FastAPI(title="OptiPlan API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(_request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Rejected malformed request body: %s", exc.errors())
        return _error(422, "Invalid request body")

    @app.get("/api/config")
    def provider_config() -> JSONResponse:
        provider = get_settings().provider
        payload = ProviderConfigPayload(provider_client_id=provider.client_id, provider_api_key=provider.api_key)
        return JSONResponse(payload.model_dump(by_alias=True))

    @app.post("/api/chat")
    def chat(request: ChatRequestPayload, gateway: ChatModelGateway = Depends(get_gateway)) -> JSONResponse:
        try:
            result = gateway.complete(request)
        except ModelNotConfigured as exc:
            return _error(500, str(exc))
        except ModelCallFailed as exc:
            return _error(500, str(exc))
        logger.debug("Chat turn answered with %d function call(s)", len(result.function_calls or []))
        return JSONResponse(result.model_dump(by_alias=True))

    return app


app = create_app()


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving OptiPlan API on %s:%d", host, port)
    asyncio.run(serve(app, config))
