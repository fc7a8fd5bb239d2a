"""FastAPI application exposing the relay endpoint."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import get_settings
from .models import RelayRequest, RelayResponse
from .service import RelayService, build_relay_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_relay_service(request: Request) -> RelayService:
    """Return the app's relay service, building it from settings on first use.

    Runs on the event loop, so concurrent first requests share one service.
    """
    service: RelayService | None = getattr(request.app.state, "relay_service", None)
    if service is not None:
        return service

    settings = get_settings()
    if not settings.openai_api_key:
        raise HTTPException(
            status_code=500,
            detail="Missing OPENAI_API_KEY in environment or .env",
        )
    logger.info(
        "Config: model=%s organization_set=%s",
        settings.chat_model,
        bool(settings.openai_organization),
    )
    service = build_relay_service(settings)
    request.app.state.relay_service = service
    return service


@router.post("/", response_model=RelayResponse)
async def relay_chat(
    req: RelayRequest,
    service: RelayService = Depends(get_relay_service),
) -> RelayResponse:
    logger.info("Incoming chat: turns=%d", len(req.chats))
    try:
        output = await service.relay(req.chats)
    except Exception as e:
        logger.exception("Relay failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return RelayResponse(output=output)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected malformed request: %s", exc.errors())
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(service: RelayService | None = None) -> FastAPI:
    """Create the relay application.

    Args:
        service: Relay service to use. When omitted, one is built from
            environment settings on the first request.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        active: RelayService | None = getattr(app.state, "relay_service", None)
        if active is not None:
            await active.close()

    app = FastAPI(title="chatrelay", version="0.1.0", lifespan=lifespan)
    app.state.relay_service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _bad_request)
    app.include_router(router)
    return app

