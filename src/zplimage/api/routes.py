"""REST API routes for zplimage."""

import logging
import secrets
from typing import Any

from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from zplimage.config import ConverterConfig
from zplimage.converter import ImageZplConverter
from zplimage.converters.errors import (
    ConversionError,
    DecodeError,
    DimensionMismatchError,
    InvalidConfigurationError,
)
from zplimage.models.graphic import GraphicField

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])

# These will be set by the app during startup
_app_state: dict[str, Any] = {}


def set_app_state(
    defaults: ConverterConfig,
    api_key: str | None = None,
    max_upload_bytes: int = 10 * 1024 * 1024,
    max_width: int = 4096,
) -> None:
    """Set application state references for the routes."""
    _app_state["defaults"] = defaults
    _app_state["api_key"] = api_key
    _app_state["max_upload_bytes"] = max_upload_bytes
    _app_state["max_width"] = max_width


async def verify_api_key(request: Request) -> None:
    """Check the X-API-Key header or Bearer token when an API key is configured."""
    configured_key = _app_state.get("api_key")
    if not configured_key:
        return

    provided_key = request.headers.get("X-API-Key")
    auth = request.headers.get("Authorization", "")
    if provided_key is None and auth.startswith("Bearer "):
        provided_key = auth[7:]

    if not provided_key or not secrets.compare_digest(provided_key, configured_key):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
            headers={"WWW-Authenticate": "Bearer"},
        )


# Response models


class ConvertResponse(BaseModel):
    """Conversion result."""

    width: int
    height: int
    bytes_per_row: int
    total_bytes: int
    zpl: str


# Helpers


def _build_converter(
    width: int | None,
    threshold: int | None,
    darkness: int | None,
) -> ImageZplConverter:
    """Merge per-request overrides onto the configured defaults."""
    defaults: ConverterConfig = _app_state.get("defaults") or ConverterConfig()
    overrides = {
        key: value
        for key, value in (("width", width), ("threshold", threshold), ("darkness", darkness))
        if value is not None
    }
    try:
        config = ConverterConfig.create(**{**defaults.model_dump(), **overrides})
    except InvalidConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    max_width = _app_state.get("max_width", 4096)
    if config.width > max_width:
        logger.warning(f"Rejected label width {config.width}, limit is {max_width}")
        raise HTTPException(status_code=422, detail=f"Width must not exceed {max_width} dots, got {config.width}")
    return ImageZplConverter(config)


async def _read_image(request: Request) -> bytes:
    """Read the raw request body, enforcing the upload limit."""
    limit = _app_state.get("max_upload_bytes", 10 * 1024 * 1024)
    body = await request.body()
    if len(body) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds {limit} bytes",
        )
    if not body:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request body is empty")
    return body


def _conversion_http_error(error: ConversionError) -> HTTPException:
    """Map a pipeline error to an HTTP error."""
    if isinstance(error, InvalidConfigurationError):
        code = 422
    elif isinstance(error, DecodeError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, DimensionMismatchError):
        logger.error(f"Internal resampling error: {error}")
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=f"Conversion failed at {error.stage} stage: {error}")


async def _convert(request: Request, width: int | None, threshold: int | None, darkness: int | None) -> GraphicField:
    converter = _build_converter(width, threshold, darkness)
    body = await _read_image(request)
    try:
        return await run_in_threadpool(converter.convert, body)
    except ConversionError as e:
        raise _conversion_http_error(e) from e


# Endpoints


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check."""
    return {"status": "ok"}


@router.post(
    "/convert",
    response_model=ConvertResponse,
    responses={
        400: {"description": "Image could not be decoded"},
        413: {"description": "Image too large"},
        422: {"description": "Invalid conversion parameters"},
    },
)
async def convert_image(
    request: Request,
    width: int | None = None,
    threshold: int | None = None,
    darkness: int | None = None,
) -> ConvertResponse:
    """Convert the image in the request body to a ZPL label."""
    graphic = await _convert(request, width, threshold, darkness)
    dimensions = graphic.dimensions
    return ConvertResponse(
        width=dimensions.width,
        height=dimensions.height,
        bytes_per_row=dimensions.bytes_per_row,
        total_bytes=dimensions.total_bytes,
        zpl=graphic.command,
    )


@router.post("/convert/raw")
async def convert_image_raw(
    request: Request,
    width: int | None = None,
    threshold: int | None = None,
    darkness: int | None = None,
) -> Response:
    """Convert the image in the request body and return bare ZPL."""
    graphic = await _convert(request, width, threshold, darkness)
    return Response(content=graphic.command, media_type="text/plain")


@router.post("/preview")
async def preview_image(
    request: Request,
    width: int | None = None,
    threshold: int | None = None,
) -> Response:
    """Render the label bitmap for the image in the request body as PNG."""
    converter = _build_converter(width, threshold, None)
    body = await _read_image(request)
    try:
        png = await run_in_threadpool(converter.preview, body)
    except ConversionError as e:
        raise _conversion_http_error(e) from e
    return Response(content=png, media_type="image/png")
