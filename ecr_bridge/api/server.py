"""HTTP surface of the bridge.

Endpoints:
- GET  /health    -> liveness and bridge mode
- POST /print     -> print a receipt and wait for the driver's verdict
- POST /z-report  -> issue the daily Z report

Usage:
    ecr-bridge serve
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from ecr_bridge.application.bridge import Bridge
from ecr_bridge.application.dto.bridge_response import BridgeResponse
from ecr_bridge.application.dto.print_request import (
    format_validation_error,
    parse_print_request,
)
from ecr_bridge.domain.errors import ArtifactWriteError
from ecr_bridge.infrastructure.config.settings import BridgeSettings

SERVICE_NAME = "ecr-bridge"


def _respond(response: BridgeResponse) -> JSONResponse:
    return JSONResponse(status_code=response.http_status, content=response.body())


def create_app(settings: BridgeSettings, bridge: Bridge | None = None) -> FastAPI:
    bridge = bridge or Bridge(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Initializing application...")
        if not await bridge.initialize():
            raise RuntimeError("Some ECR Bridge directories failed to initialize")
        logger.info("Application initialized successfully")
        yield
        logger.info("Server closed")

    app = FastAPI(title="ECR Bridge", version="0.1.0", lifespan=lifespan)
    app.state.bridge = bridge

    # Local bridge: any origin may call it
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        client = request.client.host if request.client else "-"
        logger.info("Incoming request {} {} from {}", request.method, request.url.path, client)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            logger.warning("Route not found: {} {}", request.method, request.url.path)
            return JSONResponse(
                status_code=404, content={"status": "error", "message": "Route not found"}
            )
        return JSONResponse(
            status_code=exc.status_code, content={"status": "error", "message": str(exc.detail)}
        )

    @app.exception_handler(RequestValidationError)
    async def malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Malformed request body on {}", request.url.path)
        return _respond(BridgeResponse.invalid_request("Request body must be valid JSON"))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on {}: {}", request.url.path, exc)
        return JSONResponse(
            status_code=500, content={"status": "error", "message": "Internal server error"}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "mode": settings.mode.value,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    @app.post("/print")
    async def print_receipt(payload: Any = Body(default=None)) -> JSONResponse:
        request_id = f"req_{uuid4().hex[:12]}"
        logger.info("Print request {} received: {}", request_id, payload)

        try:
            transaction = parse_print_request(payload)
        except ValidationError as e:
            details = format_validation_error(e)
            logger.warning("Validation failed for {}: {}", request_id, details)
            return _respond(BridgeResponse.invalid_request(details))

        try:
            outcome = await bridge.submit_receipt.execute(transaction)
        except ArtifactWriteError as e:
            logger.error("Failed to generate receipt file for {}: {}", request_id, e)
            return _respond(BridgeResponse.write_failed())

        response = BridgeResponse.from_outcome(outcome, success_message="Fiscal receipt issued")
        logger.info("Print request {} finished with {}", request_id, outcome.kind)
        return _respond(response)

    @app.post("/z-report")
    async def z_report() -> JSONResponse:
        request_id = f"req_{uuid4().hex[:12]}"
        logger.info("Z report request {} received", request_id)

        try:
            outcome = await bridge.submit_z_report.execute()
        except ArtifactWriteError as e:
            logger.error("Failed to generate Z report file for {}: {}", request_id, e)
            return _respond(BridgeResponse.write_failed())

        response = BridgeResponse.from_outcome(
            outcome, success_message="Z report issued", failure_message="Z report failed"
        )
        logger.info("Z report request {} finished with {}", request_id, outcome.kind)
        return _respond(response)

    return app
