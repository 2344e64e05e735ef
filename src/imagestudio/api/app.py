"""FastAPI application exposing the generation handler over HTTP."""

import json
import logging
import os
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from imagestudio.config import Settings
from imagestudio.models.errors import ErrorCode
from imagestudio.models.requests import GenerationRequest
from imagestudio.providers.gemini_provider import GeminiChatProvider
from imagestudio.services.generation_service import GenerationHandler
from imagestudio.services.image_store import ImageStore
from imagestudio.services.record_store import JsonFileGenerationRepository

logger = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate image"

# Error codes reported to the caller as client errors; everything else is a 500
CLIENT_ERROR_CODES = {ErrorCode.INVALID_INPUT}


def status_code_for(code: ErrorCode) -> int:
    return 400 if code in CLIENT_ERROR_CODES else 500


def build_handler(settings: Settings) -> GenerationHandler:
    """Wire the default Gemini provider and on-disk stores."""
    return GenerationHandler(
        provider=GeminiChatProvider(settings),
        repository=JsonFileGenerationRepository(settings.records_path),
        image_store=ImageStore(settings.image_dir, url_prefix=settings.image_url_prefix),
        settings=settings,
    )


def create_app(settings: Settings | None = None, handler: GenerationHandler | None = None) -> FastAPI:
    """
    Create the HTTP application.

    Args:
        settings: Application settings (defaults to Settings.from_env())
        handler: Preconfigured handler (defaults to one built from settings)
    """
    if handler is None:
        settings = settings or Settings.from_env()
        handler = build_handler(settings)

    app = FastAPI(title="imagestudio")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins if settings else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.handler = handler

    @app.post("/api/image")
    async def generate_image(request: Request) -> JSONResponse:
        try:
            payload: Any = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)

        if not isinstance(payload, dict):
            return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)

        try:
            generation_request = GenerationRequest.model_validate(payload)
        except ValidationError as e:
            return JSONResponse(
                {"error": "Invalid request", "details": e.errors(include_url=False, include_context=False)},
                status_code=400,
            )

        result = await handler.generate(generation_request)

        if result.success:
            return JSONResponse(result.data.to_http_body())

        status_code = status_code_for(result.error.code)
        if status_code == 400:
            return JSONResponse({"error": result.error.message}, status_code=400)

        logger.error(f"❌ [API] Error generating image: {result.error.code.value}: {result.error.message}")
        return JSONResponse(
            {"error": GENERATION_FAILED_MESSAGE, "details": result.error.message},
            status_code=status_code,
        )

    @app.get("/api/generations")
    async def list_generations() -> JSONResponse:
        records = handler.list_records()
        return JSONResponse([record.to_json_dict() for record in records])

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def main() -> None:
    """Run the API with uvicorn."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.from_env()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=os.getenv("IMAGESTUDIO_HOST", "127.0.0.1"),
        port=int(os.getenv("IMAGESTUDIO_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
