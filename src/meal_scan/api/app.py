"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from meal_scan.app_logging import configure_logging
from meal_scan.config import parse_allowed_origins
from meal_scan.containers import AppContainer
from meal_scan.domain.analysis import ImageSubmission
from meal_scan.domain.errors import AnalysisFailure

ANALYZE_PATH = "/api/analyze-food"

NO_FILE_MESSAGE = "No image file provided"
NOT_AN_IMAGE_MESSAGE = "Only image files are allowed!"
SERVER_FAILURE_MESSAGE = "Analysis failed on the server."
INTERNAL_ERROR_MESSAGE = "Internal server error"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    max_upload_bytes = container.settings.max_upload_bytes

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Server error on %s: %s", request.url.path, exc)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if request.url.path == ANALYZE_PATH:
            logger.warning("Rejected analysis upload: %s", exc.errors())
            return _failure(status.HTTP_400_BAD_REQUEST, NO_FILE_MESSAGE)
        return await request_validation_exception_handler(request, exc)

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.post(ANALYZE_PATH, response_model=None)
    async def analyze_food(
        request: Request,
        food_image: UploadFile | None = File(default=None, alias="foodImage"),
    ) -> dict[str, object] | JSONResponse:
        """Analyze an uploaded meal photo."""
        if food_image is None:
            return _failure(status.HTTP_400_BAD_REQUEST, NO_FILE_MESSAGE)
        media_type = food_image.content_type or ""
        if not media_type.startswith("image/"):
            return _failure(status.HTTP_400_BAD_REQUEST, NOT_AN_IMAGE_MESSAGE)
        if food_image.size is not None and food_image.size > max_upload_bytes:
            return _failure(
                status.HTTP_400_BAD_REQUEST, _too_large_message(max_upload_bytes)
            )
        content = await food_image.read()
        if len(content) > max_upload_bytes:
            return _failure(
                status.HTTP_400_BAD_REQUEST, _too_large_message(max_upload_bytes)
            )
        submission = ImageSubmission(
            content=content, media_type=media_type, filename=food_image.filename
        )

        state_container: AppContainer = request.app.state.container
        logger.info(
            "Analyzing food image: %s (%.2f KB)",
            submission.filename,
            submission.size_kb,
        )
        try:
            result = await state_container.food_analyzer.analyze(
                submission.content, submission.media_type
            )
        except AnalysisFailure as exc:
            return {"success": False, "error": exc.message}
        except Exception:
            logger.exception("Analysis route error")
            return _failure(
                status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_FAILURE_MESSAGE
            )
        return {
            "success": True,
            "data": result.model_dump(
                mode="json", by_alias=True, exclude_unset=True
            ),
        }

    return app


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def _too_large_message(max_upload_bytes: int) -> str:
    limit_mb = max_upload_bytes // (1024 * 1024)
    return f"Image exceeds the {limit_mb} MB upload limit."
