import logging
from typing import Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .contracts_models import ErrorResponse, ProcessingStep, ProductInput, ProductResult
from .services.enrichment import ProductEnricher
from .services.errors import ListingServiceError
from .services.steps import processing_steps

logger = logging.getLogger("listing-ai")

CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type"


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.CORS_ALLOW_ORIGIN,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }


def _validation_message(errors: list[dict]) -> str:
    parts = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


def create_app(
    settings: Optional[Settings] = None,
    enricher: Optional[ProductEnricher] = None,
) -> FastAPI:
    settings = settings or get_settings()
    enricher = enricher or ProductEnricher(settings)
    headers = cors_headers(settings)

    app = FastAPI(title="Listing AI Product Service", version="0.1.0")
    app.state.settings = settings
    app.state.enricher = enricher

    @app.middleware("http")
    async def cors_middleware(request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)
        response = await call_next(request)
        for key, value in headers.items():
            response.headers[key] = value
        return response

    @app.exception_handler(ListingServiceError)
    async def listing_service_error_handler(request: Request, exc: ListingServiceError):
        logger.warning("Listing service error at %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.info("HTTP %s at %s: %s", exc.status_code, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
            content={
                "error": str(exc.detail),
                "code": "INVALID_INPUT" if exc.status_code == 400 else "HTTP_ERROR",
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
            for err in exc.errors()
        ]
        logger.info("Rejected request at %s: %d validation errors", request.url.path, len(details))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": _validation_message(details),
                "code": "INVALID_INPUT",
                "details": details,
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception at %s", request.url.path)
        return JSONResponse(
            status_code=500,
            headers=headers,
            content={
                "error": "Unexpected server error.",
                "code": "INTERNAL_ERROR",
                "details": {"error": str(exc), "path": request.url.path},
            },
        )

    @app.get("/health", status_code=200)
    async def health_get():
        return {"status": "ok"}

    @app.head("/health", status_code=200)
    async def health_head():
        return Response(status_code=200)

    @app.get("/processing-steps", response_model=list[ProcessingStep])
    async def get_processing_steps(current: Optional[str] = None):
        return processing_steps(current)

    @app.post(
        "/generate-from-text",
        response_model=ProductResult,
        status_code=status.HTTP_200_OK,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def generate_from_text(payload: ProductInput):
        try:
            logger.info(
                "generate-from-text title=%r currency=%s keywords=%d",
                payload.title,
                payload.currency,
                len(payload.keywords),
            )
            result = await enricher.enrich(payload)
            logger.info("Generated result category=%r", result.product_info.category)
            return result
        except ListingServiceError as exc:
            logger.warning("Enrichment failed: code=%s message=%s", exc.code, exc.message)
            return JSONResponse(status_code=exc.http_status, content=exc.to_contract_dict())
        except Exception as exc:
            logger.exception("Unexpected enrichment failure")
            return JSONResponse(
                status_code=500,
                content={
                    "error": str(exc) or "Unknown error occurred",
                    "code": "INTERNAL_ERROR",
                },
            )

    return app


_settings = get_settings()
logging.basicConfig(level=getattr(logging, _settings.LOG_LEVEL.upper(), logging.INFO))

app = create_app(_settings)
