"""
FastAPI application exposing single and batch product extraction.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, List, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from paniniscraper import __version__
from paniniscraper.config.config import ScraperSettings, load_settings
from paniniscraper.errors import ScrapingFailedError
from paniniscraper.observability.metrics import export_prometheus
from paniniscraper.protocols import PageFetcher
from paniniscraper.scraper import ReusableExtractor, make_extractor

logger = structlog.get_logger(__name__)

ERROR_STATUS = {
    "INVALID_URL": (400, "Bad Request"),
    "PRODUCT_NOT_FOUND": (404, "Not Found"),
    "SCRAPING_ERROR": (500, "Internal Server Error"),
}


class ScrapeRequest(BaseModel):
    url: Optional[str] = None


class BatchScrapeRequest(BaseModel):
    urls: List[str] = Field(default_factory=list)


def _bad_request(message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Bad Request", "message": message, "code": code})


def error_response(exc: Exception) -> JSONResponse:
    """Map an extraction error onto its HTTP status and JSON body."""
    if isinstance(exc, ScrapingFailedError):
        status_code, error = ERROR_STATUS.get(exc.code, ERROR_STATUS["SCRAPING_ERROR"])
        content: Dict[str, Any] = {"error": error, "message": exc.message, "code": exc.code, "url": exc.url}
        if status_code == 500:
            content["statusCode"] = exc.status_code
        return JSONResponse(status_code=status_code, content=content)

    logger.error("Unhandled extraction error", error=str(exc), error_type=type(exc).__name__)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "message": str(exc) or "Unknown error occurred", "code": "INTERNAL_ERROR"},
    )


def create_app(settings: Optional[ScraperSettings] = None, fetcher: Optional[PageFetcher] = None) -> FastAPI:
    """Build the API around one shared extractor, opened for the app's lifetime."""
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app.state.extractor = make_extractor(settings.http, site=settings.site, fetcher=fetcher)
        app.state.start_time = time.time()
        logger.info("Panini Scraper API starting", version=__version__)
        yield
        await app.state.extractor.aclose()
        logger.info("Panini Scraper API stopped")

    app = FastAPI(title="Panini Scraper API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Any) -> Any:
        logger.info("Request", method=request.method, path=request.url.path)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Not Found",
                    "message": f"Route {request.method} {request.url.path} not found",
                    "code": "ROUTE_NOT_FOUND",
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail, "code": "HTTP_ERROR"})

    def extractor(request: Request) -> ReusableExtractor:
        return request.app.state.extractor

    async def scrape(request: Request, url: str) -> JSONResponse:
        try:
            record = await extractor(request)(url)
        except Exception as e:
            return error_response(e)
        return JSONResponse(content={"success": True, "data": record.to_dict()})

    @app.get("/")
    async def api_info() -> Dict[str, Any]:
        return {
            "name": "Panini Scraper API",
            "description": "API for scraping Panini Brasil product information",
            "version": __version__,
            "endpoints": {
                "POST /api/scrape": "Scrape product by URL in request body",
                "GET /api/scrape": "Scrape product by URL in query parameter",
                "POST /api/scrape/batch": "Scrape several products by URL list in request body",
                "GET /health": "Health check endpoint",
                "GET /metrics": "Prometheus metrics",
                "GET /": "API information",
            },
        }

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {
            "success": True,
            "message": "Panini Scraper API is running",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(export_prometheus(), media_type=CONTENT_TYPE_LATEST)

    @app.post("/api/scrape")
    async def scrape_by_body(request: Request, payload: Optional[ScrapeRequest] = None) -> JSONResponse:
        if payload is None or not payload.url:
            return _bad_request("URL is required", "MISSING_URL")
        return await scrape(request, payload.url)

    @app.get("/api/scrape")
    async def scrape_by_query(request: Request, url: Optional[str] = None) -> JSONResponse:
        if not url:
            return _bad_request("URL query parameter is required", "MISSING_URL")
        return await scrape(request, url)

    @app.post("/api/scrape/batch")
    async def scrape_batch(request: Request, payload: Optional[BatchScrapeRequest] = None) -> JSONResponse:
        if payload is None or not payload.urls:
            return _bad_request("URLs array is required", "MISSING_URLS")
        result = await extractor(request).extract_many(payload.urls)
        return JSONResponse(content={"success": True, "data": result.to_dict()})

    return app
