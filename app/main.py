# file: app/main.py
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import Settings, get_settings
from app.credentials import CredentialError
from app.domain_models import Err, ErrorKind
from app.logging_utils import setup_logging, logger
from app.normalize import normalize_request_body
from app.schema import ErrorResponse, HealthResponse, SaveResultsResponse, parse_save_results
from app.services.ingestion import Ingestor
from app.services.store import build_store

setup_logging(get_settings().log_level)

STATUS_BY_KIND = {
    ErrorKind.NORMALIZATION: 400,
    # Missing submission_id/user_id has always answered 500, callers depend on it
    ErrorKind.VALIDATION: 500,
    ErrorKind.PERSISTENCE: 500,
}

router = APIRouter(prefix="/api")

def error_response(err: Err) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[err.kind],
        content=ErrorResponse(error=err.message).model_dump(),
    )

def get_store(request: Request):
    """The process-wide document store, built once at startup"""
    return request.app.state.store

def get_ingestor(store=Depends(get_store)) -> Ingestor:
    return Ingestor(store)

def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check"""
    return HealthResponse(status="ok", timestamp=_utc_now_iso())

@router.post(
    "/save-results",
    response_model=SaveResultsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def save_results(request: Request, ingestor: Ingestor = Depends(get_ingestor)):
    """Receive company info, Apollo filters and leads from the Make.com scenario"""
    try:
        body = await request.json()
    except (ValueError, RecursionError) as e:
        logger.error("Rejected save-results body: %s", e)
        return error_response(Err(ErrorKind.NORMALIZATION, f"Failed to normalize request data: invalid JSON ({e})"))

    normalized = normalize_request_body(body)
    if isinstance(normalized, Err):
        return error_response(normalized)

    parsed = parse_save_results(normalized.value)
    if isinstance(parsed, Err):
        logger.error("Rejected save-results payload: %s", parsed.message)
        return error_response(parsed)

    result = await ingestor.save_results(parsed.value)
    if isinstance(result, Err):
        return error_response(result)

    outcome = result.value
    return SaveResultsResponse(
        success=True,
        company_info_id=outcome.company_info_id,
        leads_saved=outcome.leads_saved,
    )

def create_app(store=None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. Pass `store` to inject a document store; otherwise one is built on startup."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.store is None:
            # Raises CredentialError, which aborts startup
            app.state.store = build_store(settings)
        logger.info("API server running on port %s", settings.port)
        logger.info("Environment: %s", settings.env)
        yield

    app = FastAPI(title="Lead Results Webhook", version="1.0.0", lifespan=lifespan)
    app.state.store = store
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app

app = create_app()

def main():
    import uvicorn

    settings = get_settings()
    try:
        store = build_store(settings)
    except CredentialError as e:
        logger.error("%s", e)
        sys.exit(1)

    uvicorn.run(create_app(store, settings), host=settings.host, port=settings.port, log_config=None)

if __name__ == "__main__":
    main()
