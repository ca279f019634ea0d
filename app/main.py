from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import api_router
from app.core.automation.exceptions import AutomationError
from app.core.config_file import get_settings
from app.core.exceptions import APIException, api_exception_from_domain
from app.schemas.common import ErrorDetail, ErrorResponse

settings = get_settings()

app = FastAPI(
    title="Taskboard API",
    version="0.1.0",
    description="Backend API for the Taskboard Kanban app",
    docs_url="/docs",
    openapi_url="/openapi.json",
)

# CORS configuration
origins = [origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(
    status_code: int, code: str, message: str, details: dict | None = None
) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Handle APIException and return standard error format."""
    return _error_response(exc.status_code, exc.code, exc.message, exc.details)


@app.exception_handler(AutomationError)
async def automation_exception_handler(request: Request, exc: AutomationError) -> JSONResponse:
    """Map domain errors raised by services to HTTP errors."""
    return await api_exception_handler(request, api_exception_from_domain(exc))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Format request validation errors in the standard error envelope."""
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        # ["body", "name"] -> "name"
        field_path = error["loc"]
        field_name = str(field_path[-1] if len(field_path) > 1 else field_path[0])
        details.setdefault(field_name, []).append(error["msg"])

    return _error_response(422, "VALIDATION_ERROR", "Validation failed", details)


@app.get("/healthz", tags=["system"])
def healthz():
    """Health check endpoint."""
    return {
        "status": "ok",
        "env": settings.ENV,
        "debug": settings.DEBUG,
    }


# Include API routers
app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
