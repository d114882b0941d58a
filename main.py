"""
Main FastAPI application entry point.
"""
import uvicorn
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from routers import schedule
from config import settings
from service.errors import InternalConsistencyError, ValidationError

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize the FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Assigns professors to a section's fixed class slots from weighted preferences, "
                "respecting subject competence, time conflicts and per-professor class limits.",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _humanize_field(field_path) -> str:
    # Skip "body" prefix and build field name
    if len(field_path) > 1 and field_path[0] in ("body", "path"):
        field_path = field_path[1:]

    field_name = " -> ".join(str(p) for p in field_path)

    # Convert snake_case to Title Case with spaces
    field_name = field_name.replace("_", " ").title()
    field_name = field_name.replace("Professor Links", "Professors")
    return field_name


# Custom exception handler for validation errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Convert FastAPI validation errors to human-friendly format.

    Expected format:
    {
        "errors": {
            "field_name": ["Error message 1", "Error message 2"]
        }
    }
    """
    errors = {}

    for error in exc.errors():
        field_name = _humanize_field(error.get("loc", []))

        # Get error message
        error_msg = error.get("msg", "Invalid value")
        error_type = error.get("type", "")

        # Create human-friendly messages
        if error_type == "missing":
            error_msg = f"{field_name} is required."
        elif error_type == "literal_error":
            error_msg = f"{field_name} has an unsupported value. {error_msg}"
        elif "type" in error_type.lower() or error_type.endswith("_parsing"):
            error_msg = f"{field_name} has an invalid type. {error_msg}"
        else:
            # Use the original message but make it more readable
            error_msg = f"{field_name}: {error_msg}"

        errors.setdefault(field_name, []).append(error_msg)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"errors": errors}
    )


@app.exception_handler(ValidationError)
async def section_validation_handler(request: Request, exc: ValidationError):
    """Inconsistent section snapshot: same error format as schema validation."""
    errors = {}
    for field, messages in exc.errors.items():
        # Only the collection name is humanized; record ids are echoed as sent
        collection, *record = field.split(" -> ")
        field_name = " -> ".join([_humanize_field([collection])] + record)
        errors.setdefault(field_name, []).extend(messages)

    logger.info(f"Rejected section input: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"errors": errors}
    )


@app.exception_handler(InternalConsistencyError)
async def internal_consistency_handler(request: Request, exc: InternalConsistencyError):
    logger.error(f"Solver consistency failure: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"errors": {"Solver": [str(exc)]}}
    )


# Include routers
app.include_router(schedule.router, prefix="/api/v1", tags=["scheduling"])

@app.get("/", tags=["health"])
async def root():
    """Root endpoint - API health check."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "status": "healthy",
        "docs": "/docs"
    }

@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}

if __name__ == "__main__":
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload
    )
