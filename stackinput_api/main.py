"""
FastAPI backend for stackinput.

Provides REST API endpoints for:
- Listing input types
- Rendering an input from its teacher definition
- Validating a student response
"""

from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from .core import (
    settings,
    setup_logging,
    get_logger,
    register_error_handlers,
)
from .models import (
    InputTypeInfo,
    RenderRequest,
    RenderResponse,
    ValidateRequest,
    ValidateResponse,
)
from .services import InputService, get_input_service

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info(
        "Starting Stack Input API",
        extra_data={
            "environment": settings.ENVIRONMENT,
            "debug": settings.DEBUG
        }
    )
    yield
    logger.info("Shutting down Stack Input API")


app = FastAPI(
    title=settings.APP_NAME,
    description="REST API for rendering and validating teacher-specified choice inputs",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


# API Routes

@app.get("/")
async def read_root():
    """API root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "endpoints": {
            "inputs": "/inputs",
            "render": "/inputs/{input_type}/render",
            "validate": "/inputs/{input_type}/validate",
            "health": "/health"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT
    }


@app.get("/inputs", response_model=List[InputTypeInfo])
async def list_input_types(
    service: InputService = Depends(get_input_service)
):
    """List registered input types and their default parameters"""
    return await service.list_input_types()


@app.post("/inputs/{input_type}/render", response_model=RenderResponse)
async def render_input(
    input_type: str,
    request: RenderRequest,
    service: InputService = Depends(get_input_service)
):
    """
    Render an input.

    Args:
        input_type: Registered input type, e.g. "dropdown"
        request: Teacher definition, attempt seed and current selection

    Returns:
        HTML, widget description and any authoring warnings
    """
    return await service.render(input_type, request)


@app.post("/inputs/{input_type}/validate", response_model=ValidateResponse)
async def validate_input(
    input_type: str,
    request: ValidateRequest,
    service: InputService = Depends(get_input_service)
):
    """
    Validate a student response.

    Args:
        input_type: Registered input type
        request: Teacher definition, attempt seed and submitted form data

    Returns:
        Input state (blank, valid, invalid or score) with any message
    """
    return await service.validate(input_type, request)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stackinput_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
