from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from dotenv import load_dotenv
import logging
import time
import uvicorn

# Load environment variables from .env file
load_dotenv()

from travila.core.logging import setup_logging
from travila.core.settings import get_settings

settings = get_settings()

# Setup logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

from travila.api.v1 import search
from travila.web.form import SearchFormState
from travila.web.renderer import SearchRenderer

app = FastAPI(title="Travila API", version="1.0.0", debug=settings.DEBUG)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

renderer = SearchRenderer()


@app.middleware("http")
async def log_requests_middleware(request: Request, call_next):
    """Log incoming requests, their processing time, and unhandled errors."""
    start_time = time.time()
    method = request.method
    path = request.url.path

    logger.info(f"Request: {method} {path}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(
            f"Response: {method} {path} - Status: {response.status_code} - Duration: {process_time:.4f}s"
        )
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"Error: {method} {path} - Exception: {str(e)} - Duration: {process_time:.4f}s",
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Internal server error"},
        )


# Include routers
app.include_router(search.router, prefix="/api/search", tags=["search"])


@app.get("/", include_in_schema=False, response_class=HTMLResponse)
async def root_page():
    """Serve the landing page with a fresh search box."""
    return HTMLResponse(renderer.render_page(SearchFormState(), title="Travila"))


@app.get("/api", summary="API Welcome", tags=["General"])
async def api_welcome_message():
    """Provides a welcome message and basic API information."""
    return {
        "success": True,
        "message": "Welcome to Travila API v1.0",
        "version": app.version,
        "documentation_url": app.docs_url,
        "openapi_url": app.openapi_url,
    }


@app.exception_handler(HTTPException)
async def custom_http_exception_handler(request: Request, exc: HTTPException):
    # Every error leaves the API as a {"success": false, ...} envelope
    content = {"success": False}
    if isinstance(exc.detail, dict):
        content.update(exc.detail)
    else:
        content["message"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Request validation failed",
            "errors": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


if __name__ == "__main__":
    logger.info(
        f"Starting server on {settings.HOST}:{settings.PORT}, environment: {settings.ENVIRONMENT}"
    )

    uvicorn.run(
        "travila.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.ENVIRONMENT == "development",
    )
