"""Main FastAPI application for BlogAPI."""

import os
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from dotenv import load_dotenv

from blog_api.auth import NotAuthenticatedError
from blog_api.database import init_db
from blog_api.routers import user, blog

# Load environment variables
load_dotenv()

NAME_APP = os.getenv("NAME_APP", "BlogAPI")
LOG_FILE = os.getenv("LOG_FILE", "blog_api.log")

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(LOG_FILE)
    ]
)

logger = logging.getLogger(__name__)


def check_unique_routes(app: FastAPI):
    """
    Refuse to start with two handlers for the same method and path.

    Raises:
        RuntimeError: If a (method, path) pair is registered twice
    """
    seen = set()
    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        for method in route.methods:
            key = (method, route.path)
            if key in seen:
                raise RuntimeError(f"Duplicate route registration: {method} {route.path}")
            seen.add(key)


# Create FastAPI application
app = FastAPI(
    title=NAME_APP,
    description="Blogging API with user signup/signin and token protected blog posts",
    version="1.0.0"
)

# Configure CORS (adjust origins as needed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(user.router)
app.include_router(blog.router)


@app.exception_handler(NotAuthenticatedError)
def not_authenticated_handler(request: Request, exc: NotAuthenticatedError):
    """Render authentication failures for the blog routes."""
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"message": "You are not logged in"}
    )


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and hide their cause from the caller."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"}
    )


@app.on_event("startup")
def startup_event():
    """Check the route table and initialize the database on startup."""
    logger.info(f"Starting {NAME_APP}")
    check_unique_routes(app)
    init_db()
    logger.info("Database initialized successfully")


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": NAME_APP,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
