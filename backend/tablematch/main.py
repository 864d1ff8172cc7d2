"""TableMatch - Restaurant Preferences Account API."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tablematch.config import get_settings
from tablematch.schemas.auth import HealthResponse

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: make sure the users file exists
    from tablematch.database import get_user_store

    get_user_store().initialize()

    yield


app = FastAPI(
    title=settings.app_name,
    description="Sign up, log in, and keep your dining preferences",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse()


# Import and include routers
from tablematch.api import auth, users  # noqa: E402
from tablematch.api.handlers import register_exception_handlers  # noqa: E402

register_exception_handlers(app)
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
