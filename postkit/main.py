import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from postkit.routers import posts
from postkit.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    content_root = settings.content_root
    if content_root.is_dir():
        logger.info(f"Serving posts from {content_root}")
    else:
        logger.warning(f"Content directory {content_root} does not exist")
    yield


app = FastAPI(
    title="postkit API",
    description="Read-only view of the blog content directory",
    lifespan=lifespan,
)

app.include_router(posts.router)


@app.get("/")
async def root():
    return {"message": "postkit API is running"}
