import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from postkit import dependencies as deps
from postkit.schemas.blog import (
    Category,
    CategoryCount,
    PageMetadata,
    PostListItem,
    RenderedPost,
)
from postkit.services.posts_service import (
    PostNotFoundError,
    PostsService,
    is_valid_category,
)
from postkit.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[PostListItem])
def list_posts(service: PostsService = Depends(deps.get_posts_service)):
    """Get all posts metadata, newest first."""
    try:
        return service.list_posts()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/slugs", response_model=List[str])
def list_post_slugs(service: PostsService = Depends(deps.get_posts_service)):
    try:
        return service.get_post_slugs()
    except Exception as e:
        logger.error(f"Unexpected error listing post slugs: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug}", response_model=RenderedPost)
def get_post(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a single rendered post by slug."""
    try:
        return service.get_post_by_slug(slug)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.get("/posts/{slug}/metadata", response_model=PageMetadata)
def get_post_metadata(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(deps.get_settings),
):
    try:
        front_matter = service.get_post_by_slug(slug).frontMatter
    except Exception as e:
        logger.warning(f"Falling back to default metadata for post {slug}: {e}")
        return PageMetadata(title=f"Post | {current_settings.SITE_NAME}")
    return PageMetadata(
        title=f"{front_matter.title} | {current_settings.SITE_NAME}",
        description=front_matter.description,
    )


@router.get("/categories", response_model=List[CategoryCount])
def list_categories(service: PostsService = Depends(deps.get_posts_service)):
    """Post counts for every category, in display order."""
    try:
        return service.list_categories()
    except Exception as e:
        logger.error(f"Unexpected error listing categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve categories")


@router.get("/categories/{category}", response_model=List[PostListItem])
def list_posts_by_category(
    category: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    if not is_valid_category(category):
        raise HTTPException(status_code=404, detail="Category not found")
    try:
        return service.list_posts_by_category(Category(category))
    except Exception as e:
        logger.error(f"Unexpected error listing posts for {category}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/categories/{category}/metadata", response_model=PageMetadata)
def get_category_metadata(
    category: str,
    current_settings: Settings = Depends(deps.get_settings),
):
    if not is_valid_category(category):
        return PageMetadata(title=f"Categories | {current_settings.SITE_NAME}")
    return PageMetadata(title=f"{category.upper()} | {current_settings.SITE_NAME}")
