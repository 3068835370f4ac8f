from fastapi import Depends

from postkit.repos.posts_repo import FilePostsRepo
from postkit.services.markdown_renderer import MarkdownRenderer
from postkit.services.posts_service import PostsService
from postkit.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_posts_repo(current_settings: Settings = Depends(get_settings)):
    return FilePostsRepo(
        current_settings.content_root, extension=current_settings.CONTENT_EXTENSION
    )


def get_posts_service(
    repo=Depends(get_posts_repo),
    current_settings: Settings = Depends(get_settings),
):
    return PostsService(
        repo=repo,
        renderer=MarkdownRenderer(),
        default_title=current_settings.DEFAULT_TITLE,
        max_workers=current_settings.READ_WORKERS,
    )
