import datetime
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List

from postkit.schemas.blog import (
    Category,
    CategoryCount,
    PostListItem,
    RenderedPost,
)
from postkit.services.content_parser import split_document
from postkit.services.frontmatter_normalizer import (
    normalize_frontmatter,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

_UNPARSED_SORT_KEY = float("-inf")


class PostNotFoundError(LookupError):
    def __init__(self, slug: str):
        super().__init__(f"Post not found: {slug}")
        self.slug = slug


class PostsService:
    def __init__(self, repo, renderer, default_title: str = "Untitled", max_workers: int = 4):
        self.repo = repo
        self.renderer = renderer
        self.default_title = default_title
        self.max_workers = max(1, max_workers)

    def list_posts(self) -> List[PostListItem]:
        entries = self.repo.list_entries()
        # Reads are independent; map() returns only after all of them finish
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            posts = list(pool.map(self._load_list_item, entries))

        posts.sort(key=lambda p: p.slug)
        posts.sort(key=lambda p: created_sort_key(p.frontMatter.createdAt), reverse=True)
        logger.debug(f"Listed {len(posts)} posts")
        return posts

    def get_post_slugs(self) -> List[str]:
        return self.repo.list_slugs()

    def get_post_by_slug(self, slug: str) -> RenderedPost:
        try:
            raw = self.repo.read_document(slug)
        except FileNotFoundError as e:
            raise PostNotFoundError(slug) from e

        metadata, body = split_document(raw)
        content = self.renderer.render(body)
        front_matter = normalize_frontmatter(metadata, default_title=slug)
        return RenderedPost(frontMatter=front_matter, content=content)

    def list_categories(self) -> List[CategoryCount]:
        counts = {category: 0 for category in Category}
        for post in self.list_posts():
            counts[post.frontMatter.category] += 1
        return [
            CategoryCount(category=category, count=count)
            for category, count in counts.items()
        ]

    def list_posts_by_category(self, category: Category) -> List[PostListItem]:
        return [p for p in self.list_posts() if p.frontMatter.category == category]

    def _load_list_item(self, path: Path) -> PostListItem:
        slug = self.repo.slug_for(path)
        metadata, _body = split_document(self.repo.read_entry(path))
        front_matter = normalize_frontmatter(metadata, default_title=self.default_title)
        return PostListItem(slug=slug, frontMatter=front_matter)


def is_valid_category(value: str) -> bool:
    """Exact, case-sensitive check; use before trusting outside input as a Category."""
    return value in Category.values()


def created_sort_key(created_at: str) -> float:
    parsed = parse_timestamp(created_at)
    if parsed is None:
        return _UNPARSED_SORT_KEY
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.timezone.utc)
    try:
        return parsed.timestamp()
    except (OverflowError, ValueError):
        return _UNPARSED_SORT_KEY
