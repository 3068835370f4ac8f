import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


class FilePostsRepo:
    """Reads post documents straight from a content directory on disk."""

    def __init__(self, content_dir: Path, extension: str = ".mdx"):
        self.content_dir = Path(content_dir)
        self.extension = extension

    def list_entries(self) -> List[Path]:
        # Missing or unreadable roots raise OSError to the caller
        entries = sorted(self.content_dir.iterdir(), key=lambda p: p.name)
        return [
            path
            for path in entries
            if path.is_file() and path.name.endswith(self.extension)
        ]

    def slug_for(self, path: Path) -> str:
        return path.name.removesuffix(self.extension)

    def list_slugs(self) -> List[str]:
        return [self.slug_for(path) for path in self.list_entries()]

    def read_entry(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def read_document(self, slug: str) -> str:
        path = self._path_for(slug)
        logger.debug(f"Reading post {slug} from {path}")
        return self.read_entry(path)

    def _path_for(self, slug: str) -> Path:
        if not slug or "/" in slug or "\\" in slug or slug in (".", ".."):
            raise FileNotFoundError(f"No post document for slug {slug!r}")
        path = self.content_dir / f"{slug}{self.extension}"
        if not path.is_file():
            raise FileNotFoundError(f"No post document at {path}")
        return path
