import datetime
import email.utils
import logging
from typing import Any, Dict, List, Optional

from postkit.schemas.blog import Category, Frontmatter

logger = logging.getLogger(__name__)

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)

# Common hand-written forms that YAML leaves as plain strings
LENIENT_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y.%m.%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def normalize_frontmatter(metadata: Dict[str, Any], default_title: str) -> Frontmatter:
    """Coerce raw front matter into a Frontmatter record.

    Every field has a deterministic fallback, so this never raises.
    """
    metadata = metadata or {}
    created_raw = _first_present(metadata, "createdAt", "date")
    updated_raw = _first_present(metadata, "updatedAt", "createdAt", "date")

    return Frontmatter(
        title=normalize_title(metadata.get("title"), default_title),
        createdAt=normalize_date(created_raw),
        updatedAt=normalize_date(updated_raw),
        category=normalize_category(metadata.get("category")),
        description=normalize_description(metadata.get("description")),
        tags=normalize_tags(metadata.get("tags")),
    )


def _first_present(metadata: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = metadata.get(key)
        if value is not None:
            return value
    return None


def normalize_title(value: Any, default_title: str) -> str:
    if value is None:
        return default_title
    title = str(value)
    return title if title.strip() else default_title


def normalize_date(value: Any) -> str:
    """Render a date-ish value as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Missing values become the epoch. Strings that cannot be parsed are
    returned unchanged.
    """
    if not value:
        return format_timestamp(EPOCH)
    if isinstance(value, datetime.datetime):
        return _format_or(value, str(value))
    if isinstance(value, datetime.date):
        midnight = datetime.datetime(value.year, value.month, value.day)
        return _format_or(midnight, str(value))

    as_string = str(value)
    parsed = parse_timestamp(as_string)
    if parsed is None:
        logger.warning(f"Could not parse date {as_string!r}, keeping it as is")
        return as_string
    return _format_or(parsed, as_string)


def parse_timestamp(value: str) -> Optional[datetime.datetime]:
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return email.utils.parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass
    for fmt in LENIENT_DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _format_or(value: datetime.datetime, fallback: str) -> str:
    try:
        return format_timestamp(value)
    except (OverflowError, ValueError):
        # Offsets can push edge-of-range values outside datetime bounds
        return fallback


def format_timestamp(value: datetime.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    utc = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="milliseconds") + "Z"


def normalize_category(value: Any) -> Category:
    if not value:
        return Category.ETC
    candidate = str(value).lower().strip()
    if candidate in Category.values():
        return Category(candidate)
    return Category.ETC


def normalize_description(value: Any) -> Optional[str]:
    return str(value) if value else None


def normalize_tags(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    return [str(tag) for tag in value]
