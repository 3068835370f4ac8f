import logging
from typing import Any, Dict, Tuple

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler

logger = logging.getLogger(__name__)


def split_document(raw: str) -> Tuple[Dict[str, Any], str]:
    """Split a document into its front matter mapping and markdown body.

    A document without a front matter block is all body. A block that is not
    valid YAML, or that holds an impossible date, is dropped rather than
    failing the document.
    """
    if not frontmatter.checks(raw):
        return {}, raw
    try:
        metadata, body = frontmatter.parse(raw)
    except (yaml.YAMLError, ValueError) as e:
        # PyYAML raises ValueError for timestamps like 2024-02-30
        logger.warning(f"Ignoring malformed front matter: {e}")
        return {}, _body_after_block(raw)
    return dict(metadata), body


def _body_after_block(raw: str) -> str:
    try:
        _fm, content = YAMLHandler().split(raw.strip())
    except ValueError:
        return raw
    return content.strip()
