from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, computed_field

from postkit.schemas.render import RenderTree


class Category(str, Enum):
    # Declaration order is display order
    FRONTEND = "frontend"
    BACKEND = "backend"
    INFRA = "infra"
    ETC = "etc"

    @classmethod
    def values(cls) -> List[str]:
        return [member.value for member in cls]


class Frontmatter(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    createdAt: str
    updatedAt: str
    category: Category = Category.ETC
    description: Optional[str] = None
    tags: Optional[List[str]] = None


class PostListItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    frontMatter: Frontmatter


class RenderedPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    frontMatter: Frontmatter
    content: RenderTree

    @computed_field
    @property
    def isUpdated(self) -> bool:
        return self.frontMatter.updatedAt != self.frontMatter.createdAt


class CategoryCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Category
    count: int


class PageMetadata(BaseModel):
    title: str
    description: Optional[str] = None
