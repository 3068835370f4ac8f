import textwrap

import pytest


class FakeRepo:
    """
    In-memory stand-in for FilePostsRepo.
    Entries are the slugs themselves, in insertion order.
    """

    def __init__(self, docs: dict[str, str]):
        self.docs = {slug: textwrap.dedent(raw).lstrip() for slug, raw in docs.items()}
        self.reads = []

    def list_entries(self):
        return list(self.docs)

    def slug_for(self, entry):
        return entry

    def list_slugs(self):
        return list(self.docs)

    def read_entry(self, entry):
        self.reads.append(entry)
        return self.docs[entry]

    def read_document(self, slug):
        if slug not in self.docs:
            raise FileNotFoundError(slug)
        return self.read_entry(slug)


class FakeRenderer:
    """Records bodies and returns an empty tree."""

    def __init__(self):
        self.bodies = []

    def render(self, body):
        self.bodies.append(body)
        return []


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(
        self,
        list_posts_return=None,
        get_post_return=None,
        slugs_return=None,
        categories_return=None,
    ):
        self._list_posts_return = list_posts_return or []
        self._get_post_return = get_post_return
        self._slugs_return = slugs_return or []
        self._categories_return = categories_return or []
        self.category_calls = []

    def list_posts(self):
        return self._list_posts_return

    def get_post_slugs(self):
        return self._slugs_return

    def get_post_by_slug(self, slug: str):
        from postkit.schemas.blog import RenderedPost
        from postkit.services.posts_service import PostNotFoundError

        if self._get_post_return is None:
            raise PostNotFoundError(slug)
        # Routes read attributes off the result, same as the real service
        return RenderedPost.model_validate(self._get_post_return)

    def list_categories(self):
        return self._categories_return

    def list_posts_by_category(self, category):
        self.category_calls.append(category)
        return [
            p for p in self._list_posts_return if p["frontMatter"]["category"] == category
        ]


class FakeTimer:
    """threading.Timer stand-in that only fires when told to."""

    created = []

    def __init__(self, interval, function):
        self.interval = interval
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.created.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function()


@pytest.fixture
def fake_timer():
    FakeTimer.created = []
    yield FakeTimer
    FakeTimer.created = []


class ContentDir:
    """Directory-backed content root for repo and end-to-end tests."""

    def __init__(self, root):
        self.root = root

    def write(self, name: str, text: str = ""):
        path = self.root / name
        path.write_text(textwrap.dedent(text).lstrip(), encoding="utf-8")
        return path


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    root.mkdir()
    return ContentDir(root)
