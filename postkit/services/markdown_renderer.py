"""Markdown body to render tree.

The body is tokenized by markdown-it (commonmark plus tables, strikethrough
and task lists), folded into ``postkit.schemas.render`` nodes, then run
through an ordered list of tree passes.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.tasklists import tasklists_plugin

from postkit.schemas.render import CodeBlock, Element, RenderNode, RenderTree, Text

logger = logging.getLogger(__name__)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
TASK_CHECKBOX_CLASS = "task-list-item-checkbox"

_SLUG_STRIP_PATTERN = re.compile(r"[^\w\- ]")

TreePass = Callable[[RenderTree], RenderTree]


def build_markdown_parser() -> MarkdownIt:
    md = MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])
    return md.use(tasklists_plugin)


def extract_text(node: Any) -> str:
    """Flatten any render node, list of nodes or scalar into plain text."""
    if node is None or isinstance(node, bool):
        return ""
    if isinstance(node, (str, int, float)):
        return str(node)
    if isinstance(node, (list, tuple)):
        return "".join(extract_text(child) for child in node)
    if isinstance(node, Text):
        return extract_text(node.value)
    if isinstance(node, (Element, CodeBlock)):
        return extract_text(node.children)
    return ""


# --- Token folding ---


def tokens_to_tree(tokens: Sequence[Token]) -> RenderTree:
    root: List[RenderNode] = []
    current = root
    stack = []

    for token in tokens:
        if token.nesting == 1:
            if token.hidden:
                continue
            children: List[RenderNode] = []
            stack.append((token, current, children))
            current = children
        elif token.nesting == -1:
            if token.hidden or not stack:
                continue
            opener, parent, children = stack.pop()
            parent.append(
                Element(
                    tag=opener.tag,
                    properties=dict(opener.attrs),
                    children=children,
                )
            )
            current = parent
        else:
            current.extend(_leaf_nodes(token))

    # Unbalanced streams keep whatever was collected
    while stack:
        opener, parent, children = stack.pop()
        parent.append(
            Element(tag=opener.tag, properties=dict(opener.attrs), children=children)
        )
    return root


def _leaf_nodes(token: Token) -> List[RenderNode]:
    if token.type == "inline":
        return tokens_to_tree(token.children or [])
    if token.type == "text":
        return [Text(value=token.content)] if token.content else []
    if token.type == "softbreak":
        return [Text(value="\n")]
    if token.type == "code_inline":
        return [Element(tag="code", children=[Text(value=token.content)])]
    if token.type in ("fence", "code_block"):
        return [_code_element(token)]
    if token.type == "image":
        return [_image_element(token)]
    if token.type in ("html_inline", "html_block"):
        return [_html_node(token)]
    if token.tag:
        return [Element(tag=token.tag, properties=dict(token.attrs))]
    return [Text(value=token.content)] if token.content else []


def _code_element(token: Token) -> Element:
    info = token.info.strip()
    language = info.split(maxsplit=1)[0] if info else ""
    code_props: Dict[str, Any] = {"class": f"language-{language}"} if language else {}
    return Element(
        tag="pre",
        children=[
            Element(tag="code", properties=code_props, children=[Text(value=token.content)])
        ],
    )


def _image_element(token: Token) -> Element:
    properties = dict(token.attrs)
    properties["alt"] = extract_text(tokens_to_tree(token.children or []))
    return Element(tag="img", properties=properties)


def _html_node(token: Token) -> RenderNode:
    # Raw HTML is disabled, so the only markup tokens come from the task list plugin
    if TASK_CHECKBOX_CLASS in token.content:
        return Element(
            tag="input",
            properties={
                "class": TASK_CHECKBOX_CLASS,
                "type": "checkbox",
                "disabled": True,
                "checked": 'checked="checked"' in token.content,
            },
        )
    return Text(value=token.content)


# --- Tree passes ---


def _transform(tree: RenderTree, fn: Callable[[RenderNode], RenderNode]) -> RenderTree:
    def visit(node: RenderNode) -> RenderNode:
        if isinstance(node, Text):
            return fn(node)
        children = [visit(child) for child in node.children]
        return fn(node.model_copy(update={"children": children}))

    return [visit(node) for node in tree]


class HeadingSlugger:
    """GitHub-style heading slugs, de-duplicated with numeric suffixes."""

    def __init__(self):
        self.occurrences: Dict[str, int] = {}

    def slug(self, value: str) -> str:
        original = slugify_heading(value)
        result = original
        while result in self.occurrences:
            self.occurrences[original] += 1
            result = f"{original}-{self.occurrences[original]}"
        self.occurrences[result] = 0
        return result


def slugify_heading(value: str) -> str:
    return _SLUG_STRIP_PATTERN.sub("", value.lower()).replace(" ", "-")


def _is_heading(node: RenderNode) -> bool:
    return isinstance(node, Element) and node.tag in HEADING_TAGS


def assign_heading_ids(tree: RenderTree) -> RenderTree:
    slugger = HeadingSlugger()

    def add_id(node: RenderNode) -> RenderNode:
        if not _is_heading(node) or "id" in node.properties:
            return node
        heading_id = slugger.slug(extract_text(node.children))
        return node.model_copy(
            update={"properties": {**node.properties, "id": heading_id}}
        )

    return _transform(tree, add_id)


def autolink_headings(tree: RenderTree) -> RenderTree:
    """Append a self-link to every heading; needs ids from assign_heading_ids."""

    def add_link(node: RenderNode) -> RenderNode:
        if not _is_heading(node) or not node.properties.get("id"):
            return node
        link = Element(
            tag="a",
            properties={
                "aria-hidden": "true",
                "tabindex": -1,
                "href": f"#{node.properties['id']}",
            },
            children=[Element(tag="span", properties={"class": "icon icon-link"})],
        )
        return node.model_copy(update={"children": [*node.children, link]})

    return _transform(tree, add_link)


def substitute_code_blocks(tree: RenderTree) -> RenderTree:
    def to_code_block(node: RenderNode) -> RenderNode:
        if not isinstance(node, Element) or node.tag != "pre":
            return node
        return CodeBlock(
            properties=node.properties,
            children=node.children,
            copyText=extract_text(node.children).strip(),
        )

    return _transform(tree, to_code_block)


DEFAULT_PASSES: Sequence[TreePass] = (
    assign_heading_ids,
    autolink_headings,
    substitute_code_blocks,
)


class MarkdownRenderer:
    def __init__(self, passes: Sequence[TreePass] = DEFAULT_PASSES):
        self.md = build_markdown_parser()
        self.passes = tuple(passes)

    def render(self, body: str) -> RenderTree:
        tree = tokens_to_tree(self.md.parse(body))
        for tree_pass in self.passes:
            tree = tree_pass(tree)
        logger.debug(f"Rendered body into {len(tree)} top-level nodes")
        return tree
