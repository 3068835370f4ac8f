"""Render tree produced from a post body.

Nodes follow a small tagged-variant shape: ``Text`` leaves carry a string or
number, ``Element`` composites carry a tag, properties and ordered children,
and ``CodeBlock`` is the copyable stand-in for ``pre`` regions.
"""

from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Text(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    value: Union[str, int, float]


class Element(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["element"] = "element"
    tag: str
    properties: Dict[str, Any] = Field(default_factory=dict)
    children: List["RenderNode"] = Field(default_factory=list)


class CodeBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["code_block"] = "code_block"
    properties: Dict[str, Any] = Field(default_factory=dict)
    children: List["RenderNode"] = Field(default_factory=list)
    copyText: str = ""


RenderNode = Annotated[Union[Text, Element, CodeBlock], Field(discriminator="type")]
RenderTree = List[RenderNode]

Element.model_rebuild()
CodeBlock.model_rebuild()
