"""Turn whatever a chat model put in ``message.content`` into parsed JSON.

Providers disagree on the shape of the content even when JSON output is
requested: most return a string, some return a list of typed content blocks,
and a few hand back an already-decoded object. Each shape gets its own variant
and its own parse step.
"""

import json
from dataclasses import dataclass
from typing import Any, List, Union

from ..errors import MalformedResponseError, NoContentError


@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class BlockListContent:
    blocks: List[Any]


@dataclass(frozen=True)
class StructuredContent:
    value: Any


ModelContent = Union[TextContent, BlockListContent, StructuredContent]


def classify_content(raw: Any) -> ModelContent:
    if raw is None or raw == "":
        raise NoContentError("No content from OpenRouter")
    if isinstance(raw, str):
        return TextContent(raw)
    if isinstance(raw, list):
        return BlockListContent(raw)
    return StructuredContent(raw)


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"Model content is not valid JSON: {exc}") from exc


def _first_text_block(blocks: List[Any]) -> Any:
    for block in blocks:
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text")
    return None


def normalize_content(content: ModelContent) -> Any:
    if isinstance(content, TextContent):
        return _parse_json(content.text)

    if isinstance(content, BlockListContent):
        text = _first_text_block(content.blocks)
        if text is None or text == "":
            text = "{}"
        if not isinstance(text, str):
            raise MalformedResponseError("Text block does not carry a string")
        return _parse_json(text)

    return content.value


def parse_model_content(raw: Any) -> Any:
    return normalize_content(classify_content(raw))
