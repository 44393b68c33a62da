"""
Content Block Schemas.

Scripts and notes store their body as an ordered list of blocks.
Scripts allow a narrower set of block types than notes.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

from modules.backend.core.utils import new_id

ScriptBlockType = Literal["text", "heading", "bullet", "divider"]
NoteBlockType = Literal["text", "heading", "bullet", "divider", "code", "quote"]


class ScriptBlock(BaseModel):
    """A single block of script content."""

    id: str = Field(
        ...,
        min_length=1,
        description="Block identifier, generated by the editor",
    )
    type: ScriptBlockType = Field(description="Block type")
    content: str = Field(default="", description="Block text")
    metadata: dict[str, Any] | None = Field(
        default=None,
        description="Free-form block data, e.g. heading level",
        examples=[{"level": 2}],
    )


class NoteBlock(ScriptBlock):
    """A single block of note content."""

    type: NoteBlockType = Field(description="Block type")


def default_content() -> list[dict[str, Any]]:
    """Body of a new script or note: one empty text block."""
    return [{"id": new_id(), "type": "text", "content": ""}]


def dump_blocks(blocks: list[ScriptBlock]) -> list[dict[str, Any]]:
    """Serialize blocks for storage, omitting absent metadata."""
    return [block.model_dump(exclude_none=True) for block in blocks]
