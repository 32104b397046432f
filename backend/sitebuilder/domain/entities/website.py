"""Domain entity — the website document and its structural operations.

Every operation returns a new ``Website``; the receiver is never modified.
Operations that target a block id which does not resolve return the receiver
unchanged instead of raising, so late asynchronous completions against a
deleted block are harmless.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Literal

from .content_block import ContentBlock
from .theme import DEFAULT_THEME, Theme

MoveDirection = Literal["up", "down"]


@dataclass(frozen=True)
class Website:
    """One generated website: metadata, theme, and the ordered block sequence."""

    id: str
    title: str
    business_name: str
    business_type: str
    location: str
    theme: Theme = DEFAULT_THEME
    blocks: tuple[ContentBlock, ...] = field(default_factory=tuple)

    # ── Queries ─────────────────────────────────────────────────────

    def find_block(self, block_id: str) -> ContentBlock | None:
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    def has_block(self, block_id: str) -> bool:
        return self.find_block(block_id) is not None

    def block_ids(self) -> list[str]:
        return [b.id for b in self.blocks]

    def _index_of(self, block_id: str) -> int:
        for index, block in enumerate(self.blocks):
            if block.id == block_id:
                return index
        return -1

    # ── Structural operations ───────────────────────────────────────

    def insert_block(self, block: ContentBlock, after_id: str | None = None) -> "Website":
        """Insert ``block`` after ``after_id``, or append when it does not resolve."""
        blocks = list(self.blocks)
        index = self._index_of(after_id) if after_id is not None else -1
        if index < 0:
            blocks.append(block)
        else:
            blocks.insert(index + 1, block)
        return replace(self, blocks=tuple(blocks))

    def update_block_content(self, block_id: str, field_name: str, value: Any) -> "Website":
        """Shallow-merge ``{field_name: value}`` into the target block's content."""
        return self._replace_block(block_id, lambda b: b.with_content({field_name: value}))

    def patch_block_content(self, block_id: str, patch: dict[str, Any]) -> "Website":
        """Shallow-merge several content fields at once."""
        return self._replace_block(block_id, lambda b: b.with_content(patch))

    def update_block_style(self, block_id: str, patch: dict[str, Any]) -> "Website":
        """Shallow-merge ``patch`` into the target block's styles."""
        return self._replace_block(block_id, lambda b: b.with_styles(patch))

    def move_block(self, block_id: str, direction: MoveDirection) -> "Website":
        """Swap the block with its neighbour; no-op at either boundary."""
        index = self._index_of(block_id)
        if index < 0:
            return self
        if direction == "up":
            other = index - 1
        elif direction == "down":
            other = index + 1
        else:
            raise ValueError(f"Unknown move direction: {direction!r}")
        if other < 0 or other >= len(self.blocks):
            return self
        blocks = list(self.blocks)
        blocks[index], blocks[other] = blocks[other], blocks[index]
        return replace(self, blocks=tuple(blocks))

    def remove_block(self, block_id: str) -> "Website":
        if not self.has_block(block_id):
            return self
        return replace(self, blocks=tuple(b for b in self.blocks if b.id != block_id))

    def _replace_block(self, block_id: str, transform) -> "Website":
        index = self._index_of(block_id)
        if index < 0:
            return self
        blocks = list(self.blocks)
        blocks[index] = transform(blocks[index])
        return replace(self, blocks=tuple(blocks))

    # ── Serialization ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready document using the camelCase keys of the stored snapshot."""
        return {
            "id": self.id,
            "title": self.title,
            "businessName": self.business_name,
            "businessType": self.business_type,
            "location": self.location,
            "theme": self.theme.to_dict(),
            "blocks": [b.to_dict() for b in self.blocks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Website":
        """Rebuild a website from ``to_dict`` output.

        Raises:
            KeyError, TypeError, ValueError: if the document is malformed.
        """
        if not isinstance(data, dict):
            raise TypeError("Website document must be a JSON object")
        blocks = data.get("blocks", [])
        if not isinstance(blocks, list):
            raise TypeError("'blocks' must be a list")
        theme_data = data.get("theme")
        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            business_name=str(data.get("businessName", "")),
            business_type=str(data.get("businessType", "")),
            location=str(data.get("location", "")),
            theme=Theme.from_dict(theme_data) if theme_data else DEFAULT_THEME,
            blocks=tuple(ContentBlock.from_dict(b) for b in blocks),
        )
