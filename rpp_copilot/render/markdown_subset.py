"""
Parser for the constrained markdown subset used in section descriptions.

Two rules only:
- a line wrapped entirely in ** is a header
- a line starting with "<integer>. " is a numbered-list item

Anything else is a plain paragraph. The screen, PDF and Word renderers all
consume this one parser, so a description renders the same everywhere. If the
subset is ever extended, update the prompt format rules alongside it.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from rpp_copilot.config import settings as config

HEADER_PATTERN = re.compile(r"^\*\*(.+)\*\*$")
LIST_ITEM_PATTERN = re.compile(r"^\d+\.\s+(.*)$")
BULLET_PATTERN = re.compile(r"^[*\-•]\s+(.*)$")
INLINE_BOLD_PATTERN = re.compile(r"\*\*(.+?)\*\*")

HEADER = "header"
LIST = "list"
PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Block:
    kind: str
    text: str = ""
    items: Tuple[str, ...] = field(default_factory=tuple)

    def as_tuple(self) -> Tuple[str, Union[str, List[str]]]:
        if self.kind == LIST:
            return (LIST, list(self.items))
        return (self.kind, self.text)


def _clean_inline(text: str) -> str:
    return INLINE_BOLD_PATTERN.sub(r"\1", text).strip()


def parse_description(text: Optional[str], bullet_policy: Optional[str] = None) -> List[Block]:
    """
    Split a description into header, list and paragraph blocks.

    Args:
        text: Description string from the generated plan
        bullet_policy: "passthrough" keeps stray bullet lines as paragraphs,
            "normalize" turns them into numbered-list items. Defaults to
            config.BULLET_POLICY.

    Returns:
        Blocks in input order; list items are never merged across a header
        or paragraph boundary
    """
    policy = bullet_policy or config.BULLET_POLICY
    blocks: List[Block] = []
    pending: List[str] = []

    def flush():
        if pending:
            blocks.append(Block(LIST, items=tuple(pending)))
            pending.clear()

    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue

        header = HEADER_PATTERN.match(line)
        if header:
            flush()
            blocks.append(Block(HEADER, text=_clean_inline(header.group(1))))
            continue

        item = LIST_ITEM_PATTERN.match(line)
        if item is None and policy == "normalize":
            item = BULLET_PATTERN.match(line)
        if item:
            pending.append(_clean_inline(item.group(1)))
            continue

        flush()
        blocks.append(Block(PARAGRAPH, text=_clean_inline(line)))

    flush()
    return blocks


def blocks_as_tuples(blocks: List[Block]) -> List[Tuple[str, Union[str, List[str]]]]:
    return [block.as_tuple() for block in blocks]


def plain_block(text: str) -> List[Block]:
    """Wrap literal text (no markdown parsing) as paragraph blocks, one per line."""
    return [Block(PARAGRAPH, text=line.strip()) for line in text.splitlines() if line.strip()]
