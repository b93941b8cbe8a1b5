"""Markdown rendering for the catalog's hint blocks.

The fragment is Qt rich text compatible, so the hint label can show it
directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from geocraft.constants.game_constants import HINT_LINE_LIMIT


@dataclass(slots=True)
class HintRenderer:
    """Converts the first lines of a hint block into an HTML list."""

    line_limit: int = HINT_LINE_LIMIT
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": False})

    def visible_lines(self, hint_text: str | None) -> list[str]:
        if not hint_text:
            return []
        lines = [line.strip() for line in hint_text.splitlines() if line.strip()]
        return lines[: self.line_limit]

    def render_fragment(self, hint_text: str | None) -> str:
        lines = self.visible_lines(hint_text)
        if not lines:
            return "<p><em>No hints available.</em></p>"
        markdown = "\n".join(f"- {_strip_bullet(line)}" for line in lines)
        return self._markdown.render(markdown)


def _strip_bullet(line: str) -> str:
    if line[:2] in ("- ", "* ", "+ "):
        return line[2:].strip()
    return line


renderer = HintRenderer()
