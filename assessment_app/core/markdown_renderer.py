"""Markdown rendering for question prompts and explanations served to web clients.

Question files are authored as markdown so trainers can emphasize terms or add
short lists. The API returns both the raw text and an HTML fragment; raw HTML
in the source is never passed through.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from assessment_app.core.models import Question


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown text into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return ""
        return self._markdown.render(sanitized)

    def render_question(self, question: Question) -> dict[str, str]:
        return {
            "prompt_html": self.render_fragment(question.prompt),
            "explanation_html": self.render_fragment(question.explanation),
        }


renderer = MarkdownRenderer()
# MarkdownIt is safe to share for read-only renders across request threads.
