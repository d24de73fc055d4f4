"""Markdown + LaTeX rendering for quiz questions and the review summary.

Question text, options and the AI review are stored as Markdown with ``$``
math. The renderer turns them into HTML and leaves the math to MathJax at
display time inside ``QWebEngineView``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt

from epsilora_quiz.constants.about import APP_NAME
from epsilora_quiz.styling.color_palette import ColorPalette, Theme

_MATHJAX_SCRIPT = (
    "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments or full documents."""

    enable_html: bool = False
    theme: Theme = Theme.LIGHT
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
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line without wrapping it in a paragraph."""

        return self._markdown.renderInline(markdown_text.strip())

    def render_option(self, label: str, text: str, css_class: str = "") -> str:
        """Render one answer option as a labelled block."""

        classes = " ".join(part for part in ("option", css_class) if part)
        body = self.render_inline(text) or "<em>(empty)</em>"
        return (
            f'<div class="{classes}"><span class="option-label">{escape(label)}.</span> '
            f"{body}</div>"
        )

    def wrap_with_mathjax(self, body_html: str, title: str = APP_NAME, font_size: int = 14) -> str:
        """Wrap a fragment inside a minimal HTML document that loads MathJax."""

        theme = self.theme
        return f"""<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{escape(title)}</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 1rem; background: {ColorPalette.BACKGROUND_PRIMARY.get(theme)}; color: {ColorPalette.TEXT_PRIMARY.get(theme)}; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
      .option {{ margin: 0.4rem 0; padding: 0.5rem 0.75rem; border-radius: 6px; border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)}; }}
      .option-label {{ font-weight: bold; }}
      .option.selected {{ background: {ColorPalette.OPTION_SELECTED_BG.get(theme)}; color: {ColorPalette.OPTION_SELECTED_TEXT.get(theme)}; }}
      .option.correct {{ background: {ColorPalette.OPTION_CORRECT_BG.get(theme)}; color: {ColorPalette.OPTION_CORRECT_TEXT.get(theme)}; }}
      .option.incorrect {{ background: {ColorPalette.OPTION_INCORRECT_BG.get(theme)}; color: {ColorPalette.OPTION_INCORRECT_TEXT.get(theme)}; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }}, svg: {{ fontCache: 'global' }} }};
    </script>
    <script defer src=\"{_MATHJAX_SCRIPT}\"></script>
  </head>
  <body>
    <div class=\"question-html\">{body_html}</div>
  </body>
</html>"""

    def render_full_document(self, markdown_text: str, title: str = APP_NAME, font_size: int = 14) -> str:
        """Convenience wrapper to render markdown and embed MathJax."""

        fragment = self.render_fragment(markdown_text)
        return self.wrap_with_mathjax(fragment, title=title, font_size=font_size)


# Shared instance; MarkdownIt renders are read-only so reuse is safe on the UI thread.
renderer = MarkdownMathRenderer()
