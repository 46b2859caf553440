# ABOUTME: Deterministic rewrite prompt and references section rendering
# ABOUTME: Pure functions: identical inputs always produce identical strings

from collections.abc import Sequence
from html import escape

from article_forge.enrichment.references import ReferenceCandidate

REFERENCE_TEXT_LIMIT = 2000

INSTRUCTIONS = """\
You are an expert technical writer. Rewrite the following article to improve formatting, readability, and SEO.
Inspiration: Use the ideas and structure cues from the reference articles, but avoid any plagiarism. \
Do not copy sentences verbatim from the references. \
Produce clean HTML with semantic tags only (h2/h3, p, ul/ol, strong/em, code where needed)."""

RULES = """\
Rules:
- Preserve the factual meaning of the original article.
- Improve clarity, flow, and scannability.
- Use concise headings and bullet lists when helpful.
- Avoid overly flowery language. Keep professional tone.
- Output only HTML for the rewritten content body (no <html> or <body>)."""


def format_reference(index: int, reference: ReferenceCandidate, limit: int = REFERENCE_TEXT_LIMIT) -> str:
    """Label a reference as ``Reference N`` with its text truncated to ``limit`` characters."""
    return f"Reference {index}: {reference.url}\nContent (truncated): {reference.text[:limit]}"


def build_prompt(
    original_title: str,
    original_html: str,
    references: Sequence[ReferenceCandidate],
    limit: int = REFERENCE_TEXT_LIMIT,
) -> str:
    """Assemble the rewrite prompt for an original article and its references."""
    references_text = "\n\n".join(
        format_reference(index, reference, limit) for index, reference in enumerate(references, start=1)
    )
    return (
        f"{INSTRUCTIONS}\n\n"
        f"Original Title:\n{original_title}\n\n"
        f"Original Article HTML:\n{original_html}\n\n"
        f"References:\n{references_text}\n\n"
        f"{RULES}\n"
    )


def render_references_section(references: Sequence[ReferenceCandidate]) -> str:
    """Render the references appended to a rewritten article body."""
    items = "\n".join(
        f'<li><a href="{escape(reference.url, quote=True)}" target="_blank" rel="noopener">'
        f"{escape(reference.display_title)}</a></li>"
        for reference in references
    )
    return f"<hr/>\n<section>\n<h3>References</h3>\n<ol>\n{items}\n</ol>\n</section>"
