# ABOUTME: Readability-style main content extraction for external reference pages
# ABOUTME: Wraps readability-lxml and derives plain text with BeautifulSoup; never raises on bad HTML

from bs4 import BeautifulSoup
from lxml.etree import ParserError
from pydantic import BaseModel
from readability import Document
from readability.readability import Unparseable

from article_forge.utils.logging import get_logger

logger = get_logger(__name__)

# readability-lxml returns this placeholder when the document has no title
NO_TITLE = "[no-title]"


class ReadableContent(BaseModel):
    """Main content isolated from a web page."""

    title: str = ""
    content_html: str = ""
    text_content: str = ""


def _document_title(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    tag = soup.find("title")
    return tag.get_text().strip() if tag else ""


def extract_readable(html: str, base_url: str) -> ReadableContent:
    """Isolate the primary content block of a page.

    Args:
        html: Raw page markup
        base_url: URL the page was fetched from, used to absolutise links

    Returns:
        ReadableContent; content and text are empty when no main block is found
    """
    if not html or not html.strip():
        return ReadableContent()

    title = ""
    content_html = ""
    try:
        document = Document(html, url=base_url)
        content_html = document.summary(html_partial=True)
        title = document.short_title() or ""
    except (Unparseable, ParserError, ValueError, TypeError) as e:
        logger.debug("Readability extraction failed", url=base_url, error=str(e))

    if title == NO_TITLE:
        title = ""

    text_content = ""
    if content_html:
        text_content = BeautifulSoup(content_html, "html.parser").get_text(separator=" ").strip()
        # A summary that holds no text is not a main block
        if not text_content:
            content_html = ""

    return ReadableContent(
        title=title.strip() or _document_title(html),
        content_html=content_html,
        text_content=text_content,
    )
