# ABOUTME: Tests for readability-based main content extraction of reference pages
# ABOUTME: Runs readability-lxml on realistic markup and checks the never-raise contract

from article_forge.enrichment.readability import ReadableContent, extract_readable

PARAGRAPH = (
    "Support teams that adopt conversational assistants report shorter queues, "
    "faster first responses and happier customers, because routine questions are answered "
    "instantly while agents focus on complex conversations that need a human touch. "
)

ARTICLE_PAGE = f"""
<html>
  <head><title>Deep dive into support bots</title></head>
  <body>
    <nav><a href="/">Home</a><a href="/pricing">Pricing</a></nav>
    <div class="post-content">
      <h1>Deep dive into support bots</h1>
      <p>{PARAGRAPH * 3}</p>
      <p>{PARAGRAPH * 3}</p>
      <p>{PARAGRAPH * 2} See <a href="/blog/part-two">part two</a>.</p>
    </div>
    <footer>Copyright Example Inc.</footer>
  </body>
</html>
"""


def test_extracts_main_block_and_text():
    readable = extract_readable(ARTICLE_PAGE, "https://example.com/blog/support-bots")

    assert "conversational assistants" in readable.text_content
    assert len(readable.text_content) > 800
    assert "<p>" in readable.content_html
    assert "support bots" in readable.title.lower()


def test_empty_document_yields_empty_content():
    assert extract_readable("", "https://example.com/") == ReadableContent()
    assert extract_readable("   \n", "https://example.com/") == ReadableContent()


def test_missing_title_is_empty_string():
    html = f"<html><body><div><p>{PARAGRAPH * 4}</p></div></body></html>"

    readable = extract_readable(html, "https://example.com/blog/untitled")

    assert readable.title == ""
    assert "conversational assistants" in readable.text_content


def test_garbage_markup_does_not_raise():
    readable = extract_readable("<<<>>> </div></p> &&& <html", "https://example.com/")

    assert isinstance(readable, ReadableContent)
    assert isinstance(readable.text_content, str)
