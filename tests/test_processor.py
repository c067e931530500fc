"""Tests for faqharvest.services.processor."""

from faqharvest.models.page import CrawlRecord, PageContent
from faqharvest.services.extractor import extract_all
from faqharvest.services.patterns import extract_accordions, extract_disclosure_widgets
from faqharvest.services.processor import filter_valid_pages, html_to_content, process_pages

PAGE_HTML = """
<html><body>
<nav><a href="/">Home</a></nav>
<h2>How do I pay?</h2>
<p>By <strong>card</strong> or invoice.</p>
<details><summary>Is checkout secure?</summary><p>Yes, all payments use TLS.</p></details>
<div class="accordion-item">
  <h3 class="accordion-header">Can I cancel my order?</h3>
  <div class="accordion-body" style="display:none">Yes, within 24 hours.</div>
</div>
<footer>Copyright 2024</footer>
</body></html>
"""


class TestHtmlToContent:
    def test_headings_become_markdown(self):
        content = html_to_content(PAGE_HTML)
        assert "## How do I pay?" in content
        assert "By **card** or invoice." in content

    def test_page_chrome_removed(self):
        content = html_to_content(PAGE_HTML)
        assert "Home" not in content
        assert "Copyright" not in content

    def test_widgets_kept_as_markup(self):
        content = html_to_content(PAGE_HTML)
        assert "<details>" in content
        assert "<summary>Is checkout secure?</summary>" in content
        assert 'class="accordion-item"' in content
        assert "FAQHARVESTBLOCK" not in content

    def test_widgets_still_extractable(self):
        content = html_to_content(PAGE_HTML)
        assert extract_disclosure_widgets(content, "")[0].answer == "Yes, all payments use TLS."
        assert extract_accordions(content, "")[0].answer == "Yes, within 24 hours."

    def test_nested_widgets_preserved_once(self):
        html = "<div class='accordion'><details><summary>Q?</summary>A.</details></div>"
        assert html_to_content(html).count("<details>") == 1


class TestProcessPages:
    def test_prefers_markdown(self):
        record = CrawlRecord(url="https://a.example", markdown="# Title\nBody", content="plain", html="<p>x</p>")
        assert process_pages([record])[0].content == "# Title\nBody"

    def test_falls_back_to_content(self):
        record = CrawlRecord(url="https://a.example", markdown="   ", content="Plain body text")
        assert process_pages([record])[0].content == "Plain body text"

    def test_falls_back_to_html(self):
        record = CrawlRecord(url="https://a.example", html="<h2>Shipping</h2><p>Fast.</p>")
        content = process_pages([record])[0].content
        assert "## Shipping" in content
        assert "Fast." in content

    def test_empty_record(self):
        assert process_pages([CrawlRecord(url="https://a.example")])[0].content == ""

    def test_source_url_metadata_wins(self):
        record = CrawlRecord(url="https://a.example", content="x", metadata={"sourceURL": "https://b.example/faq"})
        page = process_pages([record])[0]
        assert page.url == "https://b.example/faq"
        assert page.metadata == {"sourceURL": "https://b.example/faq"}

    def test_missing_url(self):
        assert process_pages([CrawlRecord(content="x")])[0].url == ""

    def test_keeps_order(self):
        records = [CrawlRecord(url=f"https://{n}.example", content="x") for n in "abc"]
        assert [p.url for p in process_pages(records)] == [
            "https://a.example",
            "https://b.example",
            "https://c.example",
        ]


class TestFilterValidPages:
    def test_drops_short_and_empty_pages(self):
        pages = [
            PageContent(url="a", content=""),
            PageContent(url="b", content="   short   "),
            PageContent(url="c", content="Long enough content."),
        ]
        assert [p.url for p in filter_valid_pages(pages)] == ["c"]

    def test_custom_minimum(self):
        pages = [PageContent(url="a", content="Twenty characters!!!")]
        assert filter_valid_pages(pages, min_length=50) == []


ASPNET_HTML = (
    "<html><body><form id='aspnetForm'><h2>FAQ</h2>"
    "<details><summary>How do I return an item I bought online?</summary>"
    "<p>Send it back within 30 days using the prepaid label in the parcel.</p></details>"
    "</form></body></html>"
)

ELEMENTOR_HTML = (
    "<html><body>"
    '<div class="elementor-widget elementor-widget-heading"><div class="elementor-widget-container">'
    '<h2 class="elementor-heading-title">How long does delivery to Austria take?</h2></div></div>'
    '<div class="elementor-widget elementor-widget-text-editor"><div class="elementor-widget-container">'
    "<p>Parcels to Austria usually arrive within three to four business days.</p></div></div>"
    "</body></html>"
)


class TestPageBuilderMarkup:
    def test_form_wrapped_page_keeps_widget(self):
        content = html_to_content(ASPNET_HTML)
        assert "## FAQ" in content
        assert "<summary>How do I return an item I bought online?</summary>" in content

    def test_form_wrapped_page_yields_faq(self):
        faqs = extract_all(process_pages([CrawlRecord(url="https://shop.example.com/faq", html=ASPNET_HTML)]))
        assert [f.question for f in faqs] == ["How do I return an item I bought online?"]

    def test_elementor_blocks_become_markdown(self):
        content = html_to_content(ELEMENTOR_HTML)
        assert "## How long does delivery to Austria take?" in content
        assert "Parcels to Austria usually arrive" in content

    def test_elementor_page_yields_faq(self):
        faqs = extract_all(process_pages([CrawlRecord(url="https://shop.example.at/faq", html=ELEMENTOR_HTML)]))
        assert len(faqs) == 1
        assert faqs[0].answer == "Parcels to Austria usually arrive within three to four business days."
        assert faqs[0].category == "Shipping"
