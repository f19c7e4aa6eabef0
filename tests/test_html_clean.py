"""
Tests for llms_fetch.html_clean: boilerplate removal, main-content selection, Markdown tidy-up.
"""
from llms_fetch.html_clean import clean_html, clean_markdown, convert_html

PAGE = """
<html>
  <head><title>Docs</title><script>var x = 1;</script></head>
  <body>
    <nav><a href="/">Home</a> | <a href="/docs">Docs</a></nav>
    <div class="breadcrumb">Home / Docs</div>
    <main>
      <h1>Getting Started</h1>
      <p>Install the package first.</p>
      <h2>Usage</h2>
      <p>Call <code>run()</code>.</p>
    </main>
    <footer class="site-footer">Copyright</footer>
  </body>
</html>
"""


class TestCleanHtml:
    """Tests for clean_html."""

    def test_keeps_main_content(self):
        html = clean_html(PAGE)

        assert "Getting Started" in html
        assert "Install the package first." in html

    def test_removes_navigation_and_scripts(self):
        html = clean_html(PAGE)

        assert "Home / Docs" not in html
        assert "var x" not in html
        assert 'href="/docs"' not in html
        assert "Copyright" not in html

    def test_aria_label_match_is_case_insensitive(self):
        html = clean_html('<body><div aria-label="Main Navigation">menu</div><p>text</p></body>')

        assert "menu" not in html
        assert "text" in html

    def test_markdown_body_preferred_over_main(self):
        html = clean_html('<body><main><p>outer</p><article class="markdown-body"><p>inner</p></article></main></body>')

        assert "inner" in html
        assert "outer" not in html

    def test_falls_back_to_body(self):
        html = clean_html("<html><body><p>only body</p></body></html>")

        assert html.startswith("<body>")
        assert "only body" in html

    def test_fragment_without_body(self):
        assert "fragment" in clean_html("<p>fragment</p>")

    def test_decorative_images_removed(self):
        html = clean_html(
            '<main><img src="/icons/arrow.svg"><img role="presentation" src="x.png" alt="x">'
            '<img alt="no source"><img src="diagram.png"></main>'
        )

        assert "arrow.svg" not in html
        assert "x.png" not in html
        assert "no source" not in html
        assert 'alt="image"' in html
        assert "diagram.png" in html

    def test_image_attributes_reduced_to_src_and_alt(self):
        html = clean_html('<main><img src="a.png" alt="Chart" width="300" class="wide"></main>')

        assert 'alt="Chart"' in html
        assert "width" not in html
        assert "wide" not in html


class TestCleanMarkdown:
    """Tests for clean_markdown."""

    def test_empty_link_before_link(self):
        assert clean_markdown("## [](#intro)[Intro](#intro)") == "## [Intro](#intro)"

    def test_empty_link_removed(self):
        assert clean_markdown("## Setup [](#setup)") == "## Setup "

    def test_zero_width_label_removed(self):
        assert clean_markdown("a [\u200b\u200d] b") == "a  b"

    def test_blank_line_runs_collapsed(self):
        assert clean_markdown("a\n\n\n\n\nb") == "a\n\nb"

    def test_regular_links_kept(self):
        text = "See [the guide](https://example.com/guide)."

        assert clean_markdown(text) == text


def test_convert_html_produces_headings():
    markdown = convert_html(PAGE)

    assert "# Getting Started" in markdown
    assert "## Usage" in markdown
    assert "Install the package first." in markdown
    assert "Home / Docs" not in markdown
    assert "\n\n\n" not in markdown
