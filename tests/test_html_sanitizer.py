import pytest

from mdexport.services.html_sanitizer import HtmlSanitizer


@pytest.fixture
def sanitizer() -> HtmlSanitizer:
    return HtmlSanitizer()


def test_script_and_style_removed_with_content(sanitizer):
    out = sanitizer.sanitize("<p>a</p><script>evil()</script><style>p{}</style>")
    assert out == "<p>a</p>"


def test_unknown_tags_unwrapped_text_kept(sanitizer):
    out = sanitizer.sanitize("<custom><b>bold</b></custom>")
    assert out == "<b>bold</b>"


def test_attributes_limited_to_allow_list(sanitizer):
    out = sanitizer.sanitize('<a href="https://x.org" title="t" onclick="e()" class="c">x</a>')
    assert 'href="https://x.org"' in out
    assert 'title="t"' in out
    assert 'class="c"' in out
    assert "onclick" not in out


@pytest.mark.parametrize(
    "url, kept",
    [
        ("https://example.com", True),
        ("mailto:me@example.com", True),
        ("#section", True),
        ("docs/page.html", True),
        ("javascript:alert(1)", False),
        (" JavaScript:alert(1)", False),
        ("vbscript:x", False),
    ],
)
def test_url_schemes(sanitizer, url, kept):
    out = sanitizer.sanitize(f'<a href="{url}">x</a>')
    assert ("href=" in out) is kept


def test_img_keeps_src_and_alt(sanitizer):
    out = sanitizer.sanitize('<img src="a.png" alt="A" onerror="x()">')
    assert 'src="a.png"' in out and 'alt="A"' in out
    assert "onerror" not in out


def test_comments_removed(sanitizer):
    assert sanitizer.sanitize("<p>a<!-- hidden --></p>") == "<p>a</p>"
