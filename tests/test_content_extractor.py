from nearby_worker.core.content_extractor import NO_CONTENT_FOUND, extract_snippet

PARAGRAPH_35 = "We build bicycles in Berlin since 1"  # 35 characters
DESCRIPTION = "Family bakery in Kreuzberg"  # 26 characters


def _page(head="", body=""):
    return f"<html><head>{head}</head><body>{body}</body></html>"


def test_paragraph_wins_over_meta_description():
    html = _page(
        head=f'<meta name="description" content="{DESCRIPTION}">',
        body=f"<p>short</p><p>  {PARAGRAPH_35}  </p>",
    )
    assert len(PARAGRAPH_35) == 35
    assert extract_snippet(html) == PARAGRAPH_35


def test_paragraph_threshold_is_exclusive():
    html = _page(body="<p>" + "x" * 30 + "</p><h1>Welcome to our shop</h1>")
    assert extract_snippet(html) == "Welcome to our shop"


def test_meta_description_used_when_no_paragraph():
    html = _page(head=f'<meta name="description" content=" {DESCRIPTION} ">')
    assert extract_snippet(html) == DESCRIPTION


def test_short_meta_description_is_skipped():
    html = _page(head='<meta name="description" content="Too short">', body="<h2>Opening hours and prices</h2>")
    assert extract_snippet(html) == "Opening hours and prices"


def test_heading_requires_more_than_ten_characters():
    html = _page(body="<h1>Home</h1><h3>About our company</h3>")
    assert extract_snippet(html) == "About our company"


def test_content_container_is_truncated_to_300_characters():
    text = "Quality craftsmanship " * 20
    html = _page(body=f'<div class="nav">x</div><div class="about">{text}</div>')

    snippet = extract_snippet(html)

    assert snippet == text.strip()[:300]
    assert len(snippet) == 300


def test_content_container_with_fifty_characters():
    text = "a" * 50
    html = _page(body=f'<div id="main"><span>{text}</span></div>')
    assert extract_snippet(html) == text


def test_any_div_fallback_returns_full_text():
    text = "Serving the neighbourhood with fresh produce every day " * 10
    html = _page(body=f"<div><span>{text}</span></div>")
    assert extract_snippet(html) == text.strip()


def test_sentinel_when_nothing_qualifies():
    assert extract_snippet(_page(body="<div>tiny</div><p>also tiny</p>")) == NO_CONTENT_FOUND
    assert extract_snippet("") == NO_CONTENT_FOUND
