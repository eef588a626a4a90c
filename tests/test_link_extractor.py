# File: tests/test_link_extractor.py
from asset_scout.crawler.hosts import HostAllowList
from asset_scout.crawler.ledger import VisitedLedger
from asset_scout.crawler.link_extractor import extract_links, iter_anchors
from asset_scout.parser.html_parser import parse_html

BASE = "https://example.org/"
ALLOW = HostAllowList(["example.org", "*.example.org"])


def links(html: str, ledger: VisitedLedger | None = None, base: str = BASE) -> list[str]:
    return list(extract_links(parse_html(html), base, ALLOW, ledger or VisitedLedger()))


def test_scenario_offsite_link_dropped(sample_html):
    assert links(sample_html) == ["https://example.org/report.pdf"]


def test_document_order_preorder():
    html = """
    <html><body>
      <div>
        <a href="/1">one</a>
        <section><p><a href="/2">two</a></p></section>
      </div>
      <a href="/3">three</a>
      <footer><a href="/4">four</a></footer>
    </body></html>
    """
    assert links(html) == [f"https://example.org/{i}" for i in range(1, 5)]


def test_iter_anchors_walks_whole_tree():
    depth = 300
    html = "<div>" * depth + '<a href="/deep">deep</a>' + "</div>" * depth
    anchors = list(iter_anchors(parse_html(html)))
    assert [a["href"] for a in anchors] == ["/deep"]


def test_unsupported_schemes_and_hosts_dropped():
    html = """
    <a href="mailto:info@example.org">mail</a>
    <a href="javascript:void(0)">js</a>
    <a href="ftp://example.org/file.pdf">ftp</a>
    <a href="tel:+10000000">tel</a>
    <a href="https://evil.org/a.pdf">evil</a>
    <a href="https://deep.www.example.org/a.pdf">too deep</a>
    <a href="https://www.example.org/b.pdf">ok</a>
    """
    assert links(html) == ["https://www.example.org/b.pdf"]


def test_malformed_and_missing_href_skipped():
    html = '<a name="anchor">x</a><a href="http://[::1">bad</a><a href="/good">good</a>'
    assert links(html) == ["https://example.org/good"]


def test_visited_links_dropped():
    ledger = VisitedLedger()
    ledger.mark_seen("https://example.org/seen")
    html = '<a href="/seen">a</a><a href="/seen#again">b</a><a href="/new">c</a>'
    assert links(html, ledger) == ["https://example.org/new"]


def test_default_port_spelling_of_visited_link_dropped():
    ledger = VisitedLedger()
    ledger.mark_seen("https://example.org/")
    html = '<a href="https://example.org:443/">self</a><a href="https://example.org:443/next#x">n</a>'
    assert links(html, ledger) == ["https://example.org/next"]


def test_relative_links_resolved_against_base():
    html = '<a href="../up.pdf">up</a><a href="sibling">s</a>'
    assert links(html, base="https://example.org/a/b/page") == [
        "https://example.org/a/up.pdf",
        "https://example.org/a/b/sibling",
    ]


def test_extraction_is_lazy():
    ledger = VisitedLedger()
    html = '<a href="/a">a</a><a href="/b">b</a><a href="/c">c</a>'
    gen = extract_links(parse_html(html), BASE, ALLOW, ledger)
    assert next(gen) == "https://example.org/a"
    ledger.mark_seen("https://example.org/b")
    assert list(gen) == ["https://example.org/c"]
    assert list(gen) == []


def test_never_yields_unsafe_urls():
    html = "".join(
        f'<a href="{href}">x</a>'
        for href in (
            "/x", "data:text/html,hi", "https://other.org/", "//other.org/y",
            "http://example.org:80/z", "file:///etc/passwd", "https://sub.example.org/",
        )
    )
    for url in links(html):
        assert url.split(":", 1)[0] in ("http", "https")
        assert ALLOW.allows_url(url)
