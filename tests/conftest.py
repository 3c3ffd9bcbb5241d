"""Shared test configuration and fixtures."""

import pytest


GOOGLE_DOC_HTML = """<html><head><title>secret</title></head><body>
<div class="doc-content"><p class="c2"><span class="c0">This is a published doc.</span></p>
<table class="c9"><tbody>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">x-coordinate</span></p></td><td class="c5"><p class="c3"><span class="c1">Character</span></p></td><td class="c5"><p class="c3"><span class="c1">y-coordinate</span></p></td></tr>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">0</span></p></td><td class="c5"><p class="c3"><span class="c1">&#9608;</span></p></td><td class="c5"><p class="c3"><span class="c1">0</span></p></td></tr>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">0</span></p></td><td class="c5"><p class="c3"><span class="c1">&#9608;</span></p></td><td class="c5"><p class="c3"><span class="c1">1</span></p></td></tr>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">0</span></p></td><td class="c5"><p class="c3"><span class="c1">&#9608;</span></p></td><td class="c5"><p class="c3"><span class="c1">2</span></p></td></tr>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">1</span></p></td><td class="c5"><p class="c3"><span class="c1">&#9600;</span></p></td><td class="c5"><p class="c3"><span class="c1">1</span></p></td></tr>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">1</span></p></td><td class="c5"><p class="c3"><span class="c1">&#9600;</span></p></td><td class="c5"><p class="c3"><span class="c1">2</span></p></td></tr>
<tr class="c4"><td class="c5"><p class="c3"><span class="c1">2</span></p></td><td class="c5"><p class="c3"><span class="c1">&#9600;</span></p></td><td class="c5"><p class="c3"><span class="c1">2</span></p></td></tr>
</tbody></table>
<p class="c2"><span class="c0"></span></p></div></body></html>"""

GOOGLE_DOC_LINES = [
    "█▀▀",
    "█▀ ",
    "█  ",
]


class FakeFetcher:
    """Stands in for DocumentFetcher; returns canned markup."""

    def __init__(self, markup=None):
        self.markup = markup
        self.urls = []

    def fetch(self, url):
        if not url or not url.strip():
            raise ValueError("Url is required.")
        self.urls.append(url)
        return self.markup


@pytest.fixture
def google_doc_html():
    return GOOGLE_DOC_HTML


@pytest.fixture
def google_doc_lines():
    return list(GOOGLE_DOC_LINES)


@pytest.fixture
def fake_fetcher(google_doc_html):
    return FakeFetcher(google_doc_html)
