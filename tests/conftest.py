"""Shared test fixtures for a11y-insight tests."""

import logging

import pytest

from a11y_insight.config import ScanConfig
from a11y_insight.document import SoupDocument
from a11y_insight.insights.context import ScanContext


def page(body: str, head: str = "") -> str:
    """Wrap body markup in a minimal HTML document."""
    return (
        '<!DOCTYPE html><html lang="en"><head><title>Test</title>'
        f"{head}</head><body>{body}</body></html>"
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers and levels left by CLI runs."""
    yield
    logger = logging.getLogger("a11y_insight")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_doc():
    """Factory: body markup (+ optional head) -> SoupDocument."""

    def _make(body: str, head: str = "", url: str = "test.html") -> SoupDocument:
        doc = SoupDocument(page(body, head), url=url)
        doc.materialize()
        return doc

    return _make


@pytest.fixture
def make_ctx(make_doc):
    """Factory: body markup -> ScanContext, with ScanConfig overrides."""

    def _make(body: str, head: str = "", **config) -> ScanContext:
        return ScanContext(document=make_doc(body, head), config=ScanConfig(**config))

    return _make


@pytest.fixture
def clean_page():
    """A page with no structural or semantic problems."""
    return page(
        "<header><nav><a href='/docs'>Documentation home</a></nav></header>"
        "<main><h1>Welcome</h1><h2>About us</h2>"
        "<p>We make tools. They are easy to use.</p>"
        "<img src='team.jpg' alt='Our team at the summer meetup'>"
        "</main>"
    )


@pytest.fixture
def mixed_issue_page():
    """H1->H3 skip, one unlabelled input, 3:1 large bold text."""
    return page(
        "<main>"
        "<h1>Title</h1><h3>Section</h3>"
        "<p style='color:#949494;background-color:#ffffff;font-size:18px;font-weight:bold'>"
        "Large bold low contrast text</p>"
        "<input type='text' id='name'>"
        "</main>"
    )
