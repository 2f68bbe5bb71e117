"""Shared test fixtures for docwiki."""

from datetime import timedelta

import pytest

from docwiki.config.models import ConversionConfig, DocWikiConfig
from docwiki.converter.pipeline import ConversionPipeline
from docwiki.store.sqlite_store import SQLiteDocumentStore

# 1x1 transparent PNG
PNG_BYTES = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010806000000"
    "1f15c4890000000d49444154789c6360000002000100e221bc330000000049454e44ae426082"
)


class FakePdfDocument:
    def __init__(self, page_count, fail_on_page=None):
        self._page_count = page_count
        self._fail_on_page = fail_on_page
        self.rendered: list[tuple[int, float]] = []
        self.closed = False

    @property
    def page_count(self):
        return self._page_count

    def render_page(self, page_number, scale):
        if page_number == self._fail_on_page:
            raise RuntimeError("corrupt page")
        self.rendered.append((page_number, scale))
        return PNG_BYTES

    def close(self):
        self.closed = True


class FakeRasterizer:
    """Records every open and page render."""

    name = "fake-pdf"

    def __init__(self, page_count=2, fail_on_page=None):
        self.page_count = page_count
        self.fail_on_page = fail_on_page
        self.documents: list[FakePdfDocument] = []

    def open(self, data):
        if not data.startswith(b"%PDF"):
            raise ValueError("not a PDF")
        doc = FakePdfDocument(self.page_count, self.fail_on_page)
        self.documents.append(doc)
        return doc

    @property
    def render_calls(self):
        return sum(len(d.rendered) for d in self.documents)


class FakeDocxConverter:
    name = "fake-docx"

    def __init__(self, html="<p>Hello from Word</p>", error=None):
        self.html = html
        self.error = error
        self.calls = 0

    def convert(self, data):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.html


@pytest.fixture
def sample_config():
    return DocWikiConfig()


@pytest.fixture
def rasterizer():
    return FakeRasterizer()


@pytest.fixture
def docx_converter():
    return FakeDocxConverter()


@pytest.fixture
def pipeline(rasterizer, docx_converter):
    return ConversionPipeline(
        ConversionConfig(),
        pdf_rasterizer=rasterizer,
        docx_converter=docx_converter,
    )


@pytest.fixture
def store(tmp_path):
    s = SQLiteDocumentStore(db_path=str(tmp_path / "wiki.db"))
    yield s
    s.close()


class TickingClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start):
        self.now = start
        self.calls = 0

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        self.calls += 1
        return current
