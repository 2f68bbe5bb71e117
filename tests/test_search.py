"""Tests for document search and display formatting."""

import pytest

from docwiki.formatting import format_bytes, format_date
from docwiki.kinds import DocumentKind
from docwiki.search import filter_documents
from docwiki.store.models import DocumentSummary


def _summary(id_, title, preview):
    return DocumentSummary(
        id=id_,
        title=title,
        kind=DocumentKind.text,
        preview_html=preview,
        created_at="2024-01-01T00:00:00.000000+00:00",
        updated_at="2024-01-01T00:00:00.000000+00:00",
    )


@pytest.fixture
def docs():
    return [
        _summary(3, "Quarterly Report", "<p>revenue grew</p>"),
        _summary(2, "Meeting notes", "<p>Discussed the REPORT</p>"),
        _summary(1, "Recipe", "<pre>flour, sugar</pre>"),
    ]


class TestFilterDocuments:
    def test_matches_title_case_insensitive(self, docs):
        assert [d.id for d in filter_documents(docs, "quarterly")] == [3]

    def test_matches_preview(self, docs):
        assert [d.id for d in filter_documents(docs, "sugar")] == [1]

    def test_order_preserved(self, docs):
        assert [d.id for d in filter_documents(docs, "report")] == [3, 2]

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_blank_query_keeps_all(self, docs, query):
        assert filter_documents(docs, query) == docs

    def test_no_match(self, docs):
        assert filter_documents(docs, "zebra") == []

    def test_query_is_trimmed(self, docs):
        assert [d.id for d in filter_documents(docs, "  recipe ")] == [1]


class TestFormatBytes:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1 KB"),
            (1536, "2 KB"),
            (10 * 1024 * 1024, "10.0 MB"),
            (int(2.5 * 1024**3), "2.5 GB"),
        ],
    )
    def test_units(self, size, expected):
        assert format_bytes(size) == expected

    @pytest.mark.parametrize("bad", [None, "abc", -1, float("nan")])
    def test_invalid_input(self, bad):
        assert format_bytes(bad) == ""


class TestFormatDate:
    def test_day_month_year(self):
        assert format_date("2024-03-07T09:15:00.000000+00:00") == "07/03/2024"

    @pytest.mark.parametrize("bad", [None, "", "yesterday"])
    def test_invalid_input(self, bad):
        assert format_date(bad) == ""
