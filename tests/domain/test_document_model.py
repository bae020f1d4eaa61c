"""Tests for the Document model."""

from gendocs.domain.documents import Document, document_from_payload


class TestDocumentFromPayload:
    def test_unwraps_doc_key(self) -> None:
        doc = document_from_payload(
            {"doc": {"name": "Guide", "token": "t1", "subdomain": "guide", "id": 7}}
        )
        assert doc.name == "Guide"
        assert doc.token == "t1"
        assert doc.subdomain == "guide"

    def test_accepts_bare_document(self) -> None:
        doc = document_from_payload({"name": "Guide"})
        assert doc.token == ""
        assert doc.full_subdomain is None

    def test_summary_keys(self) -> None:
        doc = Document(name="Guide", token="t1", full_subdomain="https://guide.gendocs.io")
        assert doc.summary() == {
            "name": "Guide",
            "token": "t1",
            "subdomain": None,
            "full_subdomain": "https://guide.gendocs.io",
        }
