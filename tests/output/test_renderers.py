"""Tests for the operation-specific Rich renderers."""

from __future__ import annotations

from gendocs.output.renderers import render_quiet, render_result
from gendocs.services.result import ServiceResult


class TestRenderResult:
    def test_created_shows_token(self) -> None:
        result = ServiceResult.success("create_document", {"name": "Guide", "token": "t1"})
        output = render_result(result)
        assert "Document created successfully!" in output
        assert "Your token: t1" in output
        assert "gendocs init" in output

    def test_document_table(self) -> None:
        result = ServiceResult.success(
            "list_documents",
            {
                "items": [
                    {"name": "Guide", "token": "t1", "full_subdomain": "guide.gendocs.io"},
                    {"name": "Notes", "token": "t2", "full_subdomain": None},
                ],
                "count": 2,
            },
        )
        output = render_result(result)
        assert "Your documents" in output
        assert "guide.gendocs.io" in output
        assert "t2" in output
        assert "2 documents" in output

    def test_renamed(self) -> None:
        output = render_result(ServiceResult.success("rename_document", {"name": "New"}))
        assert "Doc has been updated." in output
        assert "name: New" in output

    def test_removed_name_with_brackets_is_literal(self) -> None:
        result = ServiceResult.success("remove_document", {"token": "t1", "name": "[bold]x"})
        assert 'Doc "[bold]x" has been removed.' in render_result(result)

    def test_subdomain(self) -> None:
        result = ServiceResult.success("set_subdomain", {"full_subdomain": "guide.gendocs.io"})
        assert render_result(result) == "Your site is now available at: guide.gendocs.io"

    def test_domain_ready(self) -> None:
        result = ServiceResult.success(
            "watch_domain", {"domain": "docs.example.com", "url": "https://docs.example.com/"}
        )
        output = render_result(result)
        assert "Your domain has been added!" in output
        assert "The site is now available at https://docs.example.com/" in output

    def test_generic_fallback(self) -> None:
        output = render_result(ServiceResult.success("add_domain", {"domain": "a.io"}))
        assert "OK" in output
        assert "add_domain" in output
        assert "domain: a.io" in output

    def test_error(self) -> None:
        result = ServiceResult.failure(
            "watch_domain", "PROVISIONING_ERROR", "Error code: [x]", {"context": "x"}
        )
        output = render_result(result)
        assert "ERROR" in output
        assert "Error code: [x]" in output
        assert "context" not in output

    def test_error_detail_when_verbose(self) -> None:
        result = ServiceResult.failure("watch_domain", "CODE", "msg", {"context": "dns"})
        assert "context: dns" in render_result(result, verbose=True)

    def test_verbose_renders_telemetry(self) -> None:
        result = ServiceResult(
            ok=True,
            op="add_domain",
            data={"domain": "a.io"},
            meta={"telemetry": {"name": "DomainService.add_domain", "duration_ms": 12.5}},
        )
        output = render_result(result, verbose=True)
        assert "DomainService.add_domain" in output
        assert "12.50ms" in output


class TestRenderQuiet:
    def test_list_prints_tokens(self) -> None:
        result = ServiceResult.success(
            "list_documents", {"items": [{"token": "t1"}, {"token": "t2"}], "count": 2}
        )
        assert render_quiet(result) == "t1\nt2"

    def test_url_preferred(self) -> None:
        result = ServiceResult.success("watch_domain", {"domain": "a.io", "url": "https://a.io/"})
        assert render_quiet(result) == "https://a.io/"

    def test_token(self) -> None:
        result = ServiceResult.success("create_document", {"name": "Guide", "token": "t1"})
        assert render_quiet(result) == "t1"

    def test_status_line_fallback(self) -> None:
        assert render_quiet(ServiceResult.success("add_domain", {"domain": "a.io"})) == (
            "OK: add_domain"
        )

    def test_error(self) -> None:
        result = ServiceResult.failure("set_subdomain", "SUBDOMAIN_TAKEN", "taken")
        assert render_quiet(result) == "ERROR: set_subdomain — taken"
