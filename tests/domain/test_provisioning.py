"""Tests for provisioning domain models."""

import pytest

from gendocs.domain.provisioning import (
    DomainAttachmentRequest,
    Failed,
    FailedTerminal,
    FailureReason,
    MonitorState,
    Pending,
    Ready,
    Succeeded,
    TimedOut,
    classify_failure,
    parse_poll_result,
    site_url,
)


class TestParsePollResult:
    def test_ok_is_ready(self) -> None:
        assert parse_poll_result({"status": "ok"}) == Ready()

    def test_pending(self) -> None:
        assert parse_poll_result({"status": "pending"}) == Pending()

    def test_error_keeps_context(self) -> None:
        result = parse_poll_result({"status": "error", "context": "invalid_domain"})
        assert result == Failed(context="invalid_domain")

    def test_error_without_context(self) -> None:
        assert parse_poll_result({"status": "error"}) == Failed(context="")

    def test_status_is_case_insensitive(self) -> None:
        assert parse_poll_result({"status": "OK"}) == Ready()

    @pytest.mark.parametrize("payload", [{}, {"status": "queued"}, {"status": None}])
    def test_unknown_status_keeps_polling(self, payload: dict[str, object]) -> None:
        assert isinstance(parse_poll_result(payload), Pending)


class TestClassifyFailure:
    def test_invalid_domain(self) -> None:
        outcome = classify_failure(Failed(context="invalid_domain"))
        assert outcome.reason is FailureReason.INVALID_DOMAIN

    def test_other_context(self) -> None:
        outcome = classify_failure(Failed(context="dns_mismatch"))
        assert outcome.reason is FailureReason.PROVISIONING_ERROR
        assert outcome.context == "dns_mismatch"


class TestOutcomes:
    def test_states(self) -> None:
        assert Succeeded(url="https://a.b/").state is MonitorState.SUCCEEDED
        failed = FailedTerminal(reason=FailureReason.PROVISIONING_ERROR)
        assert failed.state is MonitorState.FAILED_TERMINAL
        assert TimedOut().state is MonitorState.TIMED_OUT

    def test_only_running_is_not_terminal(self) -> None:
        assert not MonitorState.RUNNING.terminal
        assert all(s.terminal for s in MonitorState if s is not MonitorState.RUNNING)

    def test_site_url(self) -> None:
        assert site_url("docs.example.com") == "https://docs.example.com/"


class TestDomainAttachmentRequest:
    def test_frozen(self) -> None:
        request = DomainAttachmentRequest(token="tok", domain_name="docs.example.com")
        with pytest.raises(Exception):
            request.domain_name = "other.example.com"  # type: ignore[misc]
