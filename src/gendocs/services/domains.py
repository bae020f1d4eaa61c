"""DomainService — subdomains, custom domains and certificate provisioning.

Attaching a custom domain is two steps so the command can report progress
in between:

1. :meth:`DomainService.add_domain` registers the domain remotely.
2. :meth:`DomainService.watch` runs a :class:`ProvisioningMonitor` and maps
   its Outcome onto a ServiceResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gendocs.domain.documents import document_from_payload
from gendocs.domain.provisioning import (
    DomainAttachmentRequest,
    FailedTerminal,
    FailureReason,
    Outcome,
    Succeeded,
)
from gendocs.infrastructure.api import ApiError, GendocsApiError
from gendocs.services.base import BaseService
from gendocs.services.monitor import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT, ProvisioningMonitor
from gendocs.services.result import ServiceResult
from gendocs.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from gendocs.infrastructure.api import GendocsClient

TIMEOUT_MESSAGE = "Something seems to have gone wrong. Please contact us through our github."


class DomainService(BaseService):
    """Handles subdomain selection and custom domain attachment."""

    def __init__(
        self,
        client: GendocsClient,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        super().__init__(client)
        self._poll_interval = poll_interval
        self._timeout = timeout

    @traced
    def add_domain(self, token: str, domain_name: str) -> ServiceResult:
        """Register *domain_name* against the document owning *token*."""
        op = "add_domain"
        request = DomainAttachmentRequest(token=token, domain_name=domain_name.strip())
        if not request.domain_name:
            return ServiceResult.failure(op, "VALIDATION_FAILED", "Domain must not be empty")

        try:
            self._client.add_domain(request.token, request.domain_name)
        except GendocsApiError as exc:
            return self._api_error(op, exc)
        return ServiceResult.success(op, {"domain": request.domain_name})

    @traced
    def watch(self, domain_name: str) -> ServiceResult:
        """Block until certificate provisioning for *domain_name* ends."""
        monitor = self.create_monitor()
        with trace_span("provisioning_monitor") as span:
            outcome = monitor.run(domain_name)
            if span is not None:
                span.annotate("polls", monitor.polls_started)
                span.annotate("skipped_ticks", monitor.skipped_ticks)
        result = outcome_to_result(domain_name, outcome)
        if monitor.transient_failures:
            warning = f"{monitor.transient_failures} status check(s) failed and were retried"
            result = result.model_copy(update={"warnings": [*result.warnings, warning]})
        return result

    def create_monitor(self) -> ProvisioningMonitor:
        return ProvisioningMonitor(
            self._fetch_status,
            poll_interval=self._poll_interval,
            timeout=self._timeout,
        )

    @traced
    def set_subdomain(self, token: str, subdomain: str) -> ServiceResult:
        """Claim *subdomain* for the document owning *token*."""
        op = "set_subdomain"
        subdomain = subdomain.strip()
        if not subdomain:
            return ServiceResult.failure(op, "VALIDATION_FAILED", "Subdomain must not be empty")

        try:
            payload = self._client.try_adding_subdomain(token, subdomain)
        except ApiError as exc:
            if exc.status_code == 400:
                return ServiceResult.failure(
                    op,
                    "SUBDOMAIN_TAKEN",
                    f'Subdomain "{subdomain}" has already been taken.',
                    {"subdomain": subdomain},
                )
            return self._api_error(op, exc)
        except GendocsApiError as exc:
            return self._api_error(op, exc)

        doc = document_from_payload(payload)
        return ServiceResult.success(
            op, {"subdomain": subdomain, "full_subdomain": doc.full_subdomain, "name": doc.name}
        )

    async def _fetch_status(self, domain_name: str) -> dict[str, Any]:
        return await self._client.domain_status(domain_name)


def outcome_to_result(domain_name: str, outcome: Outcome) -> ServiceResult:
    """Map a terminal provisioning Outcome onto a ``watch_domain`` ServiceResult."""
    op = "watch_domain"
    if isinstance(outcome, Succeeded):
        return ServiceResult.success(
            op, {"domain": domain_name, "url": outcome.url, "state": str(outcome.state)}
        )

    detail = {"domain": domain_name, "state": str(outcome.state)}
    if isinstance(outcome, FailedTerminal):
        if outcome.reason is FailureReason.INVALID_DOMAIN:
            return ServiceResult.failure(
                op,
                "INVALID_DOMAIN",
                f'The domain "{domain_name}" seems to be malformed. '
                "Please make sure your domain is in the format somedomain.com",
                detail,
            )
        return ServiceResult.failure(
            op,
            "PROVISIONING_ERROR",
            "Something seems to have gone wrong while trying to generate your "
            f"ssl certificates. Error code: {outcome.context}",
            {**detail, "context": outcome.context},
        )
    return ServiceResult.failure(op, "PROVISIONING_TIMEOUT", TIMEOUT_MESSAGE, detail)
