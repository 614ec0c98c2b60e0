"""Shared types and behaviour of alert providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import requests

from pingwarden.alert import Alert

DEFAULT_TIMEOUT = 10.0


@dataclass
class Endpoint:
    """A monitored endpoint as seen by alert providers."""

    name: str = ""
    group: str = ""
    url: str = ""

    @property
    def display_name(self) -> str:
        """The name, prefixed with the group when there is one."""
        if self.group:
            return f"{self.group}/{self.name}"
        return self.name


@dataclass
class ConditionResult:
    """Outcome of one condition evaluated against an endpoint."""

    condition: str
    success: bool


@dataclass
class Result:
    """Outcome of one health check of an endpoint."""

    condition_results: list[ConditionResult] = field(default_factory=list)
    hostname: str = ""
    ip: str = ""
    dns_rcode: str = ""
    http_status: int = 0
    errors: list[str] = field(default_factory=list)


class AlertProviderError(Exception):
    """Raised when a provider fails to deliver an alert."""


class AlertProvider(ABC):
    """Base class of every alert provider."""

    default_alert: Alert | None

    @abstractmethod
    def is_valid(self) -> bool:
        """Return whether the provider's configuration is valid."""

    @abstractmethod
    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        """Send an alert; raise AlertProviderError on failure."""

    def _request(
        self,
        method: str,
        url: str,
        *,
        data: str | bytes | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> requests.Response:
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            response = requests.request(method, url, data=data, headers=headers, timeout=timeout)
        except requests.RequestException as exc:
            raise AlertProviderError(str(exc)) from exc
        if response.status_code > 399:
            raise AlertProviderError(
                f"call to provider alert returned status code {response.status_code}: {response.text}"
            )
        return response


def parse_with_default_alert(provider_default_alert: Alert | None, endpoint_alert: Alert | None) -> None:
    """Fill the unset fields of an endpoint alert from a provider's default alert."""
    if provider_default_alert is None or endpoint_alert is None:
        return
    if endpoint_alert.enabled is None:
        endpoint_alert.enabled = provider_default_alert.enabled
    if endpoint_alert.send_on_resolved is None:
        endpoint_alert.send_on_resolved = provider_default_alert.send_on_resolved
    if endpoint_alert.description is None:
        endpoint_alert.description = provider_default_alert.description
    if endpoint_alert.failure_threshold == 0:
        endpoint_alert.failure_threshold = provider_default_alert.failure_threshold
    if endpoint_alert.success_threshold == 0:
        endpoint_alert.success_threshold = provider_default_alert.success_threshold