"""Alert provider that sends a user-defined HTTP request."""

from __future__ import annotations

from dataclasses import dataclass, field

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, Endpoint, Result

_STATE_PLACEHOLDER = "ALERT_TRIGGERED_OR_RESOLVED"


@dataclass
class HttpRequest:
    """An HTTP request ready to be sent."""

    method: str
    url: str
    body: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class CustomAlertProvider(AlertProvider):
    """Sends an alert as an arbitrary HTTP request with placeholders filled in."""

    url: str = ""
    method: str = ""
    body: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    placeholders: dict[str, dict[str, str]] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    default_alert: Alert | None = None

    def is_valid(self) -> bool:
        return bool(self.url)

    def alert_state_placeholder_value(self, resolved: bool) -> str:
        """Return the value substituted for [ALERT_TRIGGERED_OR_RESOLVED]."""
        status = "RESOLVED" if resolved else "TRIGGERED"
        return self.placeholders.get(_STATE_PLACEHOLDER, {}).get(status, status)

    def build_http_request(self, endpoint: Endpoint, alert: Alert, resolved: bool) -> HttpRequest:
        """Build the request with every placeholder in URL and body replaced."""
        replacements = {
            "[ALERT_DESCRIPTION]": alert.description_text(),
            "[ENDPOINT_NAME]": endpoint.name,
            "[ENDPOINT_GROUP]": endpoint.group,
            "[ENDPOINT_URL]": endpoint.url,
            f"[{_STATE_PLACEHOLDER}]": self.alert_state_placeholder_value(resolved),
        }
        body, url = self.body, self.url
        for placeholder, value in replacements.items():
            body = body.replace(placeholder, value)
            url = url.replace(placeholder, value)
        return HttpRequest(method=self.method or "GET", url=url, body=body, headers=dict(self.headers))

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        request = self.build_http_request(endpoint, alert, resolved)
        self._request(request.method, request.url, data=request.body, headers=request.headers, timeout=self.timeout)