"""Alert provider that sends events to PagerDuty."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, Endpoint, Result

REST_API_URL = "https://events.pagerduty.com/v2/enqueue"
INTEGRATION_KEY_LENGTH = 32

_logger = logging.getLogger(__name__)

_BODY_TEMPLATE = """{
  "routing_key": "%s",
  "dedup_key": "%s",
  "event_action": "%s",
  "payload": {
    "summary": "%s",
    "source": "%s",
    "severity": "critical"
  }
}"""


@dataclass
class PagerDutyOverride:
    """An integration key used instead of the default one for a given group."""

    group: str = ""
    integration_key: str = ""


@dataclass
class PagerDutyAlertProvider(AlertProvider):
    """Triggers and resolves PagerDuty incidents through the Events API."""

    integration_key: str = ""
    default_alert: Alert | None = None
    overrides: list[PagerDutyOverride] = field(default_factory=list)
    timeout: float = DEFAULT_TIMEOUT

    def _overrides_are_valid(self) -> bool:
        seen: set[str] = set()
        for override in self.overrides:
            if (
                override.group in seen
                or not override.group
                or len(override.integration_key) != INTEGRATION_KEY_LENGTH
            ):
                return False
            seen.add(override.group)
        return True

    def is_valid(self) -> bool:
        # Either the default key is well formed, or properly configured overrides exist.
        return self._overrides_are_valid() and (
            len(self.integration_key) == INTEGRATION_KEY_LENGTH or bool(self.overrides)
        )

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        response = self._request(
            "POST",
            REST_API_URL,
            data=self.build_request_body(endpoint, alert, result, resolved),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )
        if not alert.is_sending_on_resolved():
            return
        if resolved:
            alert.resolve_key = ""
            return
        try:
            payload = json.loads(response.text)
            alert.resolve_key = payload["dedup_key"]
        except (ValueError, TypeError, KeyError) as exc:
            # A response we cannot read must not cause a flood of new alerts.
            _logger.warning("Ran into error unmarshaling pagerduty response: %s", exc)

    def build_request_body(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> str:
        """Build the JSON event sent to PagerDuty."""
        if resolved:
            message = f"RESOLVED: {endpoint.display_name} - {alert.description_text()}"
            event_action = "resolve"
            resolve_key = alert.resolve_key
        else:
            message = f"TRIGGERED: {endpoint.display_name} - {alert.description_text()}"
            event_action = "trigger"
            resolve_key = ""
        return _BODY_TEMPLATE % (
            self.integration_key_for_group(endpoint.group),
            resolve_key,
            event_action,
            message,
            endpoint.name,
        )

    def integration_key_for_group(self, group: str) -> str:
        """Return the integration key of the group's override, or the default one."""
        return next(
            (override.integration_key for override in self.overrides if override.group == group),
            self.integration_key,
        )