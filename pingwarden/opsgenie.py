"""Alert provider that creates and closes Opsgenie alerts."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, Endpoint, Result

REST_API = "https://api.opsgenie.com/v2/alerts"
DEFAULT_SOURCE = "gatus"
DEFAULT_PRIORITY = "P1"
DEFAULT_ENTITY_PREFIX = "gatus-"
DEFAULT_ALIAS_PREFIX = "gatus-healthcheck-"


def to_kebab_case(value: str) -> str:
    """Lower-case a string and replace its spaces with dashes."""
    return value.replace(" ", "-").lower()


def build_key(endpoint: Endpoint) -> str:
    """Return the key identifying an endpoint's alerts."""
    name = to_kebab_case(endpoint.name)
    if not endpoint.group:
        return name
    return f"{to_kebab_case(endpoint.group)}-{name}"


@dataclass
class OpsgenieAlertProvider(AlertProvider):
    """Creates an Opsgenie alert when triggered and closes it when resolved."""

    api_key: str = ""
    priority: str = ""
    source: str = ""
    entity_prefix: str = ""
    alias_prefix: str = ""
    tags: list[str] = field(default_factory=list)
    default_alert: Alert | None = None
    timeout: float = DEFAULT_TIMEOUT

    def is_valid(self) -> bool:
        return bool(self.api_key)

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        self._send_json(REST_API, self.build_create_request_body(endpoint, alert, result, resolved))
        if resolved:
            close_url = f"{REST_API}/{self.alias(build_key(endpoint))}/close?identifierType=alias"
            self._send_json(close_url, self.build_close_request_body(endpoint, alert))
        if alert.is_sending_on_resolved():
            # Once resolved without error the key is no longer needed.
            alert.resolve_key = "" if resolved else self.alias(build_key(endpoint))

    def _send_json(self, url: str, payload: dict[str, Any]) -> None:
        self._request(
            "POST",
            url,
            data=json.dumps(payload),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"GenieKey {self.api_key}",
            },
            timeout=self.timeout,
        )

    def build_create_request_body(
        self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool
    ) -> dict[str, Any]:
        """Build the payload that creates an alert."""
        alert_description = alert.description_text()
        if resolved:
            message = f"RESOLVED: {endpoint.name} - {alert_description}"
            description = (
                f"An alert for *{endpoint.display_name}* has been resolved after passing "
                f"successfully {alert.success_threshold} time(s) in a row"
            )
        else:
            message = f"{endpoint.name} - {alert_description}"
            description = (
                f"An alert for *{endpoint.display_name}* has been triggered due to having "
                f"failed {alert.failure_threshold} time(s) in a row"
            )
        if endpoint.group:
            message = f"[{endpoint.group}] {message}"
        results = "".join(
            f"{'▣' if cr.success else '▢'} - `{cr.condition}`\n" for cr in result.condition_results
        )
        description = f"{description}\n{results}"
        key = build_key(endpoint)
        candidates = {
            "endpoint:url": endpoint.url,
            "endpoint:group": endpoint.group,
            "result:hostname": result.hostname,
            "result:ip": result.ip,
            "result:dns_code": result.dns_rcode,
            "result:errors": ",".join(result.errors),
        }
        details = {name: value for name, value in candidates.items() if value}
        if result.http_status > 0:
            details["result:http_status"] = str(result.http_status)
        payload: dict[str, Any] = {
            "message": message,
            "priority": self.priority or DEFAULT_PRIORITY,
            "source": self.source or DEFAULT_SOURCE,
            "entity": self.entity(key),
            "alias": self.alias(key),
            "description": description,
        }
        if self.tags:
            payload["tags"] = list(self.tags)
        payload["details"] = details
        return payload

    def build_close_request_body(self, endpoint: Endpoint, alert: Alert) -> dict[str, str]:
        """Build the payload that closes an alert."""
        return {
            "source": build_key(endpoint),
            "note": f"RESOLVED: {endpoint.name} - {alert.description_text()}",
        }

    def alias(self, key: str) -> str:
        """Return the alias under which the alert for a key is filed."""
        return (self.alias_prefix or DEFAULT_ALIAS_PREFIX) + key

    def entity(self, key: str) -> str:
        """Return the entity named in the alert for a key."""
        return (self.entity_prefix or DEFAULT_ENTITY_PREFIX) + key