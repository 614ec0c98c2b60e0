"""Alert provider that publishes notifications to an ntfy server."""

from __future__ import annotations

import json
from dataclasses import dataclass

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, Endpoint, Result

DEFAULT_URL = "https://ntfy.sh"
DEFAULT_PRIORITY = 3
_MAX_PRIORITY = 5

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _marshal(payload: dict) -> bytes:
    """Encode a payload as compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    for character, escaped in _HTML_ESCAPES.items():
        text = text.replace(character, escaped)
    return text.encode("utf-8")


@dataclass
class NtfyAlertProvider(AlertProvider):
    """Publishes alerts to a topic on an ntfy server."""

    topic: str = ""
    url: str = ""
    priority: int = 0
    default_alert: Alert | None = None
    timeout: float = DEFAULT_TIMEOUT

    def is_valid(self) -> bool:
        """Fill in the default URL and priority, then check the configuration."""
        if not self.url:
            self.url = DEFAULT_URL
        if self.priority == 0:
            self.priority = DEFAULT_PRIORITY
        return bool(self.url) and bool(self.topic) and 0 < self.priority <= _MAX_PRIORITY

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        self._request(
            "POST",
            self.url,
            data=self.build_request_body(endpoint, alert, result, resolved),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def build_request_body(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> bytes:
        """Build the JSON payload of the notification."""
        alert_description = alert.description_text()
        if alert_description:
            message = f"{endpoint.display_name} - {alert_description}"
        else:
            message = endpoint.display_name
        tag = "white_check_mark" if resolved else "x"
        return _marshal(
            {
                "topic": self.topic,
                "title": "Gatus",
                "message": message,
                "tags": [tag],
                "priority": self.priority,
            }
        )