"""Alert provider that sends SMS messages through Messagebird."""

from __future__ import annotations

import json
from dataclasses import dataclass

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, Endpoint, Result

REST_API_URL = "https://rest.messagebird.com/messages"

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
class MessagebirdAlertProvider(AlertProvider):
    """Sends alerts as SMS messages."""

    access_key: str = ""
    originator: str = ""
    recipients: str = ""
    default_alert: Alert | None = None
    timeout: float = DEFAULT_TIMEOUT

    def is_valid(self) -> bool:
        return bool(self.access_key) and bool(self.originator) and bool(self.recipients)

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        self._request(
            "POST",
            REST_API_URL,
            data=self.build_request_body(endpoint, alert, result, resolved),
            headers={
                "Content-Type": "application/json",
                "Authorization": f"AccessKey {self.access_key}",
            },
            timeout=self.timeout,
        )

    def build_request_body(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> bytes:
        """Build the JSON payload of the message."""
        state = "RESOLVED" if resolved else "TRIGGERED"
        message = f"{state}: {endpoint.display_name} - {alert.description_text()}"
        return _marshal(
            {
                "originator": self.originator,
                "recipients": self.recipients,
                "body": message,
            }
        )