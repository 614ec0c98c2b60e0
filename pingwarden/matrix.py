"""Alert provider that posts messages to a Matrix room."""

from __future__ import annotations

import random
import string
from dataclasses import dataclass, field, replace
from urllib.parse import quote, quote_plus

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, Endpoint, Result

DEFAULT_HOMESERVER_URL = "https://matrix-client.matrix.org"
_TRANSACTION_ID_LENGTH = 24
_TRANSACTION_ID_ALPHABET = string.ascii_letters + string.digits
# Characters left as they are when a room id is put into a path segment.
_PATH_SEGMENT_SAFE = "!:@$&+=*'()~"

_BODY_TEMPLATE = """{
\t"msgtype": "m.text",
\t"format": "org.matrix.custom.html",
\t"body": "%s",
\t"formatted_body": "%s"
}"""


@dataclass
class MatrixProviderConfig:
    """Where and as whom messages are sent."""

    server_url: str = ""
    access_token: str = ""
    internal_room_id: str = ""


@dataclass
class MatrixOverride:
    """A configuration used instead of the default one for a given group."""

    group: str = ""
    config: MatrixProviderConfig = field(default_factory=MatrixProviderConfig)


@dataclass
class MatrixAlertProvider(AlertProvider):
    """Sends alerts to a Matrix room as a bot user."""

    config: MatrixProviderConfig = field(default_factory=MatrixProviderConfig)
    default_alert: Alert | None = None
    overrides: list[MatrixOverride] = field(default_factory=list)
    timeout: float = DEFAULT_TIMEOUT

    def _overrides_are_valid(self) -> bool:
        seen: set[str] = set()
        for override in self.overrides:
            if (
                override.group in seen
                or not override.group
                or not override.config.access_token
                or not override.config.internal_room_id
            ):
                return False
            seen.add(override.group)
        return True

    def is_valid(self) -> bool:
        return (
            self._overrides_are_valid()
            and bool(self.config.access_token)
            and bool(self.config.internal_room_id)
        )

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        config = self.config_for_group(endpoint.group)
        server_url = config.server_url or DEFAULT_HOMESERVER_URL
        # Every event needs its own transaction id.
        transaction_id = "".join(random.choices(_TRANSACTION_ID_ALPHABET, k=_TRANSACTION_ID_LENGTH))
        url = (
            f"{server_url}/_matrix/client/v3/rooms/"
            f"{quote(config.internal_room_id, safe=_PATH_SEGMENT_SAFE)}"
            f"/send/m.room.message/{transaction_id}"
            f"?access_token={quote_plus(config.access_token)}"
        )
        self._request(
            "PUT",
            url,
            data=self.build_request_body(endpoint, alert, result, resolved),
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def build_request_body(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> str:
        """Build the JSON event sent to the room."""
        return _BODY_TEMPLATE % (
            build_plaintext_message_body(endpoint, alert, result, resolved),
            build_html_message_body(endpoint, alert, result, resolved),
        )

    def config_for_group(self, group: str) -> MatrixProviderConfig:
        """Return a copy of the group's override configuration, or of the default one."""
        chosen = next(
            (override.config for override in self.overrides if override.group == group),
            self.config,
        )
        return replace(chosen)


def build_plaintext_message_body(endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> str:
    """Build the plain-text message, with newlines escaped for JSON."""
    if resolved:
        message = (
            f"An alert for `{endpoint.display_name}` has been resolved after passing "
            f"successfully {alert.success_threshold} time(s) in a row"
        )
    else:
        message = (
            f"An alert for `{endpoint.display_name}` has been triggered due to having "
            f"failed {alert.failure_threshold} time(s) in a row"
        )
    results = "".join(
        f"\\n{'✓' if cr.success else '✕'} - {cr.condition}" for cr in result.condition_results
    )
    alert_description = alert.description_text()
    description = f"\\n{alert_description}" if alert_description else ""
    return f"{message}{description}\\n{results}"


def build_html_message_body(endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> str:
    """Build the HTML message, with newlines escaped for JSON."""
    if resolved:
        message = (
            f"An alert for <code>{endpoint.display_name}</code> has been resolved after passing "
            f"successfully {alert.success_threshold} time(s) in a row"
        )
    else:
        message = (
            f"An alert for <code>{endpoint.display_name}</code> has been triggered due to having "
            f"failed {alert.failure_threshold} time(s) in a row"
        )
    results = "".join(
        f"<li>{'✅' if cr.success else '❌'} - <code>{cr.condition}</code></li>"
        for cr in result.condition_results
    )
    alert_description = alert.description_text()
    description = f"\\n<blockquote>{alert_description}</blockquote>" if alert_description else ""
    return f"<h3>{message}</h3>{description}\\n<h5>Condition results</h5><ul>{results}</ul>"