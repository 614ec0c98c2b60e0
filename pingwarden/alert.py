"""Alert configuration attached to a monitored endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_FAILURE_THRESHOLD = 3
DEFAULT_SUCCESS_THRESHOLD = 2
_FORBIDDEN_DESCRIPTION_CHARACTERS = frozenset('"\\')


class AlertType(str, Enum):
    """Type of an alert, named after the provider that sends it."""

    CUSTOM = "custom"
    DISCORD = "discord"
    EMAIL = "email"
    GOOGLECHAT = "googlechat"
    MATRIX = "matrix"
    MATTERMOST = "mattermost"
    MESSAGEBIRD = "messagebird"
    NTFY = "ntfy"
    OPSGENIE = "opsgenie"
    PAGERDUTY = "pagerduty"
    SLACK = "slack"
    TEAMS = "teams"
    TELEGRAM = "telegram"
    TWILIO = "twilio"


class InvalidAlertDescriptionError(ValueError):
    """Raised when an alert description contains a quote or a backslash."""

    def __init__(self) -> None:
        super().__init__('alert description must not have " or \\')


@dataclass
class Alert:
    """An endpoint's alert configuration.

    ``enabled``, ``description`` and ``send_on_resolved`` are ``None`` when
    not set explicitly, so that a provider's default alert can fill them in.
    """

    type: AlertType | None = None
    enabled: bool | None = None
    failure_threshold: int = 0
    description: str | None = None
    send_on_resolved: bool | None = None
    success_threshold: int = 0
    resolve_key: str = ""
    triggered: bool = False

    def validate_and_set_defaults(self) -> None:
        """Fill in default thresholds and reject invalid descriptions."""
        if self.failure_threshold <= 0:
            self.failure_threshold = DEFAULT_FAILURE_THRESHOLD
        if self.success_threshold <= 0:
            self.success_threshold = DEFAULT_SUCCESS_THRESHOLD
        if _FORBIDDEN_DESCRIPTION_CHARACTERS.intersection(self.description_text()):
            raise InvalidAlertDescriptionError()

    def description_text(self) -> str:
        """Return the description, or an empty string if there is none."""
        return self.description or ""

    def is_enabled(self) -> bool:
        """Return whether the alert is enabled."""
        return bool(self.enabled)

    def is_sending_on_resolved(self) -> bool:
        """Return whether a notification is sent once the alert resolves."""
        return bool(self.send_on_resolved)