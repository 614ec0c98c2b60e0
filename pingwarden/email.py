"""Alert provider that sends e-mails over SMTP."""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass, field
from email.message import EmailMessage

from pingwarden.alert import Alert
from pingwarden.provider import DEFAULT_TIMEOUT, AlertProvider, AlertProviderError, Endpoint, Result

_MAX_PORT = 65535
_IMPLICIT_TLS_PORT = 465


@dataclass
class EmailOverride:
    """Recipients used instead of the default ones for a given group."""

    group: str = ""
    to: str = ""


@dataclass
class EmailAlertProvider(AlertProvider):
    """Sends alerts as plain-text e-mails."""

    sender: str = ""
    username: str = ""
    password: str = ""
    host: str = ""
    port: int = 0
    to: str = ""
    default_alert: Alert | None = None
    overrides: list[EmailOverride] = field(default_factory=list)
    timeout: float = DEFAULT_TIMEOUT

    def _overrides_are_valid(self) -> bool:
        seen: set[str] = set()
        for override in self.overrides:
            if override.group in seen or not override.group or not override.to:
                return False
            seen.add(override.group)
        return True

    def is_valid(self) -> bool:
        return (
            self._overrides_are_valid()
            and bool(self.sender)
            and bool(self.password)
            and bool(self.host)
            and bool(self.to)
            and 0 < self.port < _MAX_PORT
        )

    def send(self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool) -> None:
        subject, body = self.build_message_subject_and_body(endpoint, alert, result, resolved)
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = ", ".join(
            address.strip() for address in self.recipients_for_group(endpoint.group).split(",")
        )
        message["Subject"] = subject
        message.set_content(body)
        username = self.username or self.sender
        try:
            if self.port == _IMPLICIT_TLS_PORT:
                server = smtplib.SMTP_SSL(
                    self.host, self.port, timeout=self.timeout, context=ssl.create_default_context()
                )
            else:
                server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
            with server as connection:
                if self.port != _IMPLICIT_TLS_PORT:
                    connection.ehlo()
                    if connection.has_extn("starttls"):
                        connection.starttls(context=ssl.create_default_context())
                        connection.ehlo()
                connection.login(username, self.password)
                connection.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise AlertProviderError(str(exc)) from exc

    def build_message_subject_and_body(
        self, endpoint: Endpoint, alert: Alert, result: Result, resolved: bool
    ) -> tuple[str, str]:
        """Return the subject and the plain-text body of the message."""
        name = endpoint.display_name
        if resolved:
            subject = f"[{name}] Alert resolved"
            message = (
                f"An alert for {name} has been resolved after passing successfully "
                f"{alert.success_threshold} time(s) in a row"
            )
        else:
            subject = f"[{name}] Alert triggered"
            message = (
                f"An alert for {name} has been triggered due to having failed "
                f"{alert.failure_threshold} time(s) in a row"
            )
        results = "".join(
            f"{'✅' if cr.success else '❌'} {cr.condition}\n" for cr in result.condition_results
        )
        alert_description = alert.description_text()
        description = f"\n\nAlert description: {alert_description}" if alert_description else ""
        return subject, f"{message}{description}\n\nCondition results:\n{results}"

    def recipients_for_group(self, group: str) -> str:
        """Return the comma-separated recipients for a group."""
        return next((override.to for override in self.overrides if override.group == group), self.to)