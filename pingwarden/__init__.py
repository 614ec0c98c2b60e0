"""Alert definitions and notification providers (custom HTTP, e-mail, Matrix, Messagebird, ntfy, Opsgenie, PagerDuty)."""

__version__ = "0.1.0"