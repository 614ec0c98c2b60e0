# pingwarden

Alert definitions and notification providers for an endpoint health monitor.
When a monitored endpoint starts failing or recovers, pingwarden builds the
message and delivers it through the provider you configured.

## Installation

```
pip install pingwarden
```

To run the test suite:

```
pip install "pingwarden[test]"
pytest
```

## Concepts

- `Alert` (in `pingwarden.alert`) holds one endpoint's alert settings. These are
  its `AlertType`, whether it is enabled, the failure and success thresholds, an
  optional description, whether a notice is sent once the issue is resolved, and
  the `resolve_key` that some providers use to close an incident.
  `validate_and_set_defaults()` sets a failure threshold of 3 and a success
  threshold of 2 where the threshold is not above zero. It raises
  `InvalidAlertDescriptionError` when the description contains `"` or `\`.
- `Endpoint`, `Result` and `ConditionResult` (in `pingwarden.provider`) describe
  what was checked and how each condition turned out. `Endpoint.display_name` is
  `group/name`, or just the name when there is no group.
- `parse_with_default_alert(provider_default_alert, endpoint_alert)` fills the
  unset fields of an endpoint's alert from the provider's default alert.
- Every provider subclasses `AlertProvider` and offers `is_valid()` and
  `send(endpoint, alert, result, resolved)`. When delivery fails, `send` raises
  `AlertProviderError`. This covers a network error and a response status above
  399.

## Providers

| Module | Class | Delivers to |
| --- | --- | --- |
| `pingwarden.custom` | `CustomAlertProvider` | any HTTP request you describe |
| `pingwarden.email` | `EmailAlertProvider` | SMTP, as a plain-text e-mail |
| `pingwarden.matrix` | `MatrixAlertProvider` | a Matrix room |
| `pingwarden.messagebird` | `MessagebirdAlertProvider` | SMS through the Messagebird REST API |
| `pingwarden.ntfy` | `NtfyAlertProvider` | a topic on an ntfy server |
| `pingwarden.opsgenie` | `OpsgenieAlertProvider` | the Opsgenie alert API |
| `pingwarden.pagerduty` | `PagerDutyAlertProvider` | the PagerDuty Events API v2 |

Notes on individual providers:

- **Custom.** `is_valid()` only requires a URL. The method defaults to `GET`. In
  the URL and body it replaces these placeholders: `[ALERT_DESCRIPTION]`,
  `[ENDPOINT_NAME]`, `[ENDPOINT_GROUP]`, `[ENDPOINT_URL]` and
  `[ALERT_TRIGGERED_OR_RESOLVED]`. The last one becomes `TRIGGERED` or
  `RESOLVED`, unless you remap it with
  `placeholders={"ALERT_TRIGGERED_OR_RESOLVED": {...}}`.
  `build_http_request()` returns the `HttpRequest` without sending it.
- **Email.** The login user is `username`, or `sender` when no username is set.
  Port 465 uses implicit TLS. On other ports the provider uses STARTTLS when the
  server offers it. `to` may hold several comma-separated addresses.
- **Matrix.** Messages go to `https://matrix-client.matrix.org` unless
  `MatrixProviderConfig.server_url` is set.
- **ntfy.** `is_valid()` fills in the default URL `https://ntfy.sh` and priority
  3. The priority must be between 1 and 5.
- **Opsgenie.** The provider creates an alert. When resolved, it also closes that
  alert by its alias. The source defaults to `gatus`, the priority to `P1`, the
  alias prefix to `gatus-healthcheck-` and the entity prefix to `gatus-`.
- **PagerDuty.** Integration keys must be 32 characters long. When the alert
  sends on resolve, `send` stores the `dedup_key` returned by PagerDuty in
  `alert.resolve_key`. The resolve event later uses that key.

The email, Matrix and PagerDuty providers accept per-group overrides:
`EmailOverride`, `MatrixOverride` and `PagerDutyOverride`. An endpoint in an
overridden group is alerted through that override's target instead of the
default one. Each group may appear only once, and its target must be set, or
`is_valid()` returns `False`.

## Example

```python
from pingwarden.alert import Alert, AlertType
from pingwarden.provider import ConditionResult, Endpoint, Result
from pingwarden.ntfy import NtfyAlertProvider

provider = NtfyAlertProvider(topic="status")
alert = Alert(type=AlertType.NTFY, enabled=True, description="API is down")
alert.validate_and_set_defaults()

endpoint = Endpoint(name="api", group="core", url="https://api.example.com/health")
result = Result(condition_results=[ConditionResult(condition="[STATUS] == 200", success=False)])

if provider.is_valid():
    provider.send(endpoint, alert, result, resolved=False)
```

An e-mail provider is set up the same way:

```python
from pingwarden.email import EmailAlertProvider

password = "password"
provider = EmailAlertProvider(
    sender="alerts@example.com",
    password=password,
    host="smtp.example.com",
    port=587,
    to="ops@example.com,oncall@example.com",
)
```

## What this package does not do

pingwarden only builds and delivers alert notifications:

- It does not run health checks or schedule them.
- It does not read configuration files.
- It has no command-line program.
- It does not map alert types to configured providers. You choose the provider
  yourself.

`AlertType` lists more types than this package has providers for. For example,
`DISCORD`, `SLACK`, `TEAMS`, `TELEGRAM` and `TWILIO` have no provider class
here.