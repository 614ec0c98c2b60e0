import json
import re

import pytest
import responses

from pingwarden.alert import Alert
from pingwarden.matrix import (
    MatrixAlertProvider,
    MatrixOverride,
    MatrixProviderConfig,
    build_html_message_body,
    build_plaintext_message_body,
)
from pingwarden.provider import AlertProviderError, ConditionResult, Endpoint, Result

DEFAULT_SERVER_PATTERN = re.compile(r"https://matrix-client\.matrix\.org/.*")


def _result(success):
    return Result(
        condition_results=[
            ConditionResult(condition="[CONNECTED] == true", success=success),
            ConditionResult(condition="[STATUS] == 200", success=success),
        ]
    )


def _config(server_url="", access_token="token", room="!a:example.com"):
    return MatrixProviderConfig(server_url=server_url, access_token=access_token, internal_room_id=room)


def test_is_valid_empty_is_invalid():
    provider = MatrixAlertProvider(config=_config(access_token="", room=""))
    assert provider.is_valid() is False


def test_is_valid_without_homeserver():
    assert MatrixAlertProvider(config=_config()).is_valid() is True


def test_is_valid_with_homeserver():
    assert MatrixAlertProvider(config=_config(server_url="https://example.com")).is_valid() is True


def test_is_valid_override_without_group():
    provider = MatrixAlertProvider(
        overrides=[MatrixOverride(group="", config=_config(access_token="", room=""))]
    )
    assert provider.is_valid() is False


def test_is_valid_override_without_credentials():
    provider = MatrixAlertProvider(
        overrides=[MatrixOverride(group="group", config=_config(access_token="", room=""))]
    )
    assert provider.is_valid() is False


def test_is_valid_with_valid_override():
    provider = MatrixAlertProvider(
        config=_config(),
        overrides=[MatrixOverride(group="group", config=_config(server_url="https://example.com"))],
    )
    assert provider.is_valid() is True


def test_is_valid_duplicate_override_group():
    provider = MatrixAlertProvider(
        config=_config(),
        overrides=[
            MatrixOverride(group="group", config=_config()),
            MatrixOverride(group="group", config=_config()),
        ],
    )
    assert provider.is_valid() is False


@pytest.mark.parametrize(
    "resolved, status, expect_error",
    [
        (False, 200, False),
        (False, 500, True),
        (True, 200, False),
        (True, 500, True),
    ],
)
def test_send(resolved, status, expect_error):
    alert = Alert(
        description="description-2" if resolved else "description-1",
        success_threshold=5,
        failure_threshold=3,
    )
    provider = MatrixAlertProvider(config=_config())
    endpoint = Endpoint(name="endpoint-name")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.PUT, DEFAULT_SERVER_PATTERN, status=status)
        if expect_error:
            with pytest.raises(AlertProviderError, match=str(status)):
                provider.send(endpoint, alert, _result(resolved), resolved)
        else:
            assert provider.send(endpoint, alert, _result(resolved), resolved) is None
        assert len(rsps.calls) == 1


def test_send_builds_url_and_leaves_config_untouched():
    provider = MatrixAlertProvider(config=_config())
    with responses.RequestsMock() as rsps:
        rsps.add(responses.PUT, DEFAULT_SERVER_PATTERN, status=200)
        assert provider.send(Endpoint(name="endpoint-name"), Alert(), _result(False), False) is None
        request = rsps.calls[0].request
    assert request.method == "PUT"
    assert request.headers["Content-Type"] == "application/json"
    match = re.fullmatch(
        r"https://matrix-client\.matrix\.org/_matrix/client/v3/rooms/!a:example\.com"
        r"/send/m\.room\.message/([A-Za-z0-9]+)\?access_token=token",
        request.url,
    )
    assert match is not None
    assert len(match.group(1)) == 24
    assert provider.config.server_url == ""


def test_send_uses_override_homeserver():
    provider = MatrixAlertProvider(
        config=_config(),
        overrides=[
            MatrixOverride(
                group="group",
                config=_config(server_url="https://example01.com", access_token="secret"),
            )
        ],
    )
    with responses.RequestsMock() as rsps:
        rsps.add(responses.PUT, re.compile(r"https://example01\.com/.*"), status=200)
        outcome = provider.send(
            Endpoint(name="endpoint-name", group="group"), Alert(), _result(False), False
        )
        assert outcome is None
        request = rsps.calls[0].request
    assert request.url.startswith("https://example01.com/_matrix/client/v3/rooms/")
    assert request.url.endswith("?access_token=secret")
    assert provider.overrides[0].config.server_url == "https://example01.com"


def test_send_unreachable_raises():
    provider = MatrixAlertProvider(config=_config(server_url="https://unreachable.example.com"))
    with responses.RequestsMock():
        with pytest.raises(AlertProviderError):
            provider.send(Endpoint(name="endpoint-name"), Alert(), _result(False), False)


@pytest.mark.parametrize(
    "resolved, description, expected",
    [
        (
            False,
            "description-1",
            "{\n\t\"msgtype\": \"m.text\",\n\t\"format\": \"org.matrix.custom.html\",\n\t\"body\": \"An alert for `endpoint-name` has been triggered due to having failed 3 time(s) in a row\\ndescription-1\\n\\n✕ - [CONNECTED] == true\\n✕ - [STATUS] == 200\",\n\t\"formatted_body\": \"<h3>An alert for <code>endpoint-name</code> has been triggered due to having failed 3 time(s) in a row</h3>\\n<blockquote>description-1</blockquote>\\n<h5>Condition results</h5><ul><li>❌ - <code>[CONNECTED] == true</code></li><li>❌ - <code>[STATUS] == 200</code></li></ul>\"\n}",
        ),
        (
            True,
            "description-2",
            "{\n\t\"msgtype\": \"m.text\",\n\t\"format\": \"org.matrix.custom.html\",\n\t\"body\": \"An alert for `endpoint-name` has been resolved after passing successfully 5 time(s) in a row\\ndescription-2\\n\\n✓ - [CONNECTED] == true\\n✓ - [STATUS] == 200\",\n\t\"formatted_body\": \"<h3>An alert for <code>endpoint-name</code> has been resolved after passing successfully 5 time(s) in a row</h3>\\n<blockquote>description-2</blockquote>\\n<h5>Condition results</h5><ul><li>✅ - <code>[CONNECTED] == true</code></li><li>✅ - <code>[STATUS] == 200</code></li></ul>\"\n}",
        ),
    ],
)
def test_build_request_body(resolved, description, expected):
    alert = Alert(description=description, success_threshold=5, failure_threshold=3)
    body = MatrixAlertProvider().build_request_body(
        Endpoint(name="endpoint-name"), alert, _result(resolved), resolved
    )
    assert body == expected
    assert isinstance(json.loads(body), dict)


def test_plaintext_body_without_description():
    alert = Alert(failure_threshold=3)
    body = build_plaintext_message_body(Endpoint(name="n", group="g"), alert, Result(), False)
    assert body == "An alert for `g/n` has been triggered due to having failed 3 time(s) in a row\\n"


def test_html_body_without_description():
    alert = Alert(success_threshold=2)
    body = build_html_message_body(Endpoint(name="n"), alert, Result(), True)
    assert body == (
        "<h3>An alert for <code>n</code> has been resolved after passing successfully 2 time(s) "
        "in a row</h3>\\n<h5>Condition results</h5><ul></ul>"
    )


def test_default_alert():
    assert MatrixAlertProvider(default_alert=Alert()).default_alert == Alert()
    assert MatrixAlertProvider().default_alert is None


_BASE = MatrixProviderConfig(
    server_url="https://example.com", access_token="token", internal_room_id="!a:example.com"
)
_OVERRIDE = MatrixProviderConfig(
    server_url="https://example01.com", access_token="secret", internal_room_id="!a:example01.com"
)


@pytest.mark.parametrize(
    "overrides, group, expected",
    [
        ([], "", _BASE),
        ([], "group", _BASE),
        ([MatrixOverride(group="group", config=_OVERRIDE)], "", _BASE),
        ([MatrixOverride(group="group", config=_OVERRIDE)], "group", _OVERRIDE),
    ],
)
def test_config_for_group(overrides, group, expected):
    provider = MatrixAlertProvider(config=_BASE, overrides=overrides)
    assert provider.config_for_group(group) == expected