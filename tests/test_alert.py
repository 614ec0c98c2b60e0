import pytest

from pingwarden.alert import Alert, AlertType, InvalidAlertDescriptionError


def test_validate_and_set_defaults_valid_empty():
    alert = Alert(description=None, failure_threshold=0, success_threshold=0)
    alert.validate_and_set_defaults()
    assert alert.failure_threshold == 3
    assert alert.success_threshold == 2


def test_validate_and_set_defaults_invalid_description():
    alert = Alert(description='"', failure_threshold=10, success_threshold=5)
    with pytest.raises(InvalidAlertDescriptionError):
        alert.validate_and_set_defaults()
    assert alert.failure_threshold == 10
    assert alert.success_threshold == 5


def test_validate_rejects_backslash():
    alert = Alert(description="a\\b")
    with pytest.raises(InvalidAlertDescriptionError):
        alert.validate_and_set_defaults()


def test_validate_negative_thresholds_get_defaults():
    alert = Alert(description="fine", failure_threshold=-1, success_threshold=-4)
    alert.validate_and_set_defaults()
    assert (alert.failure_threshold, alert.success_threshold) == (3, 2)


@pytest.mark.parametrize("value, expected", [(None, False), (False, False), (True, True)])
def test_is_enabled(value, expected):
    assert Alert(enabled=value).is_enabled() is expected


def test_description_text():
    assert Alert(description=None).description_text() == ""
    assert Alert(description="description").description_text() == "description"


@pytest.mark.parametrize("value, expected", [(None, False), (False, False), (True, True)])
def test_is_sending_on_resolved(value, expected):
    assert Alert(send_on_resolved=value).is_sending_on_resolved() is expected


def test_alert_type_values():
    assert AlertType("discord") is AlertType.DISCORD
    assert AlertType.PAGERDUTY.value == "pagerduty"