import pytest
from pydantic import ValidationError

from domain.models.login import LoginAttempt, MessageType, SessionEcho, SessionMessage


def test_session_echo_keeps_only_identifier_and_remember_flag():
    echo = SessionEcho.from_credentials({"Email": "sam@example.com", "Password": "secret", "Remember": "1"})

    assert echo.model_dump() == {"email": "sam@example.com", "remember": True}


def test_session_echo_rejects_extra_fields():
    with pytest.raises(ValidationError):
        SessionEcho(email="sam@example.com", password="secret")


def test_remember_flag_follows_form_value():
    assert LoginAttempt(credentials={"Remember": "1"}).remember is True
    assert LoginAttempt(credentials={"Remember": ""}).remember is False
    assert LoginAttempt(credentials={}).remember is False
    assert LoginAttempt(credentials={"Remember": "0"}).remember is False
    assert LoginAttempt(credentials={"Remember": "on"}).remember is True


def test_session_echo_and_login_agree_on_remember_flag():
    for value, expected in (("1", True), ("0", False), ("", False), (None, False)):
        credentials = {"Email": "sam@example.com", "Remember": value}
        assert SessionEcho.from_credentials(credentials).remember is expected
        assert LoginAttempt(credentials=credentials).remember is expected


def test_session_message_maps_to_flash_category():
    assert SessionMessage(text="x", type=MessageType.BAD).category == "danger"
    assert SessionMessage(text="x").category == "success"
