"""Tests for trigger action parsing."""

import pytest

from smart_hub.core import Command, MalformedActionError
from smart_hub.automation import DeviceAction, parse_action


@pytest.mark.parametrize(
    "text,expected",
    [
        ("turnOff(1)", DeviceAction(1, Command.TURN_OFF)),
        ("turnOn(3)", DeviceAction(3, Command.TURN_ON)),
        (" turn_on ( 12 ) ", DeviceAction(12, Command.TURN_ON)),
        ("Turn Off(2)", DeviceAction(2, Command.TURN_OFF)),
    ],
)
def test_parse_valid(text, expected):
    assert parse_action(text) == expected


def test_structured_action_passthrough():
    action = DeviceAction(5, Command.TURN_ON)
    assert parse_action(action) is action


@pytest.mark.parametrize("text", ["", "turnOff", "turnOff()", "turnOff(x)", "explode(1)"])
def test_parse_malformed(text):
    with pytest.raises(MalformedActionError):
        parse_action(text)


def test_parse_unsupported_type():
    with pytest.raises(MalformedActionError):
        parse_action(42)
