import pytest

from rules.core import RollError
from rules.session import LastRoll, SessionState


def test_initial_state() -> None:
    session = SessionState(seed=1)

    assert session.history == ()
    assert session.last_roll is None
    assert session.fields == {"dice": "1", "modifier": "0", "custom_sides": "3"}


def test_rolls_prepend_to_history() -> None:
    session = SessionState(seed=42)

    first = session.press_preset(20)
    second = session.press_preset(6)

    assert session.history == (second.display_text, first.display_text)
    assert session.last_roll == LastRoll(sides=6, dice_count=1, kind="preset")


def test_fields_are_read_at_roll_time() -> None:
    session = SessionState(seed=3)
    session.set_fields(dice="4", modifier="2")

    result = session.press_preset(8)

    assert result.dice_count == 4
    assert result.modifier == 2
    assert len(result.individual_rolls) == 4
    assert result.total == sum(result.individual_rolls) + 2


def test_invalid_fields_fall_back_to_defaults() -> None:
    session = SessionState(seed=3)
    session.set_fields(dice="", modifier="abc", custom_sides="")

    result = session.press_custom()

    assert result.dice_count == 1
    assert result.modifier == 0
    assert result.sides == 10
    assert session.last_roll == LastRoll(sides=10, dice_count=1, kind="custom")
    # Normalisation does not rewrite the visible fields.
    assert session.fields == {"dice": "", "modifier": "abc", "custom_sides": ""}


def test_unknown_preset_is_rejected() -> None:
    session = SessionState(seed=1)

    with pytest.raises(RollError):
        session.press_preset(7)
    assert session.history == ()
    assert session.last_roll is None


def test_clear_history_keeps_last_roll() -> None:
    session = SessionState(seed=5)
    for sides in (4, 6, 100):
        session.press_preset(sides)

    session.clear_history()

    assert session.history == ()
    assert session.last_roll == LastRoll(sides=100, dice_count=1, kind="preset")


def test_modifier_submit_without_roll_is_noop() -> None:
    session = SessionState(seed=5)

    assert session.on_modifier_submit("4") is None
    assert session.history == ()
    assert session.fields == {"dice": "1", "modifier": "0", "custom_sides": "3"}


def test_modifier_submit_replays_preset() -> None:
    session = SessionState(seed=11)
    session.press_preset(20)

    result = session.on_modifier_submit(5)

    assert result is not None
    assert result.kind == "preset"
    assert result.sides == 20
    assert result.dice_count == 1
    assert result.modifier == 5
    assert len(session.history) == 2
    assert session.history[0] == result.display_text
    assert session.fields["modifier"] == "5"


def test_modifier_replay_uses_current_dice_count() -> None:
    session = SessionState(seed=11)
    session.press_preset(6)
    session.set_fields(dice="3")

    result = session.on_modifier_submit()

    assert result.dice_count == 3
    assert session.last_roll == LastRoll(sides=6, dice_count=3, kind="preset")


def test_modifier_submit_replays_custom_and_syncs_sides_field() -> None:
    session = SessionState(seed=9)
    session.set_fields(custom_sides="13")
    session.press_custom()
    session.set_fields(custom_sides="99")

    result = session.on_modifier_submit("-1")

    assert result.kind == "custom"
    assert result.sides == 13
    assert result.modifier == -1
    assert session.fields["custom_sides"] == "13"
    assert len(session.history) == 2


def test_replay_after_clear_starts_fresh_history() -> None:
    session = SessionState(seed=2)
    session.press_preset(12)
    session.clear_history()

    session.on_modifier_submit("1")

    assert len(session.history) == 1


def test_dice_count_cap_applies_to_fields() -> None:
    session = SessionState(seed=2, max_dice_count=10)
    session.set_fields(dice="500")

    result = session.press_preset(4)

    assert result.dice_count == 10
    assert session.last_roll.dice_count == 10


def test_overlong_fields_roll_with_defaults() -> None:
    session = SessionState(seed=4, max_dice_count=1000)
    session.set_fields(dice="9" * 5000, modifier="9" * 5000, custom_sides="9" * 5000)

    preset = session.press_preset(6)
    custom = session.press_custom()

    assert preset.dice_count == 1
    assert preset.modifier == 0
    assert custom.sides == 10
    assert len(session.history) == 2
