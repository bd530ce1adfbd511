from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field

from rules.core import (
    PRESET_SIDES,
    RollError,
    RollKind,
    RollResult,
    parse_custom_sides,
    parse_dice_count,
    parse_modifier,
    roll_custom,
    roll_preset,
)

logger = logging.getLogger(__name__)

INITIAL_DICE_TEXT = "1"
INITIAL_MODIFIER_TEXT = "0"
INITIAL_CUSTOM_SIDES_TEXT = "3"


@dataclass(frozen=True)
class LastRoll:
    sides: int
    dice_count: int
    kind: RollKind

    def as_dict(self) -> dict:
        return {"sides": self.sides, "dice_count": self.dice_count, "kind": self.kind}


@dataclass
class SessionState:
    """Input fields, roll history and last-roll memory for one user session.

    Field values are kept as the raw text the view hands over and are only
    parsed when a roll action fires.
    """

    seed: int | None = None
    max_dice_count: int | None = None
    dice_text: str = INITIAL_DICE_TEXT
    modifier_text: str = INITIAL_MODIFIER_TEXT
    custom_sides_text: str = INITIAL_CUSTOM_SIDES_TEXT
    _history: list[str] = field(default_factory=list, repr=False)
    last_roll: LastRoll | None = None
    rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def fields(self) -> dict[str, str]:
        return {
            "dice": self.dice_text,
            "modifier": self.modifier_text,
            "custom_sides": self.custom_sides_text,
        }

    def set_fields(
        self,
        *,
        dice: str | None = None,
        modifier: str | None = None,
        custom_sides: str | None = None,
    ) -> None:
        if dice is not None:
            self.dice_text = dice
        if modifier is not None:
            self.modifier_text = modifier
        if custom_sides is not None:
            self.custom_sides_text = custom_sides

    def _current_dice_count(self) -> int:
        return parse_dice_count(self.dice_text, max_count=self.max_dice_count)

    def _current_modifier(self) -> int:
        return parse_modifier(self.modifier_text)

    def record_roll(
        self,
        kind: RollKind,
        sides: int,
        dice_count: int,
        result: RollResult,
    ) -> None:
        self._history.insert(0, result.display_text)
        self.last_roll = LastRoll(sides=sides, dice_count=dice_count, kind=kind)

    def clear_history(self) -> None:
        self._history.clear()
        logger.info("History cleared")

    def press_clear(self) -> None:
        self.clear_history()

    def press_preset(self, sides: int) -> RollResult:
        if sides not in PRESET_SIDES:
            raise RollError(f"Unsupported preset die: d{sides}")
        return self._roll_preset(sides)

    def press_custom(self) -> RollResult:
        sides = parse_custom_sides(self.custom_sides_text)
        dice_count = self._current_dice_count()
        result = roll_custom(dice_count, sides, self._current_modifier(), self.rng)
        self.record_roll("custom", sides, dice_count, result)
        return result

    def on_modifier_submit(
        self, current_modifier: str | int | None = None
    ) -> RollResult | None:
        last = self.last_roll
        if last is None:
            logger.info("Modifier submitted before any roll; nothing to replay")
            return None
        if current_modifier is not None:
            self.modifier_text = str(current_modifier)
        if last.kind == "preset":
            return self._roll_preset(last.sides)
        self.custom_sides_text = str(last.sides)
        return self.press_custom()

    def _roll_preset(self, sides: int) -> RollResult:
        dice_count = self._current_dice_count()
        result = roll_preset(dice_count, sides, self._current_modifier(), self.rng)
        self.record_roll("preset", sides, dice_count, result)
        return result

    def snapshot(self) -> dict:
        return {
            "fields": self.fields,
            "history": list(self._history),
            "last_roll": self.last_roll.as_dict() if self.last_roll else None,
        }
