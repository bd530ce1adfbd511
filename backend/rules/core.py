from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import Literal, Protocol

logger = logging.getLogger(__name__)

RollKind = Literal["preset", "custom"]

PRESET_SIDES: tuple[int, ...] = (4, 6, 8, 10, 12, 20, 100)

DEFAULT_DICE_COUNT = 1
DEFAULT_MODIFIER = 0
DEFAULT_CUSTOM_SIDES = 10

LEADING_INTEGER_PATTERN = re.compile(r"^\s*([+-]?)([0-9]+)")
MAX_INTEGER_DIGITS = 18


class RollError(ValueError):
    pass


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class RollResult:
    kind: RollKind
    dice_count: int
    sides: int
    modifier: int
    individual_rolls: tuple[int, ...]
    sum: int
    total: int
    display_text: str

    def as_dict(self) -> dict:
        return {
            "kind": self.kind,
            "dice_count": self.dice_count,
            "sides": self.sides,
            "modifier": self.modifier,
            "individual_rolls": list(self.individual_rolls),
            "sum": self.sum,
            "total": self.total,
            "display_text": self.display_text,
        }


def parse_int_field(text: str | int | None, default: int) -> int:
    """Read a leading integer from free text; zero or junk yields ``default``.

    ``"3abc"`` reads as 3 and ``"2.7"`` as 2. A value that parses to 0 is
    treated the same as unparseable input, as is a digit run longer than
    ``MAX_INTEGER_DIGITS``.
    """
    if isinstance(text, int):
        return text or default
    if not text:
        return default
    match = LEADING_INTEGER_PATTERN.match(text)
    if not match:
        return default
    sign, digits = match.groups()
    if len(digits) > MAX_INTEGER_DIGITS:
        return default
    return int(sign + digits) or default


def parse_dice_count(text: str | int | None, *, max_count: int | None = None) -> int:
    count = parse_int_field(text, DEFAULT_DICE_COUNT)
    if count < 1:
        return DEFAULT_DICE_COUNT
    if max_count and count > max_count:
        logger.warning("Dice count %s capped at %s", count, max_count)
        return max_count
    return count


def parse_modifier(text: str | int | None) -> int:
    return parse_int_field(text, DEFAULT_MODIFIER)


def parse_custom_sides(text: str | int | None) -> int:
    sides = parse_int_field(text, DEFAULT_CUSTOM_SIDES)
    if sides < 1:
        return DEFAULT_CUSTOM_SIDES
    return sides


def _draw(dice_count: int, sides: int, rng: RandomSource | None) -> tuple[int, ...]:
    source = rng or random
    return tuple(source.randint(1, sides) for _ in range(dice_count))


def _modifier_suffix(modifier: int) -> str:
    # "+ -3" for negative modifiers is the established rendering.
    return f" + {modifier}" if modifier != 0 else ""


def roll_preset(
    dice_count: int,
    sides: int,
    modifier: int,
    rng: RandomSource | None = None,
) -> RollResult:
    rolls = _draw(dice_count, sides, rng)
    subtotal = sum(rolls)
    total = subtotal + modifier

    text = f"{dice_count}d{sides}"
    if dice_count > 1:
        text += f" ({', '.join(str(value) for value in rolls)})"
    text += _modifier_suffix(modifier)
    text += f" = {total}"

    logger.debug("Preset roll %s", text)
    return RollResult(
        kind="preset",
        dice_count=dice_count,
        sides=sides,
        modifier=modifier,
        individual_rolls=rolls,
        sum=subtotal,
        total=total,
        display_text=text,
    )


def roll_custom(
    dice_count: int,
    sides: int,
    modifier: int,
    rng: RandomSource | None = None,
) -> RollResult:
    rolls = _draw(dice_count, sides, rng)
    subtotal = sum(rolls)
    total = subtotal + modifier

    # Custom rolls show the pre-modifier sum at the end, not the dice.
    text = f"{dice_count}d{sides}"
    text += _modifier_suffix(modifier)
    text += f" = {total}"
    if dice_count > 1:
        text += f" ({subtotal})"

    logger.debug("Custom roll %s", text)
    return RollResult(
        kind="custom",
        dice_count=dice_count,
        sides=sides,
        modifier=modifier,
        individual_rolls=rolls,
        sum=subtotal,
        total=total,
        display_text=text,
    )
