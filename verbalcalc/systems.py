# -*- coding: utf-8 -*-
"""
Numbering systems: how digits are grouped and which scale word each group gets
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from verbalcalc import config


INTERNATIONAL_SCALES = (
    '', 'thousand', 'million', 'billion', 'trillion', 'quadrillion',
    'quintillion', 'sextillion', 'septillion', 'octillion', 'nonillion',
    'decillion',
)

INDIAN_SCALES = ('', 'thousand', 'lakh', 'crore')


@dataclass(frozen=True)
class Grouping:
    """Grouping strategy shared by the speller and the display formatter"""
    first_size: int
    step_size: int
    scales: Tuple[str, ...]


class StrEnumMixin:
    @classmethod
    def from_str(cls, name: str):
        """Convert a string to an Enum value (case-insensitive)."""
        normalized = name.strip().lower()
        for member in cls:
            if member.name.lower() == normalized or str(member.value).lower() == normalized:
                return member

        choices = [member.name.lower() for member in cls]
        raise ValueError(f"Invalid {cls.__name__} `{name}`: must be one of {choices}")


class NumberSystem(StrEnumMixin, str, Enum):
    INTERNATIONAL = 'international'
    INDIAN = 'indian'

    @property
    def grouping(self) -> Grouping:
        return GROUPINGS[self]


GROUPINGS = {
    # 1,234,567,890
    NumberSystem.INTERNATIONAL: Grouping(first_size=3, step_size=3, scales=INTERNATIONAL_SCALES),
    # 1,23,45,67,890
    NumberSystem.INDIAN: Grouping(first_size=3, step_size=2, scales=INDIAN_SCALES),
}


def resolve_system(system: Union[NumberSystem, str, None]) -> NumberSystem:
    """
    Accept a NumberSystem member or its name

    Args:
        system: member, name ("international", "indian") or None for the default

    Returns:
        NumberSystem
    """
    if isinstance(system, NumberSystem):
        return system
    if system is None:
        system = config.DEFAULT_SYSTEM
    return NumberSystem.from_str(system)
