from dataclasses import dataclass
from typing import Any, Optional
import math
import re

from ..errors import InvalidIdentifier, RangeExceeded


@dataclass(frozen=True)
class RangeInfo:
    range_start: int
    range_end: int
    range_number: int


def range_info(number: int, range_size: int = 10) -> RangeInfo:
    """Bucket an identifier number into its block of ``range_size`` (1-10, 11-20, ...)."""
    range_number = math.ceil(number / range_size)
    return RangeInfo(
        range_start=(range_number - 1) * range_size + 1,
        range_end=range_number * range_size,
        range_number=range_number,
    )


@dataclass(frozen=True)
class IdFormat:
    """
    Textual shape of an identifier column.

    - ``prefix=None``: bare integer column (notifications).
    - ``width``: zero padding applied on render; parsing accepts any number of digits,
      so legacy ids such as ``USR000010`` still resolve to 10.
    - ``max_value``: inclusive upper bound, ``None`` for unbounded sequences.
    """

    prefix: Optional[str] = None
    width: int = 0
    max_value: Optional[int] = None

    @property
    def is_integer(self) -> bool:
        return self.prefix is None

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(rf"{re.escape(self.prefix or '')}([0-9]+)", re.ASCII)

    def describe(self) -> str:
        if self.is_integer:
            return "a positive integer"
        digits = f"{self.width} digits" if self.width else "digits"
        return f"'{self.prefix}' followed by {digits}"

    def render(self, number: int) -> Any:
        if self.is_integer:
            return number
        return f"{self.prefix}{number:0{self.width}d}" if self.width else f"{self.prefix}{number}"

    def parse(self, raw: Any) -> Optional[int]:
        """Return the numeric part of ``raw``, or None when it does not belong to this format."""
        if raw is None:
            return None
        if self.is_integer:
            if isinstance(raw, bool):
                return None
            if isinstance(raw, int):
                value = raw
            elif isinstance(raw, str) and raw.isascii() and raw.isdecimal():
                value = int(raw)
            else:
                return None
        else:
            if not isinstance(raw, str):
                return None
            match = self.pattern.fullmatch(raw)
            if not match:
                return None
            # int() drops the leading zeros
            value = int(match.group(1))
        if value <= 0:
            return None
        if self.max_value is not None and value > self.max_value:
            return None
        return value

    def matches(self, raw: Any) -> bool:
        if self.is_integer:
            return self.parse(raw) is not None
        return isinstance(raw, str) and self.pattern.fullmatch(raw) is not None

    def extract_number(self, raw: Any) -> int:
        if not self.matches(raw):
            raise InvalidIdentifier(raw, self.describe())
        if self.is_integer:
            return int(raw)
        return int(self.pattern.fullmatch(raw).group(1))  # type: ignore[union-attr]

    def check_bounds(self, candidate: int, sequence: str) -> int:
        if self.max_value is not None and candidate > self.max_value:
            raise RangeExceeded(sequence, candidate, self.max_value)
        return candidate
