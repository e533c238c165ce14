from dataclasses import dataclass, field
from enum import IntEnum
from typing import Self

BASE_CELL_HEIGHT = 24
BASE_CELL_WIDTH = 9
BASE_LABEL_MAX_WIDTH = 115
BASE_LABEL_COLUMN_WIDTH = 120


class StatusCode(IntEnum):
    NO_DATA = -1
    MISSED = 0
    MISSED_PREVOTE = 1
    MISSED_PRECOMMIT = 2
    SIGNED = 3
    PROPOSED = 4

    @classmethod
    def classify(cls, value: object) -> "StatusCode":
        """Map any raw block value to a code, NO_DATA for anything outside 0..4."""
        if isinstance(value, bool) or not isinstance(value, int):
            return cls.NO_DATA
        try:
            return cls(value)
        except ValueError:
            return cls.NO_DATA


@dataclass
class ValidatorSeries:
    name: str
    blocks: list[int] = field(default_factory=list)


@dataclass
class MultiSeries:
    status: list[ValidatorSeries] = field(default_factory=list)

    def __iter__(self):
        return iter(self.status)

    def __len__(self) -> int:
        return len(self.status)

    @property
    def max_blocks(self) -> int:
        return max((len(s.blocks) for s in self.status), default=0)


@dataclass(frozen=True)
class DisplayState:
    is_dark: bool = True
    text_color: str = "#b0b0b0"
    sign_alpha: float = 0.4

    def to_dict(self) -> dict[str, object]:
        return {
            "is_dark": self.is_dark,
            "text_color": self.text_color,
            "sign_alpha": self.sign_alpha,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> Self:
        if not data:
            return cls()
        return cls(
            is_dark=bool(data.get("is_dark", True)),
            text_color=str(data.get("text_color", "#b0b0b0")),
            sign_alpha=float(data.get("sign_alpha", 0.4)),  # pyright: ignore[reportArgumentType]
        )


@dataclass(frozen=True)
class ScaleUnits:
    cell_height: float
    cell_width: float
    label_max_width: float
    label_column_width: float
    scale_factor: float

    @classmethod
    def from_ratio(cls, ratio: float) -> Self:
        return cls(
            cell_height=BASE_CELL_HEIGHT * ratio,
            cell_width=BASE_CELL_WIDTH * ratio,
            label_max_width=BASE_LABEL_MAX_WIDTH * ratio,
            label_column_width=BASE_LABEL_COLUMN_WIDTH * ratio,
            scale_factor=ratio,
        )
