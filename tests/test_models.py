from __future__ import annotations

import pytest

from signgrid.models import DisplayState, MultiSeries, ScaleUnits, StatusCode, ValidatorSeries


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (4, StatusCode.PROPOSED),
        (3, StatusCode.SIGNED),
        (2, StatusCode.MISSED_PRECOMMIT),
        (1, StatusCode.MISSED_PREVOTE),
        (0, StatusCode.MISSED),
        (5, StatusCode.NO_DATA),
        (-7, StatusCode.NO_DATA),
        (None, StatusCode.NO_DATA),
        (False, StatusCode.NO_DATA),
        (3.0, StatusCode.NO_DATA),
    ],
)
def test_classify(value: object, expected: StatusCode) -> None:
    assert StatusCode.classify(value) is expected


def test_multi_series_iteration_and_width() -> None:
    multi = MultiSeries(status=[ValidatorSeries("a", [3, 3, 3]), ValidatorSeries("b", [4])])
    assert [s.name for s in multi] == ["a", "b"]
    assert len(multi) == 2
    assert multi.max_blocks == 3
    assert MultiSeries().max_blocks == 0


def test_display_state_round_trip() -> None:
    state = DisplayState(is_dark=False, text_color="#3f3f3f", sign_alpha=0.2)
    assert DisplayState.from_dict(state.to_dict()) == state
    assert DisplayState.from_dict(None) == DisplayState()


def test_scale_units_from_ratio() -> None:
    assert ScaleUnits.from_ratio(1) == ScaleUnits(24, 9, 115, 120, 1)
    assert ScaleUnits.from_ratio(1.5).label_column_width == 180
