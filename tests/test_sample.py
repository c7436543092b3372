import math

import pandas as pd

from Sample import Sample, derive, to_frame


def _sample(idx: int = 1, **channels) -> Sample:
    return Sample(idx=idx, t_hour=idx / 3600, **channels)


def test_vdrop_is_mean_of_three_taps() -> None:
    d = derive(_sample(t1=1, t2=2, t3=3))
    assert d.vdrop == 2.0


def test_vdrop_absent_when_any_tap_missing() -> None:
    assert derive(_sample(t1=1, t2=None, t3=3)).vdrop is None
    assert derive(_sample(t1=1, t2=2)).vdrop is None


def test_zero_readings_are_present_not_missing() -> None:
    d = derive(_sample(t1=0.0, t2=0.0, t3=3.0, b1=0.0, b2=4.0))
    assert d.vdrop == 1.0
    assert d.hv_minus_avg == 2.0


def test_hv_averages_use_brush_pairs() -> None:
    d = derive(_sample(b1=10.0, b2=20.0, b3=30.0, b4=50.0))
    assert d.hv_minus_avg == 15.0
    assert d.hv_plus_avg == 40.0

    partial = derive(_sample(b1=10.0, b3=30.0, b4=None))
    assert partial.hv_minus_avg is None
    assert partial.hv_plus_avg is None


def test_derive_keeps_raw_channels_and_current_alias() -> None:
    s = _sample(idx=42, rpm=6000.0, cons=9.5, sup=55.0)
    d = derive(s)
    assert d.idx == 42
    assert d.rpm == 6000.0
    assert d.current_a == 9.5
    assert d.sup == 55.0
    assert d.l2 is None


def test_from_record_tolerates_missing_null_and_nan() -> None:
    s = Sample.from_record({"idx": 7200, "rpm": None, "t1": "1.5", "t2": float("nan"), "cons": "bad"})
    assert s.idx == 7200
    assert s.t_hour == 2.0  # derived from idx
    assert s.rpm is None
    assert s.t1 == 1.5
    assert s.t2 is None
    assert s.cons is None
    assert s.b4 is None


def test_from_record_keeps_supplied_t_hour() -> None:
    s = Sample.from_record({"idx": 10, "t_hour": 0.25})
    assert s.t_hour == 0.25


def test_to_frame_uses_nan_for_absent_values() -> None:
    frame = to_frame([_sample(1, t1=1, t2=2, t3=3), _sample(2, t1=1)])
    assert list(frame["idx"]) == [1, 2]
    assert frame.loc[0, "vdrop"] == 2.0
    assert math.isnan(frame.loc[1, "vdrop"])
    assert "current_a" in frame.columns


def test_to_frame_empty_has_columns() -> None:
    frame = to_frame([])
    assert frame.empty
    assert {"t_hour", "vdrop", "hv_plus_avg", "current_a"} <= set(frame.columns)
    assert isinstance(frame, pd.DataFrame)
