from __future__ import annotations

import math
from dataclasses import dataclass, asdict, fields
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

SECONDS_PER_HOUR = 3600.0

# Raw channels as the backend names them
CHANNELS = ("rpm", "cons", "t1", "t2", "t3", "b1", "b2", "b3", "b4", "l1", "l2", "sup")


def _num(value: Any) -> Optional[float]:
    """Return a float, or None for missing / null / non-numeric / non-finite values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


@dataclass(frozen=True)
class Sample:
    """One telemetry reading for a (test, system) pair."""
    idx: int
    t_hour: float

    rpm: Optional[float] = None
    cons: Optional[float] = None      # excitation current
    t1: Optional[float] = None        # voltage taps
    t2: Optional[float] = None
    t3: Optional[float] = None
    b1: Optional[float] = None        # brush temperatures (1,2 = HV-, 3,4 = HV+)
    b2: Optional[float] = None
    b3: Optional[float] = None
    b4: Optional[float] = None
    l1: Optional[float] = None        # lower brush box
    l2: Optional[float] = None
    sup: Optional[float] = None       # plastic support

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Sample":
        """
        Build a Sample from one backend JSON row.

        Missing keys, nulls and NaN/inf all become None. When the row has no
        usable ``t_hour`` it is derived from ``idx`` (one index per second).
        """
        idx = int(record["idx"])
        t_hour = _num(record.get("t_hour"))
        if t_hour is None:
            t_hour = idx / SECONDS_PER_HOUR
        channels = {name: _num(record.get(name)) for name in CHANNELS}
        return cls(idx=idx, t_hour=t_hour, **channels)

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DerivedSample(Sample):
    vdrop: Optional[float] = None
    hv_minus_avg: Optional[float] = None
    hv_plus_avg: Optional[float] = None

    @property
    def current_a(self) -> Optional[float]:
        return self.cons

    def as_dict(self) -> dict:
        d = asdict(self)
        d["current_a"] = self.cons
        return d


def _mean_if_all(*values: Optional[float]) -> Optional[float]:
    if any(v is None for v in values):
        return None
    return sum(values) / len(values)


def derive(sample: Sample) -> DerivedSample:
    """Augment a sample with its derived display metrics. Never fails."""
    base = {f.name: getattr(sample, f.name) for f in fields(Sample)}
    return DerivedSample(
        **base,
        vdrop=_mean_if_all(sample.t1, sample.t2, sample.t3),
        hv_minus_avg=_mean_if_all(sample.b1, sample.b2),
        hv_plus_avg=_mean_if_all(sample.b3, sample.b4),
    )


DERIVED_COLUMNS = [f.name for f in fields(DerivedSample)] + ["current_a"]


def to_frame(samples: Iterable[Sample]) -> pd.DataFrame:
    """Derived rows as a DataFrame; absent values are NaN."""
    rows = [derive(s).as_dict() for s in samples]
    if not rows:
        return pd.DataFrame(columns=DERIVED_COLUMNS, dtype=float)
    return pd.DataFrame(rows, columns=DERIVED_COLUMNS).astype(float).astype({"idx": int})
