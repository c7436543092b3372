# characterization.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

import settings


@dataclass
class CellStats:
    value: Optional[float]   # median vdrop
    p05: Optional[float]
    p95: Optional[float]
    n: int                   # samples used

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "CellStats":
        return cls(
            value=d.get("value"),
            p05=d.get("p05"),
            p95=d.get("p95"),
            n=int(d.get("n") or 0),
        )


@dataclass
class CharacterizationParams:
    """Plateau detection + temperature grouping, sent as query params."""
    system: int = 1
    life: str = "bol"
    dt_sec: float = 0.05
    min_plateau_sec: int = 60
    take_last_sec: int = 60
    rpm_tol: int = 150
    i_tol: float = 0.4
    temp_targets: List[int] = field(default_factory=lambda: list(settings.TEMP_TARGETS))
    temp_tol: int = 10   # ±°C around each target

    def to_query(self) -> Dict[str, Any]:
        if self.life not in settings.LIFE_STAGES:
            raise ValueError(f"unknown life stage {self.life!r}")
        q = asdict(self)
        q["temp_targets"] = ",".join(str(t) for t in self.temp_targets)
        return q


def get_grid(response: Optional[Dict[str, Any]], temp: int) -> Optional[Dict[str, Any]]:
    if not response:
        return None
    return (response.get("temps") or {}).get(str(temp))


def get_cell(grid: Optional[Dict[str, Any]], current: int, rpm: int) -> Optional[CellStats]:
    """grid[current][rpm]; keys arrive as strings from JSON."""
    if not grid:
        return None
    row = grid.get(str(current))
    if not row:
        return None
    cell = row.get(str(rpm))
    return CellStats.from_dict(cell) if cell is not None else None


def grid_to_frame(
    grid: Optional[Dict[str, Any]],
    currents: List[int] = settings.CURRENTS,
    speeds: List[int] = settings.SPEEDS,
) -> pd.DataFrame:
    """Median table: rows = current (A), columns = speed (rpm), NaN where no data."""
    values = np.full((len(currents), len(speeds)), np.nan)
    for i, current in enumerate(currents):
        for j, rpm in enumerate(speeds):
            cell = get_cell(grid, current, rpm)
            if cell is not None and cell.value is not None:
                values[i, j] = float(cell.value)
    frame = pd.DataFrame(values, index=currents, columns=speeds)
    frame.index.name = "If (A)"
    frame.columns.name = "Speed (rpm)"
    return frame


def fmt(v: Any, d: int = 3) -> str:
    if v is None:
        return ""
    if isinstance(v, (int, float)):
        return f"{v:.{d}f}" if np.isfinite(v) else ""
    return str(v)
