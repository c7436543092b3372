# charts.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go

# Distinct palette, one colour per channel
COLORS = {
    "t1": "#2563eb",
    "t2": "#dc2626",
    "t3": "#16a34a",
    "cons": "#f59e0b",
    "rpm": "#7c3aed",
    "b1": "#0ea5e9",
    "b2": "#f97316",
    "b3": "#22c55e",
    "b4": "#e11d48",
    "l1": "#14b8a6",
    "l2": "#a855f7",
    "sup": "#64748b",
    "vdrop": "#2563eb",
    "current_a": "#f59e0b",
    "hv_plus_avg": "#16a34a",
    "hv_minus_avg": "#0ea5e9",
}


@dataclass(frozen=True)
class ChartSpec:
    title: str
    lines: Tuple[Tuple[str, str], ...]   # (column, legend name)
    y_title: str = ""


# Live viewer: one derived/raw field per chart
LIVE_CHARTS: Dict[str, ChartSpec] = {
    "vdrop": ChartSpec("Voltage drop (V)", (("vdrop", "Voltage drop"),), "V"),
    "current": ChartSpec("Current (A)", (("current_a", "Current"),), "A"),
    "rpm": ChartSpec("RPM", (("rpm", "RPM"),), "tr/min"),
    "hv_plus": ChartSpec("HV+ avg", (("hv_plus_avg", "HV+ avg"),), "°C"),
    "lower": ChartSpec("Lower box temp", (("l1", "Lower 1"),), "°C"),
    "support": ChartSpec("Support temp", (("sup", "Support"),), "°C"),
}

# Historical viewer: grouped raw channels
HISTORY_CHARTS: Dict[str, ChartSpec] = {
    "tension": ChartSpec(
        "U excit (V) — Tension1/2/3 vs Time (hours)",
        (("t1", "Tension1"), ("t2", "Tension2"), ("t3", "Tension3")),
        "V",
    ),
    "cons": ChartSpec("I excit (A) — cons_alim_1 vs Time (hours)", (("cons", "Cons alim 1"),), "A"),
    "rpm": ChartSpec("Régime (tr/min) — RPM vs Time (hours)", (("rpm", "RPM"),), "tr/min"),
    "brush": ChartSpec(
        "Températures balais (°C) — Brush 1..4 vs Time (hours)",
        (("b1", "Brush 1"), ("b2", "Brush 2"), ("b3", "Brush 3"), ("b4", "Brush 4")),
        "°C",
    ),
    "lower": ChartSpec(
        "Lower Brush Box + Plastic support (°C) vs Time (hours)",
        (("l1", "Lower 1"), ("l2", "Lower 2"), ("sup", "Support")),
        "°C",
    ),
}


def chart_spec(kind: str) -> ChartSpec:
    if kind in LIVE_CHARTS:
        return LIVE_CHARTS[kind]
    if kind in HISTORY_CHARTS:
        return HISTORY_CHARTS[kind]
    raise KeyError(f"unknown chart kind {kind!r}")


def _with_gaps(values) -> List[Optional[float]]:
    """NaN/None -> None so plotly leaves a gap instead of drawing through zero."""
    return [None if v is None or pd.isna(v) else float(v) for v in values]


def render_chart(kind: str, frame: pd.DataFrame, *, height: int = 280) -> go.Figure:
    """
    Build the line chart ``kind`` over a derived-sample frame (x = ``t_hour``).

    The frame is only read. Columns missing from the frame plot as empty lines.
    """
    spec = chart_spec(kind)
    x = frame["t_hour"].tolist() if "t_hour" in frame.columns else []

    fig = go.Figure()
    for column, name in spec.lines:
        if column in frame.columns:
            y = _with_gaps(frame[column].tolist())
        else:
            y = [None] * len(x)
        fig.add_trace(
            go.Scatter(
                x=x,
                y=y,
                name=name,
                mode="lines",
                connectgaps=False,
                line=dict(color=COLORS.get(column), width=1.5),
                hovertemplate=f"{name}: %{{y:.3f}}<br>hours: %{{x:.2f}}<extra></extra>",
            )
        )

    fig.update_layout(
        title=spec.title,
        height=height,
        margin=dict(l=50, r=20, t=50, b=40),
        showlegend=len(spec.lines) > 1,
        uirevision=kind,  # keep zoom across live re-renders
    )
    fig.update_xaxes(title_text="Time (hours)", showgrid=True, griddash="dash")
    fig.update_yaxes(title_text=spec.y_title, showgrid=True, griddash="dash")
    return fig


def summarize(frame: pd.DataFrame) -> Dict[str, float]:
    """Latest non-missing value of each live chart field (for the metric strip)."""
    out: Dict[str, float] = {}
    for kind, spec in LIVE_CHARTS.items():
        column = spec.lines[0][0]
        if column not in frame.columns:
            continue
        values = frame[column].to_numpy(dtype=float)
        present = values[~np.isnan(values)]
        if present.size:
            out[kind] = float(present[-1])
    return out
