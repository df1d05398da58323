"""
Presentation collaborators: session state owner and chart series preparation.

Rendering itself (pixels, DOM, widgets) lives outside this package.
"""

from src.presentation.chart_series import (
    FILL_BURN,
    FILL_MINT,
    ChartSeries,
    ChartWindowConfig,
    MarkerPoint,
    build_chart_series,
)
from src.presentation.session import (
    CurveSession,
    coerce_float,
    coerce_input,
    coerce_int,
)

__all__ = [
    # Chart series
    "FILL_BURN",
    "FILL_MINT",
    "ChartSeries",
    "ChartWindowConfig",
    "MarkerPoint",
    "build_chart_series",
    # Session
    "CurveSession",
    "coerce_float",
    "coerce_input",
    "coerce_int",
]
