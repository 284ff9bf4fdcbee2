from dashboard_engine.charts.chart_utils import (
    AXIS_TYPES,
    DATE_FORMATS,
    VALUE_TYPES,
    build_chart_series,
    format_axis,
    format_period_change,
    format_tooltip_date,
    format_value,
    observations_to_series,
    parse_date,
)
from dashboard_engine.charts.returns import calculate_period_returns

__all__ = [
    "AXIS_TYPES",
    "DATE_FORMATS",
    "VALUE_TYPES",
    "build_chart_series",
    "calculate_period_returns",
    "format_axis",
    "format_period_change",
    "format_tooltip_date",
    "format_value",
    "observations_to_series",
    "parse_date",
]
