# limnos/engine/forecasting.py

"""Short-horizon linear trend projection for sparse multi-year series."""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import stats

from limnos.engine.config import EngineConfig, load_engine_config
from limnos.shared.schemas import HistoricalObservation, LakeRecord

logger = logging.getLogger(__name__)

FORECAST_METRICS = {
    "secchi": ("transparency_m", "secchi_m"),
    "phosphorus": ("phosphorus_ppb", "phosphorus_ppb"),
}
TREND_WINDOW = 11
STABLE_SLOPE = 1e-9


@dataclass(frozen=True)
class ForecastPoint:
    period: int
    value: float
    is_forecast: bool = True


@dataclass(frozen=True)
class TrendFit:
    slope: float
    intercept: float
    r_squared: float
    n_points: int
    origin_period: Optional[int]
    direction: str

    def predict(self, period: int) -> float:
        """Value of the fitted line at ``period`` (intercept sits at the origin period)."""
        if self.origin_period is None:
            return self.intercept
        return self.intercept + self.slope * (period - self.origin_period)


def _prepare(series: Iterable[Tuple[int, float]]) -> pd.Series:
    """Collapse a (period, value) series to one mean value per period, sorted."""
    rows = list(series)
    if not rows:
        return pd.Series(dtype=float)
    df = pd.DataFrame(rows, columns=["period", "value"]).dropna()
    df["period"] = df["period"].astype(int)
    df["value"] = df["value"].astype(float)
    return df.groupby("period")["value"].mean().sort_index()


def _classify_direction(slope: float, n_points: int) -> str:
    if n_points < 2:
        return "insufficient data"
    if slope > STABLE_SLOPE:
        return "Increasing"
    if slope < -STABLE_SLOPE:
        return "Decreasing"
    return "Stable"


def _fit(history: pd.Series) -> TrendFit:
    n = len(history)
    if n == 0:
        return TrendFit(0.0, 0.0, 0.0, 0, None, _classify_direction(0.0, 0))

    origin = int(history.index[0])
    if n == 1:
        return TrendFit(0.0, float(history.iloc[0]), 0.0, 1, origin, _classify_direction(0.0, 1))

    x = history.index.to_numpy(dtype=float) - origin
    y = history.to_numpy(dtype=float)
    result = stats.linregress(x, y)
    slope = float(result.slope)
    r_squared = float(np.nan_to_num(result.rvalue) ** 2)
    return TrendFit(
        slope=slope,
        intercept=float(result.intercept),
        r_squared=r_squared,
        n_points=n,
        origin_period=origin,
        direction=_classify_direction(slope, n),
    )


def fit_trend(series: Iterable[Tuple[int, float]]) -> TrendFit:
    """Ordinary least squares fit over the deduplicated, sorted series."""
    return _fit(_prepare(series))


def forecast(
    series: Iterable[Tuple[int, float]],
    horizon: int,
    fill_value: float = 0.0,
    origin_period: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> List[ForecastPoint]:
    """Project ``horizon`` consecutive periods past the last observation.

    With fewer than two distinct periods the slope is undefined and the
    projection is flat: the lone value when there is one, else ``fill_value``
    starting after ``origin_period`` (default: the configured baseline year).
    """
    if horizon < 0:
        raise ValueError(f"Forecast horizon cannot be negative: {horizon}")

    history = _prepare(series)
    if history.empty:
        if origin_period is None:
            origin_period = (config or load_engine_config()).baseline_year
        logger.debug("Empty series; flat projection of %.3f from %d", fill_value, origin_period)
        return [ForecastPoint(origin_period + i, float(fill_value)) for i in range(1, horizon + 1)]

    last = int(history.index[-1])
    fit = _fit(history)
    if fit.n_points < 2:
        logger.debug("Single observation at %d; flat projection", last)

    return [
        ForecastPoint(period, float(fit.predict(period)))
        for period in range(last + 1, last + horizon + 1)
    ]


def trend_series(
    series: Iterable[Tuple[int, float]], horizon: int, **kwargs
) -> List[ForecastPoint]:
    """Observed points (``is_forecast=False``) followed by their projection."""
    history = _prepare(series)
    observed = [
        ForecastPoint(int(period), float(value), is_forecast=False)
        for period, value in history.items()
    ]
    return observed + forecast(list(history.items()), horizon, **kwargs)


def recent_history(
    observations: Sequence[HistoricalObservation], window: int = TREND_WINDOW
) -> List[HistoricalObservation]:
    """Chronological tail of a lake's history, one observation per year."""
    if not observations or window <= 0:
        return []
    df = pd.DataFrame([o.model_dump() for o in observations])
    yearly = df.groupby("year")[["secchi_m", "phosphorus_ppb"]].mean().sort_index().tail(window)
    return [
        HistoricalObservation(year=int(year), secchi_m=float(row.secchi_m), phosphorus_ppb=float(row.phosphorus_ppb))
        for year, row in yearly.iterrows()
    ]


def forecast_lake(
    lake: LakeRecord,
    metric: str,
    horizon: int,
    config: Optional[EngineConfig] = None,
) -> List[ForecastPoint]:
    """Forecast ``secchi`` or ``phosphorus`` from a lake's historical record.

    A lake without history is projected flat at its current reading.
    """
    if metric not in FORECAST_METRICS:
        raise ValueError(f"Unknown forecast metric: {metric}. Expected one of {tuple(FORECAST_METRICS)}")
    current_attr, history_attr = FORECAST_METRICS[metric]
    series = [(o.year, getattr(o, history_attr)) for o in lake.history]
    return forecast(
        series,
        horizon,
        fill_value=getattr(lake, current_attr),
        config=config,
    )
