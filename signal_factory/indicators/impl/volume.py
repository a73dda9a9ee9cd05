from ..core.interfaces import ArrayLike, as_array, require_window

TREND_WINDOW = 10


def volume_trend(volumes: ArrayLike) -> float:
    """
    Relative change of the last 10 volumes' mean versus the 10 before them.

    Returns 0.0 when the earlier window traded no volume at all.
    """
    values = as_array(volumes)
    require_window("volume_trend", values, 2 * TREND_WINDOW)
    recent = float(values[-TREND_WINDOW:].mean())
    older = float(values[-2 * TREND_WINDOW:-TREND_WINDOW].mean())
    if older == 0:
        return 0.0
    return (recent - older) / older


def volume_ratio(volumes: ArrayLike) -> float:
    """Latest volume divided by the mean volume of the whole series."""
    values = as_array(volumes)
    require_window("volume_ratio", values, 1)
    avg = float(values.mean())
    if avg == 0:
        return 0.0
    return float(values[-1]) / avg
