from typing import Sequence, Union

import numpy as np
import pandas as pd

from signal_factory.errors import InsufficientData

ArrayLike = Union[Sequence[float], np.ndarray, pd.Series]

OHLCV_COLUMNS = ("open", "high", "low", "close", "volume")


def as_array(values: ArrayLike) -> np.ndarray:
    """
    Converts an ordered (oldest first) numeric sequence to a float64 array.
    """
    return np.asarray(values, dtype=np.float64)


def require_window(indicator: str, values: np.ndarray, required: int) -> None:
    """
    Raises InsufficientData when ``values`` holds fewer than ``required`` items.

    Args:
        indicator: Name used in the error message.
        values: Input array.
        required: Minimum number of values the indicator needs.
    """
    if required < 1:
        raise ValueError(f"{indicator}: window must be >= 1, got {required}")
    if len(values) < required:
        raise InsufficientData(indicator, required, len(values))


def validate_ohlcv(df: pd.DataFrame) -> None:
    """
    Validates that the input DataFrame contains the required OHLCV columns.

    Args:
        df: Input DataFrame.

    Raises:
        ValueError: If required columns are missing.
    """
    required_columns = set(OHLCV_COLUMNS)
    if not required_columns.issubset(df.columns):
        missing = required_columns - set(df.columns)
        raise ValueError(f"Input DataFrame missing required columns: {sorted(missing)}")
