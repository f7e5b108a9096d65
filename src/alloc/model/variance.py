from __future__ import annotations
import numpy as np

def compute_variance(original_value: float, new_value: float) -> float:
    """
    Percentage deviation of new_value from original_value.

    A zero baseline is not guarded: the result is inf/-inf/nan, never an exception.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float((np.float64(new_value) - np.float64(original_value)) / np.float64(original_value) * 100.0)
