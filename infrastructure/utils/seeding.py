"""Random seed configuration for reproducibility."""

import os
import random

import numpy as np


def set_seed(seed: int) -> np.random.Generator:
    """
    Set random seed for reproducibility across Python, NumPy, and hash-based operations.

    Args:
        seed: Random seed value

    Returns:
        A NumPy Generator seeded with the same value, for code that prefers explicit generators
    """
    random.seed(seed)
    np.random.seed(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)
    return np.random.default_rng(seed)
