"""Shannon entropy of a file's leading bytes."""

from pathlib import Path
from typing import Union

import numpy as np

SAMPLE_SIZE = 8192  # first 8 KB

MAX_ENTROPY = 8.0  # bits per byte


def byte_entropy(data: bytes) -> float:
    """
    Compute Shannon entropy H = -Σ p(b) log₂ p(b) over byte values.

    Returns:
        Entropy in bits per byte, in [0.0, 8.0]; 0.0 for empty input
    """
    if not data:
        return 0.0
    counts = np.bincount(np.frombuffer(data, dtype=np.uint8), minlength=256)
    p = counts[counts > 0] / len(data)
    # 0.0 - x avoids a -0.0 result for single-symbol input
    return float(0.0 - np.sum(p * np.log2(p)))


def sample_file_entropy(path: Union[str, Path], sample_size: int = SAMPLE_SIZE) -> float:
    """
    Entropy of the first *sample_size* bytes of *path*.

    High values (> 7.5) suggest compressed or encrypted content; text
    usually sits between 3 and 6.

    Raises:
        OSError: if the file cannot be opened or read
    """
    with open(path, "rb") as f:
        data = f.read(sample_size)
    return byte_entropy(data)
