"""Random number sources for corruption runs.

Unseeded by default: two runs over the same image differ. A seed makes a run
reproducible.
"""

import hashlib

import numpy as np


def derive_seed(base_seed: int, source_key: str, index: int = 0) -> int:
    """Derive a per-image seed from a batch seed. Same inputs = same output, always."""
    key = f"{base_seed}:{source_key}:{index}"
    return int(hashlib.sha256(key.encode()).hexdigest()[:16], 16)


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create an RNG. ``None`` draws fresh OS entropy."""
    return np.random.default_rng(seed)
