"""Replicate-level random streams derived from one master seed."""

from __future__ import annotations

import hashlib
import json
from typing import Any

import numpy as np


def stable_entropy(master_seed: int, *tokens: Any) -> int:
    """256-bit integer from a SHA-256 digest of the master seed and tokens.

    Independent of Python's salted ``hash``; distinct token tuples collide
    only with SHA-256 collision probability.
    """
    payload = json.dumps([int(master_seed), *tokens], separators=(",", ":"), default=str)
    return int.from_bytes(hashlib.sha256(payload.encode("utf-8")).digest(), "big")


def replicate_seed(master_seed: int, index: int) -> int:
    return stable_entropy(int(master_seed), "replicate", int(index))


def rng_from_seed(seed: int) -> np.random.Generator:
    """Generator whose full 256-bit seed feeds a ``SeedSequence``."""
    return np.random.default_rng(np.random.SeedSequence(int(seed)))
