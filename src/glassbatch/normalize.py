"""Renormalization of matrix fractions to a 100 % total."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

from glassbatch.constants import NORMALIZATION_TOLERANCE, PERCENT

logger = logging.getLogger(__name__)

NORMALIZATION_WARNING = "Matrix values do not sum to 100%. They will be normalized (rescaled)."


@dataclass(frozen=True)
class NormalizationResult:
    fractions: Tuple[float, ...]
    was_rescaled: bool


def normalize_fractions(fractions: Sequence[float]) -> NormalizationResult:
    """Scale ``fractions`` so they sum to 100.

    An all-zero set and a set already within ``NORMALIZATION_TOLERANCE`` of 100
    are returned unchanged, as is a set whose total is not finite. Applying
    this to its own output is a no-op, which matters because callers
    renormalize after every edit.
    """
    values = tuple(float(f) for f in fractions)
    total = sum(values)
    if not math.isfinite(total) or total == 0 or abs(total - PERCENT) <= NORMALIZATION_TOLERANCE:
        return NormalizationResult(values, False)

    factor = PERCENT / total
    logger.debug("Rescaling %d fractions (total %.6g) by %.6g", len(values), total, factor)
    return NormalizationResult(tuple(v * factor for v in values), True)
