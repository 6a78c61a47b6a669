"""Gini impurity and information gain of row partitions."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

import numpy as np


def class_counts(rows: Sequence, label_index: int) -> Counter:
    """Count rows per class label, in order of first appearance."""
    return Counter(str(row[label_index]) for row in rows)


def _gini(counts) -> float:
    dist_vec = np.fromiter(counts, dtype=float)
    tot = dist_vec.sum()
    if tot <= 0:
        return 0.0
    p = dist_vec / tot
    return float(1.0 - np.sum(p * p))


def gini_impurity(rows: Sequence, label_index: int) -> float:
    """``1 - sum(p_i ** 2)`` over the classes present; ``0.0`` for no rows."""
    return _gini(class_counts(rows, label_index).values())


def information_gain(true_rows: Sequence, false_rows: Sequence,
                     current_impurity: float, label_index: int) -> float:
    """Reduction in Gini impurity from splitting into ``true_rows``/``false_rows``."""
    n = len(true_rows) + len(false_rows)
    if n == 0:
        return 0.0
    return current_impurity - (
        len(true_rows) / n * gini_impurity(true_rows, label_index)
        + len(false_rows) / n * gini_impurity(false_rows, label_index)
    )
