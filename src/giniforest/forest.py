# -*- coding: utf-8 -*-
"""
giniforest.forest
=================

Random forests: many decision trees, each grown on its own bootstrap sample
with a random subset of feature columns considered at every node, combined by
majority vote.

Trees are independent of each other, so they are grown as separate
``joblib`` tasks on its default process-based backend.  Every task receives
its own integer seed drawn from the forest's ``random_state`` and builds its
own ``RandomState`` from it; with a fixed seed the forest is the same
whatever ``n_jobs`` is.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Sequence

import numpy as np
from joblib import Parallel, delayed
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.utils import check_random_state

from .dataset import Dataset, Schema
from .exceptions import ConfigurationError
from .tree import Tree, build_tree, check_n_vars, count_leaves, predict_leaf

logger = logging.getLogger(__name__)

MAX_INT = np.iinfo(np.int32).max


def bootstrap_sample(data: Dataset, random_state=None) -> Dataset:
    """
    Resample ``data`` with replacement.

    The sample has as many rows as ``data``; row ``i`` of the sample is the
    ``i``-th index drawn, so duplicates are expected.
    """
    rng = check_random_state(random_state)
    n = len(data)
    indices = rng.randint(0, n, size=n) if n else np.empty(0, dtype=int)
    return data.take(indices)


def _grow_tree(data: Dataset, n_vars: int, seed: int) -> Tree:
    rng = np.random.RandomState(seed)
    return build_tree(bootstrap_sample(data, rng), n_vars=n_vars, random_state=rng)


def _check_n_trees(n_trees) -> int:
    if isinstance(n_trees, (bool, np.bool_)) or not isinstance(n_trees, (int, np.integer)) or n_trees < 1:
        raise ConfigurationError(f"n_trees must be a positive integer, got {n_trees!r}")
    return int(n_trees)


class RandomForest:
    """
    A trained ensemble of decision trees sharing one schema.

    Parameters
    ----------
    schema : Schema
        Schema of the training data.
    trees : sequence of Tree
        The grown trees.  Stored as a tuple and never modified.
    """

    def __init__(self, schema: Schema, trees: Sequence[Tree]):
        self.schema = schema
        self.trees = tuple(trees)

    def __len__(self) -> int:
        return len(self.trees)

    def __repr__(self) -> str:
        return f"RandomForest(n_trees={len(self.trees)})"

    def votes(self, observation) -> Counter:
        """Tally one vote per tree: the top label of the leaf it reaches."""
        return Counter(predict_leaf(tree, observation).prediction for tree in self.trees)

    def classify(self, observation) -> list[tuple[str, int]]:
        """
        Classify ``observation`` by majority vote.

        Returns
        -------
        list of (label, votes)
            Sorted by vote count, highest first; equal counts are ordered by
            label.  Rows with unexpected cell types or too few cells are still
            classified since questions about them answer ``False``.
        """
        return sorted(self.votes(observation).items(), key=lambda kv: (-kv[1], kv[0]))

    def predict(self, observation) -> str:
        return self.classify(observation)[0][0]


def grow_forest(data: Dataset, n_trees: int, n_vars: int, *, n_jobs=None,
                random_state=None, verbose: int = 0) -> RandomForest:
    """
    Train a random forest on ``data``.

    Parameters
    ----------
    data : Dataset
        Training data; its schema must contain the label column.
    n_trees : int
        How many trees to grow.  More trees make the vote more stable but
        take proportionally longer to train.
    n_vars : int
        Number of feature columns considered at each node, between 1 and the
        number of feature columns.  The square root of the number of
        features is a good starting value.
    n_jobs : int or None, default=None
        Number of parallel jobs, as understood by :class:`joblib.Parallel`.
        Trees are grown in worker processes, so the data and the trees are
        pickled across them.
    random_state : int, RandomState or None, default=None
        Master seed.  One seed per tree is drawn from it up front.
    verbose : int, default=0
        Passed on to :class:`joblib.Parallel`.

    Raises
    ------
    ConfigurationError
        Before any tree is grown, if the label column is missing or
        ``n_trees``/``n_vars`` are out of range.
    """
    schema = data.schema
    schema.check()
    n_trees = _check_n_trees(n_trees)
    n_vars = check_n_vars(schema, n_vars)
    if n_jobs is not None and (not isinstance(n_jobs, (int, np.integer)) or n_jobs == 0):
        raise ConfigurationError(f"n_jobs must be None or a non-zero integer, got {n_jobs!r}")

    rng = check_random_state(random_state)
    seeds = rng.randint(MAX_INT, size=n_trees)
    logger.info("growing %d trees on %d rows with %d of %d features per node",
                n_trees, len(data), n_vars, len(schema.feature_indices))

    trees = Parallel(n_jobs=n_jobs, verbose=verbose)(
        delayed(_grow_tree)(data, n_vars, int(seed)) for seed in seeds
    )
    logger.debug("forest grown: %d leaves in total", sum(count_leaves(t) for t in trees))
    return RandomForest(schema, trees)


class RandomForestClassifier(BaseEstimator, ClassifierMixin):
    """
    Random forest of Gini decision trees with a scikit-learn–like API.

    Parameters
    ----------
    n_trees : int, default=100
        Number of trees in the forest.
    n_vars : int or None, default=None
        Feature columns considered at each node.  ``None`` uses
        ``max(1, int(sqrt(n_features)))``.
    n_jobs : int or None, default=None
        Parallel jobs used to grow the trees.
    random_state : int, RandomState or None, default=None
        Master seed.  Training is reproducible only when it is fixed.
    feature_names : list[str] or None, default=None
        Names of the columns of ``X``.
    label : str, default="label"
        Name given to the label column in the schema.
    verbose : int, default=0
        Verbosity passed to :class:`joblib.Parallel`.

    Notes
    -----
    :meth:`predict_proba` returns the fraction of trees voting for each class,
    not an average of leaf distributions.
    """

    def __init__(
        self,
        *,
        n_trees: int = 100,
        n_vars: int | None = None,
        n_jobs=None,
        random_state=None,
        feature_names: list[str] | None = None,
        label: str = "label",
        verbose: int = 0,
    ):
        self.n_trees = n_trees
        self.n_vars = n_vars
        self.n_jobs = n_jobs
        self.random_state = random_state
        self.feature_names = feature_names
        self.label = label
        self.verbose = verbose

    def fit(self, X, y, feature_names=None):
        if feature_names is None:
            feature_names = self.feature_names
        data = Dataset.from_arrays(X, y, feature_names=feature_names, label=self.label)
        return self.fit_dataset(data)

    def fit_dataset(self, data: Dataset):
        """Fit on a :class:`Dataset` whose schema names the label column."""
        n_features = len(data.schema.feature_indices)
        n_vars = self.n_vars
        if n_vars is None:
            n_vars = max(1, int(math.sqrt(n_features)))
        self.schema_ = data.schema
        self.classes_ = np.unique(data.labels())
        self.n_features_in_ = n_features
        self.n_vars_ = n_vars
        self.forest_ = grow_forest(data, self.n_trees, n_vars, n_jobs=self.n_jobs,
                                   random_state=self.random_state, verbose=self.verbose)
        return self

    def _check_fitted(self):
        if getattr(self, "forest_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def classify(self, observation) -> list[tuple[str, int]]:
        """Ranked ``(label, votes)`` pairs for a single observation."""
        self._check_fitted()
        return self.forest_.classify(observation)

    def predict(self, X):
        """Majority-vote label of each row of ``X``."""
        self._check_fitted()
        X = np.asarray(X, dtype=object)
        return np.array([self.forest_.predict(x) for x in X])

    def predict_proba(self, X):
        """Fraction of trees voting for each class, ordered like ``classes_``."""
        self._check_fitted()
        X = np.asarray(X, dtype=object)
        out = np.zeros((len(X), len(self.classes_)), dtype=float)
        n = len(self.forest_)
        for i, x in enumerate(X):
            votes = self.forest_.votes(x)
            out[i] = [votes.get(c, 0) / n for c in self.classes_]
        return out

    def score(self, X, y, sample_weight=None):
        # labels are compared as text
        return super().score(X, np.asarray(y, dtype=object).astype(str), sample_weight=sample_weight)
