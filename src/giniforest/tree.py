# -*- coding: utf-8 -*-
"""
giniforest.tree
===============

This module implements a CART-style binary classification tree grown with the
Gini impurity criterion.  It supports numeric and nominal predictors mixed
freely in the same column, an exhaustive split search for single trees and a
randomized feature-subset search for trees that are part of a forest.

The tree itself is a pair of frozen classes, :class:`Leaf` and :class:`Node`.
:func:`build_tree` grows one from a :class:`~giniforest.dataset.Dataset` and
:class:`DecisionTreeClassifier` wraps it in a scikit-learn–like estimator with
printing, rule export and Graphviz export helpers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin
from sklearn.utils import check_random_state

from .dataset import Dataset, Schema, observation_cells
from .exceptions import ConfigurationError
from .impurity import class_counts
from .question import Question
from .split import best_question, partition

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Tree structure
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Leaf:
    """Terminal node: no more certainty can be gained by asking questions.

    Attributes
    ----------
    distribution : mapping
        Read-only mapping ``{label: probability}`` in the order the labels first occur
        in the partition that reached the leaf.  Empty for an empty partition.
    n_samples : int
        Size of that partition.
    """

    distribution: MappingProxyType = field(default_factory=dict)
    n_samples: int = 0

    def __post_init__(self):
        object.__setattr__(self, "distribution", MappingProxyType(dict(self.distribution)))

    def __reduce__(self):
        return type(self), (dict(self.distribution), self.n_samples)

    @classmethod
    def from_rows(cls, rows, label_index: int) -> "Leaf":
        counts = class_counts(rows, label_index)
        size = len(rows)
        return cls({cl: n / size for cl, n in counts.items()}, size)

    @property
    def prediction(self) -> str | None:
        """Label with the highest probability (last one among ties)."""
        best, best_p = None, -1.0
        for cl, p in self.distribution.items():
            if p >= best_p:
                best, best_p = cl, p
        return best


@dataclass(frozen=True)
class Node:
    """Internal node; ``left`` answers the question with yes, ``right`` with no."""

    question: Question
    left: "Tree"
    right: "Tree"


Tree = Leaf | Node


def predict_leaf(tree: Tree, observation) -> Leaf:
    """Walk ``observation`` from the root down to a leaf."""
    observation = observation_cells(observation)
    node = tree
    while isinstance(node, Node):
        node = node.left if node.question.apply(observation) else node.right
    return node


def tree_depth(tree: Tree) -> int:
    depth, stack = 0, [(tree, 0)]
    while stack:
        node, d = stack.pop()
        depth = max(depth, d)
        if isinstance(node, Node):
            stack.append((node.left, d + 1))
            stack.append((node.right, d + 1))
    return depth


def count_leaves(tree: Tree) -> int:
    n, stack = 0, [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, Node):
            stack.extend((node.left, node.right))
        else:
            n += 1
    return n


def check_n_vars(schema: Schema, n_vars) -> int:
    """Validate ``n_vars`` against the number of feature columns."""
    n_features = len(schema.feature_indices)
    if isinstance(n_vars, (bool, np.bool_)) or not isinstance(n_vars, (int, np.integer)):
        raise ConfigurationError(f"n_vars must be a positive integer, got {n_vars!r}")
    if not 1 <= n_vars <= n_features:
        raise ConfigurationError(
            f"n_vars must be between 1 and the number of feature columns ({n_features}), got {n_vars}"
        )
    return int(n_vars)


# -----------------------------------------------------------------------------
# Tree construction
# -----------------------------------------------------------------------------
_GROW, _JOIN = 0, 1


def build_tree(data: Dataset, n_vars: int | None = None, random_state=None) -> Tree:
    """
    Grow a decision tree from ``data``.

    Each partition is split on the question with the highest information
    gain until no question has strictly positive gain, at which point a
    :class:`Leaf` is emitted.  Growth uses an explicit work stack rather than
    call recursion, so deep trees on skewed data do not hit the interpreter
    recursion limit.

    Parameters
    ----------
    data : Dataset
        Training data.  Its schema must contain the label column.
    n_vars : int or None, default=None
        ``None`` grows the tree with the exhaustive search.  Otherwise each
        node only considers ``n_vars`` randomly drawn feature columns.
    random_state : int, RandomState or None, default=None
        Source of the column draws.  Ignored when ``n_vars`` is ``None``.

    Returns
    -------
    Leaf or Node
        The root of the grown tree.

    Raises
    ------
    ConfigurationError
        If the label column is missing or ``n_vars`` is out of range.
    """
    schema = data.schema
    label_index = schema.label_index
    if n_vars is not None:
        n_vars = check_n_vars(schema, n_vars)
    rng = check_random_state(random_state) if n_vars is not None else None

    # Left subtrees are grown before right ones so the random draws happen
    # in a fixed order for a given seed.
    work = [(_GROW, data.rows)]
    built: list[Tree] = []
    while work:
        kind, payload = work.pop()
        if kind == _JOIN:
            right = built.pop()
            left = built.pop()
            built.append(Node(payload, left, right))
            continue
        rows = payload
        if not rows:
            built.append(Leaf())
            continue
        question, _ = best_question(rows, schema, n_vars, rng)
        if question is None:
            built.append(Leaf.from_rows(rows, label_index))
            continue
        true_rows, false_rows = partition(rows, question)
        work.append((_JOIN, question))
        work.append((_GROW, false_rows))
        work.append((_GROW, true_rows))

    root = built.pop()
    logger.debug("grew tree on %d rows: depth=%d leaves=%d",
                 len(data), tree_depth(root), count_leaves(root))
    return root


# -----------------------------------------------------------------------------
# Classifier
# -----------------------------------------------------------------------------
class DecisionTreeClassifier(BaseEstimator, ClassifierMixin):
    """
    Single Gini decision tree with a scikit-learn–like API.

    Class labels are handled as text: ``classes_`` and the output of
    :meth:`predict` are strings.  Numeric feature cells are split with
    ``>=`` thresholds and text cells with equality tests.

    Parameters
    ----------
    n_vars : int or None, default=None
        Number of randomly drawn feature columns considered at each node.
        ``None`` searches every column (exhaustive mode).
    random_state : int, RandomState or None, default=None
        Seed for the column draws.  Ignored when ``n_vars`` is ``None``.
    feature_names : list[str] or None, default=None
        Names of the columns of ``X``; ``f0``, ``f1``, ... when omitted.
    label : str, default="label"
        Name given to the label column in the schema.
    verbose : int, default=0
        Log the size of the grown tree at INFO level when positive.

    Notes
    -----
    The tree is never pruned; it grows until every leaf is pure or no
    question improves the split.
    """

    def __init__(
        self,
        *,
        n_vars: int | None = None,
        random_state=None,
        feature_names: list[str] | None = None,
        label: str = "label",
        verbose: int = 0,
    ):
        self.n_vars = n_vars
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
        self.schema_ = data.schema
        self.classes_ = np.unique(data.labels())
        self.n_features_in_ = len(data.schema.feature_indices)
        self.tree_ = build_tree(data, n_vars=self.n_vars, random_state=self.random_state)
        if self.verbose:
            logger.info("fitted tree: depth=%d leaves=%d",
                        tree_depth(self.tree_), count_leaves(self.tree_))
        return self

    def _check_fitted(self):
        if getattr(self, "tree_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def predict(self, X):
        """Predict the class label of each row of ``X``."""
        self._check_fitted()
        X = np.asarray(X, dtype=object)
        return np.array([predict_leaf(self.tree_, x).prediction for x in X])

    def score(self, X, y, sample_weight=None):
        # labels are compared as text
        return super().score(X, np.asarray(y, dtype=object).astype(str), sample_weight=sample_weight)

    def predict_proba(self, X):
        """Leaf class distribution of each row, columns ordered like ``classes_``."""
        self._check_fitted()
        X = np.asarray(X, dtype=object)
        out = np.zeros((len(X), len(self.classes_)), dtype=float)
        for i, x in enumerate(X):
            dist = predict_leaf(self.tree_, x).distribution
            out[i] = [dist.get(c, 0.0) for c in self.classes_]
        return out

    def predict_rule(self, X):
        """Conditions followed by each row of ``X``, joined with ``AND``."""
        from .export import trace_rule

        self._check_fitted()
        X = np.asarray(X, dtype=object)
        return [trace_rule(self.tree_, self.schema_, x) for x in X]

    def export_rules(self):
        """One ``<antecedent> => <label>`` string per leaf."""
        from .export import export_rules

        self._check_fitted()
        return export_rules(self.tree_, self.schema_)

    def export_graphviz(self, filename: str | None = None, *, format: str = "png") -> str:
        """Graphviz rendering of the tree; see :func:`giniforest.export.export_graphviz`."""
        from .export import export_graphviz

        self._check_fitted()
        return export_graphviz(self.tree_, self.schema_, filename, format=format)

    def print_tree(self):
        """Pretty-print the decision tree to ``stdout``."""
        from .export import render_tree

        self._check_fitted()
        print(render_tree(self.tree_, self.schema_))
