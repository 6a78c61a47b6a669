# -*- coding: utf-8 -*-
"""
giniforest.dataset
==================

Typed tabular data shared by the tree and forest builders.

A cell is one of ``int``, ``float`` or ``str``.  An observation is a tuple of
cells whose meaning is positional; the :class:`Schema` names the columns and
identifies which of them holds the class label.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .exceptions import ConfigurationError

Cell = int | float | str
Observation = tuple


def as_cell(value) -> Cell:
    """Normalise ``value`` to one of the three supported cell kinds."""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float, str)):
        return value
    raise TypeError(f"Data must be strings or numbers, got {type(value).__name__}")


def observation_cells(observation) -> tuple:
    """Normalise the cells of a row to classify, leaving unknown values as they are."""
    cells = []
    for value in observation:
        if isinstance(value, np.generic):
            value = value.item()
        if isinstance(value, bool):
            value = str(value)
        cells.append(value)
    return tuple(cells)


def is_numeric(cell) -> bool:
    return isinstance(cell, (int, float, np.integer, np.floating)) and not isinstance(cell, (bool, np.bool_))


@dataclass(frozen=True)
class Schema:
    """Ordered column names plus the name of the label column."""

    columns: tuple[str, ...]
    label: str = "label"

    def __init__(self, columns: Iterable[str], label: str = "label"):
        object.__setattr__(self, "columns", tuple(str(c) for c in columns))
        object.__setattr__(self, "label", str(label))

    def __len__(self) -> int:
        return len(self.columns)

    def check(self) -> None:
        """Raise ConfigurationError unless the label column is present."""
        if self.label not in self.columns:
            raise ConfigurationError(
                f"Training data must contain a {self.label!r} column; got {list(self.columns)}"
            )

    @property
    def label_index(self) -> int:
        self.check()
        return self.columns.index(self.label)

    @property
    def feature_indices(self) -> tuple[int, ...]:
        return tuple(i for i, name in enumerate(self.columns) if name != self.label)

    def name(self, column: int) -> str:
        if 0 <= column < len(self.columns):
            return self.columns[column]
        return f"X[{column}]"


class Dataset:
    """An immutable collection of observations sharing one :class:`Schema`.

    Parameters
    ----------
    schema : Schema or sequence of str
        Column names.  A plain sequence is wrapped in a :class:`Schema` whose
        label column is ``"label"``.
    rows : iterable of sequences
        Observations.  Each row needs at least ``len(schema)`` cells; extra
        trailing cells are kept.  Cells are normalised with :func:`as_cell`.
    """

    __slots__ = ("schema", "rows")

    def __init__(self, schema: Schema | Sequence[str], rows: Iterable[Sequence]):
        if not isinstance(schema, Schema):
            schema = Schema(schema)
        width = len(schema)
        normalised = []
        for i, row in enumerate(rows):
            if len(row) < width:
                raise ValueError(f"row {i} has {len(row)} cells, schema expects at least {width}")
            normalised.append(tuple(as_cell(v) for v in row))
        self.schema = schema
        self.rows: tuple[Observation, ...] = tuple(normalised)

    @classmethod
    def _from_rows(cls, schema: Schema, rows: tuple) -> "Dataset":
        # rows are already normalised tuples
        data = cls.__new__(cls)
        data.schema = schema
        data.rows = rows
        return data

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index: int) -> Observation:
        return self.rows[index]

    def __repr__(self) -> str:
        return f"Dataset(columns={list(self.schema.columns)}, n_rows={len(self.rows)})"

    def take(self, indices: Iterable[int]) -> "Dataset":
        """Rows at ``indices``, in that order (repeats allowed)."""
        rows = self.rows
        return Dataset._from_rows(self.schema, tuple(rows[int(i)] for i in indices))

    def labels(self) -> list[str]:
        i = self.schema.label_index
        return [str(row[i]) for row in self.rows]

    def column(self, name: str) -> list[Cell]:
        i = self.schema.columns.index(name)
        return [row[i] for row in self.rows]

    @classmethod
    def from_arrays(cls, X, y, feature_names: Sequence[str] | None = None,
                    label: str = "label") -> "Dataset":
        """Build a dataset from a feature matrix and a label vector.

        The label is appended as the last column, so feature positions in
        ``X`` are also valid positions for classification.
        """
        X = np.asarray(X, dtype=object)
        if X.ndim != 2:
            raise ValueError("X must be two-dimensional")
        y = np.asarray(y, dtype=object)
        if len(y) != X.shape[0]:
            raise ValueError("X and y must have the same number of rows")
        n_features = X.shape[1]
        if feature_names is None:
            feature_names = [f"f{i}" for i in range(n_features)]
        elif len(feature_names) != n_features:
            raise ValueError("feature_names length must match X.shape[1]")
        if label in feature_names:
            raise ConfigurationError(f"feature_names must not contain the label column {label!r}")
        schema = Schema(list(feature_names) + [label], label=label)
        return cls(schema, (tuple(x) + (str(as_cell(c)),) for x, c in zip(X, y)))
