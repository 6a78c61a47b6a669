"""Delimited-text input and output for datasets, backed by pandas."""

from __future__ import annotations

import logging

import pandas as pd

from .dataset import Dataset, Schema

logger = logging.getLogger(__name__)


def dataset_from_frame(frame: pd.DataFrame, label: str = "label") -> Dataset:
    """
    Convert a DataFrame to a :class:`Dataset`.

    Integer columns become ``int`` cells, float columns ``float`` cells and
    everything else text.  The label column is always stored as text.
    """
    frame = frame.copy()
    for name in frame.columns:
        col = frame[name]
        if name == label or not (pd.api.types.is_numeric_dtype(col) and not pd.api.types.is_bool_dtype(col)):
            frame[name] = col.astype(str)
    schema = Schema([str(c) for c in frame.columns], label=label)
    return Dataset(schema, frame.itertuples(index=False, name=None))


def read_csv(path, label: str = "label", sep: str = ",", na_values=None,
             dropna: bool = True, dtype=None) -> Dataset:
    """
    Read a delimited text file with a header row into a :class:`Dataset`.

    Parameters
    ----------
    path : str or path-like
        File to read.
    label : str, default="label"
        Name of the class label column.  Its absence is only reported when
        training starts, so unlabeled files can be read for classification.
    sep : str, default=","
        Field delimiter.
    na_values : scalar, str or list, optional
        Extra strings recognised as missing, e.g. ``"NA"``.
    dropna : bool, default=True
        Drop rows with a missing cell.  Missing values are not imputed.
    dtype : type or dict, optional
        Passed to :func:`pandas.read_csv`.  Columns read as ``str`` stay
        text, so numeric codes such as ``{"sex": str}`` are split with
        equality questions instead of thresholds.
    """
    frame = pd.read_csv(path, sep=sep, na_values=na_values, dtype=dtype)
    if dropna:
        n_before = len(frame)
        frame = frame.dropna().reset_index(drop=True)
        if len(frame) < n_before:
            logger.info("dropped %d rows with missing values from %s", n_before - len(frame), path)
    return dataset_from_frame(frame, label=label)


def write_csv(data: Dataset, path, sep: str = ",") -> None:
    """Write ``data`` with its schema as the header row."""
    width = len(data.schema)
    frame = pd.DataFrame([row[:width] for row in data.rows], columns=list(data.schema.columns))
    frame.to_csv(path, sep=sep, index=False)
