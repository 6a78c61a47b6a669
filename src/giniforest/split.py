"""
giniforest.split
================

Candidate question enumeration and best-split selection.

Two search modes are supported.  The exhaustive mode asks one question per
distinct value of every feature column.  The randomized mode first draws
``n_vars`` feature columns without replacement and only asks questions about
those; forests use it to decorrelate their trees.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
from sklearn.utils import check_random_state

from .dataset import Schema
from .impurity import gini_impurity, information_gain
from .question import Question, question_for


def partition(rows: Sequence, question: Question) -> tuple[tuple, tuple]:
    """Split ``rows`` into those answering the question with yes and no."""
    true_rows, false_rows = [], []
    for row in rows:
        (true_rows if question.apply(row) else false_rows).append(row)
    return tuple(true_rows), tuple(false_rows)


def candidate_questions(rows: Sequence, columns: Iterable[int]) -> list[Question]:
    """One question per distinct value seen in each of ``columns``.

    Values keep the order in which they first occur in ``rows``; columns keep
    the order they are given in.
    """
    questions = []
    for column in columns:
        values = dict.fromkeys((row[column], type(row[column])) for row in rows)
        questions.extend(question_for(column, value) for value, _ in values)
    return questions


def choose_columns(schema: Schema, n_vars: int, random_state=None) -> list[int]:
    """Draw ``n_vars`` feature columns without replacement, in draw order."""
    rng = check_random_state(random_state)
    features = np.asarray(schema.feature_indices, dtype=int)
    return [int(c) for c in rng.choice(features, size=n_vars, replace=False)]


def best_question(rows: Sequence, schema: Schema, n_vars: int | None = None,
                  random_state=None) -> tuple[Question | None, float]:
    """Find the question splitting ``rows`` for the highest information gain.

    Parameters
    ----------
    rows : sequence of observations
        The current partition.
    schema : Schema
        Column names; the label column is never asked about.
    n_vars : int or None, default=None
        ``None`` searches every feature column.  Otherwise only ``n_vars``
        randomly drawn feature columns are considered.
    random_state : int, RandomState or None
        Source of the column draw in randomized mode.

    Returns
    -------
    (question, gain)
        ``question`` is ``None`` when no candidate has strictly positive
        gain, in which case ``gain`` is ``0.0``.  Among equally good
        candidates the first one enumerated wins.
    """
    label_index = schema.label_index
    if n_vars is None:
        columns = schema.feature_indices
    else:
        columns = choose_columns(schema, n_vars, random_state)

    current_impurity = gini_impurity(rows, label_index)
    best, best_gain = None, 0.0
    for question in candidate_questions(rows, columns):
        true_rows, false_rows = partition(rows, question)
        gain = information_gain(true_rows, false_rows, current_impurity, label_index)
        if gain > best_gain:
            best, best_gain = question, gain
    return best, best_gain
