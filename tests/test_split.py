import numpy as np

from giniforest import EqualityQuestion, Schema, ThresholdQuestion
from giniforest.split import best_question, candidate_questions, choose_columns, partition


def test_partition_preserves_order():
    rows = [("a", 1), ("b", 5), ("c", 2), ("d", 7)]
    yes, no = partition(rows, ThresholdQuestion(1, 3))
    assert yes == (("b", 5), ("d", 7))
    assert no == (("a", 1), ("c", 2))


def test_candidates_are_distinct_values_per_column():
    rows = [("red", 4, "x"), ("red", 4, "y"), ("green", 5, "x")]
    questions = candidate_questions(rows, [0, 1])
    described = [(type(q).__name__, q.column, q.value) for q in questions]
    assert described == [
        ("EqualityQuestion", 0, "red"),
        ("EqualityQuestion", 0, "green"),
        ("ThresholdQuestion", 1, 4),
        ("ThresholdQuestion", 1, 5),
    ]


def test_best_question_prefers_first_of_equal_candidates():
    schema = Schema(["f", "label"])
    rows = [("a", "x"), ("b", "y")]
    q, gain = best_question(rows, schema)
    assert isinstance(q, EqualityQuestion)
    assert q.value == "a"
    assert gain > 0


def test_best_question_scans_columns_in_schema_order():
    schema = Schema(["first", "second", "label"])
    rows = [(1, "u", "x"), (2, "v", "y")]
    q, _ = best_question(rows, schema)
    assert q.column == 0


def test_best_question_skips_label_column():
    schema = Schema(["label", "f"])
    rows = [("x", 1), ("y", 2), ("x", 3)]
    q, _ = best_question(rows, schema)
    assert q.column == 1


def test_no_question_for_pure_rows():
    schema = Schema(["f", "label"])
    q, gain = best_question([(1, "a"), (2, "a")], schema)
    assert q is None
    assert gain == 0.0


def test_no_question_when_features_cannot_separate():
    schema = Schema(["f", "label"])
    q, gain = best_question([(1, "a"), (1, "b")], schema)
    assert q is None
    assert gain == 0.0


def test_choose_columns_draws_distinct_features():
    schema = Schema(["a", "label", "b", "c", "d"])
    cols = choose_columns(schema, 3, random_state=0)
    assert len(cols) == 3
    assert len(set(cols)) == 3
    assert 1 not in cols
    assert cols == choose_columns(schema, 3, random_state=0)


def test_randomized_search_only_asks_about_drawn_columns():
    schema = Schema(["noise", "signal", "label"])
    rows = [("n", 1, "x"), ("n", 2, "x"), ("n", 3, "y"), ("n", 4, "y")]
    rng = np.random.RandomState(3)
    for _ in range(10):
        q, gain = best_question(rows, schema, n_vars=1, random_state=rng)
        if q is None:
            assert gain == 0.0
        else:
            assert q.column == 1
            assert q.value == 3
