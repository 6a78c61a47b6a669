import numpy as np
from giniforest import DecisionTreeClassifier, RandomForestClassifier


def test_classifier_smoke():
    X = np.array([[1, 'A'], [2, 'A'], [3, 'B'], [4, 'B']], dtype=object)
    y = np.array([0, 0, 1, 1])
    clf = DecisionTreeClassifier(feature_names=['num', 'cat'])
    clf.fit(X, y)
    _ = clf.predict(X)
    _ = clf.export_rules()


def test_forest_smoke():
    X = np.array([[1.0, 'A'], [2.0, 'A'], [3.0, 'B'], [4.0, 'B']], dtype=object)
    y = np.array(['no', 'no', 'yes', 'yes'])
    forest = RandomForestClassifier(n_trees=5, n_vars=1, feature_names=['num', 'cat'], random_state=0)
    forest.fit(X, y)
    _ = forest.predict(X)
    _ = forest.predict_proba(X)
