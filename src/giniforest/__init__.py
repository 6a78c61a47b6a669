# giniforest/__init__.py
"""
giniforest: Gini decision trees and random forests in pure Python.

Exports:
    - build_tree, grow_forest, bootstrap_sample
    - DecisionTreeClassifier, RandomForestClassifier
    - Dataset, Schema, ConfigurationError
    - read_csv, write_csv
"""
from .dataset import Dataset, Schema
from .exceptions import ConfigurationError
from .forest import RandomForest, RandomForestClassifier, bootstrap_sample, grow_forest
from .io import read_csv, write_csv
from .question import EqualityQuestion, ThresholdQuestion
from .tree import DecisionTreeClassifier, Leaf, Node, build_tree

__all__ = [
    "ConfigurationError",
    "Dataset",
    "DecisionTreeClassifier",
    "EqualityQuestion",
    "Leaf",
    "Node",
    "RandomForest",
    "RandomForestClassifier",
    "Schema",
    "ThresholdQuestion",
    "bootstrap_sample",
    "build_tree",
    "grow_forest",
    "read_csv",
    "write_csv",
]
__version__ = "0.1.0"
