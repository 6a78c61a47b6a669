"""Yes/no questions asked about one column of an observation."""

from __future__ import annotations

from dataclasses import dataclass

from .dataset import Schema, is_numeric


@dataclass(frozen=True, eq=False)
class EqualityQuestion:
    """Is the text cell at ``column`` equal to ``value``?

    Most useful for nominal columns.  A numeric cell or a row too short to
    have ``column`` answers ``False``.
    """

    column: int
    value: str

    def apply(self, observation) -> bool:
        if len(observation) <= self.column:
            return False
        cell = observation[self.column]
        return isinstance(cell, str) and cell == self.value

    __call__ = apply

    def describe(self, schema: Schema | None = None) -> str:
        name = schema.name(self.column) if schema is not None else f"X[{self.column}]"
        return f"{name} == {self.value}?"


@dataclass(frozen=True, eq=False)
class ThresholdQuestion:
    """Is the numeric cell at ``column`` greater than or equal to ``value``?

    The column must be at least ordinal.  A text cell or a row too short to
    have ``column`` answers ``False``.
    """

    column: int
    value: float

    def apply(self, observation) -> bool:
        if len(observation) <= self.column:
            return False
        cell = observation[self.column]
        return is_numeric(cell) and cell >= self.value

    __call__ = apply

    def describe(self, schema: Schema | None = None) -> str:
        name = schema.name(self.column) if schema is not None else f"X[{self.column}]"
        return f"{name} >= {self.value}?"


Question = EqualityQuestion | ThresholdQuestion


def question_for(column: int, cell) -> Question:
    """Candidate question splitting ``column`` at an observed ``cell``."""
    if is_numeric(cell):
        return ThresholdQuestion(column, cell)
    if isinstance(cell, str):
        return EqualityQuestion(column, cell)
    raise TypeError(f"Data must be strings or numbers, got {type(cell).__name__}")
