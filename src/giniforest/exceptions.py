"""Exceptions raised by giniforest."""


class ConfigurationError(ValueError):
    """Invalid training configuration.

    Raised before any tree is grown, e.g. when the schema has no label column
    or when ``n_trees``/``n_vars`` are out of range.
    """
