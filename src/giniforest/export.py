"""Human-readable projections of a tree: text dump, rules and Graphviz."""

from __future__ import annotations

from .dataset import Schema, observation_cells
from .tree import Leaf, Node, Tree


def _describe(question, schema: Schema) -> str:
    return question.describe(schema).rstrip("?")


def _negate(question, schema: Schema) -> str:
    return "NOT " + _describe(question, schema)


def render_tree(tree: Tree, schema: Schema | None = None) -> str:
    """
    Indented dump of ``tree``, one line per node.

    A node line ``Node: <question>`` is followed by its yes-branch and then
    its no-branch, each indented by one more space.
    """
    lines = []
    stack = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        pad = " " * depth
        if isinstance(node, Leaf):
            dist = {cl: round(p, 4) for cl, p in node.distribution.items()}
            lines.append(f"{pad}Leaf: {dist}")
        else:
            lines.append(f"{pad}Node: {node.question.describe(schema)}")
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
    return "\n".join(lines)


def export_rules(tree: Tree, schema: Schema | None = None) -> list[str]:
    """All decision rules as ``<antecedent> => <label>`` strings, one per leaf."""
    rules: list[str] = []
    stack = [(tree, [])]
    while stack:
        node, parts = stack.pop()
        if isinstance(node, Leaf):
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {node.prediction}")
            continue
        stack.append((node.right, parts + [_negate(node.question, schema)]))
        stack.append((node.left, parts + [_describe(node.question, schema)]))
    return rules


def trace_rule(tree: Tree, schema: Schema | None, observation) -> str:
    """The conjunction of conditions ``observation`` satisfies on its way to a leaf."""
    observation = observation_cells(observation)
    parts = []
    node = tree
    while isinstance(node, Node):
        if node.question.apply(observation):
            parts.append(_describe(node.question, schema))
            node = node.left
        else:
            parts.append(_negate(node.question, schema))
            node = node.right
    return " AND ".join(parts) if parts else "<root>"


def export_graphviz(tree: Tree, schema: Schema | None = None, filename: str | None = None,
                    *, format: str = "png") -> str:
    """
    Export the tree structure in Graphviz format.

    Parameters
    ----------
    tree : Leaf or Node
        Tree to draw.
    schema : Schema, optional
        Used for column names in node labels.
    filename : str or None, default=None
        Basename of the output file (the extension is determined by
        ``format``).  If None, the DOT source code is returned as a string
        and no file is written.
    format : str, default="png"
        Graphviz output format.  ``'dot'`` writes the DOT source directly
        and does not call the external ``dot`` command.

    Returns
    -------
    str
        Path to the written file, or the DOT source code if filename is None.

    Raises
    ------
    RuntimeError
        If the ``graphviz`` package is not installed.
    """
    try:
        import graphviz
    except ImportError:
        raise RuntimeError("Graphviz is required for export_graphviz but not installed.")
    dot = graphviz.Digraph(format=format)
    stack = [(tree, "0")]
    while stack:
        node, name = stack.pop()
        if isinstance(node, Leaf):
            dot.node(name, f"class={node.prediction}\n{dict(node.distribution)}",
                     shape="box", style="filled", color="lightgrey")
            continue
        dot.node(name, node.question.describe(schema), shape="ellipse", style="filled", color="lightblue")
        l_id, r_id = name + "L", name + "R"
        dot.edge(name, l_id, label="True")
        dot.edge(name, r_id, label="False")
        stack.append((node.right, r_id))
        stack.append((node.left, l_id))

    if filename is None:
        return dot.source
    if format.lower() == "dot":
        path = f"{filename}.dot"
        dot.save(path)
        return path
    try:
        dot.render(filename, cleanup=True)
        return f"{filename}.{format}"
    except graphviz.ExecutableNotFound:
        # no dot binary on PATH, keep the source
        fallback_path = f"{filename}.dot"
        dot.save(fallback_path)
        return fallback_path
