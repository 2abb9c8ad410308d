import logging

from graphviz import Digraph, ExecutableNotFound

from scalargrad.constants import INDENT, NUMBER_FORMAT
from scalargrad.node import Node

logger = logging.getLogger(__name__)


def describe_node(node: Node) -> str:
    """One-line summary of a node: value, gradient, operation and gradient tracking."""
    op = node.op.value or "None"
    tracked = "Yes" if node.requires_grad else "No"
    return (
        f"Value: {node.data:{NUMBER_FORMAT}}, Grad: {node.grad:{NUMBER_FORMAT}}, "
        f"Op: {op}, Requires Grad: {tracked}"
    )


def format_graph(root: Node) -> str:
    """
    Formats the computational graph as an indented listing.

    Each node is printed on its own line, indented by its depth below root,
    followed by its operands in call order. A node shared by several results
    is listed once under each of them.

    Args:
        root: The output node of the computational graph.

    Returns:
        The listing as a single string, one line per node visit.
    """
    lines: list[str] = []
    # Explicit stack; operands pushed in reverse so they print in call order.
    stack: list[tuple[Node, int]] = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        lines.append(INDENT * depth + describe_node(node))
        for operand in reversed(node.operands):
            stack.append((operand, depth + 1))

    return "\n".join(lines)


def collect_nodes_and_edges(root: Node) -> tuple[set[Node], set[tuple[Node, Node]]]:
    """
    Traverses the computational graph starting from the root node.

    Returns:
        A tuple containing:
        - nodes: Set of all nodes in the graph.
        - edges: Set of tuples (operand_node, result_node).
    """
    nodes: set[Node] = set()
    edges: set[tuple[Node, Node]] = set()
    pending = [root]

    while pending:
        node = pending.pop()
        if node in nodes:
            continue
        nodes.add(node)
        for operand in node.operands:
            # Edge direction: operand -> result.
            edges.add((operand, node))
            pending.append(operand)

    return nodes, edges


def draw_graph(root: Node) -> Digraph:
    """
    Visualizes the computational graph using Graphviz.

    Every node is drawn as a record showing its label, data and gradient.
    Nodes produced by an operation get an extra node for the operation,
    which their operands connect to.

    Args:
        root: The root node of the computational graph to visualize.

    Returns:
        A Digraph object representing the computational graph.
    """
    graph = Digraph(format="svg", graph_attr={"rankdir": "LR"})

    nodes, edges = collect_nodes_and_edges(root)

    for node in nodes:
        node_id = str(id(node))
        graph.node(
            name=node_id,
            label=f"{node.label} | data {node.data:.4f} | grad {node.grad:.4f}",
            shape="record",
        )

        if not node.is_leaf:
            op_node_id = node_id + node.op.name
            graph.node(name=op_node_id, label=node.op.value)
            graph.edge(op_node_id, node_id)

    for operand, result in edges:
        # Results always carry an op node, so operands connect to it.
        graph.edge(str(id(operand)), str(id(result)) + result.op.name)

    return graph


def render_graph(root: Node, filename: str, view: bool = False) -> str | None:
    """
    Renders the graph to an SVG file.

    Returns:
        The path of the rendered file, or None when the Graphviz `dot`
        executable is not installed.
    """
    try:
        return draw_graph(root).render(filename, view=view)
    except ExecutableNotFound:
        logger.warning("graphviz executable not found, skipping visualization of %s", filename)
        return None
