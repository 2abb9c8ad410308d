"""
Graph construction and backward propagation for scalar nodes.

Every operation allocates a new Node wired to its operands and computes the
forward value immediately. The backward pass pushes gradient from a seeded
root to all reachable ancestors, dispatching on each node's operation tag.
"""

from __future__ import annotations

import logging
from typing import Callable

from scalargrad.node import Node, Op

logger = logging.getLogger(__name__)


def _check_operand(node: Node) -> None:
    assert isinstance(node, Node), f"expected a Node operand, got {type(node).__name__}"
    assert not node.released, f"{node!r} has been released and cannot be used as an operand"


_FORWARD_RULES: dict[Op, Callable[..., float]] = {
    Op.ADD: lambda a, b: a + b,
    Op.MULTIPLY: lambda a, b: a * b,
    Op.RECTIFY: lambda a: max(0.0, a),
}


def _make_result(inputs: tuple[Node, ...], op: Op) -> Node:
    """
    Allocate a result node recording the operation that produced it.

    Operands are validated before their values are read.

    Args:
        inputs: The nodes consumed by the operation, in call order.
        op: The operation tag selecting the forward and gradient rules.

    Returns:
        A new Node that requires gradient iff any operand does.
    """
    for operand in inputs:
        _check_operand(operand)

    res = Node(
        _FORWARD_RULES[op](*(operand.data for operand in inputs)),
        inputs,
        op,
        requires_grad=any(operand.requires_grad for operand in inputs),
    )
    # Each occurrence counts, so x * x holds two references to x.
    for operand in inputs:
        operand._consumers += 1

    return res


def create_leaf(value: float, requires_grad: bool = True, label: str = "") -> Node:
    """Create an input node with no operands."""
    assert isinstance(value, (int, float)), f"expected a number, got {type(value).__name__}"
    return Node(value, requires_grad=requires_grad, label=label)


def add(a: Node, b: Node) -> Node:
    return _make_result((a, b), Op.ADD)


def multiply(a: Node, b: Node) -> Node:
    return _make_result((a, b), Op.MULTIPLY)


def rectify(a: Node) -> Node:
    """max(0, a). The local derivative is 1 for positive output and 0 otherwise."""
    return _make_result((a,), Op.RECTIFY)


def _add_backward(res: Node) -> None:
    a, b = res.operands
    # Accumulate with += so operands used in several operations sum their contributions.
    if a.requires_grad:
        a.grad += res.grad
    if b.requires_grad:
        b.grad += res.grad


def _multiply_backward(res: Node) -> None:
    a, b = res.operands
    # Product rule: d(ab)/da = b, d(ab)/db = a.
    if a.requires_grad:
        a.grad += b.data * res.grad
    if b.requires_grad:
        b.grad += a.data * res.grad


def _rectify_backward(res: Node) -> None:
    (a,) = res.operands
    if a.requires_grad:
        # Subgradient at exactly 0 is 0.
        a.grad += res.grad if res.data > 0 else 0.0


_BACKWARD_RULES: dict[Op, Callable[[Node], None]] = {
    Op.ADD: _add_backward,
    Op.MULTIPLY: _multiply_backward,
    Op.RECTIFY: _rectify_backward,
}


def topological_order(root: Node) -> list[Node]:
    """
    Performs a topological sort of the graph reachable from root.

    Uses an explicit stack instead of recursion so deep graphs do not hit the
    interpreter's recursion limit. Operands are explored last operand first.

    Returns:
        A list of nodes in which every node appears after all of its operands.
        Each reachable node appears exactly once.
    """
    topo_ordering: list[Node] = []
    visited: set[Node] = set()
    # (node, expanded): a node is appended once all its operands are done.
    stack: list[tuple[Node, bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            topo_ordering.append(node)
            continue
        if node in visited:
            continue
        visited.add(node)
        stack.append((node, True))
        for operand in node.operands:
            if operand not in visited:
                stack.append((operand, False))

    return topo_ordering


def backward(root: Node) -> None:
    """
    Propagates gradient from root to every reachable ancestor.

    The caller must seed root.grad first (conventionally 1.0). Nodes are
    processed in reverse topological order, so a node distributes its gradient
    only after every node consuming it has contributed. A node reachable over
    several paths (diamond dependency) therefore receives the sum of all path
    contributions and is processed exactly once.

    Gradients accumulate: call zero_gradients before a second pass over a
    graph that shares nodes with a previous one.
    """
    if root.requires_grad and root.grad == 0.0:
        logger.warning("backward called on %r with an unseeded gradient", root)

    for node in reversed(topological_order(root)):
        if not node.requires_grad or node.is_leaf:
            continue
        logger.debug("backward %s: data=%s grad=%s", node.op.name, node.data, node.grad)
        _BACKWARD_RULES[node.op](node)


def zero_gradients(root: Node) -> None:
    """Reset grad to 0 on root and every node reachable through its operands."""
    for node in topological_order(root):
        node.grad = 0.0


def release(root: Node) -> None:
    """
    Releases root and every operand no longer referenced by a live node.

    Each node counts the result nodes holding it as an operand. Releasing a
    node drops its operand links and decrements those counts; an operand is
    released in turn only when its count reaches zero. Nodes shared with a
    graph that is still alive are left intact.

    Releasing a node twice, or releasing a node that is still an operand of a
    live node, is a programmer error.
    """
    assert not root.released, f"{root!r} has already been released"
    assert root._consumers == 0, f"{root!r} is still an operand of {root._consumers} live node(s)"

    pending = [root]
    released = 0
    while pending:
        node = pending.pop()
        node_operands, node.operands = node.operands, ()
        node.released = True
        released += 1
        for operand in node_operands:
            operand._consumers -= 1
            if operand._consumers == 0:
                pending.append(operand)

    logger.debug("released %d node(s) from %r", released, root)


def value(node: Node) -> float:
    return node.data


def gradient(node: Node) -> float:
    return node.grad


def operation_tag(node: Node) -> Op:
    return node.op


def operands(node: Node) -> tuple[Node, ...]:
    return node.operands
