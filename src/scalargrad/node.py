from __future__ import annotations

from enum import Enum

from scalargrad.constants import SEED_GRADIENT


class Op(Enum):
    """
    Tag of the operation that produced a node.

    The tag selects the gradient rule applied during the backward pass. The
    value is the symbol printed for the operation ("" for leaf nodes).
    """

    NONE = ""
    ADD = "+"
    MULTIPLY = "*"
    RECTIFY = "ReLU"


class Node:
    """
    Represents a scalar node in a computational graph for automatic differentiation.

    Each node stores its forward value (data), the gradient accumulated during
    the backward pass, the operation that produced it and the operand nodes
    consumed by that operation. Operands are kept in call order because the
    gradient rules index them positionally. An operand node may be shared by
    several result nodes, so the graph is a DAG rather than a tree.

    Nodes are normally created through `scalargrad.engine` (create_leaf, add,
    multiply, rectify) or the operator overloads below.
    """

    def __init__(
        self,
        data: float,
        operands: tuple[Node, ...] = (),
        op: Op = Op.NONE,
        requires_grad: bool = True,
        label: str = "",
    ) -> None:
        """
        Initialize a Node in the computational graph.

        Args:
            data: The forward value stored in this node.
            operands: Nodes consumed to produce this node, in call order.
                      Empty for leaf nodes.
            op: The operation that produced this node (Op.NONE for leaves).
            requires_grad: Whether gradients are accumulated on this node.
            label: Human-readable label for printing and visualization.
        """
        self.data = float(data)
        self.grad = 0.0
        self.operands = tuple(operands)
        self.op = op
        self.requires_grad = requires_grad
        self.label = label
        self.released = False
        # Number of live result nodes holding this node as an operand.
        self._consumers = 0

    def __repr__(self) -> str:
        return f"Node(data={self.data}, grad={self.grad})"

    @property
    def is_leaf(self) -> bool:
        return self.op is Op.NONE

    def __add__(self, other: Node) -> Node:
        from scalargrad.engine import add

        return add(self, other)

    def __mul__(self, other: Node) -> Node:
        from scalargrad.engine import multiply

        return multiply(self, other)

    def relu(self) -> Node:
        """Rectify this node: max(0, data)."""
        from scalargrad.engine import rectify

        return rectify(self)

    def backpropagate(self) -> None:
        """
        Performs a complete backward pass rooted at this node.

        The process:
        1. Reset the gradients of every reachable node to zero.
        2. Seed this node's gradient with 1.0 (d(output)/d(output) = 1).
        3. Propagate gradients to all ancestors in reverse topological order.
        """
        from scalargrad.engine import backward, zero_gradients

        zero_gradients(self)
        self.grad = SEED_GRADIENT
        backward(self)
