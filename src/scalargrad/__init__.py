from scalargrad.engine import (
    add,
    backward,
    create_leaf,
    gradient,
    multiply,
    operands,
    operation_tag,
    rectify,
    release,
    topological_order,
    value,
    zero_gradients,
)
from scalargrad.node import Node, Op

__all__ = [
    "Node",
    "Op",
    "add",
    "backward",
    "create_leaf",
    "gradient",
    "multiply",
    "operands",
    "operation_tag",
    "rectify",
    "release",
    "topological_order",
    "value",
    "zero_gradients",
]
