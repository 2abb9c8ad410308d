"""Tests for Node and its operator overloads."""

import pytest

from scalargrad.node import Node, Op


class TestNode:
    def test_leaf_defaults(self):
        node = Node(3)
        assert node.data == 3.0
        assert isinstance(node.data, float)
        assert node.grad == 0.0
        assert node.operands == ()
        assert node.op is Op.NONE
        assert node.is_leaf
        assert node.requires_grad
        assert not node.released

    def test_repr(self):
        assert repr(Node(2.0)) == "Node(data=2.0, grad=0.0)"

    def test_op_symbols(self):
        assert [op.value for op in Op] == ["", "+", "*", "ReLU"]

    def test_operator_overloads_build_graph(self):
        a = Node(2.0)
        b = Node(3.0)
        bias = Node(1.0)
        out = (a * b + bias).relu()
        assert out.op is Op.RECTIFY
        assert out.data == 7.0
        (n,) = out.operands
        assert n.op is Op.ADD
        assert n.operands[1] is bias
        assert n.operands[0].op is Op.MULTIPLY

    def test_backpropagate_seeds_and_resets(self):
        """backpropagate can be called repeatedly without stale gradients."""
        a = Node(2.0)
        b = Node(3.0)
        out = a * b + a
        out.backpropagate()
        out.backpropagate()
        assert out.grad == 1.0
        assert a.grad == pytest.approx(4.0)
        assert b.grad == pytest.approx(2.0)
