"""Cross-check gradients against torch.autograd."""

import pytest

from scalargrad.node import Node

torch = pytest.importorskip("torch")


@pytest.mark.parametrize(
    "a_val, b_val, bias_val",
    [(2.0, 3.0, 1.0), (2.0, -3.0, 1.0), (-1.5, 0.5, 4.0), (0.25, 8.0, -2.0)],
)
def test_neuron_matches_torch(a_val, b_val, bias_val):
    a, b, bias = Node(a_val), Node(b_val), Node(bias_val)
    out = (a * b + bias).relu()
    out.backpropagate()

    ta, tb, tbias = (
        torch.tensor(v, dtype=torch.float64, requires_grad=True)
        for v in (a_val, b_val, bias_val)
    )
    tout = torch.relu(ta * tb + tbias)
    tout.backward()

    assert out.data == pytest.approx(tout.item())
    assert a.grad == pytest.approx(ta.grad.item())
    assert b.grad == pytest.approx(tb.grad.item())
    assert bias.grad == pytest.approx(tbias.grad.item())


def test_diamond_matches_torch():
    x = Node(1.5)
    y = x * x
    out = (y + y) * (x + y)
    out.backpropagate()

    tx = torch.tensor(1.5, dtype=torch.float64, requires_grad=True)
    ty = tx * tx
    tout = (ty + ty) * (tx + ty)
    tout.backward()

    assert out.data == pytest.approx(tout.item())
    assert x.grad == pytest.approx(tx.grad.item())
