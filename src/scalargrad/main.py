import argparse
import logging
from dataclasses import dataclass

from scalargrad.constants import (
    ADD_ONLY,
    DEFAULT_COMPUTATION,
    MENU,
    MULTIPLY_ADD_RECTIFY,
    MULTIPLY_ONLY,
    SEED_GRADIENT,
)
from scalargrad.engine import add, backward, create_leaf, multiply, rectify, release, zero_gradients
from scalargrad.graph import format_graph, render_graph
from scalargrad.node import Node


@dataclass
class DemoResult:
    """The output node of a demo computation and its three input nodes."""

    output: Node
    a: Node
    b: Node
    bias: Node


def build_computation(kind: int, a: Node, b: Node, bias: Node) -> Node:
    """
    Build the graph for a computation type.

    Args:
        kind: 1 = a*b + bias then ReLU, 2 = a*b, 3 = a + bias.
        a: First input.
        b: Second input.
        bias: Bias input.

    Returns:
        The output node of the computation.
    """
    if kind == MULTIPLY_ADD_RECTIFY:
        ab = multiply(a, b)
        ab.label = "a*b"
        n = add(ab, bias)
        n.label = "a*b + bias"
        out = rectify(n)
    elif kind == MULTIPLY_ONLY:
        out = multiply(a, b)
    elif kind == ADD_ONLY:
        out = add(a, bias)
    else:
        raise ValueError(f"unknown computation type: {kind}")

    out.label = "out"
    return out


def run_demo(input1: float, input2: float, bias_val: float, kind: int) -> DemoResult:
    """Build the selected computation over fresh inputs and backpropagate from its output."""
    a = create_leaf(input1, label="a")
    b = create_leaf(input2, label="b")
    bias = create_leaf(bias_val, label="bias")

    out = build_computation(kind, a, b, bias)

    zero_gradients(out)
    out.grad = SEED_GRADIENT
    backward(out)

    return DemoResult(out, a, b, bias)


def prompt_float(prompt: str) -> float:
    while True:
        raw = input(prompt)
        try:
            return float(raw)
        except ValueError:
            print(f"Invalid number: {raw!r}")


def prompt_computation() -> int:
    print(MENU)
    raw = input("Enter your choice (1-3): ")
    try:
        kind = int(raw)
    except ValueError:
        kind = None

    if kind not in (MULTIPLY_ADD_RECTIFY, MULTIPLY_ONLY, ADD_ONLY):
        print("Invalid computation type. Defaulting to Multiplication.")
        return DEFAULT_COMPUTATION
    return kind


def print_result(result: DemoResult) -> None:
    print("\nComputational Results")
    print("--------------------")
    print(f"Output: {result.output.data:.2f}")

    print("\nGradients")
    print("---------")
    print(f"Input1 gradient: {result.a.grad:.2f}")
    print(f"Input2 gradient: {result.b.grad:.2f}")
    print(f"Bias gradient: {result.bias.grad:.2f}")

    print("\nComputational Graph")
    print("-------------------")
    print(format_graph(result.output))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Scalar autograd demonstration.")
    parser.add_argument(
        "--visualize", action="store_true", help="render the graph with graphviz"
    )
    parser.add_argument("--verbose", action="store_true", help="log the backward pass")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("Welcome to scalargrad - An Autograd Demonstration")

    # ? inputs and bias
    input1 = prompt_float("Enter first input value: ")
    input2 = prompt_float("Enter second input value: ")
    bias_val = prompt_float("Enter bias value: ")

    kind = prompt_computation()

    result = run_demo(input1, input2, bias_val, kind)
    print_result(result)

    if args.visualize:
        render_graph(result.output, "graph-after-backprop", view=True)

    release(result.output)


if __name__ == "__main__":
    main()
