import argparse
import json
import logging
import sys
from typing import List, Optional

from .core.einsum import einsum
from .core.equation import parse_equation
from .core.tensor import from_nested
from .gallery import CATEGORIES, get_example, list_examples, run_example
from .utils.formatting import DEFAULT_PRECISION, tensor_to_string


def _list(category: Optional[str]) -> None:
    for entry in list_examples(category):
        print(f"{entry.id:12s} {entry.category:14s} {entry.name}")


def _run(example_id: str, precision: Optional[int]) -> None:
    try:
        get_example(example_id)
    except KeyError:
        ids = ", ".join(e.id for e in list_examples())
        raise SystemExit(f"Unknown example '{example_id}'. Available: {ids}") from None

    result = run_example(example_id)
    print("=" * 60)
    print(result.title)
    print("=" * 60)
    print(result.description)
    print()
    print(result.code)
    for i, step in enumerate(result.steps, start=1):
        print()
        print(f"--- Step {i}: {step.name} ---")
        print(step.explanation)
        print()
        if precision is None:
            print(step.tensor_string)
        else:
            print(tensor_to_string(step.tensor, precision))


def _einsum(equation: str, operands: List[str], precision: int) -> None:
    parsed = parse_equation(equation)
    if len(operands) != parsed.num_operands:
        raise SystemExit(
            f"Equation '{equation}' needs {parsed.num_operands} operands, got {len(operands)}"
        )
    tensors = []
    for i, (spec, raw) in enumerate(zip(parsed.operand_specs, operands)):
        try:
            values = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SystemExit(f"Operand {i} is not valid JSON: {exc}") from exc
        # Operand labels must be distinct; diagonal specs get positional labels.
        indices = spec if len(set(spec)) == len(spec) else [f"{t}{k}" for k, t in enumerate(spec)]
        tensors.append(from_nested(f"T{i}", indices, values))

    result = einsum(equation, *tensors, name="result")
    print(f"# {parsed} -> indices {list(result.indices)}, shape {list(result.shape)}")
    print(tensor_to_string(result, precision))


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Enable debug logging"
    )

    parser = argparse.ArgumentParser(description="Tensor logic command line utilities", parents=[common])
    subparsers = parser.add_subparsers(dest="cmd")

    list_parser = subparsers.add_parser("list", parents=[common], help="List gallery examples")
    list_parser.add_argument("--category", choices=CATEGORIES, default=None)

    run_parser = subparsers.add_parser("run", parents=[common], help="Run a gallery example and print its steps")
    run_parser.add_argument("example", help="Example id (see 'list')")
    run_parser.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Decimal places for every step (default: each step's own precision)",
    )

    einsum_parser = subparsers.add_parser("einsum", parents=[common], help="Evaluate an einsum on JSON operands")
    einsum_parser.add_argument("equation", help="Index equation, e.g. 'ij,jk->ik'")
    einsum_parser.add_argument("operands", nargs="+", help="Operands as nested JSON lists")
    einsum_parser.add_argument("--precision", type=int, default=DEFAULT_PRECISION)
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "list":
            _list(args.category)
            return
        if args.cmd == "run":
            _run(args.example, args.precision)
            return
        if args.cmd == "einsum":
            _einsum(args.equation, args.operands, args.precision)
            return
    except ValueError as exc:
        raise SystemExit(f"error: {exc}") from exc

    parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
