"""
Graph Neural Network Example - Message Passing

Runs the gallery GNN example and prints every step.
"""

from einlogic.gallery import run_gnn_example


def main():
    result = run_gnn_example()

    print("=" * 60)
    print(result.title)
    print("=" * 60)
    print(result.code)

    for step in result.steps:
        print(f"\n{step.name}")
        print("-" * len(step.name))
        print(step.explanation)
        print()
        print(step.tensor_string)


if __name__ == "__main__":
    main()
