"""
Family Tree Reasoning Example - Symbolic Mode

Demonstrates logical reasoning with Boolean tensors and einsum rules.
"""

from einlogic import einsum, from_matrix, threshold, tensor_to_string


def main():
    print("=" * 60)
    print("Family Tree Reasoning - Symbolic Mode")
    print("=" * 60)

    # 0: Alice, 1: Bob, 2: Charlie, 3: Diana, 4: Eve
    names = ["Alice", "Bob", "Charlie", "Diana", "Eve"]
    num_people = len(names)

    print(f"\nFamily members: {names}")

    # Alice -> Bob, Alice -> Charlie, Bob -> Diana, Charlie -> Eve
    rows = [[0] * num_people for _ in range(num_people)]
    rows[0][1] = 1
    rows[0][2] = 1
    rows[1][3] = 1
    rows[2][4] = 1
    parent = from_matrix("Parent", ["x", "y"], rows)

    print("\nParent relationships:")
    for i in range(num_people):
        for j in range(num_people):
            if parent.item(i, j) == 1:
                print(f"  {names[i]} is parent of {names[j]}")

    # grandparent(X, Z) <- parent(X, Y), parent(Y, Z)
    grandparent = threshold(einsum("xy,yz->xz", parent, parent), name="Grandparent")

    print("\nGrandparent[x,z] = H(Σ_y Parent[x,y] · Parent[y,z]):")
    print(tensor_to_string(grandparent, 0))

    print("\nGrandparent relationships (derived):")
    for i in range(num_people):
        for j in range(num_people):
            if grandparent.item(i, j) > 0.5:
                print(f"  {names[i]} is grandparent of {names[j]}")

    print("\n" + "=" * 60)
    print("Queries:")
    print("=" * 60)

    for a, b in [(0, 3), (0, 4), (1, 4)]:
        print(f"Is {names[a]} grandparent of {names[b]}? {grandparent.item(a, b) > 0.5}")

    # Existential projection: has_child(X) <- parent(X, Y)
    has_child = threshold(einsum("xy->x", parent), name="HasChild")
    print("\nHas children:", [n for n, v in zip(names, has_child.tolist()) if v > 0.5])

    print("\n" + "=" * 60)
    print("Symbolic reasoning complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
