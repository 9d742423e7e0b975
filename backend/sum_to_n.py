#!/usr/bin/env python3
"""Compare three ways of summing the integers 1..n."""


def sum_to_n_loop(n: int) -> int:
    """Iterate and accumulate. O(n) time, O(1) space."""
    total = 0
    for i in range(1, n + 1):
        total += i
    return total


def sum_to_n_recursive(n: int) -> int:
    """Recurse down to 1. O(n) time and O(n) stack.

    Raises RecursionError once n exceeds the interpreter's recursion limit.
    """
    if n <= 1:
        return n
    return n + sum_to_n_recursive(n - 1)


def sum_to_n_math(n: int) -> int:
    """Closed form n * (n + 1) / 2. O(1) time and space."""
    return n * (n + 1) // 2


SAMPLE_SIZES = (5, 100, 1000, 10000, 100000)


def main() -> None:
    for n in SAMPLE_SIZES:
        print(f"\nTesting sum_to_n({n}):")
        print("Loop approach:", sum_to_n_loop(n))
        try:
            print("Recursive approach:", sum_to_n_recursive(n))
        except RecursionError:
            print("Recursive approach: recursion limit exceeded")
        print("Math approach:", sum_to_n_math(n))


if __name__ == "__main__":
    main()
