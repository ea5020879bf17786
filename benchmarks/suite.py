"""Bloom filter benchmark and accuracy report.

Generates synthetic UUID members, performs a deterministic 80/20 split, sizes
a filter for the 80% training set, and runs five checks per digest algorithm:

1. Membership on the training set (should be all present)
2. False positive rate on the held-out set (members never inserted)
3. Collision analysis using simple modifications of held-out members
4. Filter properties and memory usage
5. Insertion and query throughput

Run with ``python -m benchmarks.suite``.
"""
from __future__ import annotations

import time
import uuid
from typing import Optional, Tuple

from bitbloom import BloomFilter
from bitbloom.hashing import DIGESTS

NUM_ITEMS = 100_000
FALSE_POSITIVE_RATE = 0.01
TRAIN_SPLIT = 0.8
QUERY_OPS = 1_000_000


def generate_synthetic_data(n: int = NUM_ITEMS) -> list[str]:
    """Generate n unique random strings."""
    print(f"Generating {n} synthetic items...")
    # UUIDs are virtually guaranteed to be unique
    return sorted(str(uuid.uuid4()) for _ in range(n))


def build_split(
    words: list[str], hash_name: str, rate: float = FALSE_POSITIVE_RATE
) -> Tuple[BloomFilter, list[str], list[str]]:
    """Split ``words`` 80/20 and build a filter sized for the training part.

    Returns (bloom_filter, training_words, test_words).
    """
    split = int(len(words) * TRAIN_SPLIT)
    train = words[:split]
    test = words[split:]

    bloom = BloomFilter(max(1, len(train)), rate, hash_name=hash_name)
    bloom.update(train)

    return bloom, train, test


def check_membership(bloom: BloomFilter, train: list[str]) -> None:
    """Verify all training items are present in the filter."""
    print("CHECK A: Membership on training set")
    missing = [w for w in train if w not in bloom]
    print(f"  Training items: {len(train)}")
    print(f"  Missing after insertion: {len(missing)} (expected 0)")
    if missing:
        print(f"  Example missing: {missing[:5]}")
    print()


def check_false_positives(bloom: BloomFilter, train: list[str], test: list[str]) -> Optional[float]:
    """Measure empirical false positive rate on the held-out set."""
    print("CHECK B: False positive rate on held-out items")
    train_set = set(train)
    test_filtered = [w for w in test if w not in train_set]

    if not test_filtered:
        print("  No held-out items available for testing.")
        return None

    false_positives = sum(1 for w in test_filtered if w in bloom)
    fpr = false_positives / len(test_filtered)

    print(f"  Held-out items: {len(test_filtered)}")
    print(f"  False positives: {false_positives}")
    print(f"  Empirical FPR: {fpr:.6f} ({fpr*100:.4f}%)")
    print(f"  Estimated FPR: {bloom.estimated_false_positive_rate():.6f}")
    print()
    return fpr


def check_collisions(bloom: BloomFilter, train: list[str], test: list[str]) -> None:
    """Analyze collision rate using simple modifications of held-out items."""
    print("CHECK C: Collision analysis with simple modifications of held-out items")
    modifications = []

    for word in test[:500]:
        modifications.append(word + "x")
        modifications.append(word[:-1] + "z")
        modifications.append("x" + word)

    known = set(train) | set(test)
    modifications = [m for m in modifications if m not in known]

    if not modifications:
        print("  No modifications available for testing.")
        return

    false_positives = sum(1 for m in modifications if m in bloom)
    rate = false_positives / len(modifications)

    print(f"  Variants tested: {len(modifications)}")
    print(f"  False positives from variants: {false_positives}")
    print(f"  Collision rate: {rate:.6f} ({rate*100:.4f}%)")
    print()


def show_properties(bloom: BloomFilter, train: list[str]) -> None:
    """Display filter memory and configuration properties."""
    print("CHECK D: Filter properties")
    bytes_len = len(bloom.bit_array)
    mb = bytes_len / (1024 * 1024)

    print(f"  Filter size (bits): {bloom.bit_count}")
    print(f"  Filter size (bytes): {bytes_len}")
    print(f"  Filter size (MB): {mb:.2f}")
    print(f"  Number of hash functions: {bloom.hash_count}")
    print(f"  Items inserted: {len(train)}")
    print(f"  Bytes per item: {bytes_len / len(train):.4f}")
    print()


def measure_performance(bloom: BloomFilter, train: list[str], test: list[str]) -> dict:
    """Measure insertion and query throughput (ops/sec)."""
    print("CHECK E: Performance")

    bench_filter = BloomFilter(
        bloom.expected_elements, bloom.false_positive_rate, hash_name=bloom.hash_name
    )

    start_time = time.perf_counter()
    for word in train:
        bench_filter.add(word)
    insert_time = time.perf_counter() - start_time
    insert_ops = len(train) / insert_time if insert_time > 0 else float("inf")
    print(f"    - Inserted {len(train)} items in {insert_time:.4f} sec")
    print(f"    - Insertion Throughput: {insert_ops:,.0f} ops/sec")

    repeats = (QUERY_OPS // len(test)) + 1
    queries = (test * repeats)[:QUERY_OPS]

    start_time = time.perf_counter()
    for word in queries:
        _ = word in bench_filter
    query_time = time.perf_counter() - start_time
    query_ops = len(queries) / query_time if query_time > 0 else float("inf")
    print(f"    - Performed {len(queries)} queries in {query_time:.4f} sec")
    print(f"    - Query Throughput: {query_ops:,.0f} ops/sec")
    print()

    return {
        "insert_ops_per_sec": insert_ops,
        "insert_time": insert_time,
        "query_ops_per_sec": query_ops,
        "query_time": query_time,
    }


def compare(results: dict) -> None:
    """Print a compact side-by-side comparison across digest algorithms."""

    def fmt(val) -> str:
        if val is None:
            return "N/A"
        if val == float("inf"):
            return "inf"
        if abs(val) >= 1000:
            return f"{val:,.0f}"
        return f"{val:,.4f}"

    names = list(results)
    print(f"{'Metric':<34}" + "".join(f"{name:>16}" for name in names))
    print("-" * (34 + 16 * len(names)))

    rows = [
        ("Empirical FPR", "fpr"),
        ("Insertion Throughput (ops/sec)", "insert_ops_per_sec"),
        ("Insertion Time (s)", "insert_time"),
        ("Query Throughput (ops/sec)", "query_ops_per_sec"),
        ("Query Time (s)", "query_time"),
    ]
    for label, key in rows:
        print(f"{label:<34}" + "".join(f"{fmt(results[n].get(key)):>16}" for n in names))
    print()


def run_all() -> None:
    """Run every check for every registered digest."""
    words = generate_synthetic_data()
    print(f"Unique items: {len(words)}")

    results = {}
    for hash_name in DIGESTS:
        print("=" * 60)
        print(f"Running Bloom filter suite with {hash_name} (80/20 split)")
        print("=" * 60)
        print()

        bloom, train, test = build_split(words, hash_name)
        check_membership(bloom, train)
        fpr = check_false_positives(bloom, train, test)
        check_collisions(bloom, train, test)
        show_properties(bloom, train)
        metrics = measure_performance(bloom, train, test)
        metrics["fpr"] = fpr
        results[hash_name] = metrics

    print("=" * 60)
    print("COMPARISON: Summary")
    print("=" * 60)
    compare(results)

    print("=" * 60)
    print("Suite completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    run_all()
