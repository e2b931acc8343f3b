#!/usr/bin/env python3
"""
Performance Script for AVLTreeSet

Tests:
1. Sequential insert throughput
2. Random insert throughput
3. Duplicate insert throughput
4. Membership lookups
5. Full in-order iteration
6. Range iteration
7. Build + iterate compared against sorted(set(...))

Metrics:
- Operations per second (ops/sec)
- Latency (p50, p95, p99)
- Tree height against the AVL bound
"""

import logging
import math
import os
import random
import statistics
import sys
import time
from typing import List

from avlset import AVLTreeSet

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()


class PerformanceRun:
    def __init__(self, seed: int = 42):
        self.rng = random.Random(seed)

    @staticmethod
    def calculate_stats(latencies: List[int]) -> dict:
        """Calculate latency statistics (latencies in nanoseconds)."""
        if not latencies:
            return {}

        sorted_latencies = sorted(latencies)
        return {
            "min_us": min(latencies) / 1_000,
            "max_us": max(latencies) / 1_000,
            "mean_us": statistics.mean(latencies) / 1_000,
            "median_us": statistics.median(latencies) / 1_000,
            "p95_us": sorted_latencies[int(len(sorted_latencies) * 0.95)] / 1_000,
            "p99_us": sorted_latencies[int(len(sorted_latencies) * 0.99)] / 1_000,
        }

    @staticmethod
    def avl_height_bound(count: int) -> float:
        """Upper bound on AVL height for count nodes."""
        return 1.4405 * math.log2(count + 2) - 0.3277

    def timed_inserts(self, name: str, values: List[int]) -> tuple[AVLTreeSet, dict]:
        tree_set = AVLTreeSet()
        latencies = []

        start_time = time.perf_counter_ns()
        for value in values:
            op_start = time.perf_counter_ns()
            tree_set.insert(value)
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": name,
            "count": len(values),
            "elapsed_sec": elapsed,
            "ops_per_sec": len(values) / elapsed,
            "height": tree_set.height(),
            "height_bound": self.avl_height_bound(tree_set.size()),
            **self.calculate_stats(latencies),
        }
        return tree_set, results

    def test_sequential_insert(self, count: int) -> dict:
        """Ascending inserts, the worst case for an unbalanced BST."""
        _, results = self.timed_inserts("Sequential Insert", list(range(count)))
        self.print_results(results)
        return results

    def test_random_insert(self, count: int) -> dict:
        values = list(range(count))
        self.rng.shuffle(values)
        _, results = self.timed_inserts("Random Insert", values)
        self.print_results(results)
        return results

    def test_duplicate_insert(self, count: int) -> dict:
        """Re-inserting members only walks the tree."""
        tree_set = AVLTreeSet(range(count))
        values = [self.rng.randrange(count) for _ in range(count)]

        start_time = time.perf_counter_ns()
        rejected = sum(1 for value in values if not tree_set.insert(value))
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": "Duplicate Insert",
            "count": count,
            "rejected": rejected,
            "elapsed_sec": elapsed,
            "ops_per_sec": count / elapsed,
        }
        self.print_results(results)
        return results

    def test_lookups(self, count: int) -> dict:
        tree_set = AVLTreeSet(range(0, 2 * count, 2))
        probes = [self.rng.randrange(2 * count) for _ in range(count)]

        start_time = time.perf_counter_ns()
        hits = sum(1 for probe in probes if probe in tree_set)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": "Membership Lookup",
            "count": count,
            "hits": hits,
            "elapsed_sec": elapsed,
            "ops_per_sec": count / elapsed,
        }
        self.print_results(results)
        return results

    def test_iteration(self, count: int) -> dict:
        tree_set = AVLTreeSet(range(count))

        start_time = time.perf_counter_ns()
        emitted = sum(1 for _ in tree_set)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": "Full Iteration",
            "count": emitted,
            "elapsed_sec": elapsed,
            "ops_per_sec": emitted / elapsed,
        }
        self.print_results(results)
        return results

    def test_range_iteration(self, count: int, num_queries: int, range_size: int) -> dict:
        tree_set = AVLTreeSet(range(count))
        latencies = []
        emitted = 0

        start_time = time.perf_counter_ns()
        for _ in range(num_queries):
            start = self.rng.randrange(max(1, count - range_size))
            op_start = time.perf_counter_ns()
            emitted += sum(1 for _ in tree_set.iterator(start, start + range_size))
            latencies.append(time.perf_counter_ns() - op_start)
        elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        results = {
            "test": "Range Iteration",
            "count": num_queries,
            "range_size": range_size,
            "values_emitted": emitted,
            "elapsed_sec": elapsed,
            "ops_per_sec": num_queries / elapsed,
            **self.calculate_stats(latencies),
        }
        self.print_results(results)
        return results

    def test_against_builtin(self, count: int) -> dict:
        """Build and iterate, compared with sorted(set(...))."""
        values = [self.rng.randrange(count) for _ in range(count)]

        start_time = time.perf_counter_ns()
        avl_values = list(AVLTreeSet(values))
        avl_elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        start_time = time.perf_counter_ns()
        builtin_values = sorted(set(values))
        builtin_elapsed = (time.perf_counter_ns() - start_time) / 1_000_000_000

        if avl_values != builtin_values:
            logger.error("AVLTreeSet output differs from sorted(set(...))")

        results = {
            "test": "Build + Iterate vs sorted(set())",
            "count": count,
            "avl_elapsed_sec": avl_elapsed,
            "builtin_elapsed_sec": builtin_elapsed,
            "slowdown": avl_elapsed / builtin_elapsed if builtin_elapsed else float("inf"),
            "matches": avl_values == builtin_values,
        }
        self.print_results(results)
        return results

    @staticmethod
    def print_results(results: dict):
        print(f"\n{'='*60}")
        print(results["test"])
        print(f"{'='*60}")
        for key, value in results.items():
            if key == "test":
                continue
            if isinstance(value, float):
                print(f"  {key:<22} {value:,.3f}")
            else:
                print(f"  {key:<22} {value}")


def run_tests(count: int):
    logger.info(f"Running AVLTreeSet benchmarks with {count} values")
    run = PerformanceRun()

    all_results = [
        run.test_sequential_insert(count),
        run.test_random_insert(count),
        run.test_duplicate_insert(count),
        run.test_lookups(count),
        run.test_iteration(count),
        run.test_range_iteration(count, num_queries=1000, range_size=100),
        run.test_against_builtin(count),
    ]

    for result in all_results:
        if "height" in result and result["height"] > result["height_bound"]:
            logger.warning(
                f"{result['test']}: height {result['height']} exceeds "
                f"AVL bound {result['height_bound']:.1f}"
            )

    logger.info("Benchmarks complete")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "quick":
        run_tests(10_000)
    else:
        run_tests(200_000)
