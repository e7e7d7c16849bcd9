#!/usr/bin/env python3
"""Benchmark suite for PySGT comparing balance factors."""

import argparse
import json
import random
import time
from pathlib import Path
from typing import Dict, List

import numpy as np
import plotly.graph_objects as go
from tqdm import tqdm

from pysgt import ScapegoatTree


class Metrics:
    def __init__(self, alpha: float):
        self.alpha = alpha
        self.insert_latencies: List[float] = []
        self.find_latencies: List[float] = []
        self.erase_latencies: List[float] = []
        self.height = 0
        self.rebuilds = 0

    def to_dict(self) -> Dict:
        def pct(samples: List[float]) -> Dict[str, float]:
            return {
                "p50": float(np.percentile(samples, 50)),
                "p95": float(np.percentile(samples, 95)),
                "p99": float(np.percentile(samples, 99)),
            }

        return {
            "alpha": self.alpha,
            "insert_latencies": pct(self.insert_latencies),
            "find_latencies": pct(self.find_latencies),
            "erase_latencies": pct(self.erase_latencies),
            "height": self.height,
            "rebuilds": self.rebuilds,
        }


def plot_latencies(results: List[Metrics], output_path: Path):
    fig = go.Figure()

    for m in results:
        fig.add_trace(go.Box(
            y=m.insert_latencies,
            name=f"insert α={m.alpha}",
            boxpoints="outliers"
        ))
        fig.add_trace(go.Box(
            y=m.find_latencies,
            name=f"find α={m.alpha}",
            boxpoints="outliers"
        ))

    fig.update_layout(
        title="PySGT latency by balance factor",
        yaxis_title="Latency (µs)",
        boxmode="group"
    )

    fig.write_html(output_path)


class BenchmarkSuite:
    def __init__(self, num_entries: int, sequential: bool):
        self.num_entries = num_entries
        self._keys = list(range(num_entries))
        if not sequential:
            random.shuffle(self._keys)

    def run(self, alpha: float) -> Metrics:
        metrics = Metrics(alpha)
        tree: ScapegoatTree[int, int] = ScapegoatTree(alpha)

        for k in tqdm(self._keys, desc=f"α={alpha} insert"):
            start = time.perf_counter()
            tree.insert(k, k)
            metrics.insert_latencies.append((time.perf_counter() - start) * 1e6)

        metrics.height = tree.height()

        for k in tqdm(self._keys, desc=f"α={alpha} find"):
            start = time.perf_counter()
            tree.find(k)
            metrics.find_latencies.append((time.perf_counter() - start) * 1e6)

        for k in tqdm(self._keys[: self.num_entries // 2], desc=f"α={alpha} erase"):
            start = time.perf_counter()
            tree.erase(k)
            metrics.erase_latencies.append((time.perf_counter() - start) * 1e6)

        metrics.rebuilds = tree.rebuild_count
        return metrics


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--size", type=int, default=100000, help="Number of entries")
    parser.add_argument("--alpha", type=float, nargs="+", default=[0.55, 0.57, 0.66, 0.75, 0.9],
                        help="Balance factors to compare")
    parser.add_argument("--sequential", action="store_true", help="Insert keys in ascending order")
    parser.add_argument("--output", type=Path, default=Path("benchmark_results"), help="Output directory")
    args = parser.parse_args()

    args.output.mkdir(parents=True, exist_ok=True)

    suite = BenchmarkSuite(args.size, args.sequential)
    results = [suite.run(alpha) for alpha in args.alpha]

    plot_latencies(results, args.output / "pysgt_latencies.html")

    with open(args.output / "metrics.json", "w") as f:
        json.dump([m.to_dict() for m in results], f, indent=2)


if __name__ == "__main__":
    main()
