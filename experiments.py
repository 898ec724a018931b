# experiments.py

"""
Huffman coding walkthrough and experiments

Two modes:
  --text STRING   step-by-step report for one string: frequency table, Huffman
                  codes, encoded bit-string, round-trip check and size analysis
  (default)       repeated runs over synthetic text to produce data and charts

Outputs of the experiment mode (in --outdir):
  - metrics.csv     (raw row per run)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts)

How to run:
  python experiments.py --text "abracadabra"
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_kb 16 --exp1_generators uniform256,english_like

Notes:
  Compression ratio is reported as encoded bits / (symbols * 8) * 100, the
  encoded output stays a string of '0'/'1' characters.
"""

from __future__ import annotations

import argparse
import csv
import random
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import matplotlib.pyplot as plt

import huffman as huff
from errors import HuffmanError


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)

def compression_ratio(encoded_bits: int, symbol_count: int) -> float:
    # percent of the 8-bits-per-symbol size
    return encoded_bits / (symbol_count * 8) * 100


# Report formatting

def format_frequency_table(ft: Dict[str, int]) -> str:
    lines = [f"{'Character':<15}{'Frequency':<15}", "-" * 30]
    for symbol, freq in ft.items():
        lines.append(f"{symbol:<15}{freq:<15}")
    lines.append("-" * 30)
    lines.append(f"{'Total':<15}{sum(ft.values()):<15}")
    return "\n".join(lines)

def format_code_table(code_map: Dict[str, str]) -> str:
    lines = [f"{'Character':<15}{'Huffman Code':<20}", "-" * 35]
    for symbol, code in code_map.items():
        lines.append(f"{symbol:<15}{code:<20}")
    lines.append("-" * 35)
    return "\n".join(lines)


def walkthrough(text: str) -> int:
    """
    Print the five steps for one input string
    Returns 0 when the decoded string matches the original, 1 otherwise
    """
    print("\nStep 1: Create a Frequency Table\n")
    ft = huff.count_frequencies(text)
    print(format_frequency_table(ft))

    print("\nStep 2: Build a Huffman Tree and Generate Huffman Codes\n")
    root = huff.build_huffman_tree(ft)
    code_map = huff.generate_huffman_codes(root)
    print(format_code_table(code_map))

    print("\nStep 3: Encode the Input String\n")
    encoded = huff.huffman_encode(text, code_map)
    print(f"Encoded String: {encoded}")

    print("\nStep 4: Decode the Encoded String and Match it with the Original String\n")
    decoded = huff.huffman_decode(encoded, root)
    print(f"Decoded String: {decoded}")
    ok = decoded == text
    if ok:
        print("\nThe decoded string matches the original!")
    else:
        print("\nError: Decoded string does not match the original.")

    print("\nStep 5: Analyze and Compare the Sizes\n")
    print(f"Original Size (in bits): {len(text) * 8}")
    print(f"Encoded Size (in bits): {len(encoded)}")
    print(f"Average Code Length (bits/symbol): {huff.average_code_length(ft, code_map):.3f}")
    print(f"Compression Ratio: {compression_ratio(len(encoded), len(text)):.2f}%")
    return 0 if ok else 1


# Synthetic text generators (single 8-bit code units)

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> str:
    rng = random.Random(seed)
    return "".join(chr(rng.randrange(0, alphabet)) for _ in range(size))

def gen_repetitive(size: int, dominant: str = 'A', dom_frac: float = 0.90, seed: int = 0) -> str:
    rng = random.Random(seed)
    other_symbols = [chr(i) for i in range(256) if chr(i) != dominant]
    out = []
    for _ in range(size):
        if rng.random() < dom_frac:
            out.append(dominant)
        else:
            out.append(rng.choice(other_symbols))
    return "".join(out)

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> str:
    rng = random.Random(seed)
    weights = [1.0 / ((i + 1) ** s) for i in range(alphabet)]
    symbols = [chr(i) for i in range(alphabet)]
    return "".join(rng.choices(symbols, weights=weights, k=size))

def gen_english_like(size: int, seed: int = 0) -> str:
    rng = random.Random(seed)
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return "".join(rng.choices(chars, weights=weights, k=size))

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], str]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant='A', dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant='A', dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
}

def generate_dataset(name: str, size: int, seed: int) -> str:
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        raise ValueError(f"unknown generator {name!r}, choose from {', '.join(sorted(GENERATOR_REGISTRY))}")
    return fn(size, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    symbol_count: int
    run_id: int
    unique_symbols: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    original_bits: int
    encoded_bits: int
    compression_ratio: float  # percent
    avg_code_length: float
    correctness_ok: int  # 1 or 0


def run_one(text: str) -> MetricRow:
    t0 = now_ns()
    ft = huff.count_frequencies(text)
    root = huff.build_huffman_tree(ft)
    code_map = huff.generate_huffman_codes(root)
    t1 = now_ns()

    encoded = huff.huffman_encode(text, code_map)
    t2 = now_ns()

    decoded = huff.huffman_decode(encoded, root)
    t3 = now_ns()

    build_ms = ns_to_ms(t1 - t0)
    encode_ms = ns_to_ms(t2 - t1)
    decode_ms = ns_to_ms(t3 - t2)

    return MetricRow(
        exp_name="",
        dataset_name="",
        symbol_count=len(text),
        run_id=0,
        unique_symbols=len(ft),
        build_ms=build_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_ms + encode_ms + decode_ms,
        original_bits=len(text) * 8,
        encoded_bits=len(encoded),
        compression_ratio=compression_ratio(len(encoded), len(text)),
        avg_code_length=huff.average_code_length(ft, code_map),
        correctness_ok=1 if decoded == text else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)


def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, symbol_count and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.symbol_count)
        key_to.setdefault(key, []).append(r)

    summary_fields = [
        "exp_name", "dataset_name", "symbol_count", "n_runs",
        "compression_ratio_mean", "compression_ratio_stdev",
        "avg_code_length_mean", "avg_code_length_stdev",
        "build_ms_mean", "build_ms_stdev",
        "encode_ms_mean", "encode_ms_stdev",
        "decode_ms_mean", "decode_ms_stdev",
        "total_ms_mean", "total_ms_stdev",
        "correctness_ok_rate",
    ]

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, symbol_count = key
            out = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "symbol_count": symbol_count,
                "n_runs": len(items),
                "correctness_ok_rate": sum(x.correctness_ok for x in items) / len(items),
            }
            for field in ("compression_ratio", "avg_code_length", "build_ms", "encode_ms", "decode_ms", "total_ms"):
                m, s = mean_stdev([getattr(x, field) for x in items])
                out[f"{field}_mean"] = m
                out[f"{field}_stdev"] = s
            w.writerow(out)


# Plotting

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> List[Path]:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return []

    datasets = sorted(set(r.dataset_name for r in exp_rows))

    def mean_for(dataset: str, field: str) -> float:
        vals = [getattr(r, field) for r in exp_rows if r.dataset_name == dataset]
        return statistics.mean(vals) if vals else float("nan")

    x = list(range(len(datasets)))
    written = []

    plt.figure()
    plt.bar(x, [mean_for(d, "compression_ratio") for d in datasets])
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Encoded Bits / Original Bits (%)")
    plt.title("Experiment 1: Compression Ratio by Distribution")
    plt.tight_layout()
    written.append(outdir / "exp1_compression_ratio.png")
    plt.savefig(written[-1], dpi=200)
    plt.close()

    plt.figure()
    for field, label in (("build_ms", "build"), ("encode_ms", "encode"), ("decode_ms", "decode")):
        plt.plot(x, [mean_for(d, field) for d in datasets], marker="o", label=label)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Time (ms)")
    plt.title("Experiment 1: Stage Time by Distribution")
    plt.legend()
    plt.tight_layout()
    written.append(outdir / "exp1_stage_time.png")
    plt.savefig(written[-1], dpi=200)
    plt.close()

    return written


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> List[Path]:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return []

    distributions = sorted(set(r.dataset_name for r in exp_rows))
    written = []

    plt.figure()
    for dist in distributions:
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.symbol_count for r in dist_rows))
        y = [statistics.mean(r.total_ms for r in dist_rows if r.symbol_count == s) for s in sizes]
        plt.plot(sizes, y, marker="o", label=dist)
    plt.xlabel("Input Size (symbols)")
    plt.ylabel("Total Time (ms) (build + encode + decode)")
    plt.title("Experiment 2: Total Runtime vs Size")
    plt.legend()
    plt.tight_layout()
    written.append(outdir / "exp2_total_time.png")
    plt.savefig(written[-1], dpi=200)
    plt.close()

    plt.figure()
    for dist in distributions:
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.symbol_count for r in dist_rows))
        y = [statistics.mean(r.compression_ratio for r in dist_rows if r.symbol_count == s) for s in sizes]
        plt.plot(sizes, y, marker="o", label=dist)
    plt.xlabel("Input Size (symbols)")
    plt.ylabel("Encoded Bits / Original Bits (%)")
    plt.title("Experiment 2: Compression Ratio vs Size")
    plt.legend()
    plt.tight_layout()
    written.append(outdir / "exp2_compression_ratio.png")
    plt.savefig(written[-1], dpi=200)
    plt.close()

    return written


def run_experiments(args: argparse.Namespace) -> List[MetricRow]:
    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_kb) * 1024
        for gen_name in parse_csv_list(args.exp1_generators):
            for run_id in range(1, args.runs + 1):
                text = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                row = run_one(text)
                row.exp_name = "exp1_distribution"
                row.dataset_name = gen_name
                row.run_id = run_id
                rows.append(row)

    # Experiment 2: size scaling (powers of 2)
    if not args.no_exp2:
        sizes: List[int] = []
        s = max(1, args.exp2_min_kb) * 1024
        while s <= max(1, args.exp2_max_kb) * 1024:
            sizes.append(s)
            s *= 2

        for gen_name in parse_csv_list(args.exp2_generators):
            for size in sizes:
                for run_id in range(1, args.runs + 1):
                    text = generate_dataset(gen_name, size, args.seed + 10_000 + size + run_id)
                    row = run_one(text)
                    row.exp_name = "exp2_size_scaling"
                    row.dataset_name = gen_name
                    row.run_id = run_id
                    rows.append(row)

    return rows


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Huffman coding walkthrough and experiments")
    ap.add_argument("--text", type=str, default=None, help="Encode/decode one string and print the step-by-step report")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")
    ap.add_argument("--no_plots", action="store_true", help="Only write the CSV files")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=64, help="Experiment 1 fixed input size in K symbols")
    ap.add_argument("--exp1_generators", type=str, default="uniform256,zipf128,repetitive90,english_like",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=4, help="Experiment 2 min size in K symbols (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=256, help="Experiment 2 max size in K symbols")
    ap.add_argument("--exp2_generators", type=str, default="uniform256,zipf128,repetitive90",
                    help="Comma-separated dataset generator names for experiment 2")
    return ap

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.text is not None:
        try:
            return walkthrough(args.text)
        except HuffmanError as e:
            print(f"\nError! {e}")
            return 2

    try:
        rows = run_experiments(args)
    except ValueError as e:
        print(f"Error! {e}")
        return 2

    outdir = Path(args.outdir)
    safe_mkdir(outdir)

    # Write raw and summary
    metrics_csv = outdir / "metrics.csv"
    summary_csv = outdir / "summary.csv"
    write_csv(metrics_csv, rows)
    group_summary(rows, summary_csv)

    if not args.no_plots:
        plot_experiment_1(rows, outdir)
        plot_experiment_2(rows, outdir)

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if not args.no_plots:
        print("Charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
