"""
Usage examples for the sigmatau package.

This demonstrates the Dataset API, the analyzer table, sigma-tau plots and
the function-based compatibility layer.
"""

import asyncio
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

# Plot style applies automatically on import
from sigmatau import (
    Dataset,
    PowerLawNoise,
    StabilityAnalyzer,
    adev,
    mdev,
    plot_block_series,
    plot_sigma_tau,
)

# NBS monograph 140 frequency test data
NBS_FREQ = [892, 809, 823, 798, 671, 644, 883, 903, 677]


def example_dataset():
    """Example: Load frequency data and query deviations."""
    print("=" * 70)
    print("Example 1: Dataset")
    print("=" * 70)

    dataset = Dataset(name="NBS 9-point", dataset_id=1)
    dataset.load_freq(NBS_FREQ)

    print(f"Phase samples: {list(dataset.phase)}")
    for m in (1, 2):
        print(f"  m={m}: ADEV={dataset.get_adev(m):.5f}  MDEV={dataset.get_mdev(m):.5f}")
    print(f"  m=4: ADEV={dataset.get_adev(4):.5f} (too few terms)")
    print(f"  mean frequency: {dataset.get_freq_avg(1):.5f}")
    print()


def example_noise_table():
    """Example: Sigma-tau table of simulated white FM noise."""
    print("=" * 70)
    print("Example 2: Sigma-tau table")
    print("=" * 70)

    noise = PowerLawNoise(alpha=0, N=4096, sigma=1e-11, tau0=1.0)
    _, x, _ = noise.generate(rng=np.random.default_rng(42))

    dataset = Dataset(name=noise.kind, tau0=noise.tau0)
    dataset.load_phase(x)

    analyzer = StabilityAnalyzer(["adev", "mdev", "hdev", "totdev"])
    summary = analyzer.analyze(dataset)
    print(StabilityAnalyzer.to_dataframe(summary).to_string(float_format="{:.3e}".format))
    print()
    return dataset


def example_plots(dataset: Dataset, output_dir: Path):
    """Example: Render the cached deviations and the block-averaged record."""
    print("=" * 70)
    print("Example 3: Plots")
    print("=" * 70)

    output_dir.mkdir(parents=True, exist_ok=True)

    plot = dataset.get_sigma_tau_plot(["ADEV", "MDEV", "HDEV", "TOTDEV"])
    ax = plot_sigma_tau(plot, title=dataset.name)
    path = output_dir / "sigma_tau.pdf"
    ax.figure.savefig(path, bbox_inches="tight")
    print(f"  Saved: {path}")
    plt.close(ax.figure)

    ax = plot_block_series(dataset.get_freq_series(64), label="y (64-sample means)")
    path = output_dir / "frequency.pdf"
    ax.figure.savefig(path, bbox_inches="tight")
    print(f"  Saved: {path}")
    plt.close(ax.figure)
    print()


def example_compat():
    """Example: Stateless function API."""
    print("=" * 70)
    print("Example 4: Compatibility layer")
    print("=" * 70)

    phase = np.concatenate(([0.0], np.cumsum(NBS_FREQ)))
    print(f"  adev(phase, 1) = {adev(phase, 1):.5f}")
    print(f"  mdev(phase, 2) = {mdev(phase, 2):.5f}")
    print()


async def example_remote(url: str):
    """Example: Fetch a frequency record over HTTP."""
    dataset = Dataset(name=url)
    await dataset.load_freq_from_url(url)
    print(f"  {len(dataset.frequency)} samples, {dataset.skipped_lines} lines skipped")
    print(f"  ADEV(1) = {dataset.get_adev(1):.5e}")


if __name__ == "__main__":
    example_dataset()
    simulated = example_noise_table()
    example_plots(simulated, Path(__file__).parent / "output")
    example_compat()

    # Optional: python usage_example.py <url of a frequency file>
    if len(sys.argv) > 1:
        asyncio.run(example_remote(sys.argv[1]))

    print("=" * 70)
    print("All examples completed!")
    print("=" * 70)
