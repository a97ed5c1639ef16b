"""
Standalone plotting script for existing ride logs.

Useful for re-generating plots or plotting telemetry against progress
after a ride has completed.
"""
import sys
from pathlib import Path
import argparse

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ridepath.visualization.plotting import plot_rope_lengths, plot_telemetry


def main():
    """Plot ride results from CSV log."""
    parser = argparse.ArgumentParser(
        description="Generate plots from ridepath session logs"
    )
    parser.add_argument(
        "csv_path",
        type=str,
        help="Path to session CSV file"
    )
    parser.add_argument(
        "--x-axis",
        choices=["t", "progress"],
        default="t",
        help="Horizontal axis for telemetry plots (default: t)"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for plots (default: same as CSV)"
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display plots interactively"
    )

    args = parser.parse_args()

    csv_path = Path(args.csv_path)
    if not csv_path.exists():
        print(f"Error: CSV file not found: {csv_path}")
        return 1

    output_dir = Path(args.output_dir) if args.output_dir else csv_path.parent
    output_dir.mkdir(parents=True, exist_ok=True)

    print(f"Loading data from: {csv_path}")
    print(f"Saving plots to: {output_dir}")

    plot_telemetry(
        str(csv_path),
        save_path=str(output_dir / f"telemetry_{args.x_axis}.png"),
        show=args.show,
        x_axis=args.x_axis,
    )
    plot_rope_lengths(
        str(csv_path),
        save_path=str(output_dir / "rope_lengths.png"),
        show=args.show,
    )

    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
