# main.py
import argparse
import os
import sys

from config import load_config, geometry_from_config, reset_age_on_hit
from errors import SimulatorError
from report import render
from simulator import Simulator, save_results
from tracefile import load_trace


def build_parser():
    parser = argparse.ArgumentParser(
        prog="cachesim",
        description="Replay a memory trace through a set-associative LRU cache "
                    "(write-back, write-allocate)")
    parser.add_argument("config", help="cache config: associativity, line size, cache size")
    parser.add_argument("trace", help="memory trace, one <R|W>:<size>:<hexaddr> per line")
    parser.add_argument("--json", dest="json_path", metavar="PATH",
                        help="also write the summary as JSON to PATH")
    parser.add_argument("--plot-dir", metavar="DIR",
                        help="save hit/miss plots into DIR")
    parser.add_argument("--legacy", action="store_true",
                        help="use legacy tag/index widths and never reset a line's age on a hit")
    return parser


def save_plots(result, plot_dir):
    # matplotlib is only loaded when plots are requested
    from visualize import plot_hit_miss_counts, plot_cumulative_hit_rate, plot_set_activity

    paths = []
    if result.hit_rate is not None:
        path = os.path.join(plot_dir, "hit_miss_rate.png")
        plot_hit_miss_counts(result.hit_count, result.miss_count, path)
        paths.append(path)
        path = os.path.join(plot_dir, "cumulative_hit_rate.png")
        plot_cumulative_hit_rate(result.cumulative_hit_rate(), path)
        paths.append(path)
    accesses, hits = result.set_activity()
    path = os.path.join(plot_dir, "set_activity.png")
    plot_set_activity(accesses, hits, path)
    paths.append(path)
    return paths


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
        geometry = geometry_from_config(cfg, legacy=args.legacy)
        trace = load_trace(args.trace)
        result = Simulator(geometry, reset_age_on_hit=reset_age_on_hit(cfg, args.legacy)).run(trace)
    except SimulatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(render(result))

    try:
        if args.json_path:
            results_path = save_results(result.summary(), args.json_path)
            print("Results saved to:", results_path)
        if args.plot_dir:
            save_plots(result, args.plot_dir)
            print(f"Plots saved in {args.plot_dir}/")
    except OSError as e:
        print(f"Error: cannot write {e.filename or 'output'}: {e.strerror}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
