# visualize.py
import os
import matplotlib.pyplot as plt


def _ensure_dir(outpath):
    out_dir = os.path.dirname(outpath)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)


def plot_hit_miss_counts(hits, misses, outpath):
    _ensure_dir(outpath)
    plt.figure(figsize=(5,5))
    labels = [f"Hit ({hits})", f"Miss ({misses})"]
    plt.pie([hits, misses], labels=labels, colors=["tab:green", "tab:red"], autopct="%1.2f%%")
    plt.title(f"Hit/Miss Split over {hits + misses} References")
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()


def plot_cumulative_hit_rate(rates, outpath):
    _ensure_dir(outpath)
    plt.figure(figsize=(8,4))
    plt.plot(range(1, len(rates) + 1), rates, linewidth=1)
    plt.title("Cumulative Hit Rate")
    plt.xlabel("Reference Number")
    plt.ylabel("Hit Rate")
    plt.ylim(0, 1)
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()


def plot_set_activity(accesses, hits, outpath):
    _ensure_dir(outpath)
    sets = range(len(accesses))
    misses = [a - h for a, h in zip(accesses, hits)]
    plt.figure(figsize=(8,4))
    plt.bar(sets, hits, label='Hit')
    plt.bar(sets, misses, bottom=hits, label='Miss')
    plt.title("Accesses per Set")
    plt.xlabel("Set Index")
    plt.ylabel("Accesses")
    plt.legend()
    plt.tight_layout()
    plt.savefig(outpath)
    plt.close()
