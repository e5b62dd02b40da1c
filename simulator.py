# simulator.py
import os
import json
import time
import numpy as np
from cache import CacheModel


class SimulationResult:
    """
    Outcome of one replay: the decoded trace, one hit flag per reference and
    the cache's counters. Built only once the replay has finished.
    """

    def __init__(self, geometry, trace, outcomes, model, duration_s):
        self.geometry = geometry
        self.trace = trace
        self.outcomes = np.asarray(outcomes, dtype=bool)
        self.hit_count = model.hit_count
        self.access_count = model.access_count
        self.eviction_count = model.eviction_count
        self.dirty_eviction_count = model.dirty_eviction_count
        self.reset_age_on_hit = model.reset_age_on_hit
        self.final_state = model.stats()
        self.duration_s = duration_s

    @property
    def miss_count(self):
        return self.access_count - self.hit_count

    @property
    def hit_rate(self):
        return self.hit_count / self.access_count if self.access_count else None

    @property
    def miss_rate(self):
        return self.miss_count / self.access_count if self.access_count else None

    def cumulative_hit_rate(self):
        """Hit rate after each reference, in trace order."""
        if not len(self.outcomes):
            return np.zeros(0)
        return np.cumsum(self.outcomes) / np.arange(1, len(self.outcomes) + 1)

    def set_activity(self):
        """Per-set (accesses, hits) as two arrays of length num_sets."""
        indices = np.fromiter((a.index for a in self.trace), dtype=np.int64, count=len(self.trace))
        n = self.geometry.num_sets
        accesses = np.bincount(indices, minlength=n)
        hits = np.bincount(indices, weights=self.outcomes, minlength=n).astype(np.int64)
        return accesses, hits

    def summary(self):
        return {
            "geometry": self.geometry.describe(),
            "reset_age_on_hit": self.reset_age_on_hit,
            "total_accesses": self.access_count,
            "hits": self.hit_count,
            "misses": self.miss_count,
            "hit_rate": self.hit_rate,
            "miss_rate": self.miss_rate,
            "evictions": self.eviction_count,
            "dirty_evictions": self.dirty_eviction_count,
            "duration_s": self.duration_s,
            "final_state": self.final_state,
        }


class Simulator:
    def __init__(self, geometry, reset_age_on_hit=True):
        self.geometry = geometry
        self.reset_age_on_hit = reset_age_on_hit

    def run(self, trace):
        """
        Replay `trace` (a sequence of Access) through a fresh cache, one
        reference at a time in trace order. LRU ages depend on that order,
        so the loop never reorders or batches.
        """
        model = CacheModel(self.geometry, reset_age_on_hit=self.reset_age_on_hit)
        trace = [access.decode(self.geometry) for access in trace]
        outcomes = []
        start = time.time()
        for access in trace:
            outcomes.append(model.access(access))
        end = time.time()
        return SimulationResult(self.geometry, trace, outcomes, model, end - start)


def save_results(summary, out_path):
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "w") as f:
        json.dump(summary, f, indent=2)
    return out_path
