# metrics_tracker.py - running sums/counts for operation timings

import json
import os
import time
from collections import defaultdict
from functools import wraps
from typing import Any, Callable, Dict, Optional, Tuple


class Metrics:
    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.m: Dict[str, float] = defaultdict(float)
        self.n: Dict[str, int] = defaultdict(int)
        self._load()

    def _load(self):
        if self.path and os.path.exists(self.path):
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            for k, v in d.items():
                self.m[k] = v["sum"]
                self.n[k] = v["count"]

    def save(self):
        if not self.path:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key: str, val: float) -> None:
        self.m[key] += val
        self.n[key] += 1

    def avg(self, key: str) -> float:
        if self.n.get(key, 0) == 0:
            return 0.0
        return self.m[key] / self.n[key]

    def keys(self):
        return sorted(self.m)

    def show(self):
        print("metrics:")
        for k in self.keys():
            print(f"  {k:15} {self.avg(k):.6f}")


def timed(func: Callable) -> Callable[..., Tuple[Any, float]]:
    """Decorator returns tuple: (result, elapsed)"""
    @wraps(func)
    def _wrap(*a, **kw):
        t0 = time.perf_counter()
        res = func(*a, **kw)
        t1 = time.perf_counter()
        return res, (t1 - t0)
    return _wrap
