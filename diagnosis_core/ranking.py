from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_STATS, UNKNOWN_AXIS_RANK
from .question_bank import finite_number
from .rng import hash_str
from .types import ScoreMap


def rank_stats(scores: Any, stats_order: Sequence[str]) -> List[str]:
    """
    Axes by descending score; ties go to the earlier axis in ``stats_order``.
    Axes outside the order share rank UNKNOWN_AXIS_RANK and keep their
    insertion order among themselves.
    """
    order_index = {s: i for i, s in enumerate(stats_order)}
    if not isinstance(scores, dict):
        return []
    entries = [(k, finite_number(v) or 0) for k, v in scores.items()]
    entries.sort(key=lambda kv: (-kv[1], order_index.get(kv[0], UNKNOWN_AXIS_RANK)))
    return [k for k, _ in entries]


def top_two(scores: Any, stats_order: Sequence[str]) -> Tuple[str, str]:
    order = list(stats_order) or list(DEFAULT_STATS)
    ranked = rank_stats(scores, order)
    top = ranked[0] if len(ranked) > 0 else (order[0] if len(order) > 0 else "emp")
    second = ranked[1] if len(ranked) > 1 else (order[1] if len(order) > 1 else "soc")
    return top, second


_RADIX_PREFIXES = ("0x", "0o", "0b")


def _number_from_str(s: str) -> Optional[float]:
    s = s.strip()
    if not s:
        return 0
    if s[:2].lower() in _RADIX_PREFIXES:
        try:
            return int(s, 0)
        except ValueError:
            return None
    try:
        return float(s)
    except ValueError:
        return None


def to_scores(raw: Any) -> ScoreMap:
    """
    Coerce a persisted score mapping the way the browser's ``Number()`` does:
    null, blank strings and false become 0, numeric and 0x/0o/0b strings are
    parsed, anything else is dropped.
    """
    if not isinstance(raw, dict):
        return {}
    out: ScoreMap = {}
    for k, v in raw.items():
        if v is None:
            v = 0
        elif isinstance(v, bool):
            v = int(v)
        elif isinstance(v, str):
            v = _number_from_str(v)
            if v is None:
                continue
        n = finite_number(v)
        if n is not None:
            out[str(k)] = n
    return out


def pick_top_axes(scores: ScoreMap, seed: int) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    """(top, second, lowest) with seeded-hash tie-breaks; used by the catalog selector."""
    entries = [(k, v) for k, v in scores.items() if finite_number(v) is not None]
    entries.sort(key=lambda kv: (-kv[1], hash_str(kv[0], seed)))
    top_a = entries[0][0] if len(entries) > 0 else None
    top_b = entries[1][0] if len(entries) > 1 else None
    low = entries[-1][0] if entries else None
    return top_a, top_b, low


def score_extremes(scores: ScoreMap, stats_order: Sequence[str]) -> Dict[str, Optional[str]]:
    ranked = rank_stats(scores, stats_order)
    return {
        "top": ranked[0] if ranked else None,
        "second": ranked[1] if len(ranked) > 1 else None,
        "low": ranked[-1] if ranked else None,
    }
