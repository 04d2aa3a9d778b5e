# diagnosis_core/stats.py
from __future__ import annotations
import math
from typing import Any

from .question_bank import finite_number
from .types import RpgStats

STAT_CAP = 999


def clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


def round_half_up(x: float) -> int:
    # same as the browser's Math.round: .5 goes toward +inf (-2.5 -> -2)
    return int(math.floor(x + 0.5))


def _stat(x: float, lo: int) -> int:
    # clamp first: huge axis scores overflow to inf before rounding
    if math.isnan(x):
        return lo
    return round_half_up(clamp(x, lo, STAT_CAP))


def _axis(scores: Any, key: str) -> float:
    if not isinstance(scores, dict):
        return 0
    n = finite_number(scores.get(key))
    if n is None:
        return 0
    try:
        return float(n)
    except OverflowError:
        return math.inf if n > 0 else -math.inf


def make_rpg_stats(scores: Any) -> RpgStats:
    emp = _axis(scores, "emp"); soc = _axis(scores, "soc")
    intu = _axis(scores, "int"); ord_ = _axis(scores, "ord")
    adv = _axis(scores, "adv"); exp = _axis(scores, "exp")
    res = _axis(scores, "res"); shd = _axis(scores, "shd")

    hp = _stat(90 + res * 6 + ord_ * 2 + emp * 1.5, 80)
    mp = _stat(60 + intu * 6 + exp * 2 + emp * 1.5, 40)
    atk = _stat(18 + adv * 4.2 + shd * 2.2 + soc * 0.8, 10)
    df = _stat(18 + ord_ * 4.8 + res * 2.0 + emp * 0.6, 10)
    agi = _stat(18 + exp * 4.0 + soc * 2.2 + adv * 1.2, 10)
    return RpgStats(hp=hp, mp=mp, atk=atk, defense=df, agi=agi)


def bar_pct(v: float, max_value: float = 200) -> float:
    if max_value <= 0:
        return 0.0
    return float(clamp((v / max_value) * 100, 0, 100))
