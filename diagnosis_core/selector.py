from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

from .config import UNKNOWN_CLASS_ID
from .question_bank import finite_number
from .ranking import pick_top_axes, to_scores
from .rng import hash_str
from .types import ClassRecord, PickedClass

# top axis -> (second axis -> class id), "*" for any other second axis
CLASS_RULES: Dict[str, Dict[str, str]] = {
    "emp": {"ord": "holy_sigil_paladin", "int": "star_oracle", "*": "seraphim_healer"},
    "soc": {"exp": "wind_bard", "*": "contract_diplomancer"},
    "int": {"shd": "torch_enchanter", "emp": "star_oracle", "*": "azure_archmage"},
    "ord": {"res": "holy_sigil_paladin", "*": "castle_artificer"},
    "adv": {"exp": "training_warlord", "*": "travel_ranger"},
    "exp": {"int": "torch_enchanter", "adv": "training_warlord", "*": "wind_bard"},
    "res": {"*": "immortal_vanguard"},
    "shd": {"*": "thunder_rogue"},
}


def pick_class_id(top: str, second: str) -> str:
    row = CLASS_RULES.get(top)
    if row is None:
        return UNKNOWN_CLASS_ID
    return row.get(second, row["*"])


def select_class_id(top: str, second: str, total: Any) -> str:
    t = finite_number(total)
    if t is None or t <= 0:
        return UNKNOWN_CLASS_ID
    return pick_class_id(top, second)


def rule_class_ids() -> List[str]:
    seen: List[str] = []
    for row in CLASS_RULES.values():
        for cid in row.values():
            if cid not in seen:
                seen.append(cid)
    return seen


def _axis_pair(c: ClassRecord) -> Sequence[str]:
    return c.axes if len(c.axes) >= 2 else ()


def match_class_by_axes(classes: Sequence[ClassRecord], a: str, b: str) -> Optional[ClassRecord]:
    sig1, sig2 = f"{a}-{b}", f"{b}-{a}"
    for c in classes:
        if c.id == sig1 or c.id == sig2:
            return c
    for c in classes:
        pair = _axis_pair(c)
        if pair and (pair[0], pair[1]) in ((a, b), (b, a)):
            return c
    for c in classes:
        if a in c.tags and b in c.tags:
            return c
    return None


def pick_class(classes: Sequence[ClassRecord], scores_raw: Any, seed: int) -> PickedClass:
    """
    Catalog search: exact "{a}-{b}" id, then declared axis pair, then tags,
    then a seeded hash over the catalog. Only an empty catalog yields no record.
    """
    scores = to_scores(scores_raw)
    top_a, top_b, low = pick_top_axes(scores, seed)

    if not classes:
        return PickedClass(None, scores, top_a, top_b, low)
    if not top_a or not top_b:
        return PickedClass(classes[0], scores, top_a, top_b, low)

    found = match_class_by_axes(classes, top_a, top_b)
    if found is not None:
        return PickedClass(found, scores, top_a, top_b, low)

    idx = hash_str(f"{top_a}-{top_b}", seed) % len(classes)
    return PickedClass(classes[idx], scores, top_a, top_b, low)


def find_class(classes: Sequence[ClassRecord], class_id: Optional[str]) -> Optional[ClassRecord]:
    if not class_id:
        return None
    for c in classes:
        if c.id == class_id:
            return c
    return None
