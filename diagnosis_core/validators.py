from __future__ import annotations
from collections import Counter
from typing import List, Sequence

from .question_bank import axis_order
from .selector import rule_class_ids
from .types import ClassRecord, QuestionPool


def validate_pool(pool: QuestionPool) -> List[str]:
    warns: List[str] = []
    order = set(axis_order(pool))
    for qid, n in Counter(q.id for q in pool.questions).items():
        if n > 1: warns.append(f"duplicate question id {qid} ({n}x)")
    if pool.question_count != len(pool.questions):
        warns.append(f"question_count {pool.question_count} != {len(pool.questions)} questions")
    for q in pool.questions:
        if q.id.startswith("#"): warns.append(f"question {q.id} has no id")
        if not q.choices:
            warns.append(f"question {q.id} has no choices"); continue
        for cid, n in Counter(c.id for c in q.choices).items():
            if n > 1: warns.append(f"question {q.id}: duplicate choice id {cid}")
        for c in q.choices:
            for axis in c.points:
                if axis not in order:
                    warns.append(f"question {q.id} choice {c.id}: undeclared axis {axis}")
    return warns


def validate_catalog(classes: Sequence[ClassRecord], stats: Sequence[str] = ()) -> List[str]:
    warns: List[str] = []
    ids = Counter(c.id for c in classes)
    for cid, n in ids.items():
        if n > 1: warns.append(f"duplicate class id {cid} ({n}x)")
    for cid in rule_class_ids():
        if cid not in ids:
            warns.append(f"rule table class {cid} missing from catalog")
    known = set(stats)
    for c in classes:
        if len(c.axes) < 2 and not c.tags:
            warns.append(f"class {c.id} has neither an axis pair nor tags")
        if known:
            for axis in c.axes:
                if axis not in known: warns.append(f"class {c.id}: unknown axis {axis}")
        if not c.title:
            warns.append(f"class {c.id} has no title")
    return warns
