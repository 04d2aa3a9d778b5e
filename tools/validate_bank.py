from __future__ import annotations
from collections import Counter
import argparse, sys

from diagnosis_core.class_catalog import load_classes
from diagnosis_core.question_bank import axis_order, load_pool
from diagnosis_core.validators import validate_catalog, validate_pool


def main():
    ap = argparse.ArgumentParser(description="Check the question pool and class catalog")
    ap.add_argument("--questions", help="question pool JSON (default: bundled)")
    ap.add_argument("--classes", help="class catalog JSON (default: bundled)")
    ap.add_argument("--strict", action="store_true", help="exit 1 on any warning")
    a = ap.parse_args()

    pool = load_pool(a.questions)
    classes = load_classes(a.classes)
    order = axis_order(pool)

    print(f"Questions: {len(pool.questions)} (declared {pool.question_count})  Classes: {len(classes)}")
    # how much each axis can gain across the whole pool
    reach = Counter()
    for q in pool.questions:
        for c in q.choices:
            for axis, v in c.points.items():
                if v > 0: reach[axis] += v
    for axis in order:
        print(f"  {axis}: choices add up to {reach.get(axis, 0)}")

    warns = validate_pool(pool) + validate_catalog(classes, order)
    for w in warns:
        print(f"  → {w}")
    if not warns:
        print("  ✓ No problems found")
    if warns and a.strict:
        sys.exit(1)

if __name__ == "__main__":
    main()
