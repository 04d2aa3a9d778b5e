"""Helpers to export per-answer traces in JSON/CSV formats."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List
import csv
import io

from .question_bank import finite_number, normalize_question_doc
from .scoring import format_points

_FIELDS: tuple[str, ...] = (
    "question_id",
    "choice_id",
    "matched",
    "points",
    "subtotal",
)


def trace_answers(answers: Any, questions: Any) -> List[Dict[str, Any]]:
    """One row per answer, in answer order; unmatched answers get empty points."""
    pool = normalize_question_doc(questions)
    by_id = pool.by_id()
    rows: List[Dict[str, Any]] = []
    if not isinstance(answers, dict):
        return rows
    for qid, cid in answers.items():
        q = by_id.get(qid) if isinstance(qid, str) else None
        choice = q.choice(cid) if q is not None and isinstance(cid, str) else None
        points = dict(choice.points) if choice is not None else {}
        subtotal = sum(finite_number(v) or 0 for v in points.values())
        rows.append({
            "question_id": qid,
            "choice_id": cid,
            "matched": choice is not None,
            "points": points,
            "subtotal": subtotal,
        })
    return rows


def _normalize_row(row: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key in _FIELDS:
        val = row.get(key)
        if key == "matched":
            out[key] = bool(val)
        elif key == "points":
            out[key] = dict(val) if isinstance(val, dict) else {}
        elif key == "subtotal":
            n = finite_number(val)
            out[key] = n if n is not None else 0
        else:
            out[key] = "" if val is None else str(val)
    return out


def to_json(rows: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """Return a JSON-safe payload for trace export."""

    return {"answers": [_normalize_row(r or {}) for r in rows]}


def to_csv(rows: Iterable[Dict[str, Any]]) -> str:
    """Render trace rows as CSV with a fixed header; points as ``axis +n`` text."""

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=_FIELDS)
    writer.writeheader()
    for row in rows:
        norm = _normalize_row(row or {})
        norm["points"] = format_points(norm["points"])
        norm["matched"] = "1" if norm["matched"] else "0"
        writer.writerow(norm)
    return buf.getvalue()


__all__ = ["trace_answers", "to_json", "to_csv"]
