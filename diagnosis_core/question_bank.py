from __future__ import annotations
import json, logging, math
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import DEFAULT_STATS, QUESTIONS_PATH
from .i18n import pick_text
from .types import Choice, Question, QuestionPool

log = logging.getLogger(__name__)

_TEXT_KEYS = ("text", "question", "prompt", "body")
_TITLE_KEYS = ("title", "questionTitle", "caption", "label")


def finite_number(v: Any) -> Optional[float]:
    """Return ``v`` when it is a real, finite number (bools excluded), else None."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return None
    if isinstance(v, float) and not math.isfinite(v):
        return None
    if isinstance(v, int):
        try:
            float(v)
        except OverflowError:
            return None
    return v


def _first_raw(obj: Dict[str, Any], keys: tuple[str, ...]) -> Any:
    for k in keys:
        v = obj.get(k)
        if v:
            return v
    return None


def _normalize_points(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return {}
    out: Dict[str, Any] = {}
    for axis, val in raw.items():
        if not isinstance(axis, str):
            continue
        n = finite_number(val)
        if n is None:
            log.debug("non-numeric delta for axis %s dropped to 0", axis)
            n = 0
        out[axis] = n
    return out


def _normalize_choice(raw: Any, idx: int) -> Choice:
    if not isinstance(raw, dict):
        return Choice(id=f"#{idx}")
    cid = raw.get("id")
    # positional placeholder keeps index-keyed answers aligned
    if not isinstance(cid, str):
        cid = f"#{idx}"
    pts = raw.get("points")
    if pts is None:
        pts = raw.get("scores")
    return Choice(id=cid, label=_first_raw(raw, ("label", "text")), points=_normalize_points(pts))


def _normalize_question(raw: Any, idx: int) -> Question:
    if not isinstance(raw, dict):
        log.debug("question #%d is not an object; kept as empty placeholder", idx)
        return Question(id=f"#{idx}")
    qid = raw.get("id")
    if not isinstance(qid, str):
        qid = f"#{idx}"
    choices_raw = raw.get("choices")
    choices = [_normalize_choice(c, i) for i, c in enumerate(choices_raw)] if isinstance(choices_raw, list) else []
    return Question(
        id=qid,
        text=_first_raw(raw, _TEXT_KEYS),
        title=_first_raw(raw, _TITLE_KEYS),
        choices=choices,
    )


def normalize_question_doc(doc: Any) -> QuestionPool:
    """Accept ``{stats?, question_count?, questions}`` or a bare list of questions."""
    if isinstance(doc, QuestionPool):
        return doc
    declared = isinstance(doc, dict) and isinstance(doc.get("stats"), list)
    stats = [s for s in doc["stats"] if isinstance(s, str)] if declared else list(DEFAULT_STATS)

    if isinstance(doc, list):
        raw_questions: List[Any] = doc
    elif isinstance(doc, dict) and isinstance(doc.get("questions"), list):
        raw_questions = doc["questions"]
    else:
        raw_questions = []
    questions = [_normalize_question(q, i) for i, q in enumerate(raw_questions)]

    count = finite_number(doc.get("question_count")) if isinstance(doc, dict) else None
    version = doc.get("version") if isinstance(doc, dict) and isinstance(doc.get("version"), str) else None
    return QuestionPool(
        stats=stats,
        questions=questions,
        question_count=int(count) if count is not None else len(questions),
        version=version,
        stats_declared=declared,
    )


def axis_order(pool: QuestionPool) -> List[str]:
    return list(pool.stats) if pool.stats else list(DEFAULT_STATS)


def load_pool(path: str | None = None) -> QuestionPool:
    p = Path(path or QUESTIONS_PATH)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("question pool unavailable at %s: %s", p, e)
        raw = []
    return normalize_question_doc(raw)


def question_text(q: Question, lang: str) -> tuple[str, str]:
    """(primary, secondary) display strings; title is shown only when both exist and differ."""
    text = pick_text(q.text, lang)
    title = pick_text(q.title, lang)
    primary = text or title
    secondary = title if text and title and text != title else ""
    return primary, secondary


def localize_question(q: Question, lang: str, index: int | None = None) -> Dict[str, Any]:
    primary, secondary = question_text(q, lang)
    return {
        "id": q.id,
        "index": index,
        "text": primary,
        "title": secondary,
        "choices": [
            {"id": c.id, "label": pick_text(c.label, lang), "points": dict(c.points)}
            for c in q.choices
        ],
    }
