from __future__ import annotations
from typing import Any, Tuple
import logging, math

from .config import DEBUG_TRACE, LEVEL_STEP, LEVEL_MIN, TRACE_FIELDS
from .question_bank import finite_number, normalize_question_doc
from .types import AnswersMap, ScoreMap

log = logging.getLogger(__name__)


def _emit_trace(**values: object) -> None:
    if not DEBUG_TRACE:
        return
    ordered = []
    for key in TRACE_FIELDS:
        if key in values:
            ordered.append(f"{key}={values[key]}")
    if ordered:
        log.info("trace %s", " ".join(str(val) for val in ordered))


def _answer_items(answers: Any):
    if not isinstance(answers, dict):
        return []
    return list(answers.items())


def score_answers(answers: Any, questions: Any) -> ScoreMap:
    """
    Reduce an id-keyed AnswerSet against the pool into a ScoreVector.
    Every declared axis is present (0 when untouched); axes only seen in
    choice data are added as they appear. Unknown questions/choices and
    malformed values contribute nothing.
    """
    pool = normalize_question_doc(questions)
    totals: ScoreMap = {s: 0 for s in pool.stats}
    by_id = pool.by_id()

    for qid, choice_id in _answer_items(answers):
        if not isinstance(qid, str) or not qid:
            continue
        if not isinstance(choice_id, str) or not choice_id:
            continue
        q = by_id.get(qid)
        if q is None:
            log.debug("answer for unknown question %s skipped", qid)
            continue
        picked = q.choice(choice_id)
        if picked is None:
            log.debug("unknown choice %s for question %s skipped", choice_id, qid)
            continue
        for axis, val in picked.points.items():
            n = finite_number(val)
            if n is None:
                n = 0
            totals[axis] = _add(totals.get(axis, 0), n)
            _emit_trace(question_id=qid, choice_id=choice_id, axis=axis, delta=n, running=totals[axis])
    return totals


def _add(a: float, b: float) -> float:
    try:
        return a + b
    except OverflowError:
        # an int beyond float range met a float; the int decides the sign
        big = a if isinstance(a, int) else b
        return math.inf if big > 0 else -math.inf


def sum_scores(scores: Any) -> float:
    if not isinstance(scores, dict):
        return 0
    total = 0
    for v in scores.values():
        n = finite_number(v)
        if n is not None:
            total = _add(total, n)
    return total


def derive_level(total: Any) -> int:
    # e.g. 30 points -> Lv7 (floor(30/5)+1)
    t = finite_number(total)
    if t is None:
        t = 0
    # floor division keeps huge integer totals exact
    return max(LEVEL_MIN, int(t // LEVEL_STEP) + 1)


def _choice_index(val: Any) -> int | None:
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str):
        try:
            return int(val.strip())
        except ValueError:
            return None
    return None


def index_answers_to_ids(answers: Any, questions: Any) -> AnswersMap:
    """Map ``{"<question index>": <choice index>}`` onto ``{question id: choice id}``."""
    pool = normalize_question_doc(questions)
    out: AnswersMap = {}
    for key, val in _answer_items(answers):
        qi = _choice_index(key)
        ci = _choice_index(val)
        if qi is None or ci is None:
            continue
        if not (0 <= qi < len(pool.questions)):
            continue
        q = pool.questions[qi]
        if not (0 <= ci < len(q.choices)):
            continue
        out[q.id] = q.choices[ci].id
    return out


def score_index_answers(answers: Any, questions: Any) -> Tuple[ScoreMap, float, int]:
    pool = normalize_question_doc(questions)
    scores = score_answers(index_answers_to_ids(answers, pool), pool)
    total = sum_scores(scores)
    return scores, total, derive_level(total)


def format_points(points: Any) -> str:
    if not isinstance(points, dict):
        return ""
    parts = []
    for k, v in points.items():
        n = finite_number(v) or 0
        if n == 0:
            continue
        parts.append(f"{k} +{n}" if n > 0 else f"{k} {n}")
    return " ".join(parts)
