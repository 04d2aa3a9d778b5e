from __future__ import annotations
from typing import Any, Optional, Sequence
import logging

from .config import CLASS_STRATEGY, UNKNOWN_CLASS_ID
from .question_bank import axis_order, normalize_question_doc
from .ranking import top_two
from .scoring import derive_level, score_answers, sum_scores
from .selector import pick_class, select_class_id
from .types import ClassRecord, DiagnoseResult

log = logging.getLogger(__name__)


def choose_class_id(scores: Any, top: str, second: str, total: Any,
                    classes: Optional[Sequence[ClassRecord]], seed: int,
                    strategy: Optional[str] = None) -> Optional[str]:
    """
    "rules": fixed pair table, "unknown" for non-positive totals.
    "catalog": catalog search with a seeded hash fallback; None for an empty catalog.
    """
    strategy = strategy or CLASS_STRATEGY
    if strategy == "catalog":
        picked = pick_class(list(classes or []), scores, seed)
        return picked.record.id if picked.record is not None else None
    return select_class_id(top, second, total)


def diagnose(answers: Any, questions: Any, classes: Optional[Sequence[ClassRecord]] = None,
             seed: int = 0, strategy: Optional[str] = None) -> DiagnoseResult:
    pool = normalize_question_doc(questions)
    scores = score_answers(answers, pool)
    total = sum_scores(scores)
    level = derive_level(total)
    top, second = top_two(scores, axis_order(pool))
    class_id = choose_class_id(scores, top, second, total, classes, seed, strategy)
    if class_id == UNKNOWN_CLASS_ID:
        log.debug("no class for total=%s", total)
    return DiagnoseResult(
        class_id=class_id,
        scores=scores,
        total=total,
        level=level,
        top_stat=top,
        second_stat=second,
    )
