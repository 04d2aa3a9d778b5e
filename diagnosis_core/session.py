from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging, math, time

from .config import POOL_SIZE, TOTAL_ASK
from .i18n import normalize_lang
from .question_bank import normalize_question_doc
from .records import LastResult, ProfileRecord, RunRecord
from .rng import seeded_shuffle
from .scoring import score_index_answers
from .types import Question, QuestionPool

log = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def new_run(question_count: int, seed: int, now: int,
            pool_size: int = POOL_SIZE, total_ask: int = TOTAL_ASK) -> RunRecord:
    """Shuffle every question index, keep a pool of them and ask a prefix of that pool."""
    n = max(0, int(question_count))
    order = seeded_shuffle(list(range(n)), seed)[: max(0, min(pool_size, n))]
    return RunRecord(
        order=order,
        cursor=0,
        total_ask=max(0, min(total_ask, len(order))),
        pool_size=len(order),
        created_at=now,
    )


def run_needs_new(run: Optional[RunRecord]) -> bool:
    return run is None or not run.order or run.cursor < 0


def patch_profile(profile: Optional[ProfileRecord], now: int,
                  name: Any = None, lang: Any = None) -> ProfileRecord:
    cur = profile or ProfileRecord()
    return ProfileRecord(
        name=str(name).strip() if name is not None else cur.name,
        lang=normalize_lang(lang) if lang is not None else cur.lang,
        answers=dict(cur.answers),
        updated_at=now,
        v=cur.v,
    )


def reset_answers(profile: Optional[ProfileRecord], now: int) -> ProfileRecord:
    cur = profile or ProfileRecord()
    return ProfileRecord(name=cur.name, lang=cur.lang, answers={}, updated_at=now, v=cur.v)


@dataclass
class DiagnosisSession:
    """
    One player's progress through a run. State lives in the three records;
    callers persist ``profile`` and ``run`` after each step and store the
    LastResult returned by ``answer_current`` once the run completes.
    """
    pool: QuestionPool
    profile: ProfileRecord = field(default_factory=ProfileRecord)
    run: Optional[RunRecord] = None
    pool_size: int = POOL_SIZE
    total_ask: int = TOTAL_ASK
    clock: Callable[[], int] = now_ms
    seed: Optional[int] = None

    def __post_init__(self):
        self.pool = normalize_question_doc(self.pool)

    def _seed(self) -> int:
        # fixed seed for reproducible runs, else the wall clock
        return self.seed if self.seed is not None else self.clock()

    @property
    def question_count(self) -> int:
        return len(self.pool.questions)

    def ensure_run(self, force: bool = False) -> RunRecord:
        if force or run_needs_new(self.run):
            self.run = new_run(self.question_count, self._seed(), self.clock(),
                               self.pool_size, self.total_ask)
            log.debug("new run: %d asked of %d pooled", self.run.total_ask, self.run.pool_size)
        return self.run

    @property
    def ask_count(self) -> int:
        if self.run is None:
            return min(self.total_ask, self.question_count)
        return min(self.run.total_ask, len(self.run.order))

    def current_index(self) -> Optional[int]:
        run = self.run
        if run is None or not (0 <= run.cursor < len(run.order)):
            return None
        return run.order[run.cursor]

    def next_question(self) -> Optional[Question]:
        idx = self.current_index()
        if idx is None or self.run.cursor >= self.ask_count:
            return None
        if not (0 <= idx < self.question_count):
            return None
        return self.pool.questions[idx]

    def answered_count(self) -> int:
        if self.run is None:
            return 0
        return sum(1 for qi in self.run.asked if str(qi) in self.profile.answers)

    def progress_pct(self) -> int:
        tot = self.ask_count
        if tot <= 0:
            return 0
        return max(0, min(100, int(math.floor(self.answered_count() / tot * 100 + 0.5))))

    @property
    def done(self) -> bool:
        return self.run is not None and self.run.cursor >= self.ask_count

    def answer_current(self, choice_index: int) -> Optional[LastResult]:
        """
        Record an answer for the current question and advance the cursor.
        Returns the LastResult when this answer completes the run, else None.
        Out-of-range indices are clamped onto the choice list.
        """
        q = self.next_question()
        if q is None or not q.choices:
            return None
        ci = max(0, min(len(q.choices) - 1, int(choice_index)))
        qi = self.current_index()
        answers: Dict[str, int] = dict(self.profile.answers)
        answers[str(qi)] = ci
        self.profile = ProfileRecord(
            name=self.profile.name, lang=self.profile.lang, answers=answers,
            updated_at=self.clock(), v=self.profile.v,
        )
        nxt = self.run.cursor + 1
        self.run = RunRecord(
            order=list(self.run.order), cursor=nxt, total_ask=self.run.total_ask,
            pool_size=self.run.pool_size, created_at=self.run.created_at, v=self.run.v,
        )
        if nxt >= self.ask_count:
            return self.finalize()
        return None

    def finalize(self) -> LastResult:
        scores, total, level = score_index_answers(self.profile.answers, self.pool)
        return LastResult(
            ts=self.clock(),
            name=self.profile.name,
            lang=self.profile.lang,
            scores=scores,
            total_points=total,
            level=level,
            answered=len(self.profile.answers),
            total=self.question_count,
        )

    def restart(self) -> RunRecord:
        self.profile = reset_answers(self.profile, self.clock())
        return self.ensure_run(force=True)
