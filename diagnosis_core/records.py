from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .config import RECORD_VERSION
from .i18n import normalize_lang
from .question_bank import finite_number
from .ranking import to_scores
from .types import ScoreMap

# Persisted shapes are camelCase so stores written by the browser build load as-is.


def _int(v: Any, default: int = 0) -> int:
    n = finite_number(v)
    return int(n) if n is not None else default


def _index_answers(raw: Any) -> Dict[str, int]:
    if not isinstance(raw, dict):
        return {}
    out: Dict[str, int] = {}
    for k, v in raw.items():
        n = finite_number(v)
        if n is None or int(n) != n:
            continue
        out[str(k)] = int(n)
    return out


@dataclass
class ProfileRecord:
    """Name, language and index-keyed answers ({question index: choice index})."""
    name: str = ""
    lang: str = "ja"
    answers: Dict[str, int] = field(default_factory=dict)
    updated_at: int = 0
    v: int = RECORD_VERSION

    @classmethod
    def from_dict(cls, d: Any) -> "ProfileRecord":
        if not isinstance(d, dict):
            return cls()
        return cls(
            name=str(d.get("name") or ""),
            lang=normalize_lang(d.get("lang")),
            answers=_index_answers(d.get("answers")),
            updated_at=_int(d.get("updatedAt")),
            v=_int(d.get("v"), RECORD_VERSION),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "v": self.v,
            "updatedAt": self.updated_at,
            "answers": dict(self.answers),
            "name": self.name,
            "lang": self.lang,
        }


@dataclass
class RunRecord:
    order: List[int] = field(default_factory=list)
    cursor: int = 0
    total_ask: int = 0
    pool_size: int = 0
    created_at: int = 0
    v: int = RECORD_VERSION

    @classmethod
    def from_dict(cls, d: Any) -> "RunRecord | None":
        if not isinstance(d, dict):
            return None
        order_raw = d.get("order")
        order = [int(i) for i in order_raw if finite_number(i) is not None] if isinstance(order_raw, list) else []
        cursor = finite_number(d.get("cursor"))
        return cls(
            order=order,
            # invalid cursor kept as -1 so run_needs_new() rejects it
            cursor=int(cursor) if cursor is not None else -1,
            total_ask=_int(d.get("totalAsk")),
            pool_size=_int(d.get("poolSize"), len(order)),
            created_at=_int(d.get("createdAt")),
            v=_int(d.get("v"), RECORD_VERSION),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "v": self.v,
            "createdAt": self.created_at,
            "order": list(self.order),
            "cursor": self.cursor,
            "totalAsk": self.total_ask,
            "poolSize": self.pool_size,
        }

    @property
    def asked(self) -> List[int]:
        return self.order[: min(self.total_ask, len(self.order))]


@dataclass
class LastResult:
    ts: int
    name: str
    lang: str
    scores: ScoreMap
    total_points: float
    level: int
    answered: int = 0
    total: int = 0
    v: int = RECORD_VERSION

    @classmethod
    def from_dict(cls, d: Any) -> "LastResult | None":
        if not isinstance(d, dict):
            return None
        total_points = finite_number(d.get("totalPoints"))
        return cls(
            ts=_int(d.get("ts")),
            name=str(d.get("name") or ""),
            lang=normalize_lang(d.get("lang")),
            scores=to_scores(d.get("scores")),
            total_points=total_points if total_points is not None else 0,
            level=_int(d.get("level"), 1),
            answered=_int(d.get("answered")),
            total=_int(d.get("total")),
            v=_int(d.get("v"), RECORD_VERSION),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "v": self.v,
            "ts": self.ts,
            "lang": self.lang,
            "name": self.name,
            "scores": dict(self.scores),
            "totalPoints": self.total_points,
            "level": self.level,
            "answered": self.answered,
            "total": self.total,
        }
