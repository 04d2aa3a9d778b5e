from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
import math

from .class_catalog import class_flavor, class_image, class_intro, class_title
from .config import CLASS_STRATEGY, DEFAULT_STATS, KEY_LAST, LEVEL_BUMP_SPAN, LEVEL_MAX, LEVEL_MIN
from .i18n import MEMO, axis_label, normalize_lang, ui_text
from .names import display_name
from .question_bank import finite_number
from .ranking import rank_stats, to_scores, top_two
from .records import LastResult
from .rng import hash_str, seeded01, stable_id_from
from .selector import find_class, pick_class, select_class_id
from .stats import clamp, make_rpg_stats
from .types import ClassRecord, RpgStats, ScoreMap


@dataclass
class ResultCard:
    lang: str
    name: str
    shown_id: str
    base_level: int
    level: int
    total_points: float
    class_id: Optional[str]
    class_title: str
    class_intro: str
    class_image: str
    top_axis: Optional[str]
    second_axis: Optional[str]
    low_axis: Optional[str]
    scores: ScoreMap
    stats: RpgStats
    memo: Dict[str, str] = field(default_factory=dict)
    flavor: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lang": self.lang,
            "name": self.name,
            "shownId": self.shown_id,
            "baseLevel": self.base_level,
            "level": self.level,
            "totalPoints": self.total_points,
            "classId": self.class_id,
            "classTitle": self.class_title,
            "classIntro": self.class_intro,
            "classImage": self.class_image,
            "topAxis": self.top_axis,
            "secondAxis": self.second_axis,
            "lowAxis": self.low_axis,
            "scores": dict(self.scores),
            "stats": self.stats.to_dict(),
            "memo": dict(self.memo),
            "flavor": list(self.flavor),
        }


def card_seed(ts: int, name: str) -> int:
    return hash_str(f"{ts}:{name}:{KEY_LAST}", ts)


def shown_level(level: Any, seed: int) -> tuple[int, int]:
    """(base, shown): stored level clamped to 1..99, then a seeded bump of 0..4."""
    n = finite_number(level)
    base = int(clamp(int(n) if n is not None else 1, LEVEL_MIN, LEVEL_MAX))
    bump = int(math.floor(seeded01(seed) * LEVEL_BUMP_SPAN))
    return base, int(clamp(base + bump, LEVEL_MIN, LEVEL_MAX))


def memo_lines(a: Optional[str], b: Optional[str], low: Optional[str], lang: str) -> Dict[str, str]:
    lang = normalize_lang(lang)
    labels = {"a": axis_label(a, lang), "b": axis_label(b, lang), "low": axis_label(low, lang)}
    return {k: tpl.format(**labels) for k, tpl in MEMO[lang].items() if k != "intro"}


def build_card(last: Optional[LastResult], classes: Sequence[ClassRecord],
               lang: Optional[str] = None, strategy: Optional[str] = None) -> Optional[ResultCard]:
    """
    Everything the result screen shows, derived only from the stored result
    and the catalog. None when there is no result to show, or when the
    catalog search has no class to offer.
    """
    if last is None:
        return None
    lang = normalize_lang(lang or last.lang)
    strategy = strategy or CLASS_STRATEGY
    seed = card_seed(last.ts, last.name)
    scores = to_scores(last.scores)

    if strategy == "catalog":
        picked = pick_class(list(classes), scores, seed)
        if picked.record is None:
            return None
        record: Optional[ClassRecord] = picked.record
        class_id: Optional[str] = record.id
        a, b, low = picked.top_a, picked.top_b, picked.low
    else:
        a, b = top_two(scores, DEFAULT_STATS)
        ranked = rank_stats(scores, DEFAULT_STATS)
        low = ranked[-1] if ranked else None
        class_id = select_class_id(a, b, last.total_points)
        record = find_class(classes, class_id)

    base, level = shown_level(last.level, seed)
    if record is not None:
        title = class_title(record, lang)
        intro = class_intro(record, lang)
        image = class_image(record)
        flavor = class_flavor(record, lang)
    else:
        title = ui_text(lang)["unknown"]
        intro, image, flavor = "", "", []
    if not intro:
        intro = MEMO[lang]["intro"].format(a=axis_label(a, lang), b=axis_label(b, lang), low="")

    return ResultCard(
        lang=lang,
        name=last.name,
        shown_id=stable_id_from(last.ts, last.name or "anonymous"),
        base_level=base,
        level=level,
        total_points=last.total_points,
        class_id=class_id,
        class_title=title,
        class_intro=intro,
        class_image=image,
        top_axis=a,
        second_axis=b,
        low_axis=low,
        scores=scores,
        stats=make_rpg_stats(scores),
        memo=memo_lines(a, b, low, lang),
        flavor=flavor,
    )


def share_text(card: ResultCard) -> str:
    t = ui_text(card.lang)
    s = card.stats
    lines = [
        f"{t['guild']} / {t['card']}",
        f"{t['name']}: {card.name or '-'}",
        f"{t['id']}: {card.shown_id}",
        f"Lv: {card.level}",
        f"{t['total']}: {_num(card.total_points)}",
        f"Class: {card.class_title}",
        card.class_intro,
        "",
        f"{t['status']}:",
        f"{t['hp']}: {s.hp}",
        f"{t['mp']}: {s.mp}",
        f"{t['atk']}: {s.atk}",
        f"{t['def']}: {s.defense}",
        f"{t['agi']}: {s.agi}",
    ]
    return "\n".join(lines)


def card_heading(card: ResultCard) -> str:
    return f"{display_name(card.name, card.lang)} / Lv{card.level} / {card.class_title}"


def _num(v: Any) -> str:
    # 12.0 -> "12"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)
