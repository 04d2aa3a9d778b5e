from __future__ import annotations

import pytest

from diagnosis_core.class_catalog import normalize_catalog
from diagnosis_core.config import DEFAULT_STATS
from diagnosis_core.question_bank import normalize_question_doc
from diagnosis_core.types import ClassRecord, QuestionPool

CLASS_AXES: dict[str, list[str]] = {
    "seraphim_healer": ["emp", "res"],
    "holy_sigil_paladin": ["emp", "ord"],
    "star_oracle": ["emp", "int"],
    "wind_bard": ["soc", "exp"],
    "contract_diplomancer": ["soc", "ord"],
    "torch_enchanter": ["int", "shd"],
    "azure_archmage": ["int", "ord"],
    "castle_artificer": ["ord", "adv"],
    "travel_ranger": ["adv", "soc"],
    "training_warlord": ["adv", "exp"],
    "immortal_vanguard": ["res", "adv"],
    "thunder_rogue": ["shd", "exp"],
}


def build_synthetic_pool(
    *,
    n_questions: int = 12,
    n_choices: int = 4,
    stats: list[str] | None = None,
) -> QuestionPool:
    """Deterministic pool: choice j of question i adds j+1 to axis (i+j) mod len(stats)."""

    axes = list(stats or DEFAULT_STATS)
    questions = []
    for i in range(n_questions):
        choices = []
        for j in range(n_choices):
            axis = axes[(i + j) % len(axes)]
            choices.append(
                {
                    "id": f"c{j}",
                    "label": {"ja": f"選択{j}", "en": f"Choice {j}"},
                    "points": {axis: j + 1},
                }
            )
        questions.append(
            {
                "id": f"q{i}",
                "title": {"ja": f"題{i}", "en": f"Title {i}"},
                "text": {"ja": f"質問{i}", "en": f"Question {i}"},
                "choices": choices,
            }
        )
    return normalize_question_doc({"stats": axes, "questions": questions})


def build_synthetic_catalog(*, with_texts: bool = True) -> list[ClassRecord]:
    raw = []
    for cid, axes in CLASS_AXES.items():
        rec = {
            "id": cid,
            "axes": axes,
            "tags": list(axes),
            "title": {"ja": f"{cid}_ja", "en": cid.replace("_", " ").title()},
        }
        if with_texts:
            rec["desc"] = {"ja": f"{cid}の説明", "en": f"About {cid}"}
            rec["classFlavor"] = {"ja": [f"{cid}-1"], "en": [f"{cid} line"]}
        raw.append(rec)
    return normalize_catalog({"classes": raw})


def full_scores(**values: float) -> dict[str, float]:
    scores = {s: 0 for s in DEFAULT_STATS}
    scores.update(values)
    return scores


@pytest.fixture
def pool() -> QuestionPool:
    return build_synthetic_pool()


@pytest.fixture
def catalog() -> list[ClassRecord]:
    return build_synthetic_catalog()
