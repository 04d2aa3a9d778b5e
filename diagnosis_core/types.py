from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# plain string or per-language mapping, e.g. {"ja": "...", "en": "..."}
LangText = Union[str, Dict[str, str], None]
ScoreMap = Dict[str, Union[int, float]]
AnswersMap = Dict[str, str]

@dataclass
class Choice:
    id: str
    label: LangText = None
    points: ScoreMap = field(default_factory=dict)

@dataclass
class Question:
    id: str
    text: LangText = None
    title: LangText = None
    choices: List[Choice] = field(default_factory=list)

    def choice(self, choice_id: str) -> Optional[Choice]:
        for c in self.choices:
            if c.id == choice_id:
                return c
        return None

@dataclass
class QuestionPool:
    stats: List[str]
    questions: List[Question]
    question_count: int
    version: Optional[str] = None
    stats_declared: bool = False

    def by_id(self) -> Dict[str, Question]:
        return {q.id: q for q in self.questions}

@dataclass
class ClassRecord:
    id: str
    axes: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    title: LangText = None
    texts: Dict[str, LangText] = field(default_factory=dict)
    flavor: Dict[str, List[str]] = field(default_factory=dict)
    image: Optional[str] = None

@dataclass
class DiagnoseResult:
    class_id: Optional[str]
    scores: ScoreMap
    total: Union[int, float]
    level: int
    top_stat: str
    second_stat: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "classId": self.class_id,
            "scores": dict(self.scores),
            "total": self.total,
            "level": self.level,
            "topStat": self.top_stat,
            "secondStat": self.second_stat,
        }

@dataclass
class RpgStats:
    hp: int; mp: int; atk: int; defense: int; agi: int

    def to_dict(self) -> Dict[str, int]:
        return {"hp": self.hp, "mp": self.mp, "atk": self.atk, "def": self.defense, "agi": self.agi}

@dataclass
class PickedClass:
    record: Optional[ClassRecord]
    scores: ScoreMap
    top_a: Optional[str]
    top_b: Optional[str]
    low: Optional[str]
