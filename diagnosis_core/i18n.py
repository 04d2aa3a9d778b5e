from __future__ import annotations
from typing import Any, Dict, Iterable

from .config import DEFAULT_LANG

UI: Dict[str, Dict[str, str]] = {
    "ja": {
        "guild": "冒険者ギルド",
        "card": "ギルドカード",
        "classInfo": "クラス紹介",
        "memo": "性格メモ",
        "status": "STATUS",
        "name": "名前",
        "id": "ID",
        "total": "総合ポイント",
        "strength": "強み",
        "caution": "注意点",
        "style": "戦闘スタイル",
        "synergy": "相性",
        "hp": "HP",
        "mp": "MP",
        "atk": "攻撃力",
        "def": "防御力",
        "agi": "素早さ",
        "missing": "診断結果が見つからないよ…（タイトルへ戻って再診断してね）",
        "unknown": "不明",
        "nameless": "名無し",
    },
    "en": {
        "guild": "Adventurers Guild",
        "card": "Guild Card",
        "classInfo": "Class Info",
        "memo": "Notes",
        "status": "STATUS",
        "name": "Name",
        "id": "ID",
        "total": "Total Points",
        "strength": "Strength",
        "caution": "Caution",
        "style": "Combat Style",
        "synergy": "Synergy",
        "hp": "HP",
        "mp": "MP",
        "atk": "ATK",
        "def": "DEF",
        "agi": "AGI",
        "missing": "No result found… (go back to title and run again)",
        "unknown": "Unknown",
        "nameless": "Nameless",
    },
}

AXIS_LABEL: Dict[str, Dict[str, str]] = {
    "emp": {"ja": "共感", "en": "Empathy"},
    "soc": {"ja": "社交", "en": "Social"},
    "int": {"ja": "直感", "en": "Intuition"},
    "ord": {"ja": "規律", "en": "Order"},
    "adv": {"ja": "冒険", "en": "Adventure"},
    "exp": {"ja": "表現", "en": "Expression"},
    "res": {"ja": "回復", "en": "Recovery"},
    "shd": {"ja": "影", "en": "Shadow"},
}

MEMO: Dict[str, Dict[str, str]] = {
    "ja": {
        "strength": "{a}・{b}。落ち着いて判断し、要所を外さない。",
        "caution": "{a}が行き過ぎると偏りやすい。{low}でバランスを取ると安定。",
        "style": "{a}で主導権を取り、{b}で決め切る。",
        "synergy": "{low}が得意な仲間がいると噛み合う。",
        "intro": "{a}と{b}を軸に戦う、ギルド認定の冒険者タイプ。",
    },
    "en": {
        "strength": "Strong in {a} and {b}. Calm decisions, good timing.",
        "caution": "Too much {a} can tilt your balance. Stabilize with {low}.",
        "style": "Lead with {a}, finish cleanly with {b}.",
        "synergy": "Best with allies strong in {low}.",
        "intro": "A guild-certified adventurer type built around {a} and {b}.",
    },
}


def normalize_lang(value: Any, default: str = DEFAULT_LANG) -> str:
    """Collapse "en", "en-US", "ja-JP" ... onto the two supported codes."""
    if not isinstance(value, str) or not value.strip():
        return default if default in UI else "ja"
    return "en" if value.strip().lower().startswith("en") else "ja"


def pick_text(value: Any, lang: str) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in (lang, "ja", "en"):
            s = value.get(key)
            if isinstance(s, str) and s:
                return s
    return ""


def first_text(obj: Dict[str, Any], keys: Iterable[str], lang: str) -> str:
    for k in keys:
        s = pick_text(obj.get(k), lang).strip()
        if s:
            return s
    return ""


def axis_label(axis: str | None, lang: str) -> str:
    lang = normalize_lang(lang)
    if not axis:
        return UI[lang]["unknown"]
    entry = AXIS_LABEL.get(axis)
    if entry:
        return entry[lang]
    return axis.upper()


def ui_text(lang: str) -> Dict[str, str]:
    return UI[normalize_lang(lang)]
