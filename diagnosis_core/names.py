from __future__ import annotations
from typing import List

from .i18n import normalize_lang, ui_text
from .rng import xorshift32

GENERATED = {
    "en": ["Astra", "Liora", "Kael", "Mira", "Rowan", "Elio", "Seren", "Nyx", "Ciel", "Vey"],
    "ja": ["アストラ", "リオラ", "カイル", "ミラ", "ローワン", "エリオ", "セレン", "ニクス", "シエル", "ヴェイ"],
}

REGISTRATION = {
    "ja": [
        "リョウ", "ハル", "ユウ", "ソラ", "レン", "カイ", "アオ", "ユイ", "サラ", "リサ", "ミオ",
        "ナナ", "アキ", "ヒナ", "ツバサ", "シオン", "レイ", "セナ", "ルナ", "マオ", "コト", "スズ",
    ],
    "en": [
        "Alex", "Robin", "Sky", "Jun", "Kai", "Noa", "Ren", "Sora", "Mika", "Yuki", "Leo",
        "Nova", "Ash", "Rio", "Sage", "Luna", "Milo", "Aria", "Finn", "Iris", "Theo", "Zara",
    ],
}


def _pick(pool: List[str], seed: int) -> str:
    r = xorshift32(seed)
    idx = int(r() * len(pool))
    return pool[max(0, min(len(pool) - 1, idx))]


def generate_name(lang: str, seed: int) -> str:
    return _pick(GENERATED[normalize_lang(lang)], seed)


def random_name(lang: str, seed: int) -> str:
    """Name suggested on the registration screen."""
    return _pick(REGISTRATION[normalize_lang(lang)], seed)


def display_name(name: object, lang: str) -> str:
    s = name.strip() if isinstance(name, str) else ""
    return s or ui_text(lang)["nameless"]
