from __future__ import annotations

from diagnosis_core.card import build_card, card_seed, share_text, shown_level
from diagnosis_core.records import LastResult
from diagnosis_core.report_html import export_card_html, render_card_html
from diagnosis_core.rng import stable_id_from
from tests.conftest import build_synthetic_catalog, full_scores

TS = 1_700_000_000_000


def _last(**kw) -> LastResult:
    base = dict(ts=TS, name="Astra", lang="en", scores=full_scores(res=10, shd=-1),
                total_points=9, level=2, answered=10, total=30)
    base.update(kw)
    return LastResult(**base)


def test_no_result_no_card():
    assert build_card(None, build_synthetic_catalog()) is None
    assert build_card(_last(), [], strategy="catalog") is None


def test_card_survives_huge_scores():
    card = build_card(_last(scores={"res": 1e308}), build_synthetic_catalog(), strategy="rules")
    assert card.stats.hp == 999
    assert card.top_axis == "res"


def test_rules_card_fields():
    card = build_card(_last(), build_synthetic_catalog(), strategy="rules")
    assert card.class_id == "immortal_vanguard"
    assert card.class_title == "Immortal Vanguard"
    assert card.class_intro == "About immortal_vanguard"
    assert card.class_image == "/classes/immortal_vanguard.png"
    assert (card.top_axis, card.second_axis, card.low_axis) == ("res", "emp", "shd")
    assert card.stats.hp == 150
    assert card.shown_id == stable_id_from(TS, "Astra")
    assert card.flavor == ["immortal_vanguard line"]
    assert card.memo["caution"] == "Too much Recovery can tilt your balance. Stabilize with Shadow."


def test_catalog_card_uses_axis_pair():
    card = build_card(_last(scores={"res": 10, "adv": 6, "shd": -1}), build_synthetic_catalog(), strategy="catalog")
    assert card.class_id == "immortal_vanguard"
    assert card.low_axis == "shd"


def test_card_is_deterministic():
    catalog = build_synthetic_catalog()
    assert build_card(_last(), catalog, strategy="catalog") == build_card(_last(), catalog, strategy="catalog")


def test_shown_level_bump():
    seed = card_seed(TS, "Astra")
    base, shown = shown_level(2, seed)
    assert base == 2 and 2 <= shown <= 6
    assert shown_level(99, seed) == (99, 99)
    assert shown_level(-5, seed)[0] == 1
    assert shown_level(None, seed)[0] == 1


def test_blank_name_uses_anonymous_id():
    card = build_card(_last(name=""), build_synthetic_catalog(), strategy="rules")
    assert card.shown_id == stable_id_from(TS, "anonymous")
    assert "Name: -" in share_text(card)


def test_intro_falls_back_to_axes():
    card = build_card(_last(), build_synthetic_catalog(with_texts=False), strategy="rules")
    assert card.class_intro == "A guild-certified adventurer type built around Recovery and Empathy."
    ja = build_card(_last(lang="ja"), build_synthetic_catalog(with_texts=False), strategy="rules")
    assert ja.class_intro == "回復と共感を軸に戦う、ギルド認定の冒険者タイプ。"


def test_rules_unknown_class_still_renders():
    card = build_card(_last(scores=full_scores(), total_points=0), build_synthetic_catalog(), strategy="rules")
    assert card.class_id == "unknown"
    assert card.class_title == "Unknown"


def test_share_text_lines():
    card = build_card(_last(), build_synthetic_catalog(), strategy="rules")
    lines = share_text(card).split("\n")
    assert lines[0] == "Adventurers Guild / Guild Card"
    assert lines[1] == "Name: Astra"
    assert lines[2] == f"ID: {card.shown_id}"
    assert lines[3] == f"Lv: {card.level}"
    assert lines[4] == "Total Points: 9"
    assert lines[5] == "Class: Immortal Vanguard"
    assert lines[7] == ""
    assert lines[9] == "HP: 150"
    assert lines[-1] == "AGI: 18"


def test_card_html_export(tmp_path):
    card = build_card(_last(name="<b>Astra</b>"), build_synthetic_catalog(), strategy="rules")
    html = render_card_html(card)
    assert html.startswith("<!doctype html>")
    assert "&lt;b&gt;Astra&lt;/b&gt;" in html
    assert "Immortal Vanguard" in html
    path = tmp_path / "card.html"
    export_card_html(card, str(path))
    assert path.read_text(encoding="utf-8") == html
