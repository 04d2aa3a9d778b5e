from __future__ import annotations

import json

from diagnosis_core import config
from diagnosis_core.i18n import axis_label, normalize_lang, pick_text
from diagnosis_core.names import GENERATED, REGISTRATION, display_name, generate_name, random_name


def test_generated_names_are_seeded():
    assert generate_name("en", 42) == generate_name("en", 42)
    assert generate_name("en", 42) in GENERATED["en"]
    assert generate_name("ja-JP", 42) in GENERATED["ja"]
    assert random_name("en", 3) in REGISTRATION["en"]
    assert len({generate_name("en", s) for s in range(50)}) > 1


def test_seed_zero_picks_the_first_name():
    assert generate_name("en", 0) == GENERATED["en"][0]
    assert random_name("ja", 0) == REGISTRATION["ja"][0]


def test_display_name():
    assert display_name("  ", "en") == "Nameless"
    assert display_name(None, "ja") == "名無し"
    assert display_name(" Nyx ", "en") == "Nyx"


def test_lang_and_text_helpers():
    assert normalize_lang("en-US") == "en"
    assert normalize_lang("ja-JP") == "ja"
    assert normalize_lang("EN") == "en"
    assert pick_text({"ja": "", "en": "x"}, "ja") == "x"
    assert pick_text("plain", "en") == "plain"
    assert pick_text(3, "en") == ""
    assert axis_label("res", "en") == "Recovery"
    assert axis_label("luck", "en") == "LUCK"
    assert axis_label(None, "ja") == "不明"


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("X_FLAG", "yes")
    monkeypatch.setenv("X_INT", "abc")
    assert config._env_bool("X_FLAG", False) is True
    assert config._env_int("X_INT", 7) == 7
    assert config._env_str("X_MISSING", "d") == "d"


def test_config_accessors(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CLASS_STRATEGY", raising=False)
    monkeypatch.delenv("SEED", raising=False)
    (tmp_path / "config.json").write_text(json.dumps({"CLASS_STRATEGY": "Catalog", "TOTAL_ASK": 5}), encoding="utf-8")
    cfg = config.load_config()
    assert config.class_strategy(cfg) == "catalog"
    assert config.run_sizes(cfg) == (config.POOL_SIZE, 5)
    assert config.fixed_seed(cfg) is None

    monkeypatch.setenv("SEED", "12")
    assert config.fixed_seed(config.load_config()) == 12
    assert config.class_strategy({"CLASS_STRATEGY": "dice"}) == "rules"
    assert config.run_sizes({"POOL_SIZE": "x", "TOTAL_ASK": -3}) == (config.POOL_SIZE, 0)
