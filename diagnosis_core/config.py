from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


DEFAULT_STATS: tuple[str, ...] = ("emp", "soc", "int", "ord", "adv", "exp", "res", "shd")

POOL_SIZE: int = 30
TOTAL_ASK: int = 10

LEVEL_STEP: int = 5
LEVEL_MIN: int = 1
LEVEL_MAX: int = 99
LEVEL_BUMP_SPAN: int = 5

UNKNOWN_CLASS_ID: str = "unknown"
UNKNOWN_AXIS_RANK: int = 999
CLASS_STRATEGIES: tuple[str, ...] = ("rules", "catalog")
CLASS_STRATEGY: str = "rules"

LANGS: tuple[str, ...] = ("ja", "en")
DEFAULT_LANG: str = "ja"

RECORD_VERSION: int = 1
KEY_ANSWERS: str = "astraia:answers:v1"
KEY_RUN: str = "astraia:run:v1"
KEY_LAST: str = "astraia:lastResult:v1"

DATA_DIR = pathlib.Path(__file__).with_name("data")
QUESTIONS_PATH: str = str(DATA_DIR / "questions.json")
CLASSES_PATH: str = str(DATA_DIR / "classes.json")

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "question_id",
    "choice_id",
    "axis",
    "delta",
    "running",
)

# // env overrides for local play and ops; defaults match the browser build.
POOL_SIZE = _env_int("POOL_SIZE", POOL_SIZE)
TOTAL_ASK = _env_int("TOTAL_ASK", TOTAL_ASK)
CLASS_STRATEGY = _env_str("CLASS_STRATEGY", CLASS_STRATEGY).lower()
if CLASS_STRATEGY not in CLASS_STRATEGIES:
    CLASS_STRATEGY = "rules"
DEFAULT_LANG = "en" if _env_str("DEFAULT_LANG", DEFAULT_LANG).lower().startswith("en") else "ja"
QUESTIONS_PATH = _env_str("QUESTIONS_PATH", QUESTIONS_PATH)
CLASSES_PATH = _env_str("CLASSES_PATH", CLASSES_PATH)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", False)


def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except Exception: cfg = {}
    if not isinstance(cfg, dict):
        cfg = {}
    e = os.environ
    if e.get("CLASS_STRATEGY"): cfg["CLASS_STRATEGY"] = CLASS_STRATEGY
    if e.get("POOL_SIZE"): cfg["POOL_SIZE"] = POOL_SIZE
    if e.get("TOTAL_ASK"): cfg["TOTAL_ASK"] = TOTAL_ASK
    if e.get("SEED"):
        try: cfg["SEED"] = int(e.get("SEED"))
        except ValueError: pass
    return cfg


def class_strategy(cfg: dict | None = None) -> str:
    s = str((cfg or {}).get("CLASS_STRATEGY") or CLASS_STRATEGY).lower().strip()
    return s if s in CLASS_STRATEGIES else "rules"


def run_sizes(cfg: dict | None = None) -> tuple[int, int]:
    cfg = cfg or {}
    try: pool = int(cfg.get("POOL_SIZE", POOL_SIZE))
    except (TypeError, ValueError): pool = POOL_SIZE
    try: ask = int(cfg.get("TOTAL_ASK", TOTAL_ASK))
    except (TypeError, ValueError): ask = TOTAL_ASK
    return max(0, pool), max(0, ask)


def fixed_seed(cfg: dict | None = None) -> int | None:
    s = (cfg or {}).get("SEED")
    if s is None:
        return None
    try:
        return int(s)
    except (TypeError, ValueError):
        return None
