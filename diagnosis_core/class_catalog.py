from __future__ import annotations
import json, logging
from pathlib import Path
from typing import Any, Dict, List

from .config import CLASSES_PATH
from .i18n import first_text, normalize_lang, pick_text
from .types import ClassRecord

log = logging.getLogger(__name__)

# intro text candidates, most specific first
INTRO_KEYS = ("desc", "share_text", "intro", "card_intro", "flavor")
_IMAGE_KEYS = ("mini", "portrait", "image")


def _str_list(v: Any) -> List[str]:
    if not isinstance(v, list):
        return []
    return [s for s in v if isinstance(s, str)]


def _flavor_lines(v: Any) -> Dict[str, List[str]]:
    if not isinstance(v, dict):
        return {}
    return {str(k): _str_list(lines) for k, lines in v.items() if isinstance(lines, list)}


def normalize_class(raw: Any) -> ClassRecord | None:
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str) or not raw["id"]:
        return None
    axes = raw.get("axes")
    if axes is None:
        axes = raw.get("scoreKeys")
    image = next((raw[k] for k in _IMAGE_KEYS if isinstance(raw.get(k), str) and raw[k]), None)
    return ClassRecord(
        id=raw["id"],
        axes=_str_list(axes),
        tags=_str_list(raw.get("tags")),
        title=raw.get("title"),
        texts={k: raw[k] for k in INTRO_KEYS if k in raw},
        flavor=_flavor_lines(raw.get("classFlavor") or raw.get("flavor")),
        image=image,
    )


def normalize_catalog(doc: Any) -> List[ClassRecord]:
    """Accept ``{classes: [...]}`` or a bare list; records without an id are dropped."""
    if isinstance(doc, dict):
        raw = doc.get("classes")
    else:
        raw = doc
    if not isinstance(raw, list):
        return []
    out: List[ClassRecord] = []
    for r in raw:
        rec = normalize_class(r)
        if rec is None:
            log.debug("class record without id skipped")
            continue
        out.append(rec)
    return out


def load_classes(path: str | None = None) -> List[ClassRecord]:
    p = Path(path or CLASSES_PATH)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("class catalog unavailable at %s: %s", p, e)
        raw = {}
    return normalize_catalog(raw)


def class_title(c: ClassRecord, lang: str) -> str:
    return pick_text(c.title, normalize_lang(lang)) or c.id


def class_intro(c: ClassRecord, lang: str) -> str:
    return first_text(c.texts, INTRO_KEYS, normalize_lang(lang))


def class_image(c: ClassRecord) -> str:
    img = c.image
    if img and (img.startswith("/") or img.startswith("http")):
        return img
    return f"/classes/{c.id}.png"


def class_flavor(c: ClassRecord, lang: str) -> List[str]:
    lang = normalize_lang(lang)
    return list(c.flavor.get(lang) or c.flavor.get("ja") or c.flavor.get("en") or [])


def localize_class(c: ClassRecord, lang: str) -> Dict[str, Any]:
    return {
        "id": c.id,
        "axes": list(c.axes),
        "tags": list(c.tags),
        "title": class_title(c, lang),
        "intro": class_intro(c, lang),
        "flavor": class_flavor(c, lang),
        "image": class_image(c),
    }
