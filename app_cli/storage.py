"""Client-side key/value store for the terminal client.

Plays the part of browser local storage: each key is kept in one JSON file
under ``DATA_DIR`` so a run can be resumed after the process exits. The
diagnosis core never touches this module; the client loads records, hands
them to the core and saves what comes back.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Optional

from diagnosis_core.config import KEY_ANSWERS, KEY_LAST, KEY_RUN
from diagnosis_core.records import LastResult, ProfileRecord, RunRecord

log = logging.getLogger(__name__)

_LOCK = threading.Lock()


def data_root() -> Path:
    return Path(os.getenv("DATA_DIR", "data")).resolve()


def _path_for(key: str) -> Path:
    # "astraia:answers:v1" -> astraia_answers_v1.json
    return data_root() / (key.replace(":", "_") + ".json")


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        log.warning("unreadable store entry %s ignored", path.name)
        return default


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
    tmp.replace(path)


def get_item(key: str) -> Any:
    return _read_json(_path_for(key), None)


def set_item(key: str, value: Any) -> None:
    with _LOCK:
        _write_json(_path_for(key), value)


def remove_item(key: str) -> bool:
    path = _path_for(key)
    with _LOCK:
        if not path.exists():
            return False
        path.unlink()
    return True


def load_profile() -> Optional[ProfileRecord]:
    raw = get_item(KEY_ANSWERS)
    return ProfileRecord.from_dict(raw) if raw is not None else None


def save_profile(profile: ProfileRecord) -> None:
    set_item(KEY_ANSWERS, profile.to_dict())


def load_run() -> Optional[RunRecord]:
    return RunRecord.from_dict(get_item(KEY_RUN))


def save_run(run: RunRecord) -> None:
    set_item(KEY_RUN, run.to_dict())


def clear_run() -> None:
    remove_item(KEY_RUN)


def load_last() -> Optional[LastResult]:
    return LastResult.from_dict(get_item(KEY_LAST))


def save_last(last: LastResult) -> None:
    set_item(KEY_LAST, last.to_dict())


def clear_last() -> None:
    remove_item(KEY_LAST)
