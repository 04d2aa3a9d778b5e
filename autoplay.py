# autoplay.py
from __future__ import annotations
import argparse, os, json, datetime
from typing import Optional

from diagnosis_core.card import build_card, share_text
from diagnosis_core.class_catalog import load_classes
from diagnosis_core.config import DEFAULT_STATS, class_strategy, load_config, run_sizes
from diagnosis_core.question_bank import finite_number, load_pool
from diagnosis_core.records import ProfileRecord
from diagnosis_core.report_html import export_card_html
from diagnosis_core.rng import xorshift32
from diagnosis_core.session import DiagnosisSession
from diagnosis_core.types import Question

PROFILES = ["first", "last", "random"] + [f"max-{s}" for s in DEFAULT_STATS]

def _choice_for(q: Question, profile: str, rnd) -> int:
    n = len(q.choices)
    if n == 0: return 0
    if profile == "first": return 0
    if profile == "last": return n - 1
    if profile.startswith("max-"):
        axis = profile[4:]
        best, best_v = 0, None
        for i, c in enumerate(q.choices):
            v = finite_number(c.points.get(axis)) or 0
            if best_v is None or v > best_v: best, best_v = i, v
        return best
    return int(rnd() * n) % n

def run(profile: str, seed: int, name: str, lang: str, html: bool, strategy: Optional[str] = None):
    cfg = load_config()
    pool_size, total_ask = run_sizes(cfg)
    ticks = iter(range(seed, seed + 10_000_000))
    sess = DiagnosisSession(load_pool(), profile=ProfileRecord(name=name, lang=lang),
                            pool_size=pool_size, total_ask=total_ask,
                            clock=lambda: next(ticks), seed=seed)
    sess.ensure_run()
    rnd = xorshift32(seed)

    answered = 0; last = None
    while last is None:
        q = sess.next_question()
        if q is None: break
        last = sess.answer_current(_choice_for(q, profile, rnd)); answered += 1
    if answered <= 0 or last is None: raise RuntimeError("Driver answered 0 questions.")

    card = build_card(last, load_classes(), strategy=strategy or class_strategy(cfg))
    print(json.dumps(last.to_dict(), ensure_ascii=False))
    if card is None:
        print("no class available"); return
    print(share_text(card))
    if html:
        ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        os.makedirs("reports", exist_ok=True)
        path = os.path.join("reports", f"auto_{profile}_{ts}.html")
        export_card_html(card, path)
        print(f"Card: {path}")

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--profile", choices=PROFILES, default="random")
    ap.add_argument("--seed", type=int, default=1337)
    ap.add_argument("--name", default="Astra")
    ap.add_argument("--lang", choices=["ja", "en"], default="en")
    ap.add_argument("--strategy", choices=["rules", "catalog"])
    ap.add_argument("--html", action="store_true")
    a = ap.parse_args()
    run(a.profile, a.seed, a.name, a.lang, a.html, a.strategy)

if __name__ == "__main__":
    main()
