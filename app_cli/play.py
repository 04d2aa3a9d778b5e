from __future__ import annotations
import argparse, logging
from typing import Optional

from diagnosis_core.config import fixed_seed, load_config, run_sizes
from diagnosis_core.i18n import normalize_lang, pick_text
from diagnosis_core.names import random_name
from diagnosis_core.question_bank import load_pool, question_text
from diagnosis_core.scoring import format_points
from diagnosis_core.session import DiagnosisSession, now_ms, patch_profile, reset_answers
from app_cli import storage


def ask_index(prompt: str, options, show_points=None) -> int:
    print(prompt)
    for i, opt in enumerate(options):
        pts = f"  ({show_points[i]})" if show_points and show_points[i] else ""
        print(f"  [{i}] {opt}{pts}")
    while True:
        v = input("Your choice (index): ").strip()
        if v.isdigit(): return int(v)
        print("Enter a number index.")


def register(name: Optional[str], lang: Optional[str], seed: int) -> None:
    profile = storage.load_profile()
    lang = normalize_lang(lang or (profile.lang if profile else None))
    if name is None:
        suggestion = random_name(lang, seed)
        name = input(f"Name [{suggestion}]: ").strip() or suggestion
    storage.save_profile(patch_profile(profile, now_ms(), name=name, lang=lang))


def play(new: bool = False, debug_points: bool = False) -> None:
    cfg = load_config()
    pool = load_pool()
    pool_size, total_ask = run_sizes(cfg)
    profile = storage.load_profile()
    if profile is None:
        raise SystemExit("No profile yet. Run with --name first.")
    if new:
        profile = reset_answers(profile, now_ms())
        storage.clear_last()
        storage.clear_run()

    sess = DiagnosisSession(pool, profile=profile, run=storage.load_run(),
                            pool_size=pool_size, total_ask=total_ask, seed=fixed_seed(cfg))
    storage.save_run(sess.ensure_run())
    lang = sess.profile.lang
    last = None
    while last is None:
        q = sess.next_question()
        if q is None:
            break
        primary, secondary = question_text(q, lang)
        head = f"Q{min(sess.answered_count() + 1, sess.ask_count)}/{sess.ask_count} - {sess.progress_pct()}%"
        print(f"\n{head}" + (f"  {secondary}" if secondary else ""))
        labels = [pick_text(c.label, lang) for c in q.choices]
        pts = [format_points(c.points) for c in q.choices] if debug_points else None
        last = sess.answer_current(ask_index(primary, labels, pts))
        storage.save_profile(sess.profile)
        if last is None:
            storage.save_run(sess.run)

    if last is None:
        print("Nothing to ask. Start over with --new.")
        return
    storage.save_last(last)
    storage.clear_run()
    print(f"\nDone. {last.answered} answered, total {last.total_points} pts, Lv{last.level}.")
    print("Show the card with: python -m app_cli.result")


def main():
    ap = argparse.ArgumentParser(description="Guild class diagnosis (terminal)")
    ap.add_argument("--name")
    ap.add_argument("--lang", choices=["ja", "en"])
    ap.add_argument("--new", action="store_true", help="discard answers and start a fresh run")
    ap.add_argument("--points", action="store_true", help="show choice points (debug)")
    a = ap.parse_args()
    logging.basicConfig(level=logging.INFO)
    if a.name is not None or a.lang is not None or storage.load_profile() is None:
        register(a.name, a.lang, fixed_seed(load_config()) or now_ms())
    play(new=a.new, debug_points=a.points)

if __name__ == "__main__": main()
