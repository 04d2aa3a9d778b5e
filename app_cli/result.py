from __future__ import annotations
import argparse, os, datetime

from diagnosis_core.card import build_card, card_heading, share_text
from diagnosis_core.class_catalog import load_classes
from diagnosis_core.config import class_strategy, load_config
from diagnosis_core.i18n import ui_text
from diagnosis_core.report_html import export_card_html
from app_cli import storage


def main():
    ap = argparse.ArgumentParser(description="Show the last guild card")
    ap.add_argument("--lang", choices=["ja", "en"])
    ap.add_argument("--html", action="store_true", help="also export the card as HTML under reports/")
    a = ap.parse_args()

    last = storage.load_last()
    card = build_card(last, load_classes(), lang=a.lang, strategy=class_strategy(load_config()))
    if card is None:
        print(ui_text(a.lang or (last.lang if last else "ja"))["missing"])
        return
    print(card_heading(card))
    print()
    print(share_text(card))
    for line in card.flavor:
        print(f"  - {line}")
    t = ui_text(card.lang)
    print(f"\n{t['memo']}:")
    for key in ("strength", "caution", "style", "synergy"):
        print(f"  {t[key]}: {card.memo.get(key, '')}")

    if a.html:
        os.makedirs("reports", exist_ok=True)
        ts = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join("reports", f"card_{card.shown_id}_{ts}.html")
        export_card_html(card, path)
        print(f"\nCard saved to: {path}")

if __name__ == "__main__": main()
