from __future__ import annotations
from html import escape
from typing import List

from .card import ResultCard
from .i18n import axis_label, ui_text
from .stats import bar_pct


def _stat_row(label: str, value: int) -> str:
    pct = bar_pct(value)
    return (
        f"<tr><td>{escape(label)}</td><td>{value}</td>"
        f"<td><div class=\"bar\"><span style=\"width:{pct:.0f}%\"></span></div></td></tr>"
    )


def _score_row(axis: str, value, lang: str) -> str:
    return f"<tr><td>{escape(axis_label(axis, lang))}</td><td>{value}</td></tr>"


def render_card_html(card: ResultCard) -> str:
    t = ui_text(card.lang)
    s = card.stats
    stat_rows = "\n".join([
        _stat_row(t["hp"], s.hp),
        _stat_row(t["mp"], s.mp),
        _stat_row(t["atk"], s.atk),
        _stat_row(t["def"], s.defense),
        _stat_row(t["agi"], s.agi),
    ])
    score_rows = "\n".join(_score_row(k, v, card.lang) for k, v in card.scores.items())

    memo_items: List[str] = []
    for key in ("strength", "caution", "style", "synergy"):
        text = card.memo.get(key)
        if text:
            memo_items.append(f"<li><b>{escape(t[key])}</b>: {escape(text)}</li>")

    flavor = ""
    if card.flavor:
        flavor = "<ul class=\"flavor\">" + "".join(f"<li>{escape(x)}</li>" for x in card.flavor) + "</ul>"

    image = ""
    if card.class_image:
        image = f"<img class=\"portrait\" src=\"{escape(card.class_image, quote=True)}\" alt=\"{escape(card.class_title, quote=True)}\"/>"

    html = f"""<!doctype html>
<html lang="{card.lang}">
<head>
<meta charset="utf-8"/>
<title>{escape(t['guild'])} / {escape(t['card'])}</title>
<style>
 body{{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,'Helvetica Neue',Arial;background:#1b1530;color:#f4ecd8}}
 .wrap{{max-width:760px;margin:40px auto;padding:0 16px}}
 h1{{margin:0 0 8px;color:#f2d57a}}
 .meta{{margin:4px 0 16px}}
 .portrait{{max-width:180px;border-radius:12px;float:right;margin-left:16px}}
 table{{border-collapse:collapse;width:100%;margin:8px 0 16px}}
 th,td{{text-align:left;padding:4px 8px}}
 .bar{{background:rgba(255,255,255,.1);height:10px;border-radius:6px;overflow:hidden;width:200px}}
 .bar span{{display:block;height:100%;background:#f2d57a}}
</style>
</head>
<body>
<div class="wrap">
  <h1>{escape(t['guild'])} / {escape(t['card'])}</h1>
  {image}
  <div class="meta"><b>{escape(t['name'])}:</b> {escape(card.name or '-')} · <b>{escape(t['id'])}:</b> {card.shown_id} · <b>Lv</b> {card.level}</div>
  <div class="meta"><b>{escape(t['total'])}:</b> {card.total_points}</div>

  <h3>{escape(t['classInfo'])}: {escape(card.class_title)}</h3>
  <p>{escape(card.class_intro)}</p>
  {flavor}

  <h3>{escape(t['status'])}</h3>
  <table>
    <tbody>{stat_rows}</tbody>
  </table>

  <table border='1' cellpadding='6' cellspacing='0'>
    <tbody>{score_rows}</tbody>
  </table>

  <h3>{escape(t['memo'])}</h3>
  <ul>{''.join(memo_items)}</ul>
</div>
</body>
</html>"""
    return html


def export_card_html(card: ResultCard, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_card_html(card))
