from __future__ import annotations
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
import os, typing as t

# ---- Engine imports ----
from diagnosis_core.audit_export import to_csv as trace_to_csv, to_json as trace_to_json, trace_answers
from diagnosis_core.card import build_card, share_text
from diagnosis_core.class_catalog import load_classes, localize_class
from diagnosis_core.config import CLASS_STRATEGIES, class_strategy, fixed_seed, load_config, run_sizes
from diagnosis_core.engine import diagnose
from diagnosis_core.i18n import normalize_lang
from diagnosis_core.names import generate_name, random_name
from diagnosis_core.question_bank import axis_order, load_pool, localize_question
from diagnosis_core.records import LastResult, ProfileRecord, RunRecord
from diagnosis_core.report_html import render_card_html
from diagnosis_core.scoring import index_answers_to_ids
from diagnosis_core.session import DiagnosisSession, now_ms, patch_profile
from diagnosis_core.stats import make_rpg_stats

# read-only for the life of the process
POOL = load_pool()
CLASSES = load_classes()
CFG = load_config()

app = FastAPI(title="Astraia Diagnosis API")

@app.get("/")
def root():
    return {"status": "ok", "service": "astraia-diagnosis-api"}

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
)

# ---- Schemas ----
class DiagnoseReq(BaseModel):
    answers: dict[str, str] | None = None        # question id -> choice id
    index_answers: dict[str, int] | None = None  # question index -> choice index
    seed: int = 0
    strategy: str | None = None

class RunReq(BaseModel):
    profile: dict[str, t.Any] | None = None
    run: dict[str, t.Any] | None = None
    name: str | None = None
    lang: str | None = None
    seed: int | None = None
    force: bool = False

class RunAnswerReq(BaseModel):
    profile: dict[str, t.Any]
    run: dict[str, t.Any]
    choice_index: int
    seed: int | None = None

class CardReq(BaseModel):
    last: dict[str, t.Any] | None = None
    lang: str | None = None
    strategy: str | None = None

class NameReq(BaseModel):
    lang: str | None = None
    seed: int | None = None
    kind: str = "registration"  # "registration" | "generated"

# ---- Helpers ----
def _strategy(req_value: str | None) -> str:
    if req_value is None:
        return class_strategy(CFG)
    s = req_value.strip().lower()
    if s not in CLASS_STRATEGIES:
        raise HTTPException(400, f"unknown strategy {req_value!r}")
    return s


def _seed(req_seed: int | None) -> int | None:
    if req_seed is not None:
        return req_seed
    return fixed_seed(CFG)


def _session(profile: ProfileRecord, run: RunRecord | None, seed: int | None) -> DiagnosisSession:
    pool_size, total_ask = run_sizes(CFG)
    return DiagnosisSession(POOL, profile=profile, run=run, pool_size=pool_size,
                            total_ask=total_ask, seed=_seed(seed))


def _run_state(sess: DiagnosisSession, last: LastResult | None = None) -> dict[str, t.Any]:
    q = sess.next_question()
    lang = sess.profile.lang
    return {
        "profile": sess.profile.to_dict(),
        "run": sess.run.to_dict() if sess.run else None,
        "question": localize_question(q, lang, sess.current_index()) if q else None,
        "answered": sess.answered_count(),
        "totalAsk": sess.ask_count,
        "progress": sess.progress_pct(),
        "done": sess.done,
        "last": last.to_dict() if last else None,
    }


def _diagnose(req: DiagnoseReq):
    answers = dict(req.answers or {})
    if req.index_answers:
        answers.update(index_answers_to_ids(req.index_answers, POOL))
    return answers, diagnose(answers, POOL, CLASSES, seed=req.seed, strategy=_strategy(req.strategy))


def _card(req: CardReq):
    last = LastResult.from_dict(req.last)
    card = build_card(last, CLASSES, lang=req.lang, strategy=_strategy(req.strategy))
    if card is None:
        raise HTTPException(404, "result not found")
    return card

# ---- Health ----
@app.get("/health")
def health():
    return {
        "questions": len(POOL.questions),
        "classes": len(CLASSES),
        "stats": axis_order(POOL),
        "class_strategy": class_strategy(CFG),
    }

# ---- Static data ----
@app.get("/questions")
def questions(lang: str | None = Query(None)):
    lng = normalize_lang(lang)
    return {
        "stats": axis_order(POOL),
        "question_count": POOL.question_count,
        "questions": [localize_question(q, lng, i) for i, q in enumerate(POOL.questions)],
    }

@app.get("/classes")
def classes(lang: str | None = Query(None)):
    lng = normalize_lang(lang)
    return {"classes": [localize_class(c, lng) for c in CLASSES]}

# ---- Scoring ----
@app.post("/diagnose")
def diagnose_endpoint(req: DiagnoseReq):
    _, res = _diagnose(req)
    out = res.to_dict()
    out["stats"] = make_rpg_stats(res.scores).to_dict()
    return out

@app.post("/diagnose/trace.json")
def diagnose_trace_json(req: DiagnoseReq):
    answers, res = _diagnose(req)
    return {"result": res.to_dict(), **trace_to_json(trace_answers(answers, POOL))}

@app.post("/diagnose/trace.csv")
def diagnose_trace_csv(req: DiagnoseReq):
    answers, _ = _diagnose(req)
    body = trace_to_csv(trace_answers(answers, POOL))
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=\"diagnosis_trace.csv\""},
    )

# ---- Run session (state is held by the caller) ----
@app.post("/run/start")
def run_start(req: RunReq):
    profile = patch_profile(ProfileRecord.from_dict(req.profile), now_ms(), name=req.name, lang=req.lang)
    sess = _session(profile, RunRecord.from_dict(req.run), req.seed)
    sess.ensure_run(force=req.force)
    return _run_state(sess)

@app.post("/run/answer")
def run_answer(req: RunAnswerReq):
    run = RunRecord.from_dict(req.run)
    sess = _session(ProfileRecord.from_dict(req.profile), run, req.seed)
    if run is None or sess.next_question() is None:
        raise HTTPException(404, "no current question")
    last = sess.answer_current(req.choice_index)
    return _run_state(sess, last)

@app.post("/run/restart")
def run_restart(req: RunReq):
    profile = patch_profile(ProfileRecord.from_dict(req.profile), now_ms(), name=req.name, lang=req.lang)
    sess = _session(profile, RunRecord.from_dict(req.run), req.seed)
    sess.restart()
    return _run_state(sess)

# ---- Result card ----
@app.post("/result/card")
def result_card(req: CardReq):
    card = _card(req)
    return {"card": card.to_dict(), "shareText": share_text(card)}

@app.post("/result/card/html")
def result_card_html(req: CardReq):
    return {"html": render_card_html(_card(req))}

# ---- Names ----
@app.post("/names/random")
def names_random(req: NameReq):
    lang = normalize_lang(req.lang)
    seed = _seed(req.seed)
    if seed is None:
        seed = now_ms()
    if req.kind == "generated":
        return {"name": generate_name(lang, seed), "lang": lang}
    return {"name": random_name(lang, seed), "lang": lang}
