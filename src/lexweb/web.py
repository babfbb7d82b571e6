from __future__ import annotations
import argparse
import logging
import sys

from flask import Flask, Response, current_app, jsonify, request

from lexcore.config import VERSION, add_common_arguments, settings_from_args
from lexcore.errors import LookupFailed, SoundUnavailable, StorageUnavailable
from lexcore.markup import to_html
from lexcore.models import AnnotatedDocument
from lexcore.session import Session

log = logging.getLogger(__name__)


def _session() -> Session:
    return current_app.config["LEX_SESSION"]


def _doc_payload(doc: AnnotatedDocument) -> dict:
    return {
        "html": to_html(doc),
        "regions": [{"label": r.label, "kind": r.kind, "payload": r.payload} for r in doc.regions],
    }


def create_app(session: Session) -> Flask:
    app = Flask(__name__)
    app.config["LEX_SESSION"] = session

    # ---------- API ----------
    @app.get("/api/complete")
    def api_complete():
        q = request.args.get("q", "", type=str)
        c = _session().suggest(q)
        return jsonify({"words": c.words, "exhausted": c.exhausted})

    @app.get("/api/lookup")
    def api_lookup():
        q = request.args.get("q", "", type=str)
        try:
            res = _session().lookup(q)
        except LookupFailed as exc:
            log.warning("lookup %r failed: %s", q, exc)
            return jsonify({"error": str(exc)}), 502
        body = _doc_payload(res.document)
        body.update(word=res.word, dictionaries=res.dictionaries, sound=res.sound is not None)
        return jsonify(body)

    @app.get("/api/search")
    def api_search():
        q = request.args.get("q", "", type=str)
        s = _session()
        hits = s.search(q)
        body = _doc_payload(s.document)
        body["hits"] = [r.label for r in hits]
        return jsonify(body)

    @app.post("/api/search/clear")
    def api_search_clear():
        s = _session()
        s.clear_search()
        return jsonify(_doc_payload(s.document))

    @app.post("/api/next")
    def api_next():
        return jsonify({"label": _session().next_hit()})

    @app.post("/api/dictionaries/<int:index>")
    def api_dictionary(index: int):
        try:
            label = _session().jump_to_dictionary(index)
        except IndexError:
            return jsonify({"error": f"no dictionary #{index}"}), 404
        return jsonify({"label": label})

    @app.get("/api/history")
    def api_history():
        return jsonify(_session().history.items())

    @app.post("/api/sound")
    def api_sound():
        try:
            played = _session().play_sound()
        except SoundUnavailable as exc:
            return jsonify({"error": str(exc)}), 503
        return jsonify({"played": played})

    @app.get("/health")
    def health():
        s = _session()
        words = len(s.engine.index) if s.engine is not None and s.engine.index is not None else 0
        return jsonify({"ok": True, "version": VERSION, "words": words,
                        "autocompletion": s.completer is not None})

    # ---------- UI ----------
    @app.get("/")
    def home():
        return Response(PAGE, mimetype="text/html")

    return app


PAGE = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>lexbrowse</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff; --border:#1c2530; --dead:#5a1d1d; }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:15px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,Arial; }
.container{ max-width:980px; margin:24px auto; padding:0 16px; }
.controls{ display:flex; gap:10px; flex-wrap:wrap; align-items:center; }
input{ padding:10px 12px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); font-size:15px; }
input.dead{ background:var(--dead); }
#q{ flex:1; min-width:240px; }
.btn{ padding:9px 12px; border-radius:10px; border:1px solid var(--border); background:#0b1117; color:var(--ink); cursor:pointer; }
#out{ margin-top:14px; padding:14px; border:1px solid var(--border); border-radius:12px; background:var(--panel); white-space:pre-wrap; font-family:ui-monospace,Menlo,Consolas,monospace; max-height:70vh; overflow:auto; }
mark.section{ background:transparent; color:#06989a; }
mark.search{ background:#ff5fff; color:#fce94f; }
mark.current{ outline:2px solid var(--accent); }
#err{ color:#ffb0b0; margin-top:8px; }
select{ background:#0b1117; color:var(--ink); border:1px solid var(--border); border-radius:10px; padding:8px; }
</style>
</head>
<body>
<div class="container">
  <div class="controls">
    <input id="q" list="sugg" placeholder="Enter a word or phrase" autocomplete="off" />
    <datalist id="sugg"></datalist>
    <button class="btn" id="go">Look up</button>
    <select id="dicts"><option value="">Dictionaries</option></select>
    <select id="hist"><option value="">History</option></select>
    <button class="btn" id="snd" disabled>Pronounce</button>
  </div>
  <div class="controls" style="margin-top:8px">
    <input id="find" placeholder="Search in the text" />
    <button class="btn" id="next">Next</button>
    <button class="btn" id="clear">Clear</button>
  </div>
  <div id="err"></div>
  <div id="out"></div>
</div>
<script>
const $ = (s) => document.querySelector(s);
const esc = (s) => String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]));
const q = $("#q"), out = $("#out"), err = $("#err");
async function getJSON(url, opts){ const r = await fetch(url, opts); const d = await r.json(); if(!r.ok) throw new Error(d.error || r.status); return d; }
function show(doc){ out.innerHTML = doc.html; }
function highlight(label){
  document.querySelectorAll("mark.current").forEach(m => m.classList.remove("current"));
  if(label === null || label === undefined) return;
  const els = document.querySelectorAll(`mark[data-region="${label}"]`);
  els.forEach(m => m.classList.add("current"));
  if(els.length) els[0].scrollIntoView({block:"center"});
}
let t;
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(async () => {
  const d = await getJSON(`/api/complete?q=${encodeURIComponent(q.value)}`);
  q.classList.toggle("dead", d.exhausted);
  $("#sugg").innerHTML = d.words.map(w => `<option value="${esc(w)}">`).join("");
}, 120); });
async function lookup(word){
  err.textContent = "";
  try{
    const d = await getJSON(`/api/lookup?q=${encodeURIComponent(word)}`);
    show(d);
    $("#dicts").innerHTML = '<option value="">Dictionaries</option>' + d.dictionaries.map((n,i) => `<option value="${i}">${esc(n)}</option>`).join("");
    $("#snd").disabled = !d.sound;
    loadHistory();
  }catch(e){ err.textContent = e.message; }
}
async function loadHistory(){
  const h = await getJSON("/api/history");
  $("#hist").innerHTML = '<option value="">History</option>' + h.map(w => `<option>${esc(w)}</option>`).join("");
}
$("#go").onclick = () => lookup(q.value);
q.addEventListener("keydown", (ev) => { if(ev.key === "Enter") lookup(q.value); });
$("#dicts").onchange = async (ev) => { if(ev.target.value === "") return; const d = await getJSON(`/api/dictionaries/${ev.target.value}`, {method:"POST"}); highlight(d.label); };
$("#hist").onchange = (ev) => { if(ev.target.value){ q.value = ev.target.value; lookup(q.value); } };
$("#find").addEventListener("keydown", async (ev) => {
  if(ev.key !== "Enter") return;
  const d = await getJSON(`/api/search?q=${encodeURIComponent(ev.target.value)}`);
  show(d);
  const n = await getJSON("/api/next", {method:"POST"}); highlight(n.label);
});
$("#next").onclick = async () => { const n = await getJSON("/api/next", {method:"POST"}); highlight(n.label); };
$("#clear").onclick = async () => { show(await getJSON("/api/search/clear", {method:"POST"})); };
$("#snd").onclick = async () => { try{ await getJSON("/api/sound", {method:"POST"}); }catch(e){ err.textContent = e.message; } };
loadHistory();
</script>
</body>
</html>
"""


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="lexbrowse web UI (Flask)")
    add_common_arguments(p)
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=5000)
    p.add_argument("--debug", action="store_true")
    args = p.parse_args(argv)

    if args.version:
        print(VERSION)
        return 0
    settings = settings_from_args(args)
    if settings.verbose:
        logging.basicConfig(level=logging.INFO)

    try:
        session = Session.create(settings, rebuild=args.rebuild)
    except StorageUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    app = create_app(session)
    try:
        app.run(host=args.host, port=args.port, debug=args.debug)
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
