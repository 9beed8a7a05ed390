#!/usr/bin/env python3
"""
Web app for reading Chinese text with pinyin or zhuyin ruby annotations.

Paste text, convert it, then:
  - click a character with several readings to pick another one
  - step through characters with ←/→ (or , and .), phrases with ↑/↓
  - switch between pinyin and zhuyin, tone marks and tone numbers
  - reopen earlier texts from the history list

Run with:
    python web_app.py

Then open http://localhost:5000 in your browser.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from functools import partial

from flask import Flask, request, render_template_string, jsonify

from pinyin_ruby.chinese_processing import lookup_variants
from pinyin_ruby.config import ReaderConfig
from pinyin_ruby.history import (
    add_to_history,
    clear_history,
    load_history,
    remove_from_history,
)
from pinyin_ruby.ruby_html import RUBY_CSS
from pinyin_ruby.session import ReaderSession
from pinyin_ruby.timefmt import format_time
from pinyin_ruby.tones import RUBY_MODES, TONE_DISPLAYS
from pinyin_ruby.zhuyin_map import load_zhuyin_map

logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 1 * 1024 * 1024  # 1 MB of text is plenty
app.config['READER'] = ReaderConfig.from_env()

# In-memory reader sessions: session_id -> ReaderSession, least recently used first
MAX_SESSIONS = 200
_sessions = OrderedDict()
_sessions_lock = threading.Lock()

# History list for this process; the file on disk is only a backup
_history = None
_history_lock = threading.Lock()

HTML_PAGE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Pinyin Ruby Reader</title>
    <style>
        * { box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: #f5f5f5; color: #333; margin: 0; padding: 20px;
        }
        .page { max-width: 760px; margin: 0 auto; }
        h1 { font-size: 1.4em; margin-bottom: 4px; }
        .sub { color: #888; font-size: .9em; margin-bottom: 20px; }
        .card {
            background: #fff; border-radius: 12px;
            box-shadow: 0 2px 12px rgba(0,0,0,.08);
            padding: 20px; margin-bottom: 16px;
        }
        textarea { width: 100%; min-height: 120px; font-size: 1.1em; padding: 8px; }
        .row { display: flex; gap: 8px; margin-top: 10px; flex-wrap: wrap; }
        button { padding: 8px 14px; border-radius: 8px; border: 1px solid #ddd; background: #fff; cursor: pointer; }
        button.primary { background: #e74c3c; color: #fff; border-color: #e74c3c; }
        button.on { border-color: #e74c3c; color: #e74c3c; }
        .picker { margin-top: 10px; display: none; gap: 6px; }
        .picker button.active { background: #fde2e0; }
        .history li { display: flex; justify-content: space-between; padding: 4px 0; cursor: pointer; }
        .history .when { color: #999; font-size: .85em; margin-left: 8px; }
        .dup { color: #e67e22; font-size: .85em; }
        {{ ruby_css|safe }}
    </style>
</head>
<body>
<div class="page">
    <h1>Pinyin Ruby Reader</h1>
    <div class="sub">← → / , . move by character &nbsp; ↑ ↓ move by phrase</div>
    <div class="card">
        <textarea id="input">你好，世界！</textarea>
        <div class="row">
            <button class="primary" id="convertBtn">Convert</button>
            <button data-mode="pinyin">Pinyin</button>
            <button data-mode="zhuyin">Zhuyin</button>
            <button data-tone="mark">Tone marks</button>
            <button data-tone="number">Tone numbers</button>
        </div>
        <div class="dup" id="dup"></div>
    </div>
    <div class="card" id="output"></div>
    <div class="card picker" id="picker"></div>
    <div class="card">
        <div class="row" style="justify-content: space-between; margin: 0 0 8px;">
            <strong>History</strong><button id="clearBtn">Clear</button>
        </div>
        <ul class="history" id="history"></ul>
    </div>
</div>
<script>
const $ = id => document.getElementById(id);
let sessionId = null;
let state = null;

async function post(url, body) {
    const resp = await fetch(url, {
        method: 'POST', headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {}),
    });
    if (!resp.ok) throw new Error(await resp.text());
    return resp.json();
}

function render(data) {
    state = data.session;
    $('output').innerHTML = state.html;
    document.querySelectorAll('[data-mode]').forEach(b =>
        b.classList.toggle('on', b.dataset.mode === state.mode));
    document.querySelectorAll('[data-tone]').forEach(b =>
        b.classList.toggle('on', b.dataset.tone === state.tone_display));
    renderPicker();
}

function renderPicker() {
    const picker = $('picker');
    const tok = state && state.tokens[state.selected_index];
    if (!tok || tok.variants.length < 2) { picker.style.display = 'none'; return; }
    picker.innerHTML = '';
    tok.variants.forEach((v, i) => {
        const b = document.createElement('button');
        b.textContent = v;
        if (i === tok.active_variant_index) b.classList.add('active');
        b.onclick = async () => render(await post(`/session/${sessionId}/variant`,
            {token_index: state.selected_index, variant_index: i}));
        picker.appendChild(b);
    });
    picker.style.display = 'flex';
}

async function loadHistory() {
    const items = await (await fetch('/history')).json();
    const list = $('history');
    list.innerHTML = '';
    items.forEach(item => {
        const li = document.createElement('li');
        li.innerHTML = `<span></span><span><span class="when"></span> <button>✕</button></span>`;
        li.firstChild.textContent = item.input_text.slice(0, 40);
        li.querySelector('.when').textContent = item.relative_time;
        li.firstChild.onclick = () => { $('input').value = item.input_text; convert(); };
        li.querySelector('button').onclick = async () => {
            if (!confirm('Delete this history item?')) return;
            await fetch(`/history/${item.id}`, {method: 'DELETE'});
            loadHistory();
        };
        list.appendChild(li);
    });
}

async function convert() {
    const data = await post('/convert', {
        text: $('input').value,
        session_id: sessionId,
        mode: state ? state.mode : undefined,
        tone_display: state ? state.tone_display : undefined,
    });
    sessionId = data.session_id;
    $('dup').textContent = data.duplicate_id ? `Already in history (#${data.duplicate_id})` : '';
    render(data);
    loadHistory();
}

$('convertBtn').onclick = convert;
$('clearBtn').onclick = async () => {
    if (!confirm('Clear all history? This cannot be undone.')) return;
    await fetch('/history', {method: 'DELETE'});
    loadHistory();
};
document.querySelectorAll('[data-mode]').forEach(b => b.onclick = async () => {
    if (sessionId) render(await post(`/session/${sessionId}/display`, {mode: b.dataset.mode}));
});
document.querySelectorAll('[data-tone]').forEach(b => b.onclick = async () => {
    if (sessionId) render(await post(`/session/${sessionId}/display`, {tone_display: b.dataset.tone}));
});
$('output').addEventListener('click', async e => {
    const el = e.target.closest('ruby[data-index]');
    if (!el || !sessionId) return;
    render(await post(`/session/${sessionId}/select`, {index: parseInt(el.dataset.index)}));
});
document.addEventListener('keydown', async e => {
    if (!sessionId || e.target === $('input')) return;
    const data = await post(`/session/${sessionId}/key`, {key: e.key});
    if (data.handled) { e.preventDefault(); render(data); }
});
loadHistory();
</script>
</body>
</html>
'''


_zhuyin_lookup = None


def _lookup():
    """Reading lookup, using the configured Zhuyin overrides if any."""
    global _zhuyin_lookup
    path = app.config['READER'].zhuyin_map_path
    if not path:
        return None
    if _zhuyin_lookup is None:
        _zhuyin_lookup = partial(lookup_variants, zhuyin_map=load_zhuyin_map(path))
    return _zhuyin_lookup


def _get_history():
    global _history
    if _history is None:
        _history = load_history(app.config['READER'].history_path)
    return _history


def _history_json(items):
    return [
        {
            'id': item.id,
            'input_text': item.input_text,
            'timestamp': item.timestamp.isoformat(),
            'relative_time': format_time(item.timestamp),
        }
        for item in items
    ]


def _get_session(session_id):
    with _sessions_lock:
        return _sessions.get(session_id)


def _store_session(session_id, session):
    """Store a session, evicting the least recently used past MAX_SESSIONS."""
    with _sessions_lock:
        _sessions[session_id] = session
        _sessions.move_to_end(session_id)
        while len(_sessions) > MAX_SESSIONS:
            evicted, _ = _sessions.popitem(last=False)
            logging.info(f'Dropped idle session {evicted}')


def _update_session(session_id, change):
    """
    Replace a stored session with change(session) in one locked step.

    change returns (new_session, extra). Returns None for unknown sessions.
    """
    with _sessions_lock:
        session = _sessions.get(session_id)
        if session is None:
            return None
        session, extra = change(session)
        _sessions[session_id] = session
        _sessions.move_to_end(session_id)
    return session, extra


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _session_response(session_id, session, **extra):
    return jsonify({'session_id': session_id, 'session': session.to_dict(), **extra})


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@app.route('/')
def index():
    return render_template_string(HTML_PAGE, ruby_css=RUBY_CSS)


@app.route('/convert', methods=['POST'])
def convert():
    global _history
    data = _json_body()
    text = data.get('text', '')
    if not isinstance(text, str) or not text.strip():
        return 'Please enter some text to convert', 400

    reader = app.config['READER']
    mode = data.get('mode') or reader.mode
    tone_display = data.get('tone_display') or reader.tone_display
    if mode not in RUBY_MODES or tone_display not in TONE_DISPLAYS:
        return 'Unknown display mode', 400

    session = ReaderSession(mode=mode, tone_display=tone_display).convert(text, _lookup())
    # Reuse the caller's session slot so re-converting does not pile up sessions
    session_id = data.get('session_id')
    if not isinstance(session_id, str) or _get_session(session_id) is None:
        session_id = str(uuid.uuid4())[:8]
    _store_session(session_id, session)

    with _history_lock:
        result = add_to_history(
            _get_history(), text,
            path=reader.history_path, max_items=reader.max_history_items,
        )
        _history = result.history

    logging.info(f'Converted {len(text)} characters into session {session_id}')
    return _session_response(session_id, session, duplicate_id=result.duplicate_id)


@app.route('/session/<session_id>')
def get_session(session_id):
    session = _get_session(session_id)
    if session is None:
        return 'Session not found', 404
    return _session_response(session_id, session)


@app.route('/session/<session_id>/select', methods=['POST'])
def select(session_id):
    index = _json_body().get('index')
    if not _is_int(index):
        return 'index must be an integer', 400
    updated = _update_session(session_id, lambda s: (s.select(index), {}))
    if updated is None:
        return 'Session not found', 404
    session, _ = updated
    return _session_response(session_id, session)


@app.route('/session/<session_id>/key', methods=['POST'])
def key(session_id):
    key_name = _json_body().get('key')
    if not isinstance(key_name, str):
        return 'key must be a string', 400

    def press(session):
        session, handled = session.press_key(key_name)
        return session, {'handled': handled}

    updated = _update_session(session_id, press)
    if updated is None:
        return 'Session not found', 404
    session, extra = updated
    return _session_response(session_id, session, **extra)


@app.route('/session/<session_id>/variant', methods=['POST'])
def variant(session_id):
    data = _json_body()
    token_index = data.get('token_index')
    variant_index = data.get('variant_index')
    if not _is_int(token_index) or not _is_int(variant_index):
        return 'token_index and variant_index must be integers', 400
    updated = _update_session(
        session_id, lambda s: (s.choose_variant(token_index, variant_index), {}),
    )
    if updated is None:
        return 'Session not found', 404
    session, _ = updated
    return _session_response(session_id, session)


@app.route('/session/<session_id>/display', methods=['POST'])
def display(session_id):
    data = _json_body()
    try:
        updated = _update_session(
            session_id,
            lambda s: (s.with_display(data.get('mode'), data.get('tone_display')), {}),
        )
    except ValueError as e:
        return str(e), 400
    if updated is None:
        return 'Session not found', 404
    session, _ = updated
    return _session_response(session_id, session)


@app.route('/history')
def history():
    with _history_lock:
        return jsonify(_history_json(_get_history()))


@app.route('/history', methods=['DELETE'])
def history_clear():
    global _history
    with _history_lock:
        _history = clear_history(app.config['READER'].history_path)
    return jsonify([])


@app.route('/history/<int:item_id>', methods=['DELETE'])
def history_remove(item_id):
    global _history
    with _history_lock:
        _history = remove_from_history(
            _get_history(), item_id, app.config['READER'].history_path,
        )
        return jsonify(_history_json(_history))


if __name__ == '__main__':
    print('Starting server at http://localhost:5000')
    print('Open this URL in your browser to start reading.')
    app.run(host='0.0.0.0', port=5000, debug=False)
