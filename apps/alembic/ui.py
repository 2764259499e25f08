# -*- coding: utf-8 -*-
from __future__ import annotations

from html import escape

# NOTE:
# - Keep HTML/JS as a normal triple-quoted string.
# - Do NOT use Python f-strings here: the template contains many `{}` (CSS/JS/template literals).

_INDEX_TEMPLATE = r"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <meta name="app-root" content="__ARCADIA_APP_ROOT__" />
  <title>Arcadia Alchemy Lab</title>
  <style>
    :root {
      --bg: #0b0f14;
      --panel: #0f1722;
      --text: #e6edf3;
      --muted: #9fb0c0;
      --border: #233042;
      --potion: #79c0ff;
      --poison: #7ee787;
      --bad: #ff7b72;
    }
    html, body {
      margin: 0; padding: 0;
      background: var(--bg);
      color: var(--text);
      font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial;
    }
    .wrap { max-width: 1100px; margin: 0 auto; padding: 16px; display: grid; grid-template-columns: 1fr 360px; gap: 16px; }
    .panel { background: var(--panel); border: 1px solid var(--border); border-radius: 10px; padding: 12px; }
    .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(150px, 1fr)); gap: 8px; margin-top: 10px; }
    .ingredient-card, .slot {
      border: 1px solid var(--border); border-radius: 8px; padding: 8px; cursor: pointer; text-align: center;
    }
    .ingredient-card:hover, .slot.filled:hover { border-color: var(--potion); }
    .slots { display: grid; grid-template-columns: repeat(3, 1fr); gap: 8px; }
    .slot { min-height: 56px; color: var(--muted); }
    .slot.filled { color: var(--text); }
    input { background: #111b29; color: var(--text); border: 1px solid var(--border); border-radius: 6px; padding: 6px; }
    .potion-display { margin-top: 12px; border-left: 4px solid var(--potion); padding-left: 10px; }
    .potion-display.is-poison { border-color: var(--poison); }
    .muted { color: var(--muted); font-size: 12px; }
    .err { color: var(--bad); min-height: 18px; font-size: 13px; }
    ul { padding-left: 18px; }
  </style>
</head>
<body>
  <div class="wrap">
    <div class="panel">
      <input id="ingredientSearch" placeholder="Search ingredients..." style="width: 100%" />
      <div class="grid" id="ingredientGrid"></div>
    </div>
    <div class="panel">
      <div>
        <label>Alchemy level <input id="alchemyLevel" type="number" min="1" max="100" value="15" style="width: 64px" /></label>
        <span id="levelRank" class="muted">Novice</span>
      </div>
      <div style="margin-top: 6px">
        <label>Perks <input id="perkLevel" type="number" min="0" max="5" value="0" style="width: 64px" /></label>
      </div>
      <div class="slots" style="margin-top: 12px">
        <div class="slot" data-slot="0"></div>
        <div class="slot" data-slot="1"></div>
        <div class="slot" data-slot="2"></div>
      </div>
      <button id="clearBtn" style="margin-top: 8px">Clear</button>
      <div class="err" id="errorBox"></div>
      <div class="potion-display" id="potionDisplayBox">
        <h3 id="potionName">Unknown Potion</h3>
        <div id="multiplierBonus" class="muted">1.00x Power</div>
        <ul id="effectsList"><li>Select ingredients to see effects...</li></ul>
      </div>
    </div>
  </div>
  <script>
    const APP_ROOT = (document.querySelector('meta[name="app-root"]')?.content || '').replace(/\/+$/,'');
    const API = APP_ROOT + '/api/v1';
    let SID = null;

    function escHtml(s) {
      return String(s ?? '').replace(/[&<>"']/g, (c) => ({
        '&': '&amp;', '<': '&lt;', '>': '&gt;', '"': '&quot;', "'": '&#39;'
      }[c]));
    }

    async function call(method, path, body) {
      const res = await fetch(API + path, {
        method,
        headers: body ? { 'Content-Type': 'application/json' } : {},
        body: body ? JSON.stringify(body) : undefined,
      });
      const data = await res.json();
      if (!res.ok) {
        const d = data.detail || {};
        throw new Error(d.message || res.statusText);
      }
      return data;
    }

    function render(state) {
      document.getElementById('errorBox').textContent = '';
      document.getElementById('levelRank').textContent = state.rank;
      document.querySelectorAll('.slot').forEach((el) => {
        const ing = state.slots[Number(el.dataset.slot)];
        el.classList.toggle('filled', !!ing);
        el.innerHTML = ing ? `<div>🌿</div><div>${escHtml(ing.name)}</div>` : '';
      });

      const r = state.result;
      const box = document.getElementById('potionDisplayBox');
      const list = document.getElementById('effectsList');
      const bonus = document.getElementById('multiplierBonus');
      box.className = 'potion-display ' + (r.is_poison ? 'is-poison' : 'is-potion');
      if (r.kind === 'no_potion') {
        document.getElementById('potionName').textContent = 'Unknown Potion';
        list.innerHTML = '<li>Select ingredients to see effects...</li>';
        bonus.textContent = '1.00x Power';
        return;
      }
      if (r.kind === 'failed') {
        document.getElementById('potionName').textContent = 'Failed Potion ❌';
        list.innerHTML = '<li>No common effects found.</li>';
        return;
      }
      document.getElementById('potionName').textContent = r.display_name;
      bonus.textContent = `${r.multiplier.toFixed(2)}x Power`;
      list.innerHTML = `<li><strong>💰 Value:</strong> ${r.total_value} Septims</li><hr><li><strong>Effects:</strong></li>` +
        r.effects.map((e) => `<li>✨ ${escHtml(e.name)}: <strong>${e.magnitude} pts</strong></li>`).join('');
    }

    function showError(err) {
      document.getElementById('errorBox').textContent = err.message || String(err);
    }

    async function renderIngredients(q) {
      const data = await call('GET', '/ingredients?q=' + encodeURIComponent(q || ''));
      const grid = document.getElementById('ingredientGrid');
      grid.innerHTML = '';
      data.items.forEach((ing) => {
        const card = document.createElement('div');
        card.className = 'ingredient-card';
        card.innerHTML = `<div class="icon">🌿</div><span>${escHtml(ing.name)}</span>`;
        card.addEventListener('click', () => call('POST', `/sessions/${SID}/slots`, { name: ing.name }).then(render).catch(showError));
        grid.appendChild(card);
      });
    }

    async function main() {
      const state = await call('POST', '/sessions');
      SID = state.id;
      render(state);
      await renderIngredients('');

      document.getElementById('ingredientSearch').addEventListener('input', (ev) => renderIngredients(ev.target.value).catch(showError));
      document.querySelectorAll('.slot').forEach((el) => {
        el.addEventListener('click', () => {
          if (!el.classList.contains('filled')) return;
          call('DELETE', `/sessions/${SID}/slots/${el.dataset.slot}`).then(render).catch(showError);
        });
      });
      // live updates while typing; the clamped values go back into the fields on blur
      function pushParams(writeBack) {
        const level = document.getElementById('alchemyLevel').value;
        const perks = document.getElementById('perkLevel').value;
        return call('PUT', `/sessions/${SID}/params`, { level, perks }).then((state) => {
          if (writeBack) {
            document.getElementById('alchemyLevel').value = state.params.level;
            document.getElementById('perkLevel').value = state.params.perks;
          }
          render(state);
        }).catch(showError);
      }
      ['alchemyLevel', 'perkLevel'].forEach((id) => {
        const el = document.getElementById(id);
        el.addEventListener('input', () => pushParams(false));
        el.addEventListener('change', () => pushParams(true));
      });
      document.getElementById('clearBtn').addEventListener('click', () => call('POST', `/sessions/${SID}/clear`).then(render).catch(showError));
    }

    main().catch(showError);
  </script>
</body>
</html>
"""


def render_index_html(app_root: str = "") -> str:
    """Render the calculator page.

    app_root:
      - ""       normal direct serving
      - "/xxx"   reverse proxy mount path
    """
    return _INDEX_TEMPLATE.replace("__ARCADIA_APP_ROOT__", escape(app_root or ""))
