"""
Image-edit page: the browser view of the image-edit panel.

Rendered from the panel's state so a reload shows the current image,
prompt, result, and error. The script talks to /api/image-edit and
redraws from the state each call returns.
"""

from __future__ import annotations

from typing import Any

import chevron

from backend.services.image_edit_panel import RESULT_FILENAME
from engine.techpack.renderer import BASE_CSS, render_app_header

PAGE_PATH = "/image-edit"

LOADING_TEXT = "Generating your image..."
EMPTY_RESULT_TEXT = "Your edited image will appear here"
EMPTY_IMAGE_TEXT = "Upload an image to start"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>AI Image Editor</title>
  <style>{{{css}}}</style>
</head>
<body>
{{{app_header}}}
<main class="ie-main">
  <h2 class="ie-title">AI Image Editor</h2>
  <p class="ie-subtitle">Use text prompts to edit your images with Gemini AI.</p>
  <div class="ie-panels">
    <section class="ie-panel">
      <img id="ie-preview" alt="Selected image"{{#image}} src="{{image}}"{{/image}}{{^image}} hidden{{/image}}>
      <p id="ie-preview-empty"{{#image}} hidden{{/image}}>{{empty_image_text}}</p>
      <label class="ie-upload">
        <span id="ie-upload-label">{{#image}}Change Image{{/image}}{{^image}}Upload Image{{/image}}</span>
        <input type="file" id="ie-file" accept="image/*">
      </label>
    </section>
    <section class="ie-panel">
      <p id="ie-loading"{{^loading}} hidden{{/loading}}>{{loading_text}}</p>
      <img id="ie-result" alt="Edited image"{{#result}} src="{{result}}"{{/result}}{{^result}} hidden{{/result}}>
      <p id="ie-result-empty"{{^show_result_empty}} hidden{{/show_result_empty}}>{{empty_result_text}}</p>
      <a id="ie-download" href="{{download_url}}" download="{{download_name}}"{{^result}} hidden{{/result}}>Download Image</a>
    </section>
  </div>
  <form id="ie-form" class="ie-form">
    <label for="ie-prompt">Editing Prompt</label>
    <textarea id="ie-prompt" name="prompt" rows="3" placeholder="e.g., Add a retro filter">{{prompt}}</textarea>
    <div class="ie-examples">
      {{#example_prompts}}<button type="button" class="ie-example" data-prompt="{{.}}">{{.}}</button>{{/example_prompts}}
    </div>
    <p id="ie-error" class="ie-error" role="alert"{{^error}} hidden{{/error}}>{{error}}</p>
    <button type="submit" id="ie-submit" data-busy="Generating..."{{#loading}} disabled{{/loading}}>{{#loading}}Generating...{{/loading}}{{^loading}}Generate with AI{{/loading}}</button>
  </form>
</main>
<script>{{{script}}}</script>
</body>
</html>
"""

PAGE_CSS = """
.ie-main { max-width: 960px; margin: 0 auto; padding: 32px 24px; }
.ie-title { font-size: 24px; font-weight: 700; }
.ie-subtitle { color: #6b7280; margin: 4px 0 24px; }
.ie-panels { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; }
.ie-panel { display: flex; flex-direction: column; align-items: center; justify-content: center; gap: 12px;
  min-height: 320px; padding: 16px; background: #fff; border: 2px dashed #d1d5db; border-radius: 8px; color: #6b7280; }
.ie-panel img { max-width: 100%; max-height: 360px; object-fit: contain; }
.ie-upload { position: relative; padding: 8px 16px; border-radius: 6px; background: #111827; color: #fff; cursor: pointer; }
.ie-upload input[type=file] { position: absolute; inset: 0; opacity: 0; cursor: pointer; }
#ie-download { padding: 8px 16px; border-radius: 6px; background: #16a34a; color: #fff; text-decoration: none; }
.ie-form { display: flex; flex-direction: column; gap: 8px; margin-top: 24px; }
.ie-form textarea { padding: 8px; border: 1px solid #d1d5db; border-radius: 6px; font: inherit; }
.ie-examples { display: flex; flex-wrap: wrap; gap: 6px; }
.ie-example { padding: 4px 10px; border: 1px solid #d1d5db; border-radius: 999px; background: #fff; cursor: pointer; }
.ie-error { color: #dc2626; }
#ie-submit { align-self: flex-start; padding: 10px 20px; border: 0; border-radius: 6px; background: #2563eb; color: #fff; cursor: pointer; }
#ie-submit:disabled { opacity: .5; cursor: not-allowed; }
"""

PAGE_JS = """
(function () {
  const $ = (id) => document.getElementById(id);
  const submit = $("ie-submit");
  const idleLabel = "Generate with AI";

  function show(el, visible) { el.hidden = !visible; }

  function apply(state) {
    show($("ie-preview"), Boolean(state.image));
    if (state.image) $("ie-preview").src = state.image;
    show($("ie-preview-empty"), !state.image);
    $("ie-upload-label").textContent = state.image ? "Change Image" : "Upload Image";

    show($("ie-loading"), state.loading);
    show($("ie-result"), Boolean(state.result));
    if (state.result) $("ie-result").src = state.result;
    show($("ie-result-empty"), !state.result && !state.loading);
    show($("ie-download"), Boolean(state.result));

    show($("ie-error"), Boolean(state.error));
    $("ie-error").textContent = state.error || "";
    setBusy(state.loading);
  }

  function setBusy(busy) {
    submit.disabled = busy;
    submit.textContent = busy ? submit.dataset.busy : idleLabel;
  }

  function showError(message) {
    $("ie-error").textContent = message;
    show($("ie-error"), true);
  }

  async function readState(res) {
    const data = await res.json();
    if (res.ok) return apply(data);
    showError(typeof data.detail === "string" ? data.detail : "Request failed.");
  }

  $("ie-file").addEventListener("change", async (event) => {
    const file = event.target.files[0];
    if (!file) return;
    const body = new FormData();
    body.append("file", file);
    await readState(await fetch("/api/image-edit/image", { method: "PUT", body }));
  });

  document.querySelectorAll(".ie-example").forEach((button) => {
    button.addEventListener("click", () => { $("ie-prompt").value = button.dataset.prompt; });
  });

  $("ie-form").addEventListener("submit", async (event) => {
    event.preventDefault();
    show($("ie-error"), false);
    show($("ie-result"), false);
    show($("ie-result-empty"), false);
    show($("ie-download"), false);
    show($("ie-loading"), true);
    setBusy(true);
    try {
      const res = await fetch("/api/image-edit/submit", {
        method: "POST",
        headers: { "Content-Type": "application/json" },
        body: JSON.stringify({ prompt: $("ie-prompt").value }),
      });
      await readState(res);
    } finally {
      show($("ie-loading"), false);
      setBusy(false);
    }
  });
})();
"""


def render_image_editor(state: dict[str, Any]) -> str:
    """Full HTML page for the image-edit panel in the given state."""
    context = dict(state)
    context.update(
        css=BASE_CSS + PAGE_CSS,
        script=PAGE_JS,
        app_header=render_app_header(PAGE_PATH),
        loading_text=LOADING_TEXT,
        empty_result_text=EMPTY_RESULT_TEXT,
        show_result_empty=not state.get("result") and not state.get("loading"),
        empty_image_text=EMPTY_IMAGE_TEXT,
        download_url="/api/image-edit/result",
        download_name=RESULT_FILENAME,
    )
    return chevron.render(PAGE_TEMPLATE, context)
