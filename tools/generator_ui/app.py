"""
Generator UI - FastAPI application serving the barcode web form.

Provides a web interface to:
- Preview a barcode live while typing
- Download a single barcode as PNG, JPG or SVG
- Upload a TXT/CSV file and download every barcode as one ZIP archive
"""

import re
from functools import lru_cache
from typing import Any
from urllib.parse import quote

import structlog
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import BaseModel, Field

from src.barcode import (
    BarcodeRenderer,
    InvalidBarcodeError,
    RenderError,
    generate_single,
    list_symbologies,
    render_preview,
    validate,
)
from src.batch import BatchController, BatchInProgressError, parse_rows
from src.config import configure_logging, get_settings
from src.export import ZipExporter
from src.models import BatchRow, ExportSettings, RenderSettings, ValidationOutcome

logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Barcode Generator",
    description="Render barcodes from text or batch files",
    version="1.0.0",
)

BATCH_ARCHIVE_NAME = "barcodes.zip"

# Not allowed in an HTTP header value
CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


# Request/Response models
class FormatInfo(BaseModel):
    """A selectable barcode format."""

    value: str
    label: str


class ValidateRequest(BaseModel):
    """Code to check against a format."""

    code: str
    symbology: str


class SingleRequest(BaseModel):
    """Single-mode generation request."""

    code: str
    render: RenderSettings = Field(default_factory=RenderSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)


class UploadedFile(BaseModel):
    """Batch file content read in the browser."""

    filename: str
    content: str


class BatchRequest(UploadedFile):
    """Batch generation request."""

    render: RenderSettings = Field(default_factory=RenderSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)


class BatchPreview(BaseModel):
    """Parsed rows of an uploaded file."""

    count: int
    rows: list[BatchRow]


@lru_cache
def get_renderer() -> BarcodeRenderer:
    """Get the shared renderer."""
    return BarcodeRenderer(jpeg_quality=get_settings().jpeg_quality)


@lru_cache
def get_batch_controller() -> BatchController:
    """Get the shared batch controller; one batch runs at a time."""
    settings = get_settings()
    return BatchController(renderer=get_renderer(), row_delay=settings.batch_row_delay_seconds)


def attachment_headers(filename: str) -> dict[str, str]:
    """Content-Disposition for a download, safe for non-ASCII names and control characters."""
    fallback = filename.encode("ascii", "replace").decode("ascii")
    fallback = CONTROL_CHARACTERS.sub("_", fallback).replace('"', "_")
    return {
        "Content-Disposition": (
            f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
        )
    }


def parse_upload(upload: UploadedFile) -> list[BatchRow]:
    """Parse an uploaded file, enforcing the size limit."""
    settings = get_settings()
    if len(upload.content.encode("utf-8")) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")
    return parse_rows(upload.content, upload.filename)


# API Endpoints
@app.get("/", response_class=HTMLResponse)
async def home():
    """Redirect to the generator page."""
    return RedirectResponse(url="/generator")


@app.get("/generator", response_class=HTMLResponse)
async def generator_page():
    """Render the generator page."""
    return get_generator_html(get_settings().default_symbology)


@app.get("/api/formats")
async def list_formats() -> list[FormatInfo]:
    """List supported barcode formats."""
    return [FormatInfo(value=rule.identifier.value, label=rule.label) for rule in list_symbologies()]


@app.post("/api/validate")
async def validate_code(request: ValidateRequest) -> ValidationOutcome:
    """Check a code against a format without rendering it."""
    return validate(request.code, request.symbology)


@app.post("/api/preview")
def preview(
    request: SingleRequest,
    renderer: BarcodeRenderer = Depends(get_renderer),
) -> Response:
    """Render an SVG preview of a single code."""
    try:
        svg = render_preview(request.code, request.render, renderer=renderer)
    except InvalidBarcodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RenderError as e:
        logger.warning("Preview failed", code=request.code, error=str(e))
        raise HTTPException(status_code=400, detail="Error generating barcode")

    return Response(content=svg, media_type="image/svg+xml")


@app.post("/api/download")
def download_single(
    request: SingleRequest,
    renderer: BarcodeRenderer = Depends(get_renderer),
) -> Response:
    """Render a single code and return it as a file download."""
    try:
        artifact = generate_single(request.code, request.render, request.export, renderer=renderer)
    except InvalidBarcodeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RenderError as e:
        logger.warning("Download failed", code=request.code, error=str(e))
        raise HTTPException(status_code=400, detail="Could not render barcode")

    return Response(
        content=artifact.data,
        media_type=artifact.media_type,
        headers=attachment_headers(artifact.filename),
    )


@app.post("/api/batch/parse")
def preview_batch(upload: UploadedFile) -> BatchPreview:
    """Parse an uploaded file and return its rows."""
    rows = parse_upload(upload)
    return BatchPreview(count=len(rows), rows=rows)


@app.post("/api/batch")
def generate_batch(
    request: BatchRequest,
    controller: BatchController = Depends(get_batch_controller),
) -> Response:
    """Generate every row of an uploaded file and return a ZIP archive."""
    rows = parse_upload(request)
    if not rows:
        raise HTTPException(status_code=400, detail="No rows to generate")

    exporter = ZipExporter()
    try:
        result = controller.run(rows, request.render, request.export, exporter)
    except BatchInProgressError:
        raise HTTPException(status_code=409, detail="A batch is already running")

    headers: dict[str, Any] = {
        **attachment_headers(BATCH_ARCHIVE_NAME),
        "X-Batch-Exported": str(result.exported),
        "X-Batch-Skipped": str(result.skipped),
        "X-Batch-Failed": str(result.failed),
    }
    return Response(content=exporter.getvalue(), media_type="application/zip", headers=headers)


def get_generator_html(default_symbology: str) -> str:
    """Generate the HTML for the generator page."""
    return GENERATOR_HTML.replace("__DEFAULT_SYMBOLOGY__", default_symbology)


GENERATOR_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Barcode Generator</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f5f5f5;
            color: #333;
            line-height: 1.6;
        }
        .container { max-width: 1200px; margin: 0 auto; padding: 20px; }
        header {
            background: #2c3e50;
            color: white;
            padding: 20px;
            margin-bottom: 20px;
        }
        header h1 { font-size: 1.5rem; }
        .tabs { display: flex; gap: 8px; margin-bottom: 20px; }
        .tab {
            padding: 8px 20px;
            border: none;
            border-radius: 6px;
            background: white;
            cursor: pointer;
        }
        .tab.active { background: #3498db; color: white; }
        .layout {
            display: grid;
            grid-template-columns: 320px 1fr;
            gap: 20px;
        }
        .panel {
            background: white;
            padding: 20px;
            border-radius: 8px;
            box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        }
        .panel h2 { font-size: 1.1rem; margin-bottom: 12px; }
        label { display: block; font-size: 0.85rem; margin: 10px 0 4px; }
        input, select, textarea { width: 100%; padding: 6px; border: 1px solid #ccc; border-radius: 4px; }
        input[type=checkbox] { width: auto; }
        .row { display: grid; grid-template-columns: 1fr 1fr; gap: 8px; }
        .error { color: #c0392b; font-size: 0.85rem; min-height: 1.2em; }
        .preview {
            background: #fafafa;
            min-height: 150px;
            display: flex;
            align-items: center;
            justify-content: center;
            margin: 12px 0;
            border-radius: 6px;
        }
        .preview svg { max-width: 100%; height: auto; }
        button.primary {
            width: 100%;
            padding: 12px;
            border: none;
            border-radius: 6px;
            background: #3498db;
            color: white;
            cursor: pointer;
        }
        button.primary:disabled { background: #bbb; cursor: not-allowed; }
        .rows { font-size: 0.85rem; background: #fafafa; padding: 10px; margin: 12px 0; max-height: 160px; overflow-y: auto; }
        .hidden { display: none; }
    </style>
</head>
<body>
    <header><h1>Barcode Generator</h1></header>
    <div class="container">
        <div class="tabs">
            <button class="tab active" data-tab="single">Single Generation</button>
            <button class="tab" data-tab="batch">Batch Generation</button>
        </div>
        <div class="layout">
            <div class="panel">
                <h2>Settings</h2>
                <label>Format</label>
                <select id="symbology"></select>
                <div class="row">
                    <div><label>Bar width</label><input id="module_width" type="number" value="2" min="0.5" step="0.5"></div>
                    <div><label>Height</label><input id="bar_height" type="number" value="100" min="10" step="10"></div>
                </div>
                <label><input id="show_label" type="checkbox" checked> Show text below barcode</label>
                <label>Font size</label>
                <input id="font_size" type="number" value="20" min="6" step="1">
                <div class="row">
                    <div><label>Background</label><input id="background_color" type="color" value="#ffffff"></div>
                    <div><label>Barcode Color</label><input id="bar_color" type="color" value="#000000"></div>
                </div>
                <h2 style="margin-top: 16px;">Export Settings</h2>
                <label>Format</label>
                <select id="format">
                    <option value="png">PNG</option>
                    <option value="jpg">JPG</option>
                    <option value="svg">SVG</option>
                </select>
                <div id="resolution-field">
                    <label>Resolution (px)</label>
                    <input id="resolution" type="number" value="500" min="100" max="2000" step="50">
                </div>
                <div class="row">
                    <div><label>Prefix</label><input id="prefix" placeholder="prefix_"></div>
                    <div><label>Suffix</label><input id="suffix" placeholder="_suffix"></div>
                </div>
            </div>

            <div>
                <div class="panel" id="single-panel">
                    <h2>Single Barcode Generation</h2>
                    <label>Barcode Content</label>
                    <textarea id="code" rows="3" placeholder="Enter text to generate barcode..."></textarea>
                    <p class="error" id="single-error"></p>
                    <div class="preview" id="preview"><p>Enter valid text to see preview</p></div>
                    <button class="primary" id="download" disabled>Download Barcode</button>
                </div>

                <div class="panel hidden" id="batch-panel">
                    <h2>Batch Generation</h2>
                    <label>Upload File (TXT or CSV)</label>
                    <input id="batch-file" type="file" accept=".txt,.csv">
                    <p style="font-size: 0.85rem;">TXT: one barcode per line | CSV: columns "barcode" and optional "text"</p>
                    <div class="rows hidden" id="batch-rows"></div>
                    <p class="error" id="batch-error"></p>
                    <button class="primary" id="generate" disabled>Generate Barcodes</button>
                </div>
            </div>
        </div>
    </div>

    <script>
        const DEFAULT_SYMBOLOGY = '__DEFAULT_SYMBOLOGY__';
        let batchUpload = null;
        let previewTimer = null;

        function renderSettings() {
            return {
                symbology: document.getElementById('symbology').value,
                module_width: Number(document.getElementById('module_width').value),
                bar_height: Number(document.getElementById('bar_height').value),
                show_label: document.getElementById('show_label').checked,
                font_size: Number(document.getElementById('font_size').value),
                background_color: document.getElementById('background_color').value,
                bar_color: document.getElementById('bar_color').value
            };
        }

        function exportSettings() {
            return {
                format: document.getElementById('format').value,
                resolution: Number(document.getElementById('resolution').value),
                prefix: document.getElementById('prefix').value,
                suffix: document.getElementById('suffix').value
            };
        }

        async function errorDetail(res) {
            try {
                const body = await res.json();
                return typeof body.detail === 'string' ? body.detail : 'Invalid settings';
            } catch (e) {
                return 'Request failed';
            }
        }

        function saveBlob(blob, filename) {
            const url = URL.createObjectURL(blob);
            const a = document.createElement('a');
            a.href = url;
            a.download = filename;
            document.body.appendChild(a);
            a.click();
            a.remove();
            URL.revokeObjectURL(url);
        }

        async function updatePreview() {
            const code = document.getElementById('code').value;
            const preview = document.getElementById('preview');
            const error = document.getElementById('single-error');
            const button = document.getElementById('download');

            if (!code) {
                error.textContent = '';
                preview.innerHTML = '<p>Enter valid text to see preview</p>';
                button.disabled = true;
                return;
            }

            const res = await fetch('/api/preview', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify({ code: code, render: renderSettings() })
            });
            if (res.ok) {
                error.textContent = '';
                preview.innerHTML = await res.text();
                button.disabled = false;
            } else {
                error.textContent = await errorDetail(res);
                preview.innerHTML = '<p>Enter valid text to see preview</p>';
                button.disabled = true;
            }
        }

        function schedulePreview() {
            clearTimeout(previewTimer);
            previewTimer = setTimeout(updatePreview, 150);
        }

        async function downloadSingle() {
            const code = document.getElementById('code').value;
            const res = await fetch('/api/download', {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify({ code: code, render: renderSettings(), export: exportSettings() })
            });
            if (!res.ok) {
                document.getElementById('single-error').textContent = await errorDetail(res);
                return;
            }
            const ex = exportSettings();
            saveBlob(await res.blob(), `${ex.prefix}${code}${ex.suffix}.${ex.format}`);
        }

        function showRows(preview) {
            const box = document.getElementById('batch-rows');
            const items = preview.rows.slice(0, 5).map(row => {
                const div = document.createElement('div');
                const strong = document.createElement('strong');
                strong.textContent = row.code;
                div.appendChild(strong);
                if (row.label !== row.code) {
                    div.appendChild(document.createTextNode(' → ' + row.label));
                }
                return div;
            });
            box.replaceChildren(...items);
            if (preview.count > 5) {
                const more = document.createElement('p');
                more.textContent = `... and ${preview.count - 5} more`;
                box.appendChild(more);
            }
            box.classList.toggle('hidden', preview.count === 0);
            const button = document.getElementById('generate');
            button.disabled = preview.count === 0;
            button.textContent = `Generate ${preview.count} Barcodes`;
        }

        function loadBatchFile(event) {
            const file = event.target.files[0];
            if (!file) return;
            const reader = new FileReader();
            reader.onload = async (e) => {
                batchUpload = { filename: file.name, content: e.target.result };
                const res = await fetch('/api/batch/parse', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify(batchUpload)
                });
                if (res.ok) {
                    document.getElementById('batch-error').textContent = '';
                    showRows(await res.json());
                } else {
                    document.getElementById('batch-error').textContent = await errorDetail(res);
                    showRows({ count: 0, rows: [] });
                }
            };
            reader.readAsText(file);
        }

        async function generateBatch() {
            if (!batchUpload) return;
            const button = document.getElementById('generate');
            const label = button.textContent;
            button.disabled = true;
            button.textContent = 'Generating...';
            try {
                const res = await fetch('/api/batch', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({ ...batchUpload, render: renderSettings(), export: exportSettings() })
                });
                if (!res.ok) {
                    document.getElementById('batch-error').textContent = await errorDetail(res);
                    return;
                }
                const skipped = Number(res.headers.get('X-Batch-Skipped') || 0);
                const failed = Number(res.headers.get('X-Batch-Failed') || 0);
                document.getElementById('batch-error').textContent =
                    skipped || failed ? `${skipped} skipped, ${failed} failed` : '';
                saveBlob(await res.blob(), 'barcodes.zip');
            } finally {
                button.disabled = false;
                button.textContent = label;
            }
        }

        async function loadFormats() {
            const res = await fetch('/api/formats');
            const formats = await res.json();
            const select = document.getElementById('symbology');
            for (const f of formats) {
                const option = document.createElement('option');
                option.value = f.value;
                option.textContent = f.label;
                option.selected = f.value === DEFAULT_SYMBOLOGY;
                select.appendChild(option);
            }
        }

        document.querySelectorAll('.tab').forEach(tab => {
            tab.addEventListener('click', () => {
                document.querySelectorAll('.tab').forEach(t => t.classList.remove('active'));
                tab.classList.add('active');
                const single = tab.dataset.tab === 'single';
                document.getElementById('single-panel').classList.toggle('hidden', !single);
                document.getElementById('batch-panel').classList.toggle('hidden', single);
            });
        });

        document.querySelectorAll('#symbology, #module_width, #bar_height, #show_label, #font_size, #background_color, #bar_color')
            .forEach(el => el.addEventListener('change', schedulePreview));
        document.getElementById('code').addEventListener('input', schedulePreview);
        document.getElementById('format').addEventListener('change', (e) => {
            document.getElementById('resolution-field').classList.toggle('hidden', e.target.value === 'svg');
        });
        document.getElementById('download').addEventListener('click', downloadSingle);
        document.getElementById('batch-file').addEventListener('change', loadBatchFile);
        document.getElementById('generate').addEventListener('click', generateBatch);

        // Initialize
        loadFormats();
    </script>
</body>
</html>
"""


def main():
    """Run the generator UI server."""
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "tools.generator_ui.app:app",
        host=settings.generator_ui_host,
        port=settings.generator_ui_port,
        reload=settings.environment == "dev",
    )


if __name__ == "__main__":
    main()
