from __future__ import annotations

import os
from typing import Any, Dict

from flask import Flask, jsonify, request

from fumen import (
    HEADER,
    DecodeError,
    decode,
    encode,
    fumen_from_json,
    fumen_to_json,
    next_page,
    page_from_json,
    page_to_json,
)
from fumen_core.config import env_flag, trace

app = Flask(__name__)


def _error(message: str, status: int = 400) -> Any:
    trace(f"{request.path} rejected: {message}")
    return jsonify({"ok": False, "error": message}), status


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True, "version": HEADER.rstrip("@")})


@app.post("/api/decode")
def api_decode() -> Any:
    text = _body().get("fumen")
    if not isinstance(text, str):
        return _error("fumen string required")
    try:
        doc = decode(text.strip())
    except DecodeError as e:
        return _error(f"{type(e).__name__}: {e}")
    return jsonify({"ok": True, "document": fumen_to_json(doc), "pageCount": len(doc.pages)})


@app.post("/api/encode")
def api_encode() -> Any:
    obj = _body().get("document")
    if not isinstance(obj, dict):
        return _error("document required")
    try:
        doc = fumen_from_json(obj)
        text = encode(doc)
    except (ValueError, KeyError, TypeError) as e:
        return _error(f"bad document: {e}")
    return jsonify({"ok": True, "fumen": text})


@app.post("/api/next_page")
def api_next_page() -> Any:
    obj = _body().get("page")
    if not isinstance(obj, dict):
        return _error("page required")
    try:
        page = next_page(page_from_json(obj))
    except (ValueError, KeyError, TypeError) as e:
        return _error(f"bad page: {e}")
    return jsonify({"ok": True, "page": page_to_json(page)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
