"""
Prefix Lookup Service — A REST API for unique-prefix resolution.

Exposes a PrefixIndex as a JSON API with endpoints for inserting keys,
resolving a prefix to the single key it abbreviates, and listing every
key a prefix could stand for.  Built with Flask.

The index itself is not thread-safe, so every call into it goes through
one lock.
"""

from __future__ import annotations

import logging
import os
import threading
import time

from flask import Flask, jsonify, request

from prefixindex.loader import load_word_list, load_words
from prefixindex.tree import LINEAR_SCAN_LIMIT, PrefixAmbiguous, PrefixIndex

app = Flask(__name__)
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("prefixindex-service")

MAX_KEY_LENGTH = 256
DEFAULT_LIMIT = 25

# Seed with command names so the service is useful out-of-the-box
_SEED_WORDS = [
    "add", "alias", "apply", "archive", "bisect",
    "blame", "branch", "bundle", "checkout", "cherry-pick",
    "clean", "clone", "commit", "config", "describe",
    "diff", "fetch", "format-patch", "gc", "grep",
    "help", "init", "log", "merge", "mv",
    "notes", "pull", "push", "rebase", "reflog",
    "remote", "reset", "restore", "revert", "rm",
    "shortlog", "show", "stash", "status", "submodule",
    "switch", "tag", "worktree",
]

_lock = threading.Lock()
_start_time = time.time()

def _linear_scan_limit() -> int:
    raw = os.environ.get("PREFIXINDEX_LINEAR_SCAN_LIMIT")
    if raw is None:
        return LINEAR_SCAN_LIMIT
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Ignoring PREFIXINDEX_LINEAR_SCAN_LIMIT=%r (not an integer); using %d",
            raw, LINEAR_SCAN_LIMIT,
        )
        return LINEAR_SCAN_LIMIT


index: PrefixIndex = PrefixIndex(linear_scan_limit=_linear_scan_limit())
_words_path = os.environ.get("PREFIXINDEX_WORDS")
if _words_path:
    load_word_list(_words_path, index)
    _seed_source = _words_path
else:
    load_words(_SEED_WORDS, index)
    _seed_source = "built-in"
    logger.info("Seeded index with %d words", len(_SEED_WORDS))


def _limit_arg() -> int:
    limit = request.args.get("limit", str(DEFAULT_LIMIT), type=str)
    try:
        return max(int(limit), 0)
    except ValueError:
        return DEFAULT_LIMIT


# ── Health & Info ─────────────────────────────────────────────────────────

@app.route("/")
def home():
    """Landing page with API documentation."""
    return jsonify({
        "service": "Prefix Lookup Service",
        "version": "1.0.0",
        "description": "Resolve unambiguous prefixes to stored keys",
        "endpoints": {
            "GET  /":                   "This help page",
            "GET  /health":             "Health check",
            "GET  /stats":              "Index statistics",
            "GET  /find?q=<pfx>":       "The single key a prefix identifies",
            "GET  /matches?q=<pfx>":    "Every key a prefix could stand for",
            "POST /insert":             "Insert a key  {\"key\": \"...\", \"value\": \"...\"}",
        },
    })


@app.route("/health")
def health():
    """Liveness / readiness probe."""
    with _lock:
        size = len(index)
    return jsonify({
        "status": "healthy",
        "uptime_seconds": round(time.time() - _start_time, 2),
        "index_size": size,
    })


@app.route("/stats")
def stats():
    with _lock:
        size = len(index)
    return jsonify({
        "total_keys": size,
        "uptime_seconds": round(time.time() - _start_time, 2),
        "seed_source": _seed_source,
    })


# ── Core API ──────────────────────────────────────────────────────────────

@app.route("/find")
def find():
    """Resolve a prefix to the one key it identifies."""
    if "q" not in request.args:
        return jsonify({"error": "Missing query parameter 'q'"}), 400
    q = request.args["q"]
    limit = _limit_arg()

    with _lock:
        result = index.find_key_value(q)
        ambiguous = isinstance(result.error, PrefixAmbiguous)
        candidates = index.find_all_keys(q)[:limit] if ambiguous else []

    if result.ok:
        key, value = result.value
        return jsonify({"prefix": q, "key": key, "value": value})
    if ambiguous:
        return jsonify({"prefix": q, "error": str(result.error), "candidates": candidates}), 409
    return jsonify({"prefix": q, "error": str(result.error)}), 404


@app.route("/matches")
def matches():
    """Return every key a prefix could stand for, in sorted order."""
    if "q" not in request.args:
        return jsonify({"error": "Missing query parameter 'q'"}), 400
    q = request.args["q"]
    limit = _limit_arg()

    with _lock:
        found = index.find_all_key_values(q)

    return jsonify({
        "prefix": q,
        "count": min(len(found), limit),
        "matches": [{"key": key, "value": value} for key, value in found[:limit]],
    })


@app.route("/insert", methods=["POST"])
def insert():
    """Insert a key into the index."""
    body = request.get_json(silent=True) or {}
    key = body.get("key")
    if not isinstance(key, str):
        return jsonify({"error": "Missing 'key' in request body"}), 400
    if len(key) > MAX_KEY_LENGTH:
        return jsonify({"error": f"Key too long (max {MAX_KEY_LENGTH} chars)"}), 400
    value = body.get("value", key)

    with _lock:
        index.insert(key, value)
        size = len(index)
    logger.info("Inserted key=%s", key)
    return jsonify({"inserted": key, "value": value, "index_size": size}), 201


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    logger.info("Starting Prefix Lookup Service on port %d", port)
    app.run(host="0.0.0.0", port=port, debug=debug)
