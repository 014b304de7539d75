"""Thin JSON HTTP adapter over the summary pipeline."""

from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

from .article import fetch_article_extract
from .config import Settings, SummarizerConfig
from .errors import ValidationError
from .logger import get_logger
from .resolver import resolve_entity
from .summarizer import summarize_text

STATIC_DIR = Path.cwd() / "public"


def create_app(
    settings: Optional[Settings] = None,
    summarizer_config: Optional[SummarizerConfig] = None,
) -> Flask:
    settings = settings or Settings.from_env()
    summarizer_config = summarizer_config or SummarizerConfig.from_env()
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)

    app = Flask(__name__, static_folder=str(STATIC_DIR), static_url_path="")
    app.config["SETTINGS"] = settings
    app.config["SUMMARIZER"] = summarizer_config

    @app.get("/api/search")
    def search():
        q = (request.args.get("q") or "").strip()
        lang = request.args.get("lang") or "en"
        if not q:
            return jsonify({"error": "Missing q"}), 400
        try:
            record = resolve_entity(q, lang)
        except Exception as e:
            logger.error("Search error", q=q, lang=lang, error=str(e))
            return jsonify({"ok": False, "error": str(e)}), 500
        return jsonify({"ok": True, "result": record.to_dict()})

    @app.get("/api/article/<lang>/<path:title>")
    def article(lang: str, title: str):
        try:
            extract = fetch_article_extract(lang, title)
        except Exception as e:
            logger.error("Article error", lang=lang, title=title, error=str(e))
            return jsonify({"ok": False, "error": str(e)}), 500
        return jsonify({"ok": True, **extract.to_dict()})

    @app.post("/api/summarize")
    def summarize():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        text = body.get("text")
        language = body.get("language") or "en"
        try:
            summary = summarize_text(text, language, app.config["SUMMARIZER"])
        except ValidationError as e:
            return jsonify({"ok": False, "error": str(e)}), 400
        except Exception as e:
            logger.error("Summarize error", error=str(e))
            return jsonify({"ok": False, "error": str(e) or "Internal error"}), 500
        return jsonify({"ok": True, "summary": summary})

    return app
