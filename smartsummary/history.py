"""Client-local search history and per-entity notes, kept in a JSON file."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

MAX_HISTORY = 8


def empty_store() -> Dict[str, Any]:
    return {"history": [], "notes": {}}


def load_store(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return empty_store()
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
            if not content:
                return empty_store()
            store = json.loads(content)
    except (json.JSONDecodeError, IOError):
        return empty_store()
    if not isinstance(store, dict):
        return empty_store()
    store.setdefault("history", [])
    store.setdefault("notes", {})
    return store


def save_store(path: Path, store: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(store, f, indent=2, ensure_ascii=False)


def upsert_history(store: Dict[str, Any], term: str) -> List[str]:
    """Move ``term`` to the front, dropping older copies; keep 8 entries."""
    term = (term or "").strip()
    history = store.setdefault("history", [])
    if not term:
        return history
    history = [term] + [t for t in history if t != term]
    store["history"] = history[:MAX_HISTORY]
    return store["history"]


def clear_history(store: Dict[str, Any]) -> None:
    store["history"] = []


def save_note(store: Dict[str, Any], qid: str, text: str) -> None:
    store.setdefault("notes", {})[qid] = text or ""


def get_note(store: Dict[str, Any], qid: str) -> Optional[str]:
    return store.get("notes", {}).get(qid)
