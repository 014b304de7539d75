from typing import Dict, Iterable

from .client import fetch_json

WIKIDATA_API = "https://www.wikidata.org/w/api.php"


def resolve_labels(ids: Iterable[str], language: str) -> Dict[str, str]:
    """Batch-resolve Wikidata ids to display labels.

    One ``wbgetentities`` request covers every id. Per id the label is taken
    in ``language``, then English, then the id itself. An empty id list
    returns ``{}`` without touching the network.
    """
    ids = list(ids)
    if not ids:
        return {}

    data = fetch_json(WIKIDATA_API, params={
        "action": "wbgetentities",
        "format": "json",
        "origin": "*",
        "ids": "|".join(ids),
        "languages": f"{language}|en",
        "props": "labels",
    })
    entities = (data if isinstance(data, dict) else {}).get("entities") or {}

    out: Dict[str, str] = {}
    for qid in ids:
        labels = (entities.get(qid) or {}).get("labels") or {}
        out[qid] = (
            (labels.get(language) or {}).get("value")
            or (labels.get("en") or {}).get("value")
            or qid
        )
    return out
