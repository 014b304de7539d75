from typing import Any, Optional


def parse_time(value: Any) -> Optional[str]:
    """Turn a Wikidata time value into ``YYYY-MM-DD``.

    ``{"time": "+1879-03-14T00:00:00Z", "precision": 11}`` -> ``"1879-03-14"``.
    Precision is ignored, so a century-precision value still comes back as a
    full date. Returns None when the value or its ``time`` field is missing.
    """
    if not isinstance(value, dict):
        return None
    raw = value.get("time")
    if not isinstance(raw, str) or not raw:
        return None
    if raw.startswith("+"):
        raw = raw[1:]
    return raw[:10]
