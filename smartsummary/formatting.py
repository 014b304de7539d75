"""HTML assembly for summary content, plus the reverse trip to plain text."""

from html import escape
from typing import Optional, Sequence
from urllib.parse import quote

from bs4 import BeautifulSoup

COMMONS_FILE_PATH = "https://commons.wikimedia.org/wiki/Special:FilePath/"


def encode_component(value: str) -> str:
    """Percent-encode one URL path segment, keeping ``!'()*`` literal."""
    return quote(value, safe="!'()*")


def commons_image_url(filename: Optional[str], width: int = 600) -> Optional[str]:
    """Return a Wikimedia Commons URL serving ``filename`` at ``width`` px."""
    if not filename:
        return None
    return f"{COMMONS_FILE_PATH}{encode_component(filename)}?width={width}"


def paragraphize(text: str, strip: bool = False) -> str:
    """Wrap each blank-line-delimited block of ``text`` in ``<p>``."""
    blocks = text.split("\n\n")
    if strip:
        blocks = [b.strip() for b in blocks]
    return "".join(f"<p>{escape(b, quote=False)}</p>" for b in blocks)


def format_fallback_summary(
    label: str,
    description: Optional[str],
    birth_date: Optional[str],
    death_date: Optional[str],
    occupations: Sequence[str],
) -> str:
    """Build a minimal summary when no Wikipedia extract is available.

    A missing birth date renders as "…" while a missing death date renders
    as nothing, e.g. ``(1879-03-14 – )``.
    """
    life = ""
    if birth_date or death_date:
        life = f" ({birth_date or '…'} – {death_date or ''})"
    desc = f" — {escape(description, quote=False)}." if description else ""

    parts = [f"<p><strong>{escape(label, quote=False)}</strong>{life}{desc}</p>"]
    if occupations:
        joined = escape(", ".join(occupations), quote=False)
        parts.append(f"<p><strong>Occupation:</strong> {joined}</p>")
    return "".join(parts)


def html_to_text(html: str) -> str:
    """Flatten paragraph markup to plain text, one blank line per paragraph."""
    soup = BeautifulSoup(html or "", "html.parser")
    paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
    paragraphs = [p for p in paragraphs if p]
    if not paragraphs:
        return soup.get_text(" ", strip=True)
    return "\n\n".join(paragraphs)
