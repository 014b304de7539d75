from .client import fetch_json
from .errors import NotFoundError
from .formatting import paragraphize
from .models import ArticleExtract

WIKIPEDIA_API = "https://{lang}.wikipedia.org/w/api.php"


def fetch_article_extract(language: str, title: str) -> ArticleExtract:
    """Fetch the full plain-text extract of a Wikipedia page.

    Redirects are followed. Raises NotFoundError when no page matches.
    """
    data = fetch_json(WIKIPEDIA_API.format(lang=language), params={
        "action": "query",
        "format": "json",
        "origin": "*",
        "prop": "extracts",
        "explaintext": "true",
        "exintro": "false",
        "redirects": "1",
        "titles": title,
    }, source="wikipedia")
    pages = ((data if isinstance(data, dict) else {}).get("query") or {}).get("pages") or {}
    page_id = next(iter(pages), None)
    if page_id is None or page_id == "-1" or "missing" in pages[page_id]:
        raise NotFoundError("No page text")

    page = pages[page_id]
    return ArticleExtract(
        title=page.get("title") or title,
        content_html=paragraphize(page.get("extract") or "", strip=True),
    )
