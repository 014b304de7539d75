"""
Entity Resolution Pipeline.

Responsibilities:
- Resolve a search term to the top Wikidata entity.
- Extract birth/death dates, occupations and image from its claims.
- Cross-reference the matching Wikipedia article and merge its summary.
- Return one immutable SummaryRecord.

Non-Responsibilities:
- No caching or persistence.
- No disambiguation: the first search result always wins.

Invariant:
Search, entity fetch and label resolution are required and their errors
propagate. Wikipedia enrichment is optional and never raises.
"""

from typing import Any, Dict, Optional, Tuple

from .client import fetch_json
from .errors import NotFoundError
from .formatting import commons_image_url, encode_component, format_fallback_summary, paragraphize
from .labels import WIKIDATA_API, resolve_labels
from .logger import get_logger
from .models import Candidate, ExtractedFields, SummaryRecord
from .timeparse import parse_time

ENTITY_DATA_URL = "https://www.wikidata.org/wiki/Special:EntityData/{qid}.json"
PAGE_SUMMARY_URL = "https://{lang}.wikipedia.org/api/rest_v1/page/summary/{title}"
ARTICLE_URL = "https://{lang}.wikipedia.org/wiki/{title}"

BIRTH_DATE = "P569"
DEATH_DATE = "P570"
OCCUPATION = "P106"
IMAGE = "P18"

FALLBACK_LANGUAGE = "en"
IMAGE_WIDTH = 800


def search_top_candidate(term: str, language: str) -> Candidate:
    """Return the first ``wbsearchentities`` hit for ``term``."""
    data = fetch_json(WIKIDATA_API, params={
        "action": "wbsearchentities",
        "format": "json",
        "language": language,
        "origin": "*",
        "search": term,
    })
    results = (data if isinstance(data, dict) else {}).get("search") or []
    if not results:
        raise NotFoundError("No results in Wikidata")
    top = results[0]
    return Candidate(qid=top["id"], label=top.get("label"), description=top.get("description"))


def fetch_entity(qid: str) -> Dict[str, Any]:
    data = fetch_json(ENTITY_DATA_URL.format(qid=qid))
    entities = (data if isinstance(data, dict) else {}).get("entities") or {}
    entity = entities.get(qid)
    if entity is None:
        # Redirected items come back under their target id
        entity = next(iter(entities.values()), None)
    if entity is None:
        raise NotFoundError(f"Wikidata entity {qid} not found")
    return entity


def _localized(values: Optional[Dict[str, Any]], language: str) -> Optional[str]:
    values = values or {}
    return (
        (values.get(language) or {}).get("value")
        or (values.get(FALLBACK_LANGUAGE) or {}).get("value")
    )


def _claim_value(claim: Dict[str, Any]) -> Any:
    return ((claim.get("mainsnak") or {}).get("datavalue") or {}).get("value")


def _first_claim_value(claims: Dict[str, Any], prop: str) -> Any:
    values = claims.get(prop) or []
    return _claim_value(values[0]) if values else None


def extract_fields(entity: Dict[str, Any]) -> ExtractedFields:
    """Pull the fixed set of properties out of an entity's claims."""
    claims = entity.get("claims") or {}

    occupation_ids = []
    for claim in claims.get(OCCUPATION) or []:
        value = _claim_value(claim)
        if isinstance(value, dict) and value.get("id"):
            occupation_ids.append(value["id"])

    image = _first_claim_value(claims, IMAGE)
    return ExtractedFields(
        birth_date=parse_time(_first_claim_value(claims, BIRTH_DATE)),
        death_date=parse_time(_first_claim_value(claims, DEATH_DATE)),
        occupation_ids=occupation_ids,
        image_filename=image if isinstance(image, str) else None,
    )


def find_site_title(entity: Dict[str, Any], language: str) -> Optional[str]:
    """Sitelink title for ``{language}wiki``, falling back to ``enwiki``."""
    sitelinks = entity.get("sitelinks") or {}
    return (
        (sitelinks.get(f"{language}wiki") or {}).get("title")
        or (sitelinks.get(f"{FALLBACK_LANGUAGE}wiki") or {}).get("title")
        or None
    )


def wikipedia_url(language: str, site_title: Optional[str]) -> Optional[str]:
    """Article URL on the requested language's wiki.

    The host uses ``language`` even when the title came from the English
    sitelink.
    """
    if not site_title:
        return None
    return ARTICLE_URL.format(lang=language, title=encode_component(site_title))


def fetch_page_summary(language: str, site_title: str) -> Tuple[Optional[str], Optional[str]]:
    """Best-effort Wikipedia summary lookup.

    Returns ``(extract, thumbnail_url)``; both are None on any failure.
    """
    logger = get_logger()
    url = PAGE_SUMMARY_URL.format(lang=language, title=encode_component(site_title))
    try:
        data = fetch_json(url, source="wikipedia")
        extract = data.get("extract") or None
        thumbnail = (data.get("thumbnail") or {}).get("source") or None
        return extract, thumbnail
    except Exception as e:
        logger.record_enrichment_failure()
        logger.warning("Wikipedia summary unavailable", title=site_title, language=language, error=str(e))
        return None, None


def resolve_entity(term: str, language: str = "en") -> SummaryRecord:
    """Resolve ``term`` to a merged Wikidata + Wikipedia summary.

    Raises:
        NotFoundError: No Wikidata search results
        UpstreamError: A required Wikidata call answered with an error status
        NetworkError: A required Wikidata call failed in transport
    """
    logger = get_logger()
    language = language or FALLBACK_LANGUAGE
    logger.record_resolution_attempt()
    try:
        record = _resolve(term, language)
    except Exception as e:
        logger.record_resolution_failure(type(e).__name__)
        logger.error("Resolution failed", term=term, language=language, error=str(e))
        raise
    logger.record_resolution_success()
    logger.info("Resolved entity", term=term, language=language, qid=record.qid)
    return record


def _resolve(term: str, language: str) -> SummaryRecord:
    top = search_top_candidate(term, language)
    qid = top.qid
    entity = fetch_entity(qid)

    label = _localized(entity.get("labels"), language) or top.label or qid
    description = _localized(entity.get("descriptions"), language) or top.description or ""

    fields = extract_fields(entity)
    label_map = resolve_labels(fields.occupation_ids, language)
    occupations = tuple(label_map[i] for i in fields.occupation_ids if label_map.get(i))

    site_title = find_site_title(entity, language)
    image = commons_image_url(fields.image_filename, IMAGE_WIDTH)
    extract = None
    if site_title:
        extract, thumbnail = fetch_page_summary(language, site_title)
        if not image and thumbnail:
            image = thumbnail

    if extract:
        content_html = paragraphize(extract)
    else:
        content_html = format_fallback_summary(
            label, description, fields.birth_date, fields.death_date, occupations
        )

    return SummaryRecord(
        qid=qid,
        label=label,
        description=description,
        image=image,
        birth_date=fields.birth_date,
        death_date=fields.death_date,
        occupations=occupations,
        wikipedia_url=wikipedia_url(language, site_title),
        language=language,
        content_html=content_html,
        site_title=site_title,
    )
