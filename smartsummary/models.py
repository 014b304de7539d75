from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Candidate:
    """Top hit of a Wikidata text search."""

    qid: str
    label: Optional[str] = None
    description: Optional[str] = None


@dataclass
class ExtractedFields:
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    occupation_ids: List[str] = field(default_factory=list)  # may repeat
    image_filename: Optional[str] = None


@dataclass(frozen=True)
class SummaryRecord:
    """Merged Wikidata + Wikipedia summary for one search."""

    qid: str
    label: str
    description: str
    image: Optional[str]
    birth_date: Optional[str]
    death_date: Optional[str]
    occupations: Tuple[str, ...]
    wikipedia_url: Optional[str]
    language: str
    content_html: str
    site_title: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape served by the HTTP API."""
        return {
            "qid": self.qid,
            "label": self.label,
            "description": self.description,
            "image": self.image,
            "birthDate": self.birth_date,
            "deathDate": self.death_date,
            "occupations": list(self.occupations),
            "wikipediaUrl": self.wikipedia_url,
            "language": self.language,
            "contentHtml": self.content_html,
            "siteTitle": self.site_title,
        }


@dataclass(frozen=True)
class ArticleExtract:
    title: str
    content_html: str

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "contentHtml": self.content_html}
