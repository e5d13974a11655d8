"""Knowledge base and search result models."""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class KnowledgeEntry(BaseModel):
    """
    A single knowledge base entry.

    Treated as read-only for the duration of a search call. Missing text
    fields default to empty strings so a partially authored entry scores
    zero on the signals that need them instead of failing the search.
    """
    model_config = ConfigDict(frozen=True)

    id: str = ""
    module_id: Optional[str] = None
    title: str = ""
    content: str = ""
    keywords: List[str] = Field(default_factory=list)  # order preserved for display


class KnowledgeModule(BaseModel):
    """Metadata of a registered knowledge module."""

    id: str
    name: str
    description: str = ""
    version: Optional[str] = None
    author: Optional[str] = None
    category_id: Optional[str] = None


class ModuleDefinition(BaseModel):
    """A knowledge module together with its entries, as supplied for registration."""

    id: str = ""
    name: str = ""
    description: str = ""
    version: str = "1.0.0"
    author: Optional[str] = None
    category_id: Optional[str] = None
    entries: List[KnowledgeEntry] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)  # module ids this module builds on


class MatchSpan(BaseModel):
    """
    Highlight spans for one field.

    Positions are [start, end) offsets into the lowercased field text.
    """
    field: Literal["title", "content"]
    positions: List[Tuple[int, int]]


class SearchResult(BaseModel):
    """A scored entry produced fresh by each search call."""

    entry: KnowledgeEntry
    score: float
    matches: List[MatchSpan] = Field(default_factory=list)
    signals: Dict[str, float] = Field(default_factory=dict)  # per-signal contributions
