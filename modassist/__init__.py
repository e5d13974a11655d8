"""
Fallout 4 Modding Assistant - knowledge base search.

Usage:
    from modassist import create_default_registry, search_knowledge_base

    registry = create_default_registry()
    results = search_knowledge_base("how do i install f4se", registry)
"""

from .config import SearchSettings
from .models import KnowledgeEntry, KnowledgeModule, MatchSpan, ModuleDefinition, SearchResult
from .registry import ModuleRegistry, create_default_registry
from .search import rank, search_knowledge_base

__all__ = [
    "SearchSettings",
    "KnowledgeEntry",
    "KnowledgeModule",
    "MatchSpan",
    "ModuleDefinition",
    "SearchResult",
    "ModuleRegistry",
    "create_default_registry",
    "rank",
    "search_knowledge_base",
]
