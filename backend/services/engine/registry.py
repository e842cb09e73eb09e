"""Lazy registry for the matching and fraud-detection engine components.

The title taxonomy is loaded once per process (on first use, or at startup via
`preload`) and passed explicitly into the components that need it.
"""

import logging
from typing import Any

from config import settings
from services.engine.taxonomy import TitleTaxonomy, load_taxonomy

logger = logging.getLogger(__name__)

ENGINE_NAMES = (
    "title_expander",
    "title_matcher",
    "history_comparator",
    "similarity_detector",
)

_registry: dict[str, Any] = {}
_taxonomy: TitleTaxonomy | None = None


def get_taxonomy() -> TitleTaxonomy:
    global _taxonomy
    if _taxonomy is None:
        _taxonomy = load_taxonomy(settings.taxonomy_path)
    return _taxonomy


def _create_engine(name: str) -> Any:
    """Factory: create an engine component by name with deferred imports."""
    if name == "title_expander":
        from services.engine.title_expander import TitleExpander
        return TitleExpander(get_taxonomy())
    elif name == "title_matcher":
        from services.engine.title_matcher import TitleMatcher
        return TitleMatcher(
            get_engine("title_expander"),
            expanded_ceiling=settings.expanded_match_ceiling,
        )
    elif name == "history_comparator":
        from services.engine.history_comparator import EmploymentHistoryComparator
        return EmploymentHistoryComparator(threshold=settings.discrepancy_threshold)
    elif name == "similarity_detector":
        from services.engine.similarity_detector import CrossCandidateSimilarityDetector
        return CrossCandidateSimilarityDetector(
            high_similarity_threshold=settings.high_similarity_threshold,
        )
    else:
        raise ValueError(f"Unknown engine: {name}")


def get_engine(name: str) -> Any:
    """Get an engine component by name, creating it on first access."""
    if name not in _registry:
        _registry[name] = _create_engine(name)
        logger.info("Engine ready: %s", name)
    return _registry[name]


def preload(*names: str) -> None:
    """Pre-load engine components (e.g. at startup)."""
    for name in names or ENGINE_NAMES:
        get_engine(name)


def clear() -> None:
    """Drop all components and the cached taxonomy. Useful for testing."""
    global _taxonomy
    _registry.clear()
    _taxonomy = None
