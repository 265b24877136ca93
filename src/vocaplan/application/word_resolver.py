"""
Word id → text resolution at the engine boundary.

This is where the difficult-word list leaves the engine for passage
generation, and the one place a data-completeness failure is raised.
"""

import logging
from collections.abc import Sequence

from vocaplan.domain.constants import DEFAULT_DIFFICULT_WORDS, MISSING_WORD_TOLERANCE
from vocaplan.domain.errors import MissingWordData
from vocaplan.domain.ports import WordCatalog

from .analysis.analyzer import DwellTimeAnalysis

logger = logging.getLogger(__name__)


def resolve_words(
    word_ids: Sequence[int],
    catalog: WordCatalog,
    tolerance: float = MISSING_WORD_TOLERANCE,
) -> list[str]:
    """
    Resolve ids to word text, keeping request order.

    Args:
        word_ids: Ids to resolve.
        catalog: Source of word text.
        tolerance: Largest acceptable share of unresolvable ids.

    Returns:
        Text of every id the catalog knows.

    Raises:
        MissingWordData: If more than `tolerance` of the ids are unknown.
    """
    words: list[str] = []
    missing: list[int] = []

    for word_id in word_ids:
        text = catalog.lookup(word_id)
        if text is None:
            missing.append(word_id)
        else:
            words.append(text)

    if not missing:
        return words

    if len(missing) / len(word_ids) > tolerance:
        raise MissingWordData(missing, requested_count=len(word_ids), resolved_count=len(words))

    logger.warning(f"{len(missing)} word ids not found: {missing[:10]}")
    return words


def difficult_words_for_passage(
    analysis: DwellTimeAnalysis,
    catalog: WordCatalog,
    count: int = DEFAULT_DIFFICULT_WORDS,
    tolerance: float = MISSING_WORD_TOLERANCE,
) -> list[str]:
    """Text of the hardest words of the day, hardest first."""
    return resolve_words(analysis.get_top_difficult_words(count), catalog, tolerance)
