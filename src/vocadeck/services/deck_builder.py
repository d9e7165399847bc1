"""Building shuffled decks of catalog indices."""
import logging
import random
from typing import List, Sequence

from vocadeck.models.word import WordCatalog, parse_type_filter

logger = logging.getLogger(__name__)


def shuffle(indices: Sequence[int], rng: random.Random) -> List[int]:
    """Return a uniformly shuffled copy of ``indices`` (Fisher-Yates)."""
    deck = list(indices)
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randint(0, i)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def build_deck(catalog: WordCatalog, type_filter: str, rng: random.Random) -> List[int]:
    """Select the indices matching ``type_filter`` and shuffle them.

    An empty selection gives an empty deck.
    """
    parse_type_filter(type_filter)
    deck = shuffle(catalog.indices_matching(type_filter), rng)
    logger.debug(f"Built deck of {len(deck)} cards for filter '{type_filter}'")
    return deck
