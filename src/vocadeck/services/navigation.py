"""Command surface that drives a flashcard session."""
import logging
import random
from typing import Optional, Union

from vocadeck.models.card import CardContent, CardView, Speakable
from vocadeck.models.session import SessionState
from vocadeck.models.word import (
    TYPE_FILTER_ALL,
    GenderMode,
    WordCatalog,
    parse_gender_mode,
    parse_type_filter,
)
from vocadeck.services.card_resolver import CardContentResolver
from vocadeck.services.deck_builder import build_deck, shuffle

logger = logging.getLogger(__name__)


class NavigationController:
    """Owns one SessionState and applies user commands to it.

    Every command is synchronous and either completes or raises before
    touching the state. Each one returns the CardView to render next.
    """

    def __init__(
        self,
        catalog: WordCatalog,
        rng: Optional[random.Random] = None,
        type_filter: str = TYPE_FILTER_ALL,
        gender_mode: Union[str, GenderMode] = GenderMode.BOTH,
        resolver: Optional[CardContentResolver] = None,
    ):
        """Create a session and deal the first deck."""
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()
        self.resolver = resolver if resolver is not None else CardContentResolver()
        self.state = SessionState(gender_mode=parse_gender_mode(gender_mode))
        self.set_filter(type_filter)

    def set_filter(self, type_filter: str) -> CardView:
        """Rebuild the deck for a new type filter and go to its first card."""
        parse_type_filter(type_filter)
        deck = build_deck(self.catalog, type_filter, self.rng)
        self.state.type_filter = type_filter
        self.state.deck = deck
        self.state.cursor = 0
        self.state.deck_seen = set()
        logger.debug(f"Filter set to '{type_filter}', {len(deck)} cards")
        return self._moved()

    def set_gender_mode(self, gender_mode: Union[str, GenderMode]) -> CardView:
        """Change how adjectives are shown; the deck and cursor stay put."""
        self.state.gender_mode = parse_gender_mode(gender_mode)
        return self.current_view()

    def next(self) -> CardView:
        """Advance to the next card, wrapping around at the end."""
        if self.state.is_empty:
            return self.current_view()
        self.state.cursor = (self.state.cursor + 1) % len(self.state.deck)
        return self._moved()

    def prev(self) -> CardView:
        """Go back one card, wrapping around at the start."""
        if self.state.is_empty:
            return self.current_view()
        deck_size = len(self.state.deck)
        self.state.cursor = (self.state.cursor - 1 + deck_size) % deck_size
        return self._moved()

    def reshuffle(self) -> CardView:
        """Shuffle the same set of cards into a new order and restart."""
        self.state.deck = shuffle(self.state.deck, self.rng)
        self.state.cursor = 0
        return self._moved()

    def current_content(self) -> Optional[CardContent]:
        """Resolve the card under the cursor, None on an empty deck."""
        index = self.state.current_index
        if index is None:
            return None
        return self.resolver.resolve(self.catalog[index], self.state.gender_mode)

    def current_view(self) -> CardView:
        """The current card and progress, without changing anything."""
        state = self.state
        return CardView(
            content=self.current_content(),
            position=0 if state.is_empty else state.cursor + 1,
            deck_size=len(state.deck),
            seen_count=len(state.seen),
            catalog_size=len(self.catalog),
            deck_seen_count=len(state.deck_seen),
            type_filter=state.type_filter,
            gender_mode=state.gender_mode,
            catalog_index=state.current_index,
        )

    def speakable(self, number: int) -> Speakable:
        """The ``number``-th speakable entry of the current card.

        Entries are counted across all rows in display order. Raises
        IndexError if there is no such entry.
        """
        content = self.current_content()
        if content is None:
            raise IndexError("No card to speak")
        speakables = content.speakables()
        if number < 0 or number >= len(speakables):
            raise IndexError(f"No speakable entry {number}")
        return speakables[number]

    def _moved(self) -> CardView:
        self.state.mark_seen()
        return self.current_view()
