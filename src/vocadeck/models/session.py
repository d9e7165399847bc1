"""Mutable navigation and progress state of one flashcard session."""
from dataclasses import dataclass, field
from typing import List, Optional, Set

from vocadeck.models.word import TYPE_FILTER_ALL, GenderMode


@dataclass
class SessionState:
    """Deck, cursor and progress of a single session.

    ``seen`` collects every catalog index shown since the session started and
    survives filter changes. ``deck_seen`` only covers the current deck and is
    cleared whenever the deck is rebuilt from a filter.
    """
    type_filter: str = TYPE_FILTER_ALL
    gender_mode: GenderMode = GenderMode.BOTH
    deck: List[int] = field(default_factory=list)
    cursor: int = 0
    seen: Set[int] = field(default_factory=set)
    deck_seen: Set[int] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not self.deck

    @property
    def current_index(self) -> Optional[int]:
        """Catalog index under the cursor, None for an empty deck."""
        if not self.deck:
            return None
        return self.deck[self.cursor]

    def mark_seen(self) -> None:
        """Record the current card as seen."""
        index = self.current_index
        if index is None:
            return
        self.seen.add(index)
        self.deck_seen.add(index)
