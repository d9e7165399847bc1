"""Value types describing what a card shows."""
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from vocadeck.models.word import GenderMode


@dataclass(frozen=True)
class Speakable:
    """Text to read aloud with the locale tag to read it in."""
    text: str
    lang: str  # e.g. "fr-FR"


@dataclass(frozen=True)
class GenderPair:
    """Masculine and feminine forms shown side by side."""
    masculine: str
    feminine: str


@dataclass(frozen=True)
class LanguageRow:
    """One translation line on the back of a card."""
    label: str  # e.g. "French"
    code: str  # e.g. "fr", "lat"
    display: Union[str, GenderPair]
    speakables: Tuple[Speakable, ...] = ()

    @property
    def is_pair(self) -> bool:
        return isinstance(self.display, GenderPair)


@dataclass(frozen=True)
class CardContent:
    """Resolved content of a card, independent of how it is presented."""
    headline: str
    english: str
    word_type: str
    rows: Tuple[LanguageRow, ...] = ()

    def speakables(self) -> List[Speakable]:
        """All speakable entries in row order."""
        return [s for row in self.rows for s in row.speakables]


@dataclass(frozen=True)
class CardView:
    """Card content plus the session metadata a renderer needs.

    ``content`` is None when the deck is empty.
    """
    content: Optional[CardContent]
    position: int  # 1-based, 0 when the deck is empty
    deck_size: int
    seen_count: int
    catalog_size: int
    deck_seen_count: int
    type_filter: str
    gender_mode: GenderMode
    catalog_index: Optional[int] = None  # word under the cursor

    @property
    def is_empty(self) -> bool:
        return self.content is None

    @property
    def progress(self) -> float:
        """Share of the catalog seen so far, between 0 and 1."""
        if not self.catalog_size:
            return 0.0
        return self.seen_count / self.catalog_size
