"""Word records and the immutable word catalog."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from vocadeck.errors import InvalidFilter, InvalidGenderMode


class WordType(Enum):
    """Known word types."""
    NOUN = "noun"
    ADJ = "adj"
    VERB = "verb"
    PHRASE = "phrase"


class GenderMode(Enum):
    """How adjectives are displayed."""
    BOTH = "both"
    MASCULINE = "m"
    FEMININE = "f"


TYPE_FILTER_ALL = "all"
TYPE_FILTERS = (TYPE_FILTER_ALL,) + tuple(t.value for t in WordType)
GENDER_MODES = tuple(m.value for m in GenderMode)

# Fields read from a word record; anything else is kept in Word.extra
WORD_FIELDS = (
    "fr", "fr_art", "es", "es_art", "it", "it_art",
    "fr_m", "fr_f", "es_m", "es_f", "it_m", "it_f",
    "lat",
)


def parse_type_filter(value: str) -> str:
    """Return the filter value if it is known, raise InvalidFilter otherwise."""
    if value not in TYPE_FILTERS:
        raise InvalidFilter(value)
    return value


def parse_gender_mode(value: Union[str, GenderMode]) -> GenderMode:
    """Convert a raw value to a GenderMode, raise InvalidGenderMode if unknown."""
    if isinstance(value, GenderMode):
        return value
    try:
        return GenderMode(value)
    except ValueError:
        raise InvalidGenderMode(value) from None


@dataclass(frozen=True)
class Word:
    """A single vocabulary entry.

    ``type`` is kept as a raw string so that records with a type outside
    WordType still load; the card resolver decides how to show them.
    """
    type: str
    en: str
    fields: Mapping[str, str] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> str:
        """Get a language field, or an empty string when it is missing."""
        value = self.fields.get(name)
        return "" if value is None else str(value)

    @property
    def word_type(self) -> Optional[WordType]:
        """The WordType for this word, or None for an unrecognized type."""
        try:
            return WordType(self.type)
        except ValueError:
            return None

    def matches(self, type_filter: str) -> bool:
        """Check if the word passes a type filter."""
        return type_filter == TYPE_FILTER_ALL or self.type == type_filter

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Word":
        """Build a word from a parsed JSON object."""
        fields = {}
        extra = {}
        for key, value in record.items():
            if key in ("type", "en"):
                continue
            if key in WORD_FIELDS:
                fields[key] = "" if value is None else str(value)
            else:
                extra[key] = value
        raw_type = record.get("type")
        raw_en = record.get("en")
        return cls(
            type="" if raw_type is None else str(raw_type),
            en="" if raw_en is None else str(raw_en),
            fields=fields,
            extra=extra,
        )


class WordCatalog(Sequence[Word]):
    """Ordered, read-only collection of words.

    The position of a word in the catalog is its identity everywhere else.
    """

    def __init__(self, words: Sequence[Word] = ()):
        self._words: Tuple[Word, ...] = tuple(words)

    def __getitem__(self, index):
        return self._words[index]

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        return iter(self._words)

    def __repr__(self) -> str:
        return f"WordCatalog({len(self._words)} words)"

    def indices_matching(self, type_filter: str) -> List[int]:
        """Catalog indices of words passing the filter, in catalog order."""
        return [i for i, word in enumerate(self._words) if word.matches(type_filter)]

    def count_by_type(self) -> Dict[str, int]:
        """Number of words per type."""
        counts: Dict[str, int] = {}
        for word in self._words:
            counts[word.type] = counts.get(word.type, 0) + 1
        return counts

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "WordCatalog":
        """Build a catalog from parsed JSON objects."""
        return cls([Word.from_record(record) for record in records])
