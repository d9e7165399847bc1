"""Turning a word into the content shown on its card."""
import logging
import re
from typing import Callable, Dict, List, Tuple, Union

from vocadeck.models.card import CardContent, GenderPair, LanguageRow, Speakable
from vocadeck.models.word import GenderMode, Word, WordType, parse_gender_mode

logger = logging.getLogger(__name__)

# (label, field prefix, locale tag) for every spoken language, in display order
LANGUAGES: Tuple[Tuple[str, str, str], ...] = (
    ("French", "fr", "fr-FR"),
    ("Spanish", "es", "es-ES"),
    ("Italian", "it", "it-IT"),
)

LATIN_LABEL = "Latin"
ROOT_LABEL = "Root"

_LEADING_ARTICLE = re.compile(r"^the\s+", re.IGNORECASE)


def join_words(*parts: str) -> str:
    """Join non-empty parts with single spaces."""
    return " ".join(p for p in parts if p)


def headline_for(word: Word) -> str:
    """Front-of-card text: nouns lose a leading "the "."""
    if word.type == WordType.NOUN.value:
        return _LEADING_ARTICLE.sub("", word.en, count=1)
    return word.en


class CardContentResolver:
    """Builds CardContent for a word and the active adjective gender mode."""

    def __init__(self):
        self._builders: Dict[WordType, Callable[[Word, GenderMode], List[LanguageRow]]] = {
            WordType.NOUN: self._noun_rows,
            WordType.ADJ: self._adjective_rows,
            WordType.VERB: self._phrase_rows,
            WordType.PHRASE: self._phrase_rows,
        }

    def resolve(self, word: Word, gender_mode: Union[str, GenderMode] = GenderMode.BOTH) -> CardContent:
        """Resolve the card content for a word."""
        mode = parse_gender_mode(gender_mode)
        word_type = word.word_type
        if word_type is None:
            logger.warning(f"Unknown word type '{word.type}' for '{word.en}', showing it as a phrase")
            rows = self._phrase_rows(word, mode)
        else:
            rows = self._builders[word_type](word, mode)
        return CardContent(
            headline=headline_for(word),
            english=word.en,
            word_type=word.type,
            rows=tuple(rows),
        )

    @staticmethod
    def _latin_row(word: Word, label: str = LATIN_LABEL) -> LanguageRow:
        return LanguageRow(label=label, code="lat", display=word.get("lat"))

    def _noun_rows(self, word: Word, mode: GenderMode) -> List[LanguageRow]:
        rows = []
        for label, code, lang in LANGUAGES:
            text = join_words(word.get(f"{code}_art"), word.get(code))
            rows.append(LanguageRow(label, code, text, self._speak(text, lang)))
        rows.append(self._latin_row(word))
        return rows

    def _adjective_rows(self, word: Word, mode: GenderMode) -> List[LanguageRow]:
        rows = []
        for label, code, lang in LANGUAGES:
            masculine = word.get(f"{code}_m")
            feminine = word.get(f"{code}_f")
            if mode is GenderMode.MASCULINE:
                row = LanguageRow(label, code, masculine, self._speak(masculine, lang))
            elif mode is GenderMode.FEMININE:
                row = LanguageRow(label, code, feminine, self._speak(feminine, lang))
            else:
                row = LanguageRow(
                    label,
                    code,
                    GenderPair(masculine, feminine),
                    (Speakable(masculine, lang), Speakable(feminine, lang)),
                )
            rows.append(row)
        rows.append(self._latin_row(word, ROOT_LABEL))
        return rows

    def _phrase_rows(self, word: Word, mode: GenderMode) -> List[LanguageRow]:
        rows = []
        for label, code, lang in LANGUAGES:
            text = word.get(code)
            rows.append(LanguageRow(label, code, text, self._speak(text, lang)))
        rows.append(self._latin_row(word))
        return rows

    @staticmethod
    def _speak(text: str, lang: str) -> Tuple[Speakable, ...]:
        return (Speakable(text, lang),)
