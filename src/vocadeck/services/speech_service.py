"""Reading translations aloud with gTTS."""
import hashlib
import logging
import re
from pathlib import Path
from typing import Optional

from gtts import gTTS

from vocadeck.config import settings
from vocadeck.errors import SpeechError

logger = logging.getLogger(__name__)


class SpeechService:
    """Synthesizes short utterances into cached mp3 files."""

    def __init__(self, cache_dir: Optional[Path] = None, slow: Optional[bool] = None):
        self.cache_dir = Path(cache_dir) if cache_dir is not None else settings.paths.speech_dir
        self.slow = settings.speech.slow if slow is None else slow

    @staticmethod
    def gtts_lang(lang_tag: str) -> str:
        """Map a locale tag such as "fr-FR" to a gTTS language code."""
        return lang_tag.split("-", 1)[0].lower()

    def synthesize(self, text: str, lang_tag: str) -> Path:
        """Return the path of an mp3 reading ``text`` in ``lang_tag``."""
        text = text.strip()
        if not text:
            raise SpeechError("Nothing to speak")

        path = self.cache_dir / self._filename(text, lang_tag)
        if path.exists():
            logger.debug(f"Using cached speech for '{text}' ({lang_tag})")
            return path

        self.cache_dir.mkdir(parents=True, exist_ok=True)
        try:
            tts = gTTS(text=text, lang=self.gtts_lang(lang_tag), slow=self.slow)
            tts.save(str(path))
        except Exception as e:
            logger.error(f"Error generating speech for '{text}' ({lang_tag}): {e}")
            if path.exists():
                path.unlink()
            raise SpeechError(f"Could not synthesize '{text}'") from e
        logger.info(f"Speech generated for '{text}' ({lang_tag}): {path.name}")
        return path

    def _filename(self, text: str, lang_tag: str) -> str:
        # Readable prefix plus a hash so that accented spellings don't collide
        slug = re.sub(r"[^a-zA-Z0-9]", "_", text.lower())[:40]
        digest = hashlib.sha1(f"{lang_tag}|{self.slow}|{text}".encode("utf-8")).hexdigest()[:12]
        return f"{self.gtts_lang(lang_tag)}_{slug}_{digest}.mp3"
