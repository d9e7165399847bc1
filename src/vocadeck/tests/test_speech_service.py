"""Tests for the speech service."""
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from vocadeck.errors import SpeechError
from vocadeck.services.speech_service import SpeechService


def fake_gtts(*args, **kwargs) -> MagicMock:
    """gTTS stand-in that writes a small file on save."""
    tts = MagicMock()
    tts.save.side_effect = lambda path: Path(path).write_bytes(b"ID3")
    return tts


@pytest.fixture
def speech(tmp_path: Path) -> SpeechService:
    return SpeechService(cache_dir=tmp_path / "speech", slow=False)


@pytest.mark.parametrize("tag, lang", [("fr-FR", "fr"), ("es-ES", "es"), ("it-IT", "it"), ("en", "en")])
def test_gtts_lang(tag: str, lang: str) -> None:
    """Test mapping locale tags to gTTS languages."""
    assert SpeechService.gtts_lang(tag) == lang


def test_synthesize(speech: SpeechService) -> None:
    """Test that synthesis calls gTTS with the language and writes an mp3."""
    with patch("vocadeck.services.speech_service.gTTS", side_effect=fake_gtts) as mock_gtts:
        path = speech.synthesize("le livre", "fr-FR")

    mock_gtts.assert_called_once_with(text="le livre", lang="fr", slow=False)
    assert path.exists()
    assert path.suffix == ".mp3"
    assert path.parent == speech.cache_dir
    assert path.name.startswith("fr_le_livre_")


def test_synthesize_uses_cache(speech: SpeechService) -> None:
    """Test that the same text is only synthesized once."""
    with patch("vocadeck.services.speech_service.gTTS", side_effect=fake_gtts) as mock_gtts:
        first = speech.synthesize("grande", "es-ES")
        second = speech.synthesize("grande", "es-ES")
        other = speech.synthesize("grande", "it-IT")

    assert first == second
    assert other != first
    assert mock_gtts.call_count == 2


def test_accented_texts_do_not_collide(speech: SpeechService) -> None:
    """Test that texts differing only in accents get different files."""
    with patch("vocadeck.services.speech_service.gTTS", side_effect=fake_gtts):
        plain = speech.synthesize("ou", "fr-FR")
        accented = speech.synthesize("où", "fr-FR")
    assert plain != accented


def test_synthesize_empty_text(speech: SpeechService) -> None:
    """Test that empty text is rejected without calling gTTS."""
    with patch("vocadeck.services.speech_service.gTTS") as mock_gtts:
        with pytest.raises(SpeechError):
            speech.synthesize("   ", "fr-FR")
    mock_gtts.assert_not_called()


def test_synthesize_failure(speech: SpeechService) -> None:
    """Test that gTTS errors become SpeechError and leave no file behind."""
    tts = MagicMock()
    tts.save.side_effect = RuntimeError("connection refused")
    with patch("vocadeck.services.speech_service.gTTS", return_value=tts):
        with pytest.raises(SpeechError):
            speech.synthesize("hola", "es-ES")
    assert list(speech.cache_dir.glob("*.mp3")) == []
