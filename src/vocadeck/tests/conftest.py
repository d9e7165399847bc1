"""Test configuration."""
import os
import random
from pathlib import Path

import pytest
from dotenv import load_dotenv

# Set test environment before any imports
os.environ["ENV"] = "test"

# Load test environment variables
test_env_path = Path(__file__).parents[3] / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from vocadeck.config import ensure_directories
from vocadeck.models.word import WordCatalog


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment before each test."""
    ensure_directories()
    yield


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


@pytest.fixture
def book_record() -> dict:
    return {
        "type": "noun", "en": "the book",
        "fr": "livre", "fr_art": "le",
        "es": "libro", "es_art": "el",
        "it": "libro", "it_art": "il",
        "lat": "liber",
    }


@pytest.fixture
def big_record() -> dict:
    return {
        "type": "adj", "en": "big",
        "fr_m": "grand", "fr_f": "grande",
        "es_m": "grande", "es_f": "grande",
        "it_m": "grande", "it_f": "grande",
        "lat": "grandis",
    }


@pytest.fixture
def speak_record() -> dict:
    return {"type": "verb", "en": "to speak", "fr": "parler", "es": "hablar", "it": "parlare", "lat": "parabolare"}


@pytest.fixture
def hello_record() -> dict:
    return {"type": "phrase", "en": "hello", "fr": "bonjour", "es": "hola", "it": "ciao"}


@pytest.fixture
def catalog(book_record, big_record, speak_record, hello_record) -> WordCatalog:
    """Small mixed catalog: 3 nouns, 2 adjectives, 2 verbs, 1 phrase."""
    records = [
        book_record,
        {"type": "noun", "en": "the night", "fr": "nuit", "fr_art": "la",
         "es": "noche", "es_art": "la", "it": "notte", "it_art": "la", "lat": "nox"},
        big_record,
        speak_record,
        {"type": "noun", "en": "The Water", "fr": "eau", "fr_art": "l'",
         "es": "agua", "es_art": "el", "it": "acqua", "it_art": "l'", "lat": "aqua"},
        {"type": "adj", "en": "new", "fr_m": "nouveau", "fr_f": "nouvelle",
         "es_m": "nuevo", "es_f": "nueva", "it_m": "nuovo", "it_f": "nuova", "lat": "novus"},
        hello_record,
        {"type": "verb", "en": "to sleep", "fr": "dormir", "es": "dormir", "it": "dormire"},
    ]
    return WordCatalog.from_records(records)
