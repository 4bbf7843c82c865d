"""
Verse fetching from bible-api.com.

Picks a random reference from the verse pool and fetches its text in the
subscriber's version. Network and response errors are reported and turned
into None so a single failed fetch only affects one subscriber.
"""

import random
import time
from typing import Optional

import requests

from config.bible_versions import (
    BIBLE_VERSIONS,
    BOOK_NAMES,
    DEFAULT_TRANSLATION,
    VERSE_POOL,
)
from models.delivery import VersePayload


def get_random_verse_reference(rng: random.Random | None = None) -> str:
    """Pick a reference (e.g. 'JHN.3.16') uniformly from the verse pool."""
    return (rng or random).choice(VERSE_POOL)


def to_api_reference(reference: str) -> str:
    """
    Convert a pool reference to bible-api.com path format.

    'JHN.3.16' -> 'john+3:16', 'PSA.23.1-6' -> 'psalms+23:1-6'

    Raises:
        ValueError: If the reference is not BOOK.CHAPTER.VERSES
    """
    parts = reference.split(".")
    if len(parts) != 3:
        raise ValueError(f"Malformed verse reference: {reference}")

    book_code, chapter, verses = parts
    book = BOOK_NAMES.get(book_code, book_code.lower())
    return f"{book}+{chapter}:{verses}"


def get_translation(version: str) -> str:
    """bible-api.com translation id for a version code."""
    entry = BIBLE_VERSIONS.get(version)
    return entry["translation"] if entry else DEFAULT_TRANSLATION


class BibleClient:
    """Fetches verses from bible-api.com"""

    def __init__(
        self,
        base_url: str = "https://bible-api.com",
        timeout: float = 10.0,
        max_retries: int = 2,
        rng: random.Random | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.rng = rng or random.Random()
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def fetch_verse(self, reference: str, version: str = "ESV") -> Optional[VersePayload]:
        """
        Fetch one verse (or verse range).

        Connection errors, timeouts and 5xx responses are retried with
        exponential backoff. 4xx responses and malformed bodies are not.

        Args:
            reference: Pool reference such as 'PSA.119.105'
            version: Version code, kept on the payload as requested

        Returns:
            VersePayload, or None if the verse could not be fetched
        """
        url = f"{self.base_url}/{to_api_reference(reference)}"
        params = {"translation": get_translation(version)}

        for attempt in range(self.max_retries):
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                data = response.json()
            except requests.HTTPError as e:
                if response.status_code < 500:
                    print(f"  ✗ Verse {reference} ({version}) not available: {e}")
                    return None
                error: Exception = e
            except (requests.ConnectionError, requests.Timeout) as e:
                error = e
            except (requests.RequestException, ValueError) as e:
                print(f"  ✗ Malformed response for {reference} ({version}): {e}")
                return None
            else:
                text = (data.get("text") or "").strip()
                if not text:
                    print(f"  ✗ Empty verse text for {reference} ({version})")
                    return None
                return VersePayload(
                    reference=data.get("reference") or reference,
                    text=text,
                    version=version,
                )

            if attempt < self.max_retries - 1:
                print(f"  ⚠ Verse fetch failed (attempt {attempt + 1}): {error}")
                time.sleep(2**attempt)
            else:
                print(f"  ✗ Could not fetch verse {reference} ({version}): {error}")

        return None

    def fetch_random_verse(self, version: str = "ESV") -> Optional[VersePayload]:
        """Fetch a random verse from the pool in the given version."""
        reference = get_random_verse_reference(self.rng)
        return self.fetch_verse(reference, version)
