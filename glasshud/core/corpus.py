from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CORPUS_PATH = Path(__file__).resolve().parent.parent / "data" / "corpus.yaml"


@dataclass(frozen=True)
class Corpus:
    excerpts: tuple[str, ...]


class CorpusRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path is not None else DEFAULT_CORPUS_PATH
        self._corpus = self._load_corpus()

    @property
    def corpus(self) -> Corpus:
        return self._corpus

    def _load_corpus(self) -> Corpus:
        if not self._path.exists():
            raise FileNotFoundError(f"Corpus file not found: {self._path}")

        raw = yaml.safe_load(self._path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{self._path.name}: expected YAML with 'excerpts'")
        content = raw.get("excerpts")
        if content is None:
            raise ValueError(f"{self._path.name}: missing 'excerpts'")
        if isinstance(content, list):
            excerpts = [" ".join(str(item).split()) for item in content]
        else:
            # allow excerpts as multiline string, one per line
            excerpts = [line.strip() for line in str(content).splitlines()]
        excerpts = [e for e in excerpts if e]
        if not excerpts:
            raise ValueError(f"{self._path.name}: 'excerpts' has no text")

        logger.info("Loaded %d corpus excerpts from %s", len(excerpts), self._path)
        return Corpus(excerpts=tuple(excerpts))


def chars_needed(duration_seconds: int, chars_per_minute: int = 1200) -> int:
    """Character budget for a test of the given length."""
    return math.ceil(duration_seconds * chars_per_minute / 60)


class TextGenerator:
    """Builds target text long enough that a test never runs out of characters.

    Excerpts are drawn uniformly with replacement and joined by single spaces
    until the budget is met, so the result may overshoot by up to one excerpt.
    """

    def __init__(
        self,
        corpus: Corpus,
        rng: Optional[random.Random] = None,
        chars_per_minute: int = 1200,
    ) -> None:
        if not corpus.excerpts:
            raise ValueError("corpus has no excerpts")
        self._corpus = corpus
        self._rng = rng or random.Random()
        self._chars_per_minute = chars_per_minute

    def generate(self, duration_seconds: int) -> str:
        budget = chars_needed(duration_seconds, self._chars_per_minute)
        text = ""
        while len(text) < budget:
            excerpt = self._rng.choice(self._corpus.excerpts)
            text += (" " if text else "") + excerpt
        return text
