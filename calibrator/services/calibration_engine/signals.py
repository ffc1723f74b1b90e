import re
from dataclasses import dataclass
from typing import List

# Sentence terminators collapse into one boundary ("Wait?!" is one break)
SENTENCE_BOUNDARY = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class DerivedSignals:
    """
    Numeric features computed from the raw text input.
    Vector order is fixed: text length, word count, sentence count, sentiment.
    """
    text_length: int
    word_count: int
    sentence_count: int
    sentiment_score: int

    def as_vector(self) -> List[int]:
        return [
            self.text_length,
            self.word_count,
            self.sentence_count,
            self.sentiment_score,
        ]


class SignalDeriver:
    """
    Turns free-text qualitative context into a fixed-size feature vector.

    The lexicons are exact-match only: no stemming, no partial matches,
    and punctuation attached to a word prevents a match ("good." scores 0).
    """

    POSITIVE_LEXICON = frozenset({"good", "clear", "success", "positive", "ready"})
    NEGATIVE_LEXICON = frozenset({"bad", "confused", "fail", "error", "blocked"})

    def derive(self, text: str) -> DerivedSignals:
        """
        Derives [textLength, wordCount, sentenceCount, sentimentScore].

        Args:
            text: Raw, untrimmed user input

        Returns:
            DerivedSignals. sentence_count may be 0 for text with no
            content between terminators; consumers floor it themselves.
        """
        words = text.split()
        sentences = [
            piece.strip()
            for piece in SENTENCE_BOUNDARY.split(text)
            if piece.strip()
        ]

        return DerivedSignals(
            text_length=len(text),
            word_count=len(words),
            sentence_count=len(sentences),
            sentiment_score=self._score_sentiment(words),
        )

    def _score_sentiment(self, words: List[str]) -> int:
        score = 0
        for word in words:
            token = word.lower()
            if token in self.POSITIVE_LEXICON:
                score += 1
            elif token in self.NEGATIVE_LEXICON:
                score -= 1
        return score
