"""Spam scoring for new comments.

Scoring is a replaceable policy: the comment service only relies on the
``SpamDetector`` interface and compares the score to a configured
threshold.
"""

import re
from abc import ABC, abstractmethod

from inkwell.domain.value import SpamAssessment

_TAG_RE = re.compile(r"<[^>]*>")
_JS_URI_RE = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER_RE = re.compile(r"on\w+\s*=\s*[\"'][^\"']*[\"']?", re.IGNORECASE)

_URL_RE = re.compile(r"(?:https?://|www\.)[^\s]+", re.IGNORECASE)
_REPEAT_RE = re.compile(r"(.)\1{10,}")
_PROMO_RE = re.compile(
    r"\b(?:buy now|click here|free money|get rich|viagra|casino)\b", re.IGNORECASE
)


def sanitize_content(content: str) -> str:
    """Strip markup, script URIs and inline event handlers, then trim."""
    content = _TAG_RE.sub("", content)
    content = _JS_URI_RE.sub("", content)
    content = _EVENT_HANDLER_RE.sub("", content)
    return content.strip()


class SpamDetector(ABC):
    """Assigns a spam score in [0, 1] to comment content."""

    @abstractmethod
    def assess(self, content: str) -> SpamAssessment:
        """Score content.

        Args:
            content: Sanitized comment content

        Returns:
            Score and the signals that contributed to it
        """
        pass


class HeuristicSpamDetector(SpamDetector):
    """Scores content from a few cheap textual signals.

    - Each URL-like substring adds ``url_weight`` up to ``max_url_score``
    - A run of eleven or more identical characters adds ``repeat_weight``
    - A known promotional phrase adds ``promo_weight``
    """

    def __init__(
        self,
        url_weight: float = 0.2,
        max_url_score: float = 0.6,
        repeat_weight: float = 0.4,
        promo_weight: float = 0.4,
        many_urls: int = 3,
    ) -> None:
        self.url_weight = url_weight
        self.max_url_score = max_url_score
        self.repeat_weight = repeat_weight
        self.promo_weight = promo_weight
        self.many_urls = many_urls

    def assess(self, content: str) -> SpamAssessment:
        score = 0.0
        signals: list[str] = []

        urls = _URL_RE.findall(content)
        if urls:
            signals.append("urls")
            score += min(len(urls) * self.url_weight, self.max_url_score)
            if len(urls) >= self.many_urls:
                signals.append("many_urls")

        if _REPEAT_RE.search(content):
            signals.append("repeated_characters")
            score += self.repeat_weight

        if _PROMO_RE.search(content):
            signals.append("promotional_phrase")
            score += self.promo_weight

        return SpamAssessment(score=round(min(score, 1.0), 2), signals=signals)
