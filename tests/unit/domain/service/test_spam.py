"""Unit tests for content sanitizing and spam scoring."""

import pytest

from inkwell.domain.service import HeuristicSpamDetector, sanitize_content


class TestSanitizeContent:
    """Tests for sanitize_content."""

    def test_strips_tags(self):
        assert sanitize_content("<p>Hello <b>there</b></p>") == "Hello there"

    def test_strips_script_uri(self):
        cleaned = sanitize_content("click JavaScript:alert(1) now")

        assert "javascript:" not in cleaned.lower()

    def test_strips_event_handlers(self):
        cleaned = sanitize_content('text onclick="steal()" more')

        assert "onclick" not in cleaned
        assert cleaned.startswith("text")

    def test_trims_whitespace(self):
        assert sanitize_content("   plain words   ") == "plain words"


class TestHeuristicSpamDetector:
    """Tests for HeuristicSpamDetector."""

    def test_clean_text(self):
        assessment = HeuristicSpamDetector().assess("Thanks for the thoughtful write-up.")

        assert assessment.score == 0.0
        assert assessment.signals == []

    @pytest.mark.parametrize(
        "urls,score",
        [(1, 0.2), (2, 0.4), (3, 0.6), (5, 0.6)],
    )
    def test_url_score_is_capped(self, urls, score):
        text = " ".join(f"https://site{i}.example/page" for i in range(urls))

        assessment = HeuristicSpamDetector().assess(text)

        assert assessment.score == score
        assert "urls" in assessment.signals
        assert ("many_urls" in assessment.signals) == (urls >= 3)

    def test_repeated_characters(self):
        assessment = HeuristicSpamDetector().assess("Wow" + "!" * 11)

        assert assessment.score == 0.4
        assert assessment.signals == ["repeated_characters"]

    def test_ten_repeats_is_fine(self):
        assessment = HeuristicSpamDetector().assess("Wow" + "!" * 10)

        assert assessment.score == 0.0

    def test_promotional_phrase_case_insensitive(self):
        assessment = HeuristicSpamDetector().assess("CLICK HERE for details")

        assert assessment.signals == ["promotional_phrase"]

    def test_score_never_exceeds_one(self):
        text = (
            "Buy now http://a.example http://b.example http://c.example "
            + "a" * 20
        )

        assessment = HeuristicSpamDetector().assess(text)

        assert assessment.score == 1.0

    def test_custom_weights(self):
        detector = HeuristicSpamDetector(url_weight=0.5, max_url_score=0.5)

        assessment = detector.assess("see http://a.example and http://b.example")

        assert assessment.score == 0.5
