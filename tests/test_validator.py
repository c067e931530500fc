"""Tests for faqharvest.services.validator."""

from faqharvest.services.validator import is_valid, is_valid_cleaned


class TestIsValid:
    def test_accepts_regular_pair(self):
        assert is_valid("What is your return policy?", "We offer free returns within 30 days.") is True

    def test_rejects_degenerate_pair(self):
        assert is_valid("What is it?", "ok") is False

    def test_rejects_short_question(self):
        assert is_valid("Why?", "Because we ship from Germany only.") is False

    def test_rejects_long_question(self):
        assert is_valid("What " + "x" * 300 + "?", "An answer that is long enough. " * 12) is False

    def test_rejects_short_answer(self):
        assert is_valid("How long is shipping?", "Two days.") is False

    def test_rejects_long_answer(self):
        assert is_valid("How long is shipping?", "a" * 1001) is False

    def test_rejects_identical_question_and_answer(self):
        text = "What is the return policy?"
        assert is_valid(text, text) is False

    def test_rejects_placeholder_text(self):
        assert is_valid("What is lorem ipsum here?", "Lorem ipsum dolor sit amet, consectetur.") is False

    def test_rejects_answer_much_shorter_than_question(self):
        question = "What is the exact procedure for returning a damaged item bought during the sale?"
        assert is_valid(question, "Call support now.") is False

    def test_rejects_statement_without_question_marker(self):
        assert is_valid("Shipping information for Europe", "We ship within five days to Europe.") is False

    def test_accepts_interrogative_without_question_mark(self):
        assert is_valid("How to return an item", "Send it back within 30 days.") is True

    def test_accepts_german_question(self):
        assert is_valid("Wie lange dauert der Versand?", "In der Regel zwei bis drei Werktage.") is True


class TestCleaningBeforeValidation:
    def test_markup_is_removed_before_length_checks(self):
        assert is_valid("**What is your return policy?**", "<p>We offer free returns within 30 days.</p>") is True

    def test_markup_does_not_pad_short_answer(self):
        assert is_valid("<b>What is it?</b>", "<p><strong>ok</strong></p>") is False

    def test_cleaned_variant_skips_cleaning(self):
        # Only the raw string, tags included, is long enough
        assert is_valid_cleaned("How long is shipping?", "<p>ok</p>         ") is True
        assert is_valid("How long is shipping?", "<p>ok</p>         ") is False
