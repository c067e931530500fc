"""Tests for faqharvest.services.scoring and the keyword taxonomy."""

from faqharvest.services.scoring import (
    categorize,
    confidence_points,
    detect_language,
    is_incomplete,
    score_confidence,
)
from faqharvest.services.taxonomy import Taxonomy, keyword_pattern

RETURN_QUESTION = "What is your return policy?"


class TestCategorize:
    def test_shipping(self):
        assert categorize("How long does shipping take?") == "Shipping"

    def test_no_keyword_falls_back_to_general(self):
        assert categorize("asdkjasd") == "General"

    def test_returns(self):
        assert categorize("Can I get a refund?") == "Returns & Refunds"

    def test_payment(self):
        assert categorize("Which credit cards do you accept?") == "Payment"

    def test_account(self):
        assert categorize("How do I reset my password?") == "Account"

    def test_first_category_in_table_order_wins(self):
        # "delivery" (Shipping) and "refund" (Returns) both match
        assert categorize("Is delivery included in the refund?") == "Shipping"

    def test_substring_match(self):
        assert categorize("Do you offer express shipments?") == "Shipping"

    def test_case_insensitive(self):
        assert categorize("WHERE IS MY PACKAGE?") == "Shipping"

    def test_german_keywords(self):
        assert categorize("Wie lange dauert die Lieferung?") == "Shipping"

    def test_custom_taxonomy(self):
        taxonomy = Taxonomy(categories=(("Coffee", ("espresso", "bean")),), fallback_category="Misc")
        assert categorize("Which beans do you roast?", taxonomy) == "Coffee"
        assert categorize("Who are you?", taxonomy) == "Misc"


class TestConfidence:
    def test_returns_policy_example_is_high(self):
        answer = ("We offer free returns. " * 6)[:120]
        assert len(answer) == 120
        assert score_confidence(RETURN_QUESTION, answer) == "high"

    def test_question_signals_alone(self):
        assert confidence_points(RETURN_QUESTION, "") == 4

    def test_all_signals(self):
        answer = "We offer free returns within 30 days of purchase. Items must be unused."
        assert confidence_points(RETURN_QUESTION, answer) == 9

    def test_medium(self):
        # ? +2, interrogative +1, period +1, affirmative +1
        assert confidence_points("Is it free?", "Yes it is.") == 5
        assert score_confidence("Is it free?", "Yes it is.") == "medium"

    def test_low(self):
        assert confidence_points("Shipping costs", "Depends on weight") == 0
        assert score_confidence("Shipping costs", "Depends on weight") == "low"

    def test_threshold_boundaries(self):
        # ? +2, interrogative +1, period +1: exactly 4
        assert confidence_points("Why?", "Hmm.") == 4
        assert score_confidence("Why?", "Hmm.") == "medium"
        # plus "the" and the length ratio: exactly 6
        assert confidence_points("Why?", "See the page.") == 6
        assert score_confidence("Why?", "See the page.") == "high"

    def test_keyword_must_be_whole_word(self):
        # "theory" must not count as the affirmative keyword "the"
        assert confidence_points("Shipping costs", "theory") == 0


class TestIsIncomplete:
    def test_short_answer(self):
        assert is_incomplete("Yes.") is True

    def test_long_answer(self):
        assert is_incomplete("We ship to all EU countries within five days.") is False

    def test_boundary(self):
        assert is_incomplete("a" * 29) is True
        assert is_incomplete("a" * 30) is False

    def test_measures_cleaned_text(self):
        assert is_incomplete("<p><strong>Yes, we do.</strong></p>          ") is True


class TestDetectLanguage:
    def test_german(self):
        result = detect_language(
            "Wie lange dauert die Lieferung?",
            "Die Lieferung dauert in der Regel drei Tage.",
        )
        assert result == "German"

    def test_umlauts_count_as_german(self):
        result = detect_language("Können Sie nach Österreich liefern?", "Ja, wir liefern auch nach Österreich.")
        assert result == "German"

    def test_english(self):
        assert detect_language("How long does delivery take?", "Usually three days.") == "English"

    def test_unknown_text_uses_default(self):
        assert detect_language("Hola", "Gracias", default="Spanish") == "Spanish"

    def test_empty_uses_default(self):
        assert detect_language("", "") == "English"


class TestKeywordPattern:
    def test_longest_keyword_first(self):
        pattern = keyword_pattern(("you", "you can"))
        assert pattern.search("Yes, you can.").group(0) == "you can"

    def test_escapes_special_characters(self):
        assert keyword_pattern(("c++",)).pattern.startswith(r"\b(?:c\+\+")
