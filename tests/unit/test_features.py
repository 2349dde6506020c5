from builddost.generation import FEATURE_VOCABULARY, extract_features


class TestExtractFeatures:
    """Keyword scan over the feature vocabulary."""

    def test_food_delivery_prompt(self):
        assert extract_features("Food delivery website with login and cart") == ["login", "cart"]

    def test_results_follow_vocabulary_order(self):
        features = extract_features("Chat app with a dashboard, search and authentication")
        assert features == ["authentication", "dashboard", "search", "chat"]

    def test_case_insensitive(self):
        assert extract_features("PAYMENTS and Notifications") == ["payments", "notifications"]

    def test_multi_word_term_matches_without_spaces(self):
        assert extract_features("supports fileupload") == ["file upload"]
        assert extract_features("an AdminPanel for staff") == ["admin panel"]

    def test_substring_match_without_stemming(self):
        # "api" is found inside "rapid"; plural forms are not matched
        assert extract_features("rapid prototype") == ["api"]
        assert extract_features("online payment") == []

    def test_empty_description(self):
        assert extract_features("") == []

    def test_every_term_matches_itself(self):
        for term in FEATURE_VOCABULARY:
            assert term in extract_features(term)

    def test_reextracting_output_is_stable(self):
        for description in (
            "Food delivery website with login and cart",
            "Chat app with a dashboard, search and authentication",
            "Admin panel with file upload and real-time notifications",
        ):
            features = extract_features(description)
            assert extract_features(", ".join(features)) == features
            assert set(features) <= set(FEATURE_VOCABULARY)
