from catalogue.shared.slug import name_key, slugify


class TestSlugify:
    def test_lowercases_and_hyphenates_words(self):
        assert slugify("Running Shoes") == "running-shoes"

    def test_collapses_punctuation_runs(self):
        assert slugify("  Tea, Coffee & Cocoa!  ") == "tea-coffee-cocoa"

    def test_folds_accents(self):
        assert slugify("Crème Brûlée") == "creme-brulee"

    def test_is_deterministic(self):
        assert slugify("Home & Garden") == slugify("Home & Garden")

    def test_truncates_without_trailing_hyphen(self):
        slug = slugify("ab " * 10, max_len=5)
        assert slug == "ab-ab"

    def test_empty_name(self):
        assert slugify("") == ""
        assert slugify(None) == ""


class TestNameKey:
    def test_case_and_surrounding_whitespace_are_ignored(self):
        assert name_key("  Shoes ") == name_key("SHOES") == "shoes"

    def test_distinct_names_stay_distinct(self):
        assert name_key("Shoe") != name_key("Shoes")
