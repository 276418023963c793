"""
Tests for slug normalization
"""
import pytest

from supportpal_exporter.utils.slug import label_name, slugify


class TestSlugify:
    """Test free text slugs"""

    @pytest.mark.parametrize("text, expected", [
        ("Blue", "blue"),
        ("Light Blue", "light-blue"),
        ("  --Needs   Review!! ", "needs-review"),
        ("Café Crème", "cafe-creme"),
        ("R&D", "r-and-d"),
        ("support@example", "support-at-example"),
        ("Приоритет", "prioritet"),
        ("红色", "hong-se"),
        ("", ""),
    ])
    def test_slugify(self, text, expected):
        assert slugify(text) == expected

    def test_custom_separator(self):
        assert slugify("Light Blue", separator="_") == "light_blue"


class TestLabelName:
    """Test custom field label names"""

    def test_priority_level(self):
        assert label_name("Priority Level!") == "priority_level"

    def test_variants_merge(self):
        assert label_name("Priority-Level") == label_name("priority level") == "priority_level"

    def test_leading_digit_is_prefixed(self):
        assert label_name("2nd Line Team") == "cf_2nd_line_team"

    def test_symbols_only(self):
        assert label_name("!!!") == ""

    def test_non_latin_name_is_transliterated(self):
        assert label_name("Срочность клиента") == "srochnost_klienta"
