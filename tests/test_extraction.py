"""
Tests for the label extractor and the rating/category parser.
"""

import pytest

from ecorater.extraction import UNAVAILABLE, extract, extract_identity, parse_rating


class TestExtract:

    def test_first_field(self):
        assert extract("Brand: Nike\nProduct: Shoe", "Brand") == "nike"

    def test_second_field(self):
        assert extract("Brand: Nike\nProduct: Running Shoe", "Product") == "running shoe"

    def test_missing_label(self):
        assert extract("No fields here", "Brand") == UNAVAILABLE

    def test_label_must_be_followed_by_colon(self):
        assert extract("Brandname: X", "Brand") == UNAVAILABLE

    def test_label_must_not_be_suffix_of_word(self):
        assert extract("SubBrand: X", "Brand") == UNAVAILABLE

    def test_case_insensitive_label(self):
        assert extract("BRAND: Nike", "brand") == "nike"

    def test_first_occurrence_wins(self):
        assert extract("Brand: Adidas\nBrand: Puma", "Brand") == "adidas"

    def test_whitespace_around_colon(self):
        assert extract("Brand   :\t  Nike  \n", "Brand") == "nike"

    def test_value_stops_at_line_break(self):
        assert extract("Brand: Nike\r\nmore text", "Brand") == "nike"

    def test_empty_value_does_not_spill_to_next_line(self):
        assert extract("Brand:\nProduct: Shoe", "Brand") == UNAVAILABLE

    def test_markdown_bold_label(self):
        assert extract("**Brand:** Nike", "Brand") == "nike"
        assert extract("**Brand**: Nike", "Brand") == "nike"

    def test_bulleted_line(self):
        assert extract("- Product: Air Max 90", "Product") == "air max 90"

    def test_label_with_regex_characters(self):
        assert extract("Size (US): 10", "Size (US)") == "10"

    @pytest.mark.parametrize("sep", ["\u2028", "\u2029", "\x85"])
    def test_value_stops_at_unicode_line_separator(self, sep):
        assert extract(f"Brand: Nike{sep}Product: X", "Brand") == "nike"

    def test_value_may_contain_colons(self):
        assert extract("Details: Fit: true to size", "Details") == "fit: true to size"

    @pytest.mark.parametrize("text", [None, "", "   ", ":", "Brand", 42, "\n\n\n"])
    def test_never_raises(self, text):
        assert extract(text, "Brand") == UNAVAILABLE

    @pytest.mark.parametrize("label", ["", "   ", None])
    def test_blank_label(self, label):
        assert extract("Brand: Nike", label) == UNAVAILABLE


class TestExtractIdentity:

    def test_all_fields(self):
        text = "Brand: Patagonia\nProduct: Nano Puff Jacket\nDetails: Insulated jacket."
        ident = extract_identity(text)
        assert ident.brand == "patagonia"
        assert ident.product == "nano puff jacket"
        assert ident.details == "insulated jacket."

    def test_partial(self):
        ident = extract_identity("Product: Mug")
        assert ident.brand == UNAVAILABLE
        assert ident.product == "mug"
        assert ident.details == UNAVAILABLE

    def test_model_says_unavailable(self):
        assert extract_identity("Brand: unavailable").brand == UNAVAILABLE


class TestParseRating:

    def test_full_response(self):
        r = parse_rating("rating: 4/5\ncategory: footwear\nGreat shoes overall.")
        assert r.rating == 4
        assert r.category == "footwear"
        assert r.description == "Great shoes overall."

    def test_no_structured_data(self):
        r = parse_rating("no structured data")
        assert r.rating is None
        assert r.category is None
        assert r.description == "no structured data"

    def test_case_insensitive(self):
        upper = parse_rating("RATING: 3/5\nfine")
        lower = parse_rating("rating: 3/5\nfine")
        assert upper == lower
        assert upper.rating == 3

    def test_rating_is_int(self):
        assert isinstance(parse_rating("Rating: 5/5").rating, int)

    def test_out_of_range_digit_passed_through(self):
        assert parse_rating("Rating: 7/5").rating == 7

    def test_multi_digit_is_not_a_rating(self):
        assert parse_rating("Rating: 10/5").rating is None

    @pytest.mark.parametrize("text", ["Rating: 4/50", "Rating: 3/55 stars"])
    def test_multi_digit_denominator_is_not_a_rating(self, text):
        r = parse_rating(text)
        assert r.rating is None
        assert r.description == text

    def test_bold_rating_value(self):
        r = parse_rating("Rating: **4/5**\nok")
        assert r.rating == 4
        assert r.description == "ok"

    def test_rating_without_category(self):
        r = parse_rating("Rating: 2/5\nUses virgin plastics.")
        assert r.rating == 2
        assert r.category is None
        assert r.description == "Uses virgin plastics."

    def test_category_first_keeps_case(self):
        r = parse_rating("Category: Shoes\nrating: 2/5\nOK")
        assert r.category == "Shoes"
        assert r.rating == 2
        assert r.description == "OK"

    def test_spaces_inside_fraction(self):
        assert parse_rating("Rating:4 / 5").rating == 4

    def test_markdown_rating(self):
        r = parse_rating("**Rating:** 4/5\n**Category:** Apparel\nSolid.")
        assert r.rating == 4
        assert r.category == "Apparel"
        assert r.description == "Solid."

    def test_label_inside_word_not_matched(self):
        r = parse_rating("Overrating: 5/5 is common.")
        assert r.rating is None

    def test_only_matched_spans_removed(self):
        text = "Rating: 3/5\nCategory: Bags\nThe rating: 3/5 reflects leather use. Another category: none here."
        r = parse_rating(text)
        assert r.rating == 3
        assert r.category == "Bags"
        assert r.description == "The rating: 3/5 reflects leather use. Another category: none here."

    def test_inline_rating_keeps_surrounding_prose(self):
        r = parse_rating("Overall rating: 4/5 because of recycled soles.")
        assert r.rating == 4
        assert r.description == "Overall  because of recycled soles."

    def test_middle_lines_collapse(self):
        r = parse_rating("Intro line.\n\nRating: 4/5\n\nCategory: Toys\n\nClosing line.")
        assert r.description == "Intro line.\n\nClosing line."

    def test_empty_category_is_none(self):
        r = parse_rating("Rating: 1/5\nCategory:   \nPoor.")
        assert r.category is None
        assert r.description == "Poor."

    def test_first_rating_wins(self):
        assert parse_rating("Rating: 2/5\nRating: 5/5").rating == 2

    def test_idempotent_on_reconstruction(self):
        first = parse_rating("Some intro.\nRating: 4/5\nCategory: Outdoor Gear\nDurable and repairable.")
        rebuilt = f"Rating: {first.rating}/5\nCategory: {first.category}\n{first.description}"
        assert parse_rating(rebuilt) == first

    @pytest.mark.parametrize("text", [None, "", "rating:", "rating: /5", "category:", "Rating: x/5", "\x00\n\r"])
    def test_never_raises(self, text):
        r = parse_rating(text)
        assert r.rating is None
        assert isinstance(r.description, str)
