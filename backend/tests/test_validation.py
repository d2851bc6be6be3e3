"""
MenuBoard — Restaurant Validation Unit Tests
==============================================

What:  Tests for validate_restaurant() and sanitize_restaurant().
How:   Pure functions, no database or HTTP.
"""

import pytest

from menuboard.services.validation import sanitize_restaurant, validate_restaurant


def _constraints(errors):
    return {(error.field, error.constraint) for error in errors}


class TestValidateRestaurant:
    """Tests for the name and image rules."""

    def test_valid_payload_has_no_errors(self, valid_payload):
        assert validate_restaurant(valid_payload) == []

    def test_name_at_limit_is_accepted(self):
        payload = {"name": "x" * 50, "image": "http://example.com/a.png"}
        assert validate_restaurant(payload) == []

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_missing_or_blank_name_is_required_error(self, name):
        errors = validate_restaurant({"name": name, "image": "https://example.com/p.jpg"})
        assert _constraints(errors) == {("name", "required")}

    def test_slashes_count_as_escaped(self):
        # 10 characters become 10 "&#x2F;" entities (60 characters)
        errors = validate_restaurant({"name": "/" * 10, "image": "https://example.com/p.jpg"})
        assert _constraints(errors) == {("name", "max_length")}

    def test_name_over_limit_is_rejected(self):
        long_name = "x" * 51
        errors = validate_restaurant({"name": long_name, "image": "https://example.com/p.jpg"})
        assert _constraints(errors) == {("name", "max_length")}
        assert errors[0].value == long_name

    def test_length_is_measured_after_escaping(self):
        # 45 characters, but each "&" becomes "&amp;" (5 characters)
        name = "&" * 10 + "x" * 35
        errors = validate_restaurant({"name": name, "image": "https://example.com/p.jpg"})
        assert _constraints(errors) == {("name", "max_length")}

    def test_surrounding_whitespace_does_not_count(self):
        payload = {"name": "  " + "x" * 50 + "  ", "image": "https://example.com/p.jpg"}
        assert validate_restaurant(payload) == []

    @pytest.mark.parametrize(
        "image",
        [
            "https://example.com/p.jpg",
            "http://example.com",
            "ftp://files.example.com/menu.pdf",
            "example.com/p.jpg",
            "  www.example.co.uk/a.png ",
            "http://192.168.0.10/logo.png",
        ],
    )
    def test_valid_image_is_accepted(self, image):
        assert validate_restaurant({"name": "Bayroot", "image": image}) == []

    @pytest.mark.parametrize(
        "image",
        [
            None,
            "",
            "not a url",
            "example",
            "ftp//broken",
            42,
            "http://localhost",
            "http://localhost:8000/p.jpg",
            "file:///etc/hosts",
            "http://example.c0m",
        ],
    )
    def test_invalid_image_is_rejected(self, image):
        errors = validate_restaurant({"name": "Bayroot", "image": image})
        assert _constraints(errors) == {("image", "url")}

    def test_all_failures_are_reported(self):
        errors = validate_restaurant({"name": "", "image": "nope"})
        assert _constraints(errors) == {("name", "required"), ("image", "url")}

    def test_error_carries_rejected_value(self):
        errors = validate_restaurant({"name": "Bayroot", "image": "nope"})
        assert errors[0].value == "nope"
        assert errors[0].location == "body"
        assert "URL" in errors[0].message


class TestSanitizeRestaurant:
    """Tests for the stored form of validated bodies."""

    def test_name_is_trimmed(self):
        cleaned = sanitize_restaurant({"name": "  Bayroot ", "image": "https://example.com/p.jpg"})
        assert cleaned["name"] == "Bayroot"

    def test_name_is_html_escaped(self):
        cleaned = sanitize_restaurant({"name": "<b>Tom & Jerry's</b>", "image": "https://e.com/x"})
        assert cleaned["name"] == "&lt;b&gt;Tom &amp; Jerry&#x27;s&lt;&#x2F;b&gt;"

    def test_slash_backslash_and_backtick_are_escaped(self):
        cleaned = sanitize_restaurant({"name": "AC/DC `live` \\ tour", "image": "https://e.com/x"})
        assert cleaned["name"] == "AC&#x2F;DC &#96;live&#96; &#x5C; tour"

    def test_image_without_scheme_is_stored_as_sent(self):
        cleaned = sanitize_restaurant({"name": "Bayroot", "image": " example.com/p.jpg "})
        assert cleaned["image"] == "example.com/p.jpg"

    def test_unknown_fields_are_dropped(self):
        cleaned = sanitize_restaurant({
            "name": "Bayroot",
            "image": " https://example.com/p.jpg ",
            "id": 99,
        })
        assert cleaned == {"name": "Bayroot", "image": "https://example.com/p.jpg"}
