"""Tests for parsing images, tags and specifications at the command boundary."""

import pytest
from catalogue.shared.structured import parse_images, parse_specifications, parse_tags
from protean.exceptions import ValidationError


class TestImages:
    def test_accepts_json_array(self):
        assert parse_images('["/a.jpg", " /b.jpg "]') == ["/a.jpg", "/b.jpg"]

    def test_accepts_list(self):
        assert parse_images(["/a.jpg"]) == ["/a.jpg"]

    def test_empty_values_mean_no_images(self):
        assert parse_images(None) == []
        assert parse_images("") == []

    def test_rejects_malformed_json(self):
        with pytest.raises(ValidationError) as exc:
            parse_images("[/a.jpg")
        assert "images" in exc.value.messages

    def test_rejects_non_array(self):
        with pytest.raises(ValidationError):
            parse_images('{"url": "/a.jpg"}')

    def test_rejects_non_string_entries(self):
        with pytest.raises(ValidationError):
            parse_images("[1, 2]")


class TestTags:
    def test_sorted_and_deduplicated(self):
        assert parse_tags('["vegan", "hydrating", "vegan", " "]') == ["hydrating", "vegan"]

    def test_rejects_non_string_tags(self):
        with pytest.raises(ValidationError):
            parse_tags('["ok", 3]')


class TestSpecifications:
    def test_accepts_scalar_values(self):
        specs = parse_specifications('{"volume": "30ml", "spf": 30, "vegan": true}')
        assert specs == {"volume": "30ml", "spf": 30, "vegan": True}

    def test_accepts_nested_values(self):
        specs = parse_specifications(
            '{"sizes": ["30ml", "50ml"], "dimensions": {"height": 12, "width": 4}}'
        )
        assert specs == {
            "sizes": ["30ml", "50ml"],
            "dimensions": {"height": 12, "width": 4},
        }

    def test_accepts_non_ascii_values(self):
        assert parse_specifications('{"ingredients": ["کرم"]}') == {"ingredients": ["کرم"]}

    def test_top_level_must_be_an_object(self):
        with pytest.raises(ValidationError) as exc:
            parse_specifications('["volume"]')
        assert "specifications" in exc.value.messages
