"""Tests for color string checks."""

import pytest

from taxacolor.color_utils import is_hex_color, is_known_color_name, is_valid_color


class TestIsHexColor:
    @pytest.mark.parametrize("value", ["#000", "#fff", "#0d0d0d", "#A6611A", "#aBc"])
    def test_accepts(self, value):
        assert is_hex_color(value)

    @pytest.mark.parametrize(
        "value",
        ["000000", "#00", "#0000", "#00000g", "#1234567", "#12345", "", None, 123, "green"],
    )
    def test_rejects(self, value):
        assert not is_hex_color(value)


class TestKnownColorName:
    def test_css_names(self):
        assert is_known_color_name("green")
        assert is_known_color_name("darkolivegreen")

    def test_case_insensitive(self):
        assert is_known_color_name("Green")

    def test_prefixed_names(self):
        assert is_known_color_name("tab:blue")

    def test_unknown(self):
        assert not is_known_color_name("notacolor")
        assert not is_known_color_name("")
        assert not is_known_color_name(None)


def test_is_valid_color():
    assert is_valid_color("red")
    assert is_valid_color("#123")
    assert not is_valid_color("#12")
