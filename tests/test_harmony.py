"""
Unit tests for the color harmony generator.

Tests the HSL transformation tables and the hex-level generator to ensure
hue wraparound and the lightness/saturation bounds are applied correctly.
"""

import re

import pytest

from palette_studio.services.colors.conversion import hex_to_hsl, hex_to_rgb, hsl_to_hex
from palette_studio.services.colors.errors import InvalidInputError
from palette_studio.services.colors.harmony import (
    BASE_POSITIONS, HARMONY_SIZE, HarmonyKind, generate_all_harmonies,
    generate_harmony, harmony_triples, parse_harmony_kind
)

HEX_RE = re.compile(r"^#[0-9a-f]{6}$")


def hue_distance(h1: float, h2: float) -> float:
    diff = abs(h1 - h2) % 360
    return min(diff, 360 - diff)


class TestHarmonyTriples:
    """Test the raw HSL transformation tables."""

    def test_analogous(self):
        triples = harmony_triples((350, 80, 50), HarmonyKind.ANALOGOUS)
        hues = [h for h, _, _ in triples]

        assert hues == pytest.approx([320, 350, 20, 5, 335])
        assert all((s, l) == (80, 50) for _, s, l in triples)

    def test_complementary_bounds(self):
        triples = harmony_triples((10, 10, 10), "complementary")

        assert triples == [
            (10, 10, 10),
            (190, 10, 10),
            (10, 10, 20),
            (190, 10, 30),
            (10, 30, 10),
        ]

    def test_triadic(self):
        triples = harmony_triples((300, 50, 50), "triadic")

        assert [h for h, _, _ in triples] == pytest.approx([300, 60, 180, 300, 60])
        assert triples[3][2] == 35
        assert triples[4][1] == 40

    def test_triadic_floors(self):
        triples = harmony_triples((0, 35, 30), "triadic")
        assert triples[3][2] == 20
        assert triples[4][1] == 30

    def test_monochrome_mid(self):
        triples = harmony_triples((200, 60, 50), "monochrome")
        assert [l for _, _, l in triples] == [20, 35, 50, 65, 80]
        assert all(h == 200 and s == 60 for h, s, _ in triples)

    def test_monochrome_clamps(self):
        dark = harmony_triples((200, 60, 10), "monochrome")
        assert [l for _, _, l in dark] == [15, 25, 10, 25, 40]

        light = harmony_triples((200, 60, 90), "monochrome")
        assert [l for _, _, l in light] == [60, 75, 90, 85, 95]

    def test_hues_stay_in_range(self):
        for kind in HarmonyKind:
            for base_h in (0, 15, 179.5, 345, 359.9):
                for h, _, _ in harmony_triples((base_h, 50, 50), kind):
                    assert 0 <= h < 360


class TestGenerateHarmony:
    """Test hex-level harmony generation."""

    @pytest.mark.parametrize("kind", list(HarmonyKind))
    @pytest.mark.parametrize("base", ["#4f8cff", "#000000", "#ffffff", "#808080", "#ff0000", "#123abc"])
    def test_always_five_valid_colors(self, kind, base):
        colors = generate_harmony(base, kind)

        assert len(colors) == HARMONY_SIZE == 5
        assert all(HEX_RE.match(color) for color in colors)

    def test_complementary_reference_scenario(self):
        base_h, base_s, base_l = hex_to_hsl("#4f8cff")
        colors = generate_harmony("#4f8cff", "complementary")

        h, s, l = hex_to_hsl(colors[3])
        assert hue_distance(h, (base_h + 180) % 360) < 2
        assert s == pytest.approx(base_s, abs=1.5)
        assert l == pytest.approx(80, abs=1)

    def test_analogous_wraps_past_360(self):
        base = hsl_to_hex(350, 80, 50)
        colors = generate_harmony(base, "analogous")
        hues = [hex_to_hsl(color)[0] for color in colors]

        assert any(hue_distance(h, 20) < 2 for h in hues)
        assert all(0 <= h < 360 for h in hues)

    @pytest.mark.parametrize("kind", list(HarmonyKind))
    def test_base_color_is_preserved(self, kind):
        base = "#4f8cff"
        member = generate_harmony(base, kind)[BASE_POSITIONS[kind]]

        for got, want in zip(hex_to_rgb(member), hex_to_rgb(base)):
            assert abs(got - want) <= 1

    def test_triadic_of_red(self):
        assert generate_harmony("#FF0000", "triadic")[:3] == ["#ff0000", "#00ff00", "#0000ff"]

    def test_achromatic_analogous_stays_gray(self):
        assert generate_harmony("#808080", "analogous") == ["#808080"] * 5

    def test_generate_all_harmonies(self):
        harmonies = generate_all_harmonies("#4f8cff")

        assert set(harmonies) == {"analogous", "complementary", "triadic", "monochrome"}
        assert all(len(colors) == 5 for colors in harmonies.values())

    def test_invalid_kind(self):
        with pytest.raises(InvalidInputError):
            generate_harmony("#4f8cff", "tetradic")

    @pytest.mark.parametrize("bad", ["#4f8cf", "blue", "", "#4f8cffz"])
    def test_invalid_base(self, bad):
        with pytest.raises(InvalidInputError):
            generate_harmony(bad, "analogous")


class TestParseHarmonyKind:
    """Test harmony kind resolution."""

    def test_parse_names(self):
        assert parse_harmony_kind(" Triadic ") is HarmonyKind.TRIADIC
        assert parse_harmony_kind("monochrome") is HarmonyKind.MONOCHROME
        assert parse_harmony_kind(HarmonyKind.ANALOGOUS) is HarmonyKind.ANALOGOUS

    def test_parse_unknown(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_harmony_kind("split")
        assert "analogous" in str(exc_info.value)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
