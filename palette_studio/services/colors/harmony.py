"""
Color Harmony Generator

Derives five related colors from a base color by applying one fixed HSL
transformation table per harmony kind. Lightness and saturation floors and
ceilings keep harmony members away from pure black, pure white and gray.
"""

from enum import Enum
from typing import Callable, Dict, List, Union

from loguru import logger

from .conversion import HSL, hex_to_hsl, hsl_to_hex, rotate_hue
from .errors import InvalidInputError

HARMONY_SIZE = 5


class HarmonyKind(str, Enum):
    """Supported harmony rules."""
    ANALOGOUS = "analogous"
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    MONOCHROME = "monochrome"


def _analogous(h: float, s: float, l: float) -> List[HSL]:
    return [
        (rotate_hue(h, -30), s, l),
        (h, s, l),
        (rotate_hue(h, 30), s, l),
        (rotate_hue(h, 15), s, l),
        (rotate_hue(h, -15), s, l),
    ]


def _complementary(h: float, s: float, l: float) -> List[HSL]:
    comp_h = rotate_hue(h, 180)
    return [
        (h, s, l),
        (comp_h, s, l),
        (h, s, max(20, l - 20)),
        (comp_h, s, min(80, l + 20)),
        (h, max(30, s - 20), l),
    ]


def _triadic(h: float, s: float, l: float) -> List[HSL]:
    return [
        (h, s, l),
        (rotate_hue(h, 120), s, l),
        (rotate_hue(h, 240), s, l),
        (h, s, max(20, l - 15)),
        (rotate_hue(h, 120), max(30, s - 10), l),
    ]


def _monochrome(h: float, s: float, l: float) -> List[HSL]:
    return [
        (h, s, max(15, l - 30)),
        (h, s, max(25, l - 15)),
        (h, s, l),
        (h, s, min(85, l + 15)),
        (h, s, min(95, l + 30)),
    ]


_HARMONY_RULES: Dict[HarmonyKind, Callable[[float, float, float], List[HSL]]] = {
    HarmonyKind.ANALOGOUS: _analogous,
    HarmonyKind.COMPLEMENTARY: _complementary,
    HarmonyKind.TRIADIC: _triadic,
    HarmonyKind.MONOCHROME: _monochrome,
}


# Index of the unmodified base color within each rule's output
BASE_POSITIONS: Dict[HarmonyKind, int] = {
    HarmonyKind.ANALOGOUS: 1,
    HarmonyKind.COMPLEMENTARY: 0,
    HarmonyKind.TRIADIC: 0,
    HarmonyKind.MONOCHROME: 2,
}


def parse_harmony_kind(value: Union[str, HarmonyKind]) -> HarmonyKind:
    """
    Resolve a harmony kind from its name.

    Raises:
        InvalidInputError: If the name is not one of the four kinds
    """
    if isinstance(value, HarmonyKind):
        return value
    try:
        return HarmonyKind(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(kind.value for kind in HarmonyKind)
        raise InvalidInputError(f"Unknown harmony kind {value!r}; expected one of: {valid}") from None


def harmony_triples(base_hsl: HSL, kind: Union[str, HarmonyKind]) -> List[HSL]:
    """
    Apply a harmony rule to a base HSL triple.

    Args:
        base_hsl: Base (h, s, l) with h in degrees, s and l in [0, 100]
        kind: Harmony kind

    Returns:
        Five (h, s, l) triples with hues in [0, 360)
    """
    h, s, l = base_hsl
    return _HARMONY_RULES[parse_harmony_kind(kind)](h, s, l)


def generate_harmony(base_hex: str, kind: Union[str, HarmonyKind]) -> List[str]:
    """
    Generate a five-color harmony palette from a base color.

    Args:
        base_hex: Base color as #rrggbb
        kind: analogous, complementary, triadic or monochrome

    Returns:
        List of exactly five hex colors

    Raises:
        InvalidInputError: For malformed hex or an unknown kind
    """
    harmony_kind = parse_harmony_kind(kind)
    base_hsl = hex_to_hsl(base_hex)

    colors = [hsl_to_hex(h, s, l) for h, s, l in harmony_triples(base_hsl, harmony_kind)]

    logger.debug(f"Generated {harmony_kind.value} harmony for {base_hex}: {colors}")
    return colors


def generate_all_harmonies(base_hex: str) -> Dict[str, List[str]]:
    """
    Generate every harmony kind for a base color.

    Returns:
        Dictionary mapping kind names to five-color palettes
    """
    return {kind.value: generate_harmony(base_hex, kind) for kind in HarmonyKind}
