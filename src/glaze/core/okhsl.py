"""
Pure-Python OKHSL color math.

Conversions between OKHSL, OKLab, linear sRGB and gamma-encoded sRGB, WCAG
relative luminance and contrast, hex parsing, and CSS-style formatters.
No external color libraries required.

OKHSL follows Bjorn Ottosson's reference construction
(https://bottosson.github.io/posts/colorpicker/): hue in degrees, saturation
and lightness as fractions in 0-1.
"""

from __future__ import annotations

import colorsys
import math
import re
import sys

RGB = tuple[float, float, float]

_FLT_MAX = sys.float_info.max

# Toe curve constants mapping OKLab L to perceptual lightness.
_TOE_K1 = 0.206
_TOE_K2 = 0.03
_TOE_K3 = (1.0 + _TOE_K1) / (1.0 + _TOE_K2)

# Saturation knee where OKHSL switches from the C_0/C_mid to the C_mid/C_max curve.
_MID = 0.8
_MID_INV = 1.25

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# =============================================================================
# Transfer functions
# =============================================================================


def srgb_to_linear(c: float) -> float:
    """Decode one gamma-encoded sRGB channel (0-1) to linear light."""
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def linear_to_srgb(c: float) -> float:
    """Encode one linear-light channel to gamma-encoded sRGB."""
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1.0 / 2.4)) - 0.055


# =============================================================================
# OKLab
# =============================================================================


def linear_srgb_to_oklab(rgb: RGB) -> RGB:
    """Convert linear sRGB to OKLab (L, a, b)."""
    r, g, b = rgb
    lms_l = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    lms_m = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    lms_s = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b

    l_ = math.copysign(abs(lms_l) ** (1.0 / 3.0), lms_l)
    m_ = math.copysign(abs(lms_m) ** (1.0 / 3.0), lms_m)
    s_ = math.copysign(abs(lms_s) ** (1.0 / 3.0), lms_s)

    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def oklab_to_linear_srgb(lab: RGB) -> RGB:
    """Convert OKLab (L, a, b) to linear sRGB. Channels may fall outside 0-1."""
    L, a, b = lab
    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b

    lms_l = l_ * l_ * l_
    lms_m = m_ * m_ * m_
    lms_s = s_ * s_ * s_

    return (
        4.0767416621 * lms_l - 3.3077115913 * lms_m + 0.2309699292 * lms_s,
        -1.2684380046 * lms_l + 2.6097574011 * lms_m - 0.3413193965 * lms_s,
        -0.0041960863 * lms_l - 0.7034186147 * lms_m + 1.7076147010 * lms_s,
    )


# =============================================================================
# Gamut geometry
# =============================================================================


def _compute_max_saturation(a: float, b: float) -> float:
    """Max saturation S = C/L for a normalized hue direction (a, b) inside sRGB."""
    if -1.88170328 * a - 0.80936493 * b > 1:
        # Red component goes below zero first
        k0, k1, k2, k3, k4 = 1.19086277, 1.76576728, 0.59662641, 0.75515197, 0.56771245
        wl, wm, ws = 4.0767416621, -3.3077115913, 0.2309699292
    elif 1.81444104 * a - 1.19445276 * b > 1:
        # Green component goes below zero first
        k0, k1, k2, k3, k4 = 0.73956515, -0.45954404, 0.08285427, 0.12541070, 0.14503204
        wl, wm, ws = -1.2684380046, 2.6097574011, -0.3413193965
    else:
        # Blue component goes below zero first
        k0, k1, k2, k3, k4 = 1.35733652, -0.00915799, -1.15130210, -0.50559606, 0.00692167
        wl, wm, ws = -0.0041960863, -0.7034186147, 1.7076147010

    saturation = k0 + k1 * a + k2 * b + k3 * a * a + k4 * a * b

    k_l = 0.3963377774 * a + 0.2158037573 * b
    k_m = -0.1055613458 * a - 0.0638541728 * b
    k_s = -0.0894841775 * a - 1.2914855480 * b

    # One Halley step refines the polynomial estimate
    l_ = 1.0 + saturation * k_l
    m_ = 1.0 + saturation * k_m
    s_ = 1.0 + saturation * k_s

    lms_l = l_ * l_ * l_
    lms_m = m_ * m_ * m_
    lms_s = s_ * s_ * s_

    l_ds = 3.0 * k_l * l_ * l_
    m_ds = 3.0 * k_m * m_ * m_
    s_ds = 3.0 * k_s * s_ * s_

    l_ds2 = 6.0 * k_l * k_l * l_
    m_ds2 = 6.0 * k_m * k_m * m_
    s_ds2 = 6.0 * k_s * k_s * s_

    f = wl * lms_l + wm * lms_m + ws * lms_s
    f1 = wl * l_ds + wm * m_ds + ws * s_ds
    f2 = wl * l_ds2 + wm * m_ds2 + ws * s_ds2

    return saturation - f * f1 / (f1 * f1 - 0.5 * f * f2)


def _find_cusp(a: float, b: float) -> tuple[float, float]:
    """Return (L, C) of the sRGB gamut cusp for hue direction (a, b)."""
    s_cusp = _compute_max_saturation(a, b)
    rgb_at_max = oklab_to_linear_srgb((1.0, s_cusp * a, s_cusp * b))
    l_cusp = (1.0 / max(rgb_at_max)) ** (1.0 / 3.0)
    return l_cusp, l_cusp * s_cusp


def _halley_t(l_: float, m_: float, s_: float, l_dt: float, m_dt: float, s_dt: float) -> float:
    """Smallest positive Halley step towards the gamut boundary across R, G, B."""
    lms_l = l_ * l_ * l_
    lms_m = m_ * m_ * m_
    lms_s = s_ * s_ * s_

    ldt = 3.0 * l_dt * l_ * l_
    mdt = 3.0 * m_dt * m_ * m_
    sdt = 3.0 * s_dt * s_ * s_

    ldt2 = 6.0 * l_dt * l_dt * l_
    mdt2 = 6.0 * m_dt * m_dt * m_
    sdt2 = 6.0 * s_dt * s_dt * s_

    best = _FLT_MAX
    for wl, wm, ws in (
        (4.0767416621, -3.3077115913, 0.2309699292),
        (-1.2684380046, 2.6097574011, -0.3413193965),
        (-0.0041960863, -0.7034186147, 1.7076147010),
    ):
        f = wl * lms_l + wm * lms_m + ws * lms_s - 1.0
        f1 = wl * ldt + wm * mdt + ws * sdt
        f2 = wl * ldt2 + wm * mdt2 + ws * sdt2
        denom = f1 * f1 - 0.5 * f * f2
        if denom == 0.0:
            continue
        u = f1 / denom
        if u >= 0.0:
            best = min(best, -f * u)
    return best


def _find_gamut_intersection(
    a: float,
    b: float,
    l1: float,
    c1: float,
    l0: float,
    cusp: tuple[float, float],
) -> float:
    """Find t such that the line (l0, 0) -> (l1, c1) leaves the sRGB gamut at t."""
    l_cusp, c_cusp = cusp

    if ((l1 - l0) * c_cusp - (l_cusp - l0) * c1) <= 0.0:
        # Lower half: the triangle approximation is exact
        return c_cusp * l0 / (c1 * l_cusp + c_cusp * (l0 - l1))

    # Upper half: start from the triangle and refine with one Halley step
    t = c_cusp * (l0 - 1.0) / (c1 * (l_cusp - 1.0) + c_cusp * (l0 - l1))

    d_l = l1 - l0
    d_c = c1

    k_l = 0.3963377774 * a + 0.2158037573 * b
    k_m = -0.1055613458 * a - 0.0638541728 * b
    k_s = -0.0894841775 * a - 1.2914855480 * b

    lightness = l0 * (1.0 - t) + t * l1
    chroma = t * c1

    step = _halley_t(
        lightness + chroma * k_l,
        lightness + chroma * k_m,
        lightness + chroma * k_s,
        d_l + d_c * k_l,
        d_l + d_c * k_m,
        d_l + d_c * k_s,
    )
    if step < _FLT_MAX:
        t += step
    return t


def _toe(x: float) -> float:
    return 0.5 * (
        _TOE_K3 * x
        - _TOE_K1
        + math.sqrt((_TOE_K3 * x - _TOE_K1) ** 2 + 4.0 * _TOE_K2 * _TOE_K3 * x)
    )


def _toe_inv(x: float) -> float:
    return (x * x + _TOE_K1 * x) / (_TOE_K3 * (x + _TOE_K2))


def _get_st_mid(a: float, b: float) -> tuple[float, float]:
    """Smooth approximation of the cusp S/T used for the mid-saturation curve."""
    s = 0.11516993 + 1.0 / (
        7.44778970
        + 4.15901240 * b
        + a
        * (
            -2.19557347
            + 1.75198401 * b
            + a * (-2.13704948 - 10.02301043 * b + a * (-4.24894561 + 5.38770819 * b + 4.69891013 * a))
        )
    )
    t = 0.11239642 + 1.0 / (
        1.61320320
        - 0.68124379 * b
        + a
        * (
            0.40370612
            + 0.90148123 * b
            + a * (-0.27087943 + 0.61223990 * b + a * (0.00299215 - 0.45399568 * b - 0.14661872 * a))
        )
    )
    return s, t


def _get_cs(lightness: float, a: float, b: float) -> tuple[float, float, float]:
    """Return (C_0, C_mid, C_max) chroma anchors for an OKLab L and hue direction."""
    cusp = _find_cusp(a, b)
    c_max = _find_gamut_intersection(a, b, lightness, 1.0, lightness, cusp)

    l_cusp, c_cusp = cusp
    st_max_s = c_cusp / l_cusp
    st_max_t = c_cusp / (1.0 - l_cusp)

    k = c_max / min(lightness * st_max_s, (1.0 - lightness) * st_max_t)

    st_mid_s, st_mid_t = _get_st_mid(a, b)
    c_a = lightness * st_mid_s
    c_b = (1.0 - lightness) * st_mid_t
    c_mid = 0.9 * k * math.sqrt(math.sqrt(1.0 / (1.0 / c_a**4 + 1.0 / c_b**4)))

    c_a = lightness * 0.4
    c_b = (1.0 - lightness) * 0.8
    c_0 = math.sqrt(1.0 / (1.0 / c_a**2 + 1.0 / c_b**2))

    return c_0, c_mid, c_max


# =============================================================================
# OKHSL
# =============================================================================


def okhsl_to_oklab(h: float, s: float, l: float) -> RGB:
    """Convert OKHSL (hue in degrees, s/l in 0-1) to OKLab."""
    if l >= 1.0:
        return (1.0, 0.0, 0.0)
    if l <= 0.0:
        return (0.0, 0.0, 0.0)

    hue_rad = math.radians(h % 360.0)
    a_ = math.cos(hue_rad)
    b_ = math.sin(hue_rad)
    lightness = _toe_inv(l)

    if s <= 0.0:
        return (lightness, 0.0, 0.0)

    c_0, c_mid, c_max = _get_cs(lightness, a_, b_)

    if s < _MID:
        t = _MID_INV * s
        k_1 = _MID * c_0
        k_2 = 1.0 - k_1 / c_mid
        chroma = t * k_1 / (1.0 - k_2 * t)
    else:
        t = (min(s, 1.0) - _MID) / (1.0 - _MID)
        k_0 = c_mid
        k_1 = (1.0 - _MID) * c_mid * c_mid * _MID_INV * _MID_INV / c_0
        k_2 = 1.0 - k_1 / (c_max - c_mid)
        chroma = k_0 + t * k_1 / (1.0 - k_2 * t)

    return (lightness, chroma * a_, chroma * b_)


def okhsl_to_linear_srgb(h: float, s: float, l: float) -> RGB:
    """Convert OKHSL to linear sRGB. Channels may fall slightly outside 0-1."""
    return oklab_to_linear_srgb(okhsl_to_oklab(h, s, l))


def okhsl_to_srgb(h: float, s: float, l: float) -> RGB:
    """Convert OKHSL to gamma-encoded sRGB clamped to 0-1."""
    r, g, b = okhsl_to_linear_srgb(h, s, l)
    return (
        _clamp01(linear_to_srgb(r)),
        _clamp01(linear_to_srgb(g)),
        _clamp01(linear_to_srgb(b)),
    )


def srgb_to_okhsl(rgb: RGB) -> RGB:
    """Convert gamma-encoded sRGB (0-1 channels) to OKHSL (degrees, 0-1, 0-1)."""
    lab = linear_srgb_to_oklab(
        (srgb_to_linear(rgb[0]), srgb_to_linear(rgb[1]), srgb_to_linear(rgb[2]))
    )
    lightness, a, b = lab
    l = _toe(lightness)

    chroma = math.hypot(a, b)
    if chroma < 1e-10 or lightness <= 0.0 or lightness >= 1.0:
        return (0.0, 0.0, _clamp01(l))

    a_ = a / chroma
    b_ = b / chroma
    h = (0.5 + 0.5 * math.atan2(-b, -a) / math.pi) * 360.0

    c_0, c_mid, c_max = _get_cs(lightness, a_, b_)

    if chroma < c_mid:
        k_1 = _MID * c_0
        k_2 = 1.0 - k_1 / c_mid
        t = chroma / (k_1 + k_2 * chroma)
        s = t * _MID
    else:
        k_0 = c_mid
        k_1 = (1.0 - _MID) * c_mid * c_mid * _MID_INV * _MID_INV / c_0
        k_2 = 1.0 - k_1 / (c_max - c_mid)
        t = (chroma - k_0) / (k_1 + k_2 * (chroma - k_0))
        s = _MID + (1.0 - _MID) * t

    return (h % 360.0, _clamp01(s), _clamp01(l))


# =============================================================================
# WCAG
# =============================================================================


def relative_luminance(linear_rgb: RGB) -> float:
    """WCAG relative luminance of a linear sRGB color (channels clamped to 0-1)."""
    r, g, b = (_clamp01(c) for c in linear_rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(y1: float, y2: float) -> float:
    """WCAG 2 contrast ratio between two relative luminances."""
    lighter = max(y1, y2)
    darker = min(y1, y2)
    return (lighter + 0.05) / (darker + 0.05)


# =============================================================================
# Parsing
# =============================================================================


def parse_hex(value: str) -> RGB | None:
    """Parse ``#rgb`` or ``#rrggbb`` into sRGB channels in 0-1.

    Returns:
        Channel tuple, or None if the string is not a hex color.
    """
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return (
        int(digits[0:2], 16) / 255.0,
        int(digits[2:4], 16) / 255.0,
        int(digits[4:6], 16) / 255.0,
    )


# =============================================================================
# Formatting
# =============================================================================


def _num(value: float, digits: int) -> str:
    """Format a number with fixed precision, dropping redundant trailing zeros."""
    text = f"{value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_okhsl(h: float, s: float, l: float) -> str:
    """Format as ``okhsl(H S% L%)``. Saturation and lightness are 0-100."""
    return f"okhsl({_num(h, 2)} {_num(s, 2)}% {_num(l, 2)}%)"


def format_rgb(h: float, s: float, l: float) -> str:
    """Format as ``rgb(R G B)`` with fractional 0-255 channels."""
    r, g, b = okhsl_to_srgb(h, s / 100.0, l / 100.0)
    return f"rgb({r * 255:.2f} {g * 255:.2f} {b * 255:.2f})"


def format_hsl(h: float, s: float, l: float) -> str:
    """Format as CSS ``hsl(H S% L%)`` after converting through sRGB."""
    r, g, b = okhsl_to_srgb(h, s / 100.0, l / 100.0)
    hue, light, sat = colorsys.rgb_to_hls(r, g, b)
    return f"hsl({_num(hue * 360.0, 2)} {_num(sat * 100.0, 2)}% {_num(light * 100.0, 2)}%)"


def oklch_to_css(L: float, C: float, H: float, alpha: float = 1.0) -> str:
    """Format an OKLCH color as a CSS string.

    Args:
        L: Lightness (0-1).
        C: Chroma (0-0.4).
        H: Hue (0-360).
        alpha: Opacity (0-1).

    Returns:
        CSS oklch() string.
    """
    L_fmt = f"{L:.3f}"
    C_fmt = f"{C:.4f}"
    H_fmt = f"{H:.1f}"
    if alpha < 1.0:
        return f"oklch({L_fmt} {C_fmt} {H_fmt} / {alpha:.2f})"
    return f"oklch({L_fmt} {C_fmt} {H_fmt})"


def format_oklch(h: float, s: float, l: float) -> str:
    """Format as CSS ``oklch(L C H)``. Saturation and lightness are 0-100."""
    lightness, a, b = okhsl_to_oklab(h, s / 100.0, l / 100.0)
    chroma = math.hypot(a, b)
    hue = math.degrees(math.atan2(b, a)) % 360.0 if chroma > 1e-10 else 0.0
    return oklch_to_css(lightness, chroma, hue)


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))
