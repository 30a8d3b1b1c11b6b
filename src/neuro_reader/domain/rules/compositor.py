"""Presentation compositor — settings to rendering directives.

Pure function of a complete ``ReaderSettings`` record. The document viewer
(out of this package) consumes the directives; ``RenderDirectives.css``
gives the CSS-equivalent style attributes for web-style hosts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from neuro_reader.domain.models.enums import ColorScheme
from neuro_reader.domain.models.settings import ReaderSettings
from neuro_reader.domain.rules import constants as c


@dataclass(frozen=True)
class StabilizerBar:
    """Horizontal reading anchor, centred in the viewport."""

    width_percent: float = c.STABILIZER_WIDTH_PERCENT
    top_percent: float = c.STABILIZER_TOP_PERCENT
    color: str = c.STABILIZER_COLOR


@dataclass(frozen=True)
class DarknessMask:
    """Vertical opacity mask: opaque band in the middle, dimmed edges.

    Percentages are of the viewport height.
    """

    band_top_percent: float
    band_bottom_percent: float
    edge_opacity: float

    @property
    def band_height_percent(self) -> float:
        return self.band_bottom_percent - self.band_top_percent

    def css_gradient(self) -> str:
        edge = f"rgba(0, 0, 0, {self.edge_opacity:g})"
        solid = "rgba(0, 0, 0, 1)"
        return (
            "linear-gradient(to bottom, "
            f"{edge} 0%, "
            f"{solid} {self.band_top_percent:g}%, "
            f"{solid} {self.band_bottom_percent:g}%, "
            f"{edge} 100%)"
        )


@dataclass(frozen=True)
class RenderDirectives:
    """Everything the viewer needs to present a page."""

    scale: float
    letter_spacing_em: float
    line_height: float
    color_scheme: ColorScheme
    foreground: str
    background: str
    transition_ms: int
    stabilizer: Optional[StabilizerBar]
    darkness_mask: Optional[DarknessMask]

    def css(self) -> dict[str, str]:
        """Return CSS-equivalent style attributes for the page container."""
        style = {
            "letter-spacing": f"{self.letter_spacing_em:g}em",
            "line-height": f"{self.line_height:g}",
            "color": self.foreground,
            "background-color": self.background,
            "transform": f"scale({self.scale:g})",
            "transform-origin": "center center",
            "transition": f"transform {self.transition_ms}ms ease-out",
        }
        if self.darkness_mask is not None:
            style["mask-image"] = self.darkness_mask.css_gradient()
        return style


def compose(settings: ReaderSettings) -> RenderDirectives:
    """Build the rendering directives for *settings*."""
    if settings.is_dark_mode:
        scheme, palette = ColorScheme.DARK, c.DARK_PALETTE
    else:
        scheme, palette = ColorScheme.LIGHT, c.LIGHT_PALETTE

    mask = None
    if settings.is_darkness_gradient_enabled:
        half_band = settings.line_window_size * c.LINE_BAND_PERCENT_PER_LINE
        mask = DarknessMask(
            band_top_percent=50 - half_band,
            band_bottom_percent=50 + half_band,
            edge_opacity=settings.peripheral_darkness_level / 100,
        )

    return RenderDirectives(
        scale=settings.magnification_level,
        letter_spacing_em=settings.letter_spacing_percentage * 0.01,
        line_height=settings.line_spacing_multiplier,
        color_scheme=scheme,
        foreground=palette.foreground,
        background=palette.background,
        transition_ms=settings.scroll_animation_duration,
        stabilizer=StabilizerBar() if settings.is_stabilizer_bar_enabled else None,
        darkness_mask=mask,
    )
