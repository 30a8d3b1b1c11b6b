"""Reader presentation constants — pure domain values.

Field domains, factory defaults and the coefficients used by the presets,
calibration, adaptation and compositor rules. They have NO dependency on
configuration files or external libraries.

Operational knobs (timer cadence, storage keys, haptic patterns) live in the
``config`` package and are injected by the container.
"""

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Value Objects (frozen dataclasses)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Bounds:
    """Closed numeric interval for a settings field."""

    low: float
    high: float

    def clamp(self, value: float) -> float:
        return max(self.low, min(self.high, value))


@dataclass(frozen=True)
class Palette:
    """Foreground / background colour pair."""

    foreground: str
    background: str


# ---------------------------------------------------------------------------
# Field domains
# ---------------------------------------------------------------------------

LINE_WINDOW_BOUNDS = Bounds(3, 7)
PERIPHERAL_DARKNESS_BOUNDS = Bounds(10, 60)
MAGNIFICATION_BOUNDS = Bounds(1.25, 1.5)
LETTER_SPACING_BOUNDS = Bounds(25, 35)
LINE_SPACING_BOUNDS = Bounds(1.5, 2.0)
SCROLL_DURATION_BOUNDS = Bounds(200, 500)

FIXATION_STABILITY_BOUNDS = Bounds(0, 100)

# ---------------------------------------------------------------------------
# Factory defaults
# ---------------------------------------------------------------------------

DEFAULT_LINE_WINDOW_SIZE = 5
DEFAULT_PERIPHERAL_DARKNESS = 20
DEFAULT_MAGNIFICATION = 1.3
DEFAULT_LETTER_SPACING = 30
DEFAULT_LINE_SPACING = 1.75
DEFAULT_SCROLL_DURATION_MS = 300

DEFAULT_FIXATION_STABILITY = 50
DEFAULT_CROWDING_THRESHOLD = 30
DEFAULT_SACCADE_AMPLITUDE = 15

# Choices offered by the saccade step of the calibration wizard
SACCADE_AMPLITUDE_CHOICES = (10, 15, 20)

# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

LOW_VISION_MAGNIFICATION_FACTOR = 1.7
LOW_VISION_LINE_WINDOW = 3
LOW_VISION_LETTER_SPACING = 35
LOW_VISION_LINE_SPACING = 2.0
LOW_VISION_DARKNESS = 40

ACADEMIC_LINE_WINDOW = 7
ACADEMIC_LETTER_SPACING = 25
ACADEMIC_LINE_SPACING = 1.5
ACADEMIC_SCROLL_DURATION_MS = 400

# ---------------------------------------------------------------------------
# Calibration derivation
# ---------------------------------------------------------------------------

MAGNIFICATION_PER_AMPLITUDE = 0.01
LETTER_SPACING_PER_CROWDING = 0.5

LOW_STABILITY_THRESHOLD = 70
LOW_STABILITY_SCROLL_DURATION_MS = 400

HIGH_CROWDING_THRESHOLD = 50
HIGH_CROWDING_SPACING_FACTOR = 0.7
HIGH_CROWDING_MIN_LETTER_SPACING = 35
HIGH_CROWDING_LINE_SPACING = 2.0

SHORT_SACCADE_AMPLITUDE = 3
LONG_SACCADE_AMPLITUDE = 5

# ---------------------------------------------------------------------------
# Neural adaptation (linear projections over the adaptation period)
# ---------------------------------------------------------------------------

ADAPTATION_PERIOD_DAYS = 28

ADAPTATION_LINE_WINDOW = Bounds(3, 7)  # grows
ADAPTATION_DARKNESS = Bounds(10, 20)  # shrinks
ADAPTATION_LETTER_SPACING = Bounds(25, 30)  # shrinks

# ---------------------------------------------------------------------------
# Compositor
# ---------------------------------------------------------------------------

DARK_PALETTE = Palette(foreground="#E6E6E6", background="#121212")
LIGHT_PALETTE = Palette(foreground="#121212", background="#FFFFFF")

STABILIZER_WIDTH_PERCENT = 15
STABILIZER_TOP_PERCENT = 50
STABILIZER_COLOR = "#3B82F6"

# Each salient line occupies this share of the viewport height (percent)
LINE_BAND_PERCENT_PER_LINE = 5
