"""Haptics adapter for hosts without a vibration device."""

from __future__ import annotations

import logging

from neuro_reader.domain.ports.haptics_port import HapticPattern, HapticsPort

logger = logging.getLogger(__name__)


class NullHaptics(HapticsPort):
    """Reports haptics as unsupported; never raises."""

    def pulse(self, pattern: HapticPattern) -> bool:
        logger.debug("Haptic pulse %s skipped: no device", pattern)
        return False
