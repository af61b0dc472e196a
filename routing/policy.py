"""
Purpose: Central configuration for ETA estimation.
What it does:

Stores the tunable parameters of the constant-speed ETA model:

AVERAGE_SPEED_KMH = 30
STOP_DURATION_MINUTES = 5
MIN_CONFIDENCE = 0.5

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class EtaPolicy:
    """
    Central configuration for arrival estimates.
    """

    # --- Speed model ---
    # Constant average vehicle speed; no live traffic.
    average_speed_kmh: float = 30.0

    # --- Dwell time ---
    # Minutes the shuttle waits at every stop after the first one.
    stop_duration_minutes: float = 5.0

    # --- Confidence decay ---
    # confidence(i) = max(min_confidence, 1 - (i / n) * confidence_decay)
    min_confidence: float = 0.5
    confidence_decay: float = 0.5

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.average_speed_kmh <= 0:
            raise ValueError("average_speed_kmh must be > 0")

        if self.stop_duration_minutes < 0:
            raise ValueError("stop_duration_minutes must be >= 0")

        if not 0 < self.min_confidence <= 1:
            raise ValueError("min_confidence must be in (0, 1]")

        if not 0 <= self.confidence_decay <= 1:
            raise ValueError("confidence_decay must be in [0, 1]")


def default_eta_policy() -> EtaPolicy:
    """
    Convenience factory for the default policy.
    """
    p = EtaPolicy()
    p.validate()
    return p


def eta_policy_from_env() -> EtaPolicy:
    """
    Policy with overrides read from the environment (or a .env file).

    Example in .env:
    ROUTE_AVERAGE_SPEED_KMH=25
    ROUTE_STOP_DURATION_MINUTES=3
    """
    load_dotenv()
    defaults = EtaPolicy()
    p = EtaPolicy(
        average_speed_kmh=float(os.getenv("ROUTE_AVERAGE_SPEED_KMH", defaults.average_speed_kmh)),
        stop_duration_minutes=float(os.getenv("ROUTE_STOP_DURATION_MINUTES", defaults.stop_duration_minutes)),
        min_confidence=float(os.getenv("ROUTE_ETA_MIN_CONFIDENCE", defaults.min_confidence)),
        confidence_decay=float(os.getenv("ROUTE_ETA_CONFIDENCE_DECAY", defaults.confidence_decay)),
    )
    p.validate()
    return p
