"""
Policy resolver choosing the slot strategy for a practitioner/service pair.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..config import PolicyOverride, SlotPolicyConfig, StrategyName
from ..domain.slot_strategies import (
    DynamicDurationSlotStrategy,
    FixedIntervalSlotStrategy,
    SlotGenerationStrategy,
)

logger = logging.getLogger(__name__)


def build_strategy(
    name: StrategyName,
    interval_minutes: int,
) -> SlotGenerationStrategy:
    """Instantiate the strategy registered under ``name``."""
    if name is StrategyName.FIXED_INTERVAL:
        return FixedIntervalSlotStrategy(interval_minutes=interval_minutes)
    if name is StrategyName.DYNAMIC_DURATION:
        return DynamicDurationSlotStrategy()
    raise ValueError(f"Unknown slot strategy: {name!r}")


class StrategyResolver:
    """
    Resolve exactly one strategy per practitioner/service pair.

    The most specific matching override wins; ties go to the override listed
    first. Without a match the configured default applies. Strategies are
    stateless, so instances are shared per (strategy, cadence).
    """

    def __init__(self, policy: SlotPolicyConfig) -> None:
        self._policy = policy
        self._instances: Dict[Tuple[StrategyName, int], SlotGenerationStrategy] = {}

    def resolve(
        self,
        practitioner_id: str,
        service_id: Optional[str] = None,
    ) -> SlotGenerationStrategy:
        override = self._find_override(practitioner_id, service_id)

        if override is None:
            name = self._policy.default_strategy
            interval = self._policy.interval_minutes
        else:
            name = override.strategy
            interval = override.interval_minutes or self._policy.interval_minutes

        # Cadence is irrelevant for back-to-back generation.
        if name is StrategyName.DYNAMIC_DURATION:
            interval = 0

        key = (name, interval)
        if key not in self._instances:
            self._instances[key] = build_strategy(name, interval)

        strategy = self._instances[key]
        logger.debug(
            "Resolved %r for practitioner=%s service=%s",
            strategy,
            practitioner_id,
            service_id,
        )
        return strategy

    def _find_override(
        self,
        practitioner_id: str,
        service_id: Optional[str],
    ) -> Optional[PolicyOverride]:
        best: Optional[PolicyOverride] = None

        for override in self._policy.overrides:
            if not override.matches(practitioner_id, service_id):
                continue
            if best is None or override.specificity() > best.specificity():
                best = override

        return best
