"""
Run Phase Enumeration - Lifecycle phases of a daily evaluation.

This module provides the RunPhase enum passed explicitly into every core
entry point, instead of querying ambient runtime flags.

- WARMUP: not enough price history yet; no decisions, no diagnostics
- PREVIEW: compute and report target positions, submit nothing
- LIVE: compute, report, and emit trade instructions
"""

from enum import Enum


class RunPhase(Enum):
    """
    Lifecycle phase enumeration.

    Usage:
        from riskpremia.live.mode import RunPhase

        phase = RunPhase.from_string("preview")
        decision = engine.evaluate_day(..., phase=phase)
        if phase.is_live:
            submitter.submit(decision.instructions, decision.prices)
    """

    WARMUP = "warmup"
    PREVIEW = "preview"
    LIVE = "live"

    @classmethod
    def from_string(cls, value: str) -> 'RunPhase':
        """
        Parse RunPhase from string value.

        Args:
            value: Phase string ("warmup", "preview", "live" or an alias)

        Returns:
            RunPhase enum value

        Raises:
            ValueError: If value is not a valid phase string

        Examples:
            >>> RunPhase.from_string("dry-run")
            <RunPhase.PREVIEW: 'preview'>

            >>> RunPhase.from_string("trade")
            <RunPhase.LIVE: 'live'>
        """
        normalized = value.lower().strip().replace("-", "_").replace(" ", "_")

        phase_map = {
            "warmup": cls.WARMUP,
            "warm_up": cls.WARMUP,
            "lookback": cls.WARMUP,
            "preview": cls.PREVIEW,
            "test": cls.PREVIEW,
            "dry_run": cls.PREVIEW,
            "dryrun": cls.PREVIEW,
            "simulation": cls.PREVIEW,
            "live": cls.LIVE,
            "trade": cls.LIVE,
        }

        if normalized in phase_map:
            return phase_map[normalized]

        raise ValueError(
            f"Invalid run phase: '{value}'. "
            f"Valid values: {list(phase_map.keys())}"
        )

    @property
    def is_warmup(self) -> bool:
        return self == RunPhase.WARMUP

    @property
    def is_preview(self) -> bool:
        return self == RunPhase.PREVIEW

    @property
    def is_live(self) -> bool:
        return self == RunPhase.LIVE

    def __str__(self) -> str:
        return self.value.title()
