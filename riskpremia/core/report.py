"""
Human-readable desired-positions report for manual review.

Example output:

    ######
    DESIRED POSITIONS
    Data up to and including 30- 7-2020
    GLD: 150 shares @ 183.76
    TLT: 188 shares @ 171.11
    VTI: 88 shares @ 164.68
    ######
"""
from typing import List

from riskpremia.core.engine import DailyDecision

REPORT_RULE = "######"


def format_desired_positions(decision: DailyDecision) -> str:
    """
    Render target shares and reference prices for a decision.

    Warm-up decisions produce a short note instead of positions.
    """
    day = decision.trading_day.date
    lines: List[str] = [
        REPORT_RULE,
        "DESIRED POSITIONS",
        f"Data up to and including {day.day:2d}-{day.month:2d}-{day.year:4d}",
    ]

    if decision.is_warmup:
        lines.append("Warm-up period: not enough price history yet")
    else:
        for instrument in decision.instruments:
            lines.append(
                f"{instrument.symbol}: {instrument.target_position} shares @ {instrument.price:.2f}"
            )

    lines.append(REPORT_RULE)
    return "\n".join(lines)
