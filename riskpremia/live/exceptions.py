"""
Live Trading Exceptions - Conditions that abort a daily run.

The core never raises these; they are raised by the harness when the
day's inputs are incomplete or a collaborator fails, so the core is
never invoked with bad data.
"""


class CriticalFailure(Exception):
    """
    Critical failure that requires aborting the daily run.

    Raised when it is unsafe to evaluate or trade today.
    """
    pass


class MissingMarketData(CriticalFailure):
    """
    Required market data is missing.

    Raised when a configured symbol has no bars, or no bar for the
    evaluation date.
    """
    pass


class StaleMarketData(CriticalFailure):
    """
    Latest bar is older than the evaluation date.

    Raised when the data provider has not yet published today's close.
    """
    pass


class OrderSubmissionError(CriticalFailure):
    """
    Order submission failed.

    Raised by order submitters when the broker rejects or cannot receive
    an instruction. Retrying is the submitter's concern.
    """
    pass
