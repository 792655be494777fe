"""
Configuration errors for ice rink refrigeration systems

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""


class ConfigurationError(ValueError):
    """
    Unrecoverable configuration failure.

    Raised when a refrigeration system was never correctly configured
    (unset inlet node, unknown control mode, brine concentration outside
    the supported range, degenerate surface coupling, ...). The same
    condition would recur identically at every timestep, so the run must stop.

    Attributes:
        system_name: Name of the offending refrigeration system, if known
    """

    def __init__(self, message: str, system_name: str = ""):
        self.system_name = system_name
        if system_name:
            message = f"{message} (system: {system_name})"
        super().__init__(message)
