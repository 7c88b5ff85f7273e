"""
Error taxonomy of the spirograph model.

Configuration errors reject a user edit and leave the prior state in place.
Contract violations signal a bug in the caller (e.g. a tick source handing
in negative elapsed time).
"""


class SpiroError(Exception):
    """Base class for all errors raised by the spirograph model."""


class GearConfigurationError(SpiroError, ValueError):
    """An edit would produce an impossible gear/pen configuration."""


class ContractViolationError(SpiroError, ValueError):
    """A collaborator called the model with arguments outside its contract."""
