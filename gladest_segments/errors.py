class GladestError(Exception):
    """Base class for errors raised by gladest-markdown"""


class ConfigurationError(GladestError, ValueError):
    """Invalid or contradictory user configuration, raised at session setup"""


class RenderEngineError(GladestError):
    """A render capability could not be reached or crashed"""
