class WorldviewError(Exception):
    """base class for tracking engine errors"""


class TransportError(WorldviewError):
    """network or http failure talking to a live source"""


class EmptyResultError(WorldviewError):
    """well-formed response that carried no usable entities"""


class ConfigurationError(WorldviewError):
    """malformed setting or degenerate bounding box"""
