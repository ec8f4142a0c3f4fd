class GameError(Exception):
    """Base class for errors raised by the tile1024 core"""


class InvalidArgument(GameError, ValueError):
    """A caller passed a value the core does not accept, e.g. an unknown direction"""


class InvalidState(GameError, ValueError):
    """A grid or controller is in a shape the core cannot work with"""
