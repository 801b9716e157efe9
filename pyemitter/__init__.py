from pyemitter.config import ConfigType
from pyemitter.lib.events import Emitter, InvalidArgument
from pyemitter.version import __version__

PACKAGE = __package__
VERSION = __version__

__all__ = [
    "VERSION",
    "PACKAGE",
    ConfigType.__name__,
    Emitter.__name__,
    InvalidArgument.__name__,
]
