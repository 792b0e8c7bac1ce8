'''Simple top-level namespace for `posenet_backbone.utils`.'''

from .cfg_access import (
    ConfigAccess,
    ConfigAccessError,
    ConfigKeyError,
    ConfigTypeError,
)
from .funcs import get_timestamp
from .logger import Logger
from .multip import ParallelExecutor

__all__ = [
    # classes
    'ConfigAccess',
    'ConfigAccessError',
    'ConfigKeyError',
    'ConfigTypeError',
    'Logger',
    'ParallelExecutor',
    # functions
    'get_timestamp',
    # types
]
