'''
Top-level namespace for `posenet_backbone`.

Exposes selected public functions via lazy resolution to keep import
order simple and circular-free.
'''

from __future__ import annotations
import importlib
import typing

__all__ = [
    # classes
    'MobileNet',
    'ModelConfig',
    # functions
    'build_mobilenet',
    # types
]

# for static check
if typing.TYPE_CHECKING:
    from .models import MobileNet, ModelConfig, build_mobilenet

def __getattr__(name: str):

    if name in ['MobileNet', 'ModelConfig', 'build_mobilenet']:
        return getattr(importlib.import_module('.models', __package__), name)
    raise AttributeError(name)
