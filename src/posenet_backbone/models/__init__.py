'''
Top-level namespace for `posenet_backbone.models`.

Exposes selected public functions via lazy resolution to keep import
order simple and circular-free.
'''

from __future__ import annotations
import importlib
import typing

__all__ = [
    # classes
    'BaseModel',
    'ConvType',
    'ConvolutionDefinition',
    'Layer',
    'MappingWeights',
    'MobileNet',
    'ModelConfig',
    'WeightProvider',
    # functions
    'assert_valid_output_stride',
    'assert_valid_resolution',
    'build_mobilenet',
    'build_model_config',
    'get_architecture',
    'load_weights',
    'to_output_strided_layers',
    # types
    'Architecture',
]

# for static check
if typing.TYPE_CHECKING:
    from .architecture import (
        Architecture,
        ConvType,
        ConvolutionDefinition,
        get_architecture,
    )
    from .base import BaseModel
    from .config import (
        ModelConfig,
        assert_valid_output_stride,
        assert_valid_resolution,
    )
    from .factory import build_mobilenet, build_model_config
    from .layering import Layer, to_output_strided_layers
    from .mobilenet import MobileNet
    from .weights import MappingWeights, WeightProvider, load_weights

def __getattr__(name: str):

    if name in ['Architecture', 'ConvType', 'ConvolutionDefinition',
                'get_architecture']:
        return getattr(importlib.import_module('.architecture', __package__), name)
    if name in ['BaseModel']:
        return getattr(importlib.import_module('.base', __package__), name)
    if name in ['ModelConfig', 'assert_valid_output_stride',
                'assert_valid_resolution']:
        return getattr(importlib.import_module('.config', __package__), name)
    if name in ['build_mobilenet', 'build_model_config']:
        return getattr(importlib.import_module('.factory', __package__), name)
    if name in ['Layer', 'to_output_strided_layers']:
        return getattr(importlib.import_module('.layering', __package__), name)
    if name in ['MobileNet']:
        return getattr(importlib.import_module('.mobilenet', __package__), name)
    if name in ['MappingWeights', 'WeightProvider', 'load_weights']:
        return getattr(importlib.import_module('.weights', __package__), name)

    raise AttributeError(name)
