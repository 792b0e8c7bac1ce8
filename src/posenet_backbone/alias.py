'''Project-wide type aliases and lazy imports for type checking.'''

# standard imports
import typing
# third-party imports
import numpy
import torch

# typing aliases
# generic
ConfigType: typing.TypeAlias = typing.Mapping[str, typing.Any]
'''
Generic string-keyed config mapping, e.g., from omega dict.
'''
# tensors
Tensor: typing.TypeAlias = torch.Tensor
TensorDict: typing.TypeAlias = dict[str, Tensor]
ImageLike: typing.TypeAlias = Tensor | numpy.ndarray
'''
An (H, W, 3) image with pixel values in [0, 255], either as a torch
tensor or a numpy array (any numeric dtype).
'''
