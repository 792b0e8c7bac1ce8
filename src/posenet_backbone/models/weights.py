'''
Weight provider capability and an in-memory implementation.

**Overview**
The forward pass borrows named weight and bias tensors from a
`WeightProvider` for the duration of one prediction. Names are derived
from the stage `block_id` and sub-layer role:

- `Conv2d_{id}`: plain convolution stage.
- `Conv2d_{id}_depthwise` / `Conv2d_{id}_pointwise`: the two halves of a
  separable stage.
- `heatmap_2`, `offset_2`, `displacement_fwd_2`, `displacement_bwd_2`:
  the output projections.

**Expected tensor layouts (torch-native)**
- Plain / pointwise weights: (C_out, C_in, kH, kW).
- Depthwise weights: (C_in * M, 1, kH, kW), used with `groups=C_in`.
- Biases: (C_out,).

`MappingWeights.from_tf_layout` converts checkpoints exported in
TensorFlow layout: (kH, kW, C_in, C_out) and (kH, kW, C_in, M).
'''

# standard imports
import abc
import os
import typing
# third-party imports
import numpy
import torch
# local imports
import posenet_backbone.alias as alias
import posenet_backbone.errors as errors

# ----------------------------------Constants----------------------------------
# output head name -> weight layer name
HEAD_LAYERS: dict[str, str] = {
    'heatmapScores': 'heatmap_2',
    'offsets': 'offset_2',
    'displacementFwd': 'displacement_fwd_2',
    'displacementBwd': 'displacement_bwd_2',
}

DEFAULT_PREFIX = 'MobilenetV1'

# -------------------------------Public Function-------------------------------
def conv_name(block_id: int) -> str:
    '''Weight name of a plain convolution stage.'''
    return f'Conv2d_{block_id}'

def depthwise_name(block_id: int) -> str:
    '''Weight name of the depthwise half of a separable stage.'''
    return f'Conv2d_{block_id}_depthwise'

def pointwise_name(block_id: int) -> str:
    '''Weight name of the pointwise half of a separable stage.'''
    return f'Conv2d_{block_id}_pointwise'

def load_weights(
        fpath: str | os.PathLike,
        prefix: str=DEFAULT_PREFIX,
        tf_layout: bool=False
    ) -> 'MappingWeights':
    '''
    Load a serialized `{name: tensor}` mapping saved with `torch.save`.

    Args:
        fpath: Path to the saved mapping.
        prefix: Namespace prepended to every layer name in the file.
        tf_layout: Whether the weights are stored in TensorFlow layout.
    '''

    state = torch.load(fpath, map_location='cpu', weights_only=True)
    if not isinstance(state, typing.Mapping):
        raise TypeError(f'{fpath} does not hold a name-to-tensor mapping')
    if tf_layout:
        return MappingWeights.from_tf_layout(state, prefix=prefix)
    return MappingWeights(state, prefix=prefix)

# ---------------------------------Public Type---------------------------------
class WeightProvider(metaclass=abc.ABCMeta):
    '''
    Contract for anything that supplies named weights to the backbone.
    Lookups of unknown names must raise `errors.MissingWeight`. Tensors
    are read, never mutated, by inference.
    '''

    @abc.abstractmethod
    def weights(self, layer_name: str) -> alias.Tensor:
        '''4D weight of a plain or pointwise convolution.'''

    @abc.abstractmethod
    def conv_bias(self, layer_name: str) -> alias.Tensor:
        '''1D bias of a plain or pointwise convolution.'''

    @abc.abstractmethod
    def depthwise_weights(self, layer_name: str) -> alias.Tensor:
        '''4D weight of a depthwise convolution.'''

    @abc.abstractmethod
    def depthwise_bias(self, layer_name: str) -> alias.Tensor:
        '''1D bias of a depthwise convolution.'''

    @abc.abstractmethod
    def dispose(self) -> None:
        '''Release any resources held by the provider.'''


class MappingWeights(WeightProvider):
    '''
    Weight provider over a flat `{name: tensor}` mapping.

    Stored names follow `{prefix}/{layer}/{role}` with role one of
    `weights`, `depthwise_weights` or `biases` (shared by plain and
    depthwise layers). An empty prefix drops the leading namespace.
    '''

    def __init__(
            self,
            tensors: typing.Mapping[str, alias.Tensor | numpy.ndarray],
            prefix: str=DEFAULT_PREFIX
        ):
        self.prefix = prefix
        self._tensors: alias.TensorDict = {
            k: torch.as_tensor(v, dtype=torch.float32)
            for k, v in tensors.items()
        }

    @classmethod
    def from_tf_layout(
            cls,
            tensors: typing.Mapping[str, alias.Tensor | numpy.ndarray],
            prefix: str=DEFAULT_PREFIX
        ) -> 'MappingWeights':
        '''Build from weights stored in TensorFlow kernel layout.'''

        converted: alias.TensorDict = {}
        for name, value in tensors.items():
            t = torch.as_tensor(value, dtype=torch.float32)
            if name.endswith('/depthwise_weights'):
                # (kH, kW, C_in, M) -> (C_in * M, 1, kH, kW)
                kh, kw, c_in, m = t.shape
                t = t.permute(2, 3, 0, 1).reshape(c_in * m, 1, kh, kw)
            elif name.endswith('/weights'):
                # (kH, kW, C_in, C_out) -> (C_out, C_in, kH, kW)
                t = t.permute(3, 2, 0, 1)
            converted[name] = t.contiguous()
        return cls(converted, prefix=prefix)

    def weights(self, layer_name: str) -> alias.Tensor:
        return self._get(layer_name, 'weights')

    def conv_bias(self, layer_name: str) -> alias.Tensor:
        return self._get(layer_name, 'biases')

    def depthwise_weights(self, layer_name: str) -> alias.Tensor:
        return self._get(layer_name, 'depthwise_weights')

    def depthwise_bias(self, layer_name: str) -> alias.Tensor:
        return self._get(layer_name, 'biases')

    def keys(self) -> list[str]:
        '''Stored tensor names.'''
        return list(self._tensors)

    def dispose(self) -> None:
        self._tensors.clear()

    def key(self, layer_name: str, role: str) -> str:
        '''Full stored name of a layer's tensor.'''
        if self.prefix:
            return f'{self.prefix}/{layer_name}/{role}'
        return f'{layer_name}/{role}'

    def _get(self, layer_name: str, role: str) -> alias.Tensor:
        name = self.key(layer_name, role)
        try:
            return self._tensors[name]
        except KeyError:
            raise errors.MissingWeight(name) from None
