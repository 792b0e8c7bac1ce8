'''Backbone config class and caller-side input validation.'''

from __future__ import annotations
# standard imports
import dataclasses
import typing
# local imports
import posenet_backbone.errors as errors
import posenet_backbone.models.architecture as architecture

# ----------------------------------Constants----------------------------------
VALID_OUTPUT_STRIDES = (8, 16, 32)

# -------------------------------Public Function-------------------------------
def assert_valid_output_stride(output_stride: typing.Any) -> None:
    '''Raise unless `output_stride` is one of 8, 16 or 32.'''

    if isinstance(output_stride, bool) or not isinstance(output_stride, int):
        raise errors.InvalidConfiguration(
            f'outputStride is not a number: {output_stride!r}'
        )
    if output_stride not in VALID_OUTPUT_STRIDES:
        raise errors.InvalidConfiguration(
            f'outputStride of {output_stride} is invalid. '
            'It must be either 8, 16, or 32'
        )

def assert_valid_resolution(resolution: typing.Any, output_stride: int) -> None:
    '''Raise unless `(resolution - 1)` is a multiple of `output_stride`.'''

    if isinstance(resolution, bool) or not isinstance(resolution, int):
        raise errors.InvalidConfiguration(
            f'resolution is not a number: {resolution!r}'
        )
    if resolution < 1 or (resolution - 1) % output_stride != 0:
        raise errors.InvalidConfiguration(
            f'resolution of {resolution} is invalid for output stride '
            f'{output_stride}.'
        )

# ---------------------------model general configuration-----------------------
@dataclasses.dataclass(frozen=True)
class ModelConfig:
    '''Variant, output stride and input size of a backbone instance.'''
    multiplier: float = 1.0
    output_stride: int = 16
    input_resolution: int = 257
    concurrent_heads: bool = False

    def __post_init__(self):
        architecture.multiplier_key(self.multiplier)
        assert_valid_output_stride(self.output_stride)
        assert_valid_resolution(self.input_resolution, self.output_stride)

    @property
    def definitions(self) -> architecture.Architecture:
        '''Convolution definitions of the configured variant.'''
        return architecture.get_architecture(self.multiplier)
