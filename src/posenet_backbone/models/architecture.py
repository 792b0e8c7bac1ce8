'''
Fixed MobileNet architecture tables for the PoseNet backbone.

**Overview**
Each supported depth multiplier maps to an ordered sequence of
convolution stages. A stage is a `ConvolutionDefinition` pair of
convolution kind and nominal stride; its index in the table is the
stage's `block_id` and keys its weights (`Conv2d_{block_id}...`).

**Notes**
- Every table starts with a plain `conv2d` stage followed by depthwise
  separable stages.
- The 0.75 and 0.50 tables drop the stride of stage 12 so their
  cumulative stride tops out at 16; 0.25 reuses the 0.50 table.
- Channel widths are not part of the table. `stage_channels` gives the
  widths the published checkpoints use, mainly to synthesize weights.
'''

# standard imports
import enum
import math
import typing
# local imports
import posenet_backbone.errors as errors

# ---------------------------------Public Type---------------------------------
class ConvType(str, enum.Enum):
    '''Convolution kinds a stage can execute.'''
    CONV2D = 'conv2d'
    SEPARABLE_CONV = 'separableConv'


class ConvolutionDefinition(typing.NamedTuple):
    '''One network stage: convolution kind and nominal stride.'''
    conv_type: ConvType
    stride: int


Architecture: typing.TypeAlias = tuple[ConvolutionDefinition, ...]

# ----------------------------------Constants----------------------------------
_C = ConvType.CONV2D
_S = ConvType.SEPARABLE_CONV

MOBILENET_100: Architecture = tuple(ConvolutionDefinition(*d) for d in [
    (_C, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 2),
    (_S, 1),
])

MOBILENET_75: Architecture = tuple(ConvolutionDefinition(*d) for d in [
    (_C, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
])

MOBILENET_50: Architecture = tuple(ConvolutionDefinition(*d) for d in [
    (_C, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 2),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
    (_S, 1),
])

MOBILENET_25: Architecture = MOBILENET_50

# keyed by multiplier in percent
MOBILENET_ARCHITECTURES: dict[int, Architecture] = {
    100: MOBILENET_100,
    75: MOBILENET_75,
    50: MOBILENET_50,
    25: MOBILENET_25,
}

# base output channels per stage at multiplier 1.0
MOBILENET_DEPTHS: tuple[int, ...] = (
    32, 64, 128, 128, 256, 256, 512, 512, 512, 512, 512, 512, 1024, 1024
)
MIN_DEPTH = 8

# -------------------------------Public Function-------------------------------
def multiplier_key(multiplier: float | int) -> int:
    '''
    Normalize a multiplier selector to its percent key.

    Both fractional (`0.75`) and percent (`75`) forms are accepted.
    Raises `UnknownVariant` for anything outside the supported set.
    '''

    if isinstance(multiplier, bool) or \
        not isinstance(multiplier, (int, float)):
        raise errors.UnknownVariant(
            f'Multiplier must be a number, got {multiplier!r}'
        )
    key = multiplier * 100 if multiplier <= 1 else multiplier
    for k in MOBILENET_ARCHITECTURES:
        if math.isclose(key, k):
            return k
    raise errors.UnknownVariant(
        f'Multiplier of {multiplier} is invalid. '
        f'It must be one of {sorted(k / 100 for k in MOBILENET_ARCHITECTURES)}'
    )

def get_architecture(multiplier: float | int) -> Architecture:
    '''Return the convolution definitions for a depth multiplier.'''

    return MOBILENET_ARCHITECTURES[multiplier_key(multiplier)]

def stage_channels(multiplier: float | int) -> tuple[int, ...]:
    '''Output channel count of every stage for a depth multiplier.'''

    scale = multiplier_key(multiplier) / 100
    return tuple(max(int(d * scale), MIN_DEPTH) for d in MOBILENET_DEPTHS)
