'''
Convolution primitives with TensorFlow `same` padding semantics.

**Overview**
`torch.nn.functional.conv2d` only accepts `padding='same'` for stride 1,
and pads symmetrically. Checkpoints of this network were produced with
TensorFlow, whose `same` padding gives an output size of
`ceil(in / stride)` and puts the odd extra pixel after (bottom/right).
The helpers here pad explicitly to reproduce that.

**Expected tensor shapes**
- Activations are 4D tensors: (N, C, H, W).
- Weights follow the torch layouts documented in
  `posenet_backbone.models.weights`.
'''

# third-party imports
import torch
import torch.nn.functional
# local imports
import posenet_backbone.alias as alias

# -------------------------------Public Function-------------------------------
def same_padding(
        size: int,
        kernel: int,
        stride: int,
        dilation: int
    ) -> tuple[int, int]:
    '''Return (before, after) padding for one spatial dimension.'''

    out = -(-size // stride) # ceil division
    effective = (kernel - 1) * dilation + 1
    total = max((out - 1) * stride + effective - size, 0)
    return total // 2, total - total // 2

def pad_same(
        x: alias.Tensor,
        kernel: tuple[int, int],
        stride: int,
        dilation: int
    ) -> alias.Tensor:
    '''Zero-pad an (N, C, H, W) tensor for a `same` convolution.'''

    top, bottom = same_padding(x.shape[-2], kernel[0], stride, dilation)
    left, right = same_padding(x.shape[-1], kernel[1], stride, dilation)
    if top == bottom == left == right == 0:
        return x
    return torch.nn.functional.pad(x, (left, right, top, bottom))

def conv2d_same(
        x: alias.Tensor,
        weight: alias.Tensor,
        bias: alias.Tensor | None=None,
        stride: int=1,
        dilation: int=1,
        groups: int=1
    ) -> alias.Tensor:
    '''Convolution with TensorFlow `same` padding.'''

    kernel = (weight.shape[-2], weight.shape[-1])
    x = pad_same(x, kernel, stride, dilation)
    return torch.nn.functional.conv2d(
        x, weight, bias, stride=stride, dilation=dilation, groups=groups
    )

def depthwise_conv2d_same(
        x: alias.Tensor,
        weight: alias.Tensor,
        bias: alias.Tensor | None=None,
        stride: int=1,
        dilation: int=1
    ) -> alias.Tensor:
    '''Depthwise convolution; weight is (C_in * M, 1, kH, kW).'''

    return conv2d_same(
        x, weight, bias, stride=stride, dilation=dilation, groups=x.shape[1]
    )

def relu6(x: alias.Tensor) -> alias.Tensor:
    '''Bounded rectifier clipping activations to [0, 6].'''
    return torch.clamp(x, 0.0, 6.0)
