'''
Output-stride layering of a MobileNet architecture table.

Converts the nominal stage strides of an architecture into execution
parameters that produce activations with a target output stride. Once
the running product of strides reaches the target, later stages run
with stride 1 and compensate through atrous convolution: the rate of
each following stage grows by the stride that was not applied, keeping
the receptive field growing as the real stride would have.
'''

# standard imports
import dataclasses
import typing
# local imports
import posenet_backbone.models.architecture as architecture

# ---------------------------------Public Type---------------------------------
@dataclasses.dataclass(frozen=True)
class Layer:
    '''Execution parameters of one stage for a given output stride.'''
    block_id: int
    conv_type: architecture.ConvType
    stride: int         # stride applied when executing the stage
    rate: int           # atrous (dilation) rate
    output_stride: int  # cumulative stride of the stage's activations

# -------------------------------Public Function-------------------------------
def to_output_strided_layers(
        convolution_definitions: typing.Sequence[
            architecture.ConvolutionDefinition
        ],
        output_stride: int
    ) -> tuple[Layer, ...]:
    '''
    Derive per-stage layers that reach exactly `output_stride`.

    Args:
        convolution_definitions: Ordered stage definitions of a network.
        output_stride: Target downsampling factor. Callers pass a
            validated value (8, 16 or 32); an unreachable target leaves
            every stage at its nominal stride.

    Returns:
        tuple: One `Layer` per definition, in order.
    '''

    # running product of applied strides
    current_stride = 1
    # atrous rate handed to the next saturated stage
    rate = 1

    layers = []
    for block_id, (conv_type, stride) in enumerate(convolution_definitions):
        if current_stride == output_stride:
            # target reached: keep resolution, dilate instead
            layer_stride = 1
            layer_rate = rate
            rate *= stride
        else:
            layer_stride = stride
            layer_rate = 1
            current_stride *= stride

        layers.append(Layer(
            block_id=block_id,
            conv_type=conv_type,
            stride=layer_stride,
            rate=layer_rate,
            output_stride=current_stride
        ))
    return tuple(layers)

def describe_layers(layers: typing.Iterable[Layer]) -> list[str]:
    '''Format a layer plan as one line per stage for logging.'''

    return [
        f'block {layer.block_id:>2}: '
        f'{getattr(layer.conv_type, "value", layer.conv_type)!s:<13} '
        f'stride={layer.stride} rate={layer.rate} '
        f'output_stride={layer.output_stride}'
        for layer in layers
    ]
