'''
MobileNet feature backbone for PoseNet keypoint detection.

**Overview**\n
Runs one inference pass of a MobileNet v1 body configured for a target
output stride, then projects the final features through four 1x1
output heads:

- `heatmapScores`: per-keypoint part scores (sigmoid applied).
- `offsets`: sub-cell keypoint offsets.
- `displacementFwd` / `displacementBwd`: edge displacement fields along
  the pose skeleton.

The layer plan comes from `layering.to_output_strided_layers`; stages
past the target stride run at stride 1 with atrous convolution. The
forward pass folds the activation through the plan with
`functools.reduce`, so only the current activation is ever referenced.

**Expected tensor shapes**
- Input: (H, W, 3) with pixel values in [0, 255].
- Outputs: (H_out, W_out, C_head) where H_out and W_out follow the
  TensorFlow `same` size rule, e.g. 17x17 for a 257 input at stride 16.

**Notes**
- The model keeps no state between calls; `predict` is deterministic
  for fixed weights and input.
- Weights are borrowed from the provider, never copied or mutated.
'''

# standard imports
import functools
import math
import typing
# third-party imports
import numpy
import torch
# local imports
import posenet_backbone.alias as alias
import posenet_backbone.errors as errors
import posenet_backbone.models.architecture as architecture
import posenet_backbone.models.base as base
import posenet_backbone.models.layering as layering
import posenet_backbone.models.ops as ops
import posenet_backbone.models.weights as weights
import posenet_backbone.utils as utils

class MobileNet(base.BaseModel):
    '''
    Stride-configurable MobileNet backbone with PoseNet output heads.

    **Components**
    - layers: immutable per-stage execution plan (stride, atrous rate).
    - model_weights: provider supplying every stage and head tensor.

    **Notes**
    - Head projections are independent and may run on a thread pool
      when `concurrent_heads` is set.
    '''

    PREPROCESS_DIVISOR = 255.0 / 2

    def __init__(
            self,
            model_weights: weights.WeightProvider,
            convolution_definitions: typing.Sequence[
                architecture.ConvolutionDefinition
            ],
            output_stride: int,
            concurrent_heads: bool=False,
            logger: utils.Logger | None=None
        ):
        '''
        Initialize the backbone.

        Args:
            model_weights: Provider of the named weights.
            convolution_definitions: Architecture table of the variant.
            output_stride: Validated target output stride.
            concurrent_heads: Run the four heads on a thread pool.
            logger: Optional logger; receives the layer plan at debug.
        '''

        self.model_weights = model_weights
        self.convolution_definitions = tuple(convolution_definitions)
        self.output_stride = output_stride
        self.concurrent_heads = concurrent_heads
        self.logger = logger.get_child('mobilenet') if logger else None

        # layer plan depends only on architecture and output stride
        self.layers = layering.to_output_strided_layers(
            self.convolution_definitions, output_stride
        )
        self._log('debug', f'Layer plan at output stride {output_stride}:')
        for line in layering.describe_layers(self.layers):
            self._log('debug', line)

        # per-kind stage executors
        self._executors: dict[
            architecture.ConvType,
            typing.Callable[[alias.Tensor, layering.Layer], alias.Tensor]
        ] = {
            architecture.ConvType.CONV2D: self._conv,
            architecture.ConvType.SEPARABLE_CONV: self._separable_conv,
        }

    @torch.inference_mode()
    def predict(self, image: alias.ImageLike) -> alias.TensorDict:
        '''
        Run the backbone and output heads on one image.

        Args:
            image: (H, W, 3) pixels in [0, 255].

        Returns:
            dict: `heatmapScores`, `offsets`, `displacementFwd` and
                `displacementBwd`, each (H_out, W_out, C).
        '''

        preprocessed = self.preprocess(image)
        # (H, W, C) -> (1, C, H, W)
        x = preprocessed.permute(2, 0, 1).unsqueeze(0)

        features = functools.reduce(self._apply_layer, self.layers, x)

        outputs = self._run_heads(features)
        outputs['heatmapScores'] = torch.sigmoid(outputs['heatmapScores'])
        # (1, C, H, W) -> (H, W, C)
        return {k: v[0].permute(1, 2, 0) for k, v in outputs.items()}

    @classmethod
    def preprocess(cls, image: alias.ImageLike) -> alias.Tensor:
        '''Normalize (H, W, 3) pixels from [0, 255] to [-1, 1].'''

        if isinstance(image, numpy.ndarray):
            image = torch.from_numpy(numpy.ascontiguousarray(image))
        if not isinstance(image, torch.Tensor):
            raise errors.InvalidConfiguration(
                f'Input must be a tensor or array, got {type(image).__name__}'
            )
        if image.dim() != 3 or image.shape[-1] != 3:
            raise errors.InvalidConfiguration(
                f'Input must have shape (H, W, 3), got {tuple(image.shape)}'
            )
        normalized = image.to(torch.float32) / cls.PREPROCESS_DIVISOR
        return normalized - 1.0

    def output_size(self, resolution: int) -> int:
        '''Spatial size of the head outputs for an input side length.'''

        size = resolution
        for layer in self.layers:
            size = math.ceil(size / layer.stride)
        return size

    def conv_to_output(
            self,
            features: alias.Tensor,
            output_layer_name: str
        ) -> alias.Tensor:
        '''Project backbone features through one 1x1 output head.'''

        # heads may run on worker threads, which do not inherit the mode
        with torch.inference_mode():
            return ops.conv2d_same(
                features,
                self.model_weights.weights(output_layer_name),
                self.model_weights.conv_bias(output_layer_name)
            )

    def dispose(self) -> None:
        '''Release the weight provider.'''

        self.model_weights.dispose()
        self._log('info', 'Model weights disposed')

    def _apply_layer(
            self,
            x: alias.Tensor,
            layer: layering.Layer
        ) -> alias.Tensor:
        '''Dispatch one stage to the executor of its convolution kind.'''

        try:
            executor = self._executors[architecture.ConvType(layer.conv_type)]
        except (KeyError, ValueError):
            raise errors.UnknownConvolutionKind(
                f'Unknown conv type of {layer.conv_type!r} '
                f'at block {layer.block_id}'
            ) from None
        return executor(x, layer)

    def _conv(self, x: alias.Tensor, layer: layering.Layer) -> alias.Tensor:
        '''Plain convolution stage followed by relu6.'''

        name = weights.conv_name(layer.block_id)
        x = ops.conv2d_same(
            x,
            self.model_weights.weights(name),
            self.model_weights.conv_bias(name),
            stride=layer.stride,
            dilation=layer.rate
        )
        return ops.relu6(x)

    def _separable_conv(
            self,
            x: alias.Tensor,
            layer: layering.Layer
        ) -> alias.Tensor:
        '''Depthwise (strided, dilated) then pointwise, each with relu6.'''

        dw_layer = weights.depthwise_name(layer.block_id)
        pw_layer = weights.pointwise_name(layer.block_id)

        x = ops.depthwise_conv2d_same(
            x,
            self.model_weights.depthwise_weights(dw_layer),
            self.model_weights.depthwise_bias(dw_layer),
            stride=layer.stride,
            dilation=layer.rate
        )
        x = ops.relu6(x)

        x = ops.conv2d_same(
            x,
            self.model_weights.weights(pw_layer),
            self.model_weights.conv_bias(pw_layer)
        )
        return ops.relu6(x)

    def _run_heads(self, features: alias.Tensor) -> alias.TensorDict:
        '''Compute all output heads from the shared final features.'''

        names = list(weights.HEAD_LAYERS)
        if self.concurrent_heads:
            executor = utils.ParallelExecutor(max_workers=len(names))
            results = executor.run([
                (self.conv_to_output, (features, weights.HEAD_LAYERS[n]), {})
                for n in names
            ])
        else:
            results = [
                self.conv_to_output(features, weights.HEAD_LAYERS[n])
                for n in names
            ]
        return dict(zip(names, results))

    def _log(self, level: str, message: str) -> None:
        if self.logger is not None:
            self.logger.log(level, message)
