'''Shared fixtures: synthetic weights and per-test loggers.'''

# standard imports
import typing
# third-party imports
import pytest
import torch
# local imports
import posenet_backbone.models.architecture as architecture
import posenet_backbone.models.weights as weights
import posenet_backbone.utils as utils

HEAD_CHANNELS = {
    'heatmap_2': 17,
    'offset_2': 34,
    'displacement_fwd_2': 32,
    'displacement_bwd_2': 32,
}

def make_tensors(
        definitions: typing.Sequence[architecture.ConvolutionDefinition],
        channels: typing.Sequence[int],
        seed: int=0
    ) -> dict[str, torch.Tensor]:
    '''Random torch-layout tensors matching an architecture table.'''

    g = torch.Generator().manual_seed(seed)

    def rand(*shape):
        return torch.randn(*shape, generator=g) * 0.1

    tensors = {}
    in_ch = 3
    for block_id, (conv_type, _) in enumerate(definitions):
        out_ch = channels[block_id]
        if conv_type == architecture.ConvType.CONV2D:
            name = weights.conv_name(block_id)
            tensors[f'{name}/weights'] = rand(out_ch, in_ch, 3, 3)
            tensors[f'{name}/biases'] = rand(out_ch)
        else:
            dw = weights.depthwise_name(block_id)
            pw = weights.pointwise_name(block_id)
            tensors[f'{dw}/depthwise_weights'] = rand(in_ch, 1, 3, 3)
            tensors[f'{dw}/biases'] = rand(in_ch)
            tensors[f'{pw}/weights'] = rand(out_ch, in_ch, 1, 1)
            tensors[f'{pw}/biases'] = rand(out_ch)
        in_ch = out_ch

    for name, n in HEAD_CHANNELS.items():
        tensors[f'{name}/weights'] = rand(n, in_ch, 1, 1)
        tensors[f'{name}/biases'] = rand(n)
    return tensors

def make_weights(
        definitions: typing.Sequence[architecture.ConvolutionDefinition],
        channels: typing.Sequence[int],
        seed: int=0
    ) -> weights.MappingWeights:
    '''Unprefixed provider over `make_tensors`.'''
    return weights.MappingWeights(
        make_tensors(definitions, channels, seed), prefix=''
    )


@pytest.fixture
def tensors_factory():
    '''Factory building raw synthetic tensors for a table and widths.'''
    return make_tensors


@pytest.fixture
def weights_factory():
    '''Factory building synthetic weights for a table and widths.'''
    return make_weights


@pytest.fixture
def quarter_weights():
    '''Synthetic weights for the 0.25 variant.'''
    return make_weights(
        architecture.get_architecture(0.25),
        architecture.stage_channels(0.25)
    )


@pytest.fixture
def logger(tmp_path, request):
    '''File-only logger unique to the test.'''
    log = utils.Logger(
        name=f'test.{request.node.name}',
        log_file=str(tmp_path / 'test.log'),
        console_lvl=None
    )
    yield log
    log.close()
