'''Tests for architecture table lookup.'''

# third-party imports
import pytest
# local imports
import posenet_backbone.errors as errors
import posenet_backbone.models.architecture as architecture


@pytest.mark.parametrize('multiplier', [1.0, 0.75, 0.5, 0.25, 100, 75, 50, 25])
def test_every_table_starts_with_plain_conv(multiplier):
    definitions = architecture.get_architecture(multiplier)

    assert len(definitions) == 14
    assert definitions[0] == (architecture.ConvType.CONV2D, 2)
    assert all(
        d.conv_type == architecture.ConvType.SEPARABLE_CONV
        for d in definitions[1:]
    )


def test_fraction_and_percent_selectors_agree():
    assert architecture.get_architecture(0.75) is \
        architecture.get_architecture(75)
    assert architecture.get_architecture(1) is architecture.MOBILENET_100


def test_quarter_reuses_half_table():
    assert architecture.get_architecture(0.25) is \
        architecture.get_architecture(0.5)


def test_only_full_width_strides_stage_12():
    assert architecture.get_architecture(1.0)[12].stride == 2
    assert architecture.get_architecture(0.75)[12].stride == 1


@pytest.mark.parametrize('multiplier', [1.01, 0.3, 0, -1, 200, '1.0', None, True])
def test_unknown_variant(multiplier):
    with pytest.raises(errors.UnknownVariant):
        architecture.get_architecture(multiplier)


def test_unknown_variant_is_invalid_configuration():
    with pytest.raises(errors.InvalidConfiguration):
        architecture.get_architecture(0.6)


def test_stage_channels_scale_with_floor():
    assert architecture.stage_channels(1.0) == architecture.MOBILENET_DEPTHS
    quarter = architecture.stage_channels(0.25)
    assert quarter[0] == 8
    assert quarter[-1] == 256
    assert len(quarter) == len(architecture.get_architecture(0.25))
