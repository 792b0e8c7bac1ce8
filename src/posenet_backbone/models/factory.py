'''Wrapper module to build the MobileNet backbone.'''

# local imports
import posenet_backbone.alias as alias
import posenet_backbone.models.config as config
import posenet_backbone.models.mobilenet as mobilenet
import posenet_backbone.models.weights as weights
import posenet_backbone.utils as utils

# -------------------------------Public Function-------------------------------
def build_model_config(model_config: alias.ConfigType) -> config.ModelConfig:
    '''Read and validate the `model` section of a config mapping.'''

    # accessor over the `model` section only
    section = utils.ConfigAccess(model_config).get_section_as_dict('model')
    model_cfg = utils.ConfigAccess(section)

    return config.ModelConfig(
        multiplier=model_cfg.require_option('multiplier'),
        output_stride=model_cfg.require_option('output_stride'),
        input_resolution=model_cfg.require_option('input_resolution'),
        concurrent_heads=bool(
            model_cfg.get_option('concurrent_heads', default=False)
        ),
    )

def build_mobilenet(
    model_config: alias.ConfigType | config.ModelConfig,
    model_weights: weights.WeightProvider,
    logger: utils.Logger | None=None
) -> mobilenet.MobileNet:
    '''Build a MobileNet backbone from config and a weight provider.'''

    if not isinstance(model_config, config.ModelConfig):
        model_config = build_model_config(model_config)

    model = mobilenet.MobileNet(
        model_weights=model_weights,
        convolution_definitions=model_config.definitions,
        output_stride=model_config.output_stride,
        concurrent_heads=model_config.concurrent_heads,
        logger=logger
    )

    if logger is not None:
        logger.log(
            'INFO',
            f'Built MobileNet {model_config.multiplier} at output stride '
            f'{model_config.output_stride}: {len(model.layers)} stages, '
            f'{model_config.input_resolution}px input -> '
            f'{model.output_size(model_config.input_resolution)}px output'
        )
    return model
