# pylint: disable=no-value-for-parameter
'''Log the layer plan of a configured backbone and optionally run it.'''

# standard imports
import os
import sys
import typing
# third-party imports
import hydra
import numpy
import omegaconf
import PIL.Image
import torch
# local imports
import posenet_backbone.models as models
import posenet_backbone.models.layering as layering
import posenet_backbone.utils as utils

FRAME_SUFFIXES = ('.png', '.jpg', '.jpeg', '.bmp')

def _load_image(image_path: str | None, resolution: int) -> numpy.ndarray:
    '''Read an RGB image resized to a square input, or a mid-grey frame.'''

    if image_path is None:
        return numpy.full((resolution, resolution, 3), 127, dtype=numpy.uint8)
    with PIL.Image.open(image_path) as img:
        img = img.convert('RGB').resize((resolution, resolution))
        return numpy.array(img, dtype=numpy.uint8)

# main process
@hydra.main('pkg://posenet_backbone/configs', 'config', version_base='1.3')
def main(config: omegaconf.DictConfig) -> None:
    '''Layer plan and a single prediction.'''

    # fetch user settings and merge with default config
    candidates = [f'{os.getcwd()}/settings.yaml']
    for p in candidates:
        if os.path.exists(p):
            user_cfg = omegaconf.OmegaConf.load(p)
            if not isinstance(user_cfg, omegaconf.DictConfig):
                raise TypeError('settings.yaml must have a mapping at the root')
            merged = omegaconf.OmegaConf.merge(config, user_cfg) # right wins
            config = typing.cast(omegaconf.DictConfig, merged)

    # resolve
    omegaconf.OmegaConf.resolve(config)
    cfg = utils.ConfigAccess(config)

    timestamp = utils.get_timestamp()
    log_dir = cfg.get_option('log_dir', default='./logs')
    logger = utils.Logger('plan', f'{log_dir}/{timestamp}.log')
    try:
        _plan_and_predict(config, cfg, logger)
    finally:
        logger.close()

def _plan_and_predict(
        config: omegaconf.DictConfig,
        cfg: utils.ConfigAccess,
        logger: utils.Logger
    ) -> None:
    '''Log the layer plan, then predict when weights are configured.'''

    model_config = models.build_model_config(config)
    layers = layering.to_output_strided_layers(
        model_config.definitions, model_config.output_stride
    )
    logger.log_sep()
    logger.log(
        'INFO',
        f'MobileNet {model_config.multiplier} @ output stride '
        f'{model_config.output_stride}'
    )
    logger.log_lines('INFO', layering.describe_layers(layers))
    logger.log_sep()

    weights_path = cfg.get_option('weights_path')
    if weights_path is None:
        logger.log('INFO', 'No weights_path set, skipping prediction')
        return

    model_weights = models.load_weights(
        weights_path,
        prefix=cfg.get_option('weights_prefix', default='MobilenetV1'),
        tf_layout=cfg.get_option('weights_tf_layout', default=True)
    )
    model = models.build_mobilenet(model_config, model_weights, logger)
    resolution = model_config.input_resolution
    try:
        frames_dir = cfg.get_option('frames_dir')
        if frames_dir is not None:
            _predict_frames(model, frames_dir, resolution, logger)
            return

        image = _load_image(cfg.get_option('image_path'), resolution)
        outputs = model.predict(torch.from_numpy(image))
        for name, tensor in outputs.items():
            logger.log('INFO', f'{name}: {tuple(tensor.shape)}')
    finally:
        model.dispose()

def _predict_frames(
        model: models.MobileNet,
        frames_dir: str,
        resolution: int,
        logger: utils.Logger
    ) -> None:
    '''Predict every image in a directory as independent calls.'''

    fpaths = sorted(
        os.path.join(frames_dir, f) for f in os.listdir(frames_dir)
        if f.lower().endswith(FRAME_SUFFIXES)
    )
    logger.log('INFO', f'Predicting {len(fpaths)} frames from {frames_dir}')

    # frames share read-only weights, so calls run side by side
    executor = utils.ParallelExecutor(show_progress=True)
    results = executor.run([
        (model.predict, (torch.from_numpy(_load_image(p, resolution)),), {})
        for p in fpaths
    ])
    for fpath, outputs in zip(fpaths, results):
        shapes = ', '.join(
            f'{name}={tuple(t.shape)}' for name, t in outputs.items()
        )
        logger.log('INFO', f'{os.path.basename(fpath)}: {shapes}')

def run() -> None:
    '''Console script wrapper handling keyboard interruption.'''

    try:
        main()
    except KeyboardInterrupt:
        print('\nInterrupted, exiting...')
        sys.exit(130)

if __name__ == '__main__':
    run()
