'''Tests for the layer plan command line entry point.'''

# standard imports
import logging
# third-party imports
import numpy
import omegaconf
import PIL.Image
import pytest
import torch
# local imports
import posenet_backbone.cli.plan as plan
import posenet_backbone.models.architecture as architecture


def _config(tmp_path, **overrides):
    cfg = {
        'model': {
            'multiplier': 0.25,
            'output_stride': 16,
            'input_resolution': 33,
            'concurrent_heads': False,
        },
        'weights_path': None,
        'weights_prefix': '',
        'weights_tf_layout': False,
        'image_path': None,
        'log_dir': str(tmp_path / 'logs'),
    }
    cfg.update(overrides)
    return omegaconf.OmegaConf.create(cfg)


def _read_logs(tmp_path):
    return ''.join(
        p.read_text(encoding='UTF-8') for p in (tmp_path / 'logs').iterdir()
    )


def test_load_image_default_is_grey():
    image = plan._load_image(None, 9)

    assert image.shape == (9, 9, 3)
    assert numpy.all(image == 127)


def test_load_image_resizes(tmp_path):
    fpath = tmp_path / 'frame.png'
    PIL.Image.new('L', (20, 10), color=200).save(fpath)

    image = plan._load_image(str(fpath), 17)
    assert image.shape == (17, 17, 3)
    assert image.dtype == numpy.uint8


def test_plan_without_weights(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    plan.main(_config(tmp_path))

    text = _read_logs(tmp_path)
    assert 'MobileNet 0.25 @ output stride 16' in text
    assert 'block 13' in text
    assert 'skipping prediction' in text


def test_plan_with_weights(tmp_path, monkeypatch, tensors_factory):
    monkeypatch.chdir(tmp_path)
    fpath = tmp_path / 'weights.pt'
    torch.save(
        tensors_factory(
            architecture.get_architecture(0.25),
            architecture.stage_channels(0.25)
        ),
        fpath
    )

    plan.main(_config(tmp_path, weights_path=str(fpath)))

    text = _read_logs(tmp_path)
    assert 'heatmapScores: (3, 3, 17)' in text
    assert 'displacementBwd: (3, 3, 32)' in text
    assert 'Model weights disposed' in text


def _save_weights(tmp_path, tensors_factory):
    fpath = tmp_path / 'weights.pt'
    torch.save(
        tensors_factory(
            architecture.get_architecture(0.25),
            architecture.stage_channels(0.25)
        ),
        fpath
    )
    return str(fpath)


def test_plan_over_frames_dir(tmp_path, monkeypatch, tensors_factory):
    monkeypatch.chdir(tmp_path)
    frames = tmp_path / 'frames'
    frames.mkdir()
    PIL.Image.new('RGB', (40, 40), color=(10, 20, 30)).save(frames / 'f0.png')
    PIL.Image.new('RGB', (33, 33), color=(90, 0, 0)).save(frames / 'f1.png')
    (frames / 'notes.txt').write_text('ignored', encoding='UTF-8')

    plan.main(_config(
        tmp_path,
        weights_path=_save_weights(tmp_path, tensors_factory),
        frames_dir=str(frames)
    ))

    text = _read_logs(tmp_path)
    assert 'Predicting 2 frames' in text
    assert 'f0.png: heatmapScores=(3, 3, 17)' in text
    assert 'f1.png: heatmapScores=(3, 3, 17)' in text
    assert 'notes.txt' not in text
    assert 'Model weights disposed' in text


def test_plan_closes_logger_on_bad_weights(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        plan.main(_config(tmp_path, weights_path=str(tmp_path / 'none.pt')))

    assert 'block 13' in _read_logs(tmp_path)
    assert not any(
        isinstance(h, logging.FileHandler)
        for h in logging.getLogger('plan').handlers
    )


def test_plan_repeated_runs_each_write_logs(tmp_path, monkeypatch,
                                            tensors_factory):
    first, second = tmp_path / 'first', tmp_path / 'second'
    first.mkdir()
    second.mkdir()

    monkeypatch.chdir(first)
    plan.main(_config(first))
    monkeypatch.chdir(second)
    plan.main(_config(
        second, weights_path=_save_weights(second, tensors_factory)
    ))

    assert 'skipping prediction' in _read_logs(first)
    assert 'heatmapScores: (3, 3, 17)' in _read_logs(second)
