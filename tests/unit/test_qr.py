"""Unit tests for QrEmitter

Test coverage includes:

1. Rendering
   - Ensures payloads render to SVG by default and to PNG on request.
   - Ensures higher error correction never needs a smaller QR version.

2. Failures
   - Confirms empty payloads raise QrGenerationError.
   - Confirms payloads exceeding the maximum version raise QrGenerationError.
   - Confirms payloads exceeding every QR version raise QrGenerationError.

3. Configuration
   - Confirms invalid parameters raise ConfigError.
"""

import pytest

from linkshortener.exceptions import ConfigError, QrGenerationError
from linkshortener.qr import QrEmitter


# -------------------------------
# 1. Rendering
# -------------------------------


def test_render_svg():
    image = QrEmitter().render('https://sho.rt/vq5ejng0p6')

    assert image.media_type == 'image/svg+xml'
    assert 1 <= image.version <= 40
    assert b'svg' in image.content
    assert image.to_data_url().startswith('data:image/svg+xml;base64,')


def test_render_png():
    image = QrEmitter(image_format='png', box_size=2, border=1).render('vq5ejng0p6')

    assert image.media_type == 'image/png'
    assert image.content.startswith(b'\x89PNG')


def test_render_picks_smallest_version():
    assert QrEmitter(error_correction='L').render('vq5ejng0p6').version == 1


def test_error_correction_affects_version():
    payload = 'https://sho.rt/some/rather/long/redirect/path/vq5ejng0p6'
    low = QrEmitter(error_correction='L').render(payload)
    high = QrEmitter(error_correction='H').render(payload)
    assert high.version >= low.version


# -------------------------------
# 2. Failures
# -------------------------------


@pytest.mark.parametrize('payload', ['', None])
def test_render_empty_payload(payload):
    with pytest.raises(QrGenerationError, match='non-empty string'):
        QrEmitter().render(payload)


def test_render_exceeds_max_version():
    payload = 'https://sho.rt/' + 'a' * 100
    with pytest.raises(QrGenerationError, match='maximum allowed: 1'):
        QrEmitter(max_version=1).render(payload)


def test_render_exceeds_every_version():
    with pytest.raises(QrGenerationError, match='does not fit'):
        QrEmitter(error_correction='H').render('a' * 8000)


# -------------------------------
# 3. Configuration
# -------------------------------


@pytest.mark.parametrize(
    'kwargs',
    [
        {'error_correction': 'X'},
        {'error_correction': 'm'},
        {'max_version': 0},
        {'max_version': 41},
        {'max_version': True},
        {'box_size': 0},
        {'border': -1},
        {'image_format': 'gif'},
    ],
)
def test_invalid_configuration(kwargs):
    with pytest.raises(ConfigError):
        QrEmitter(**kwargs)
