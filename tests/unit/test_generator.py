"""Unit tests for LinkGenerator

Test coverage includes:

1. URL generation
   - Ensures a fresh generator issues 'vq5ejng0p6' under '/some/redirect'.
   - Ensures keys follow the counter: the n-th key encodes initial_counter + n.
   - Ensures base path and key are joined by exactly one '/'.

2. Counter policy
   - Validates the counter advances once per issued key.
   - Confirms the counter never wraps and raises CounterOverflowError instead.
   - Confirms invalid initial counters raise ConfigError.

3. QR generation
   - Ensures the QR payload is the URL (default) or the key.
   - Confirms generate_qr() without an emitter raises ConfigError without consuming a key.
   - Confirms renderer failures surface as QrGenerationError and the key stays consumed.
   - Ensures a real QrEmitter produces an SVG image.

4. Construction from settings
   - Ensures from_settings() forwards every generator and QR option.
"""

from unittest.mock import MagicMock

import pytest

from linkshortener.codec import HashIdCodec
from linkshortener.constants import Alphabet, HashIdParameters, QrPayload
from linkshortener.exceptions import ConfigError, CounterOverflowError, QrGenerationError
from linkshortener.generator import LinkGenerator, join_url
from linkshortener.models import Link, QrImage
from linkshortener.qr import QrEmitter
from linkshortener.utils.config import GeneratorSettings


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def qr_image():
    return QrImage(content=b'<svg></svg>', media_type='image/svg+xml', version=1)


@pytest.fixture
def qr_emitter(qr_image):
    """Mock QR renderer returning a fixed image."""
    emitter = MagicMock(spec=QrEmitter)
    emitter.render.return_value = qr_image
    return emitter


# -------------------------------
# 1. URL generation
# -------------------------------


def test_generate_url():
    generator = LinkGenerator('/some/redirect', min_length=10)
    assert generator.generate_url() == Link(key='vq5ejng0p6', url='/some/redirect/vq5ejng0p6')


def test_generate_url_with_salt():
    generator = LinkGenerator('/redirect', min_length=10, salt='salt')
    assert generator.generate_url() == Link(key='9x5eo4n7ow', url='/redirect/9x5eo4n7ow')


def test_keys_follow_counter():
    codec = HashIdCodec(min_length=10, alphabet=Alphabet.LINK)
    generator = LinkGenerator('/redirect', min_length=10, initial_counter=500)

    keys = [generator.generate_key() for _ in range(50)]

    assert keys == [codec.encode(500 + i) for i in range(50)]
    assert len(set(keys)) == 50


def test_generate_url_keys_are_decodable():
    generator = LinkGenerator('https://sho.rt', min_length=6, salt='pepper')
    for expected in range(100):
        link = generator.generate_url()
        assert link.url == f'https://sho.rt/{link.key}'
        assert generator.codec.decode(link.key) == expected


@pytest.mark.parametrize(
    'base_path, key, expected',
    [
        ('/some/redirect', 'abc', '/some/redirect/abc'),
        ('/some/redirect/', 'abc', '/some/redirect/abc'),
        ('https://sho.rt/', 'abc', 'https://sho.rt/abc'),
        ('https://sho.rt', 'abc', 'https://sho.rt/abc'),
        ('', 'abc', '/abc'),
    ],
)
def test_join_url(base_path, key, expected):
    assert join_url(base_path, key) == expected


def test_base_path_with_trailing_slash():
    link = LinkGenerator('/some/redirect/', min_length=10).generate_url()
    assert link.url == '/some/redirect/vq5ejng0p6'


def test_custom_codec_is_used():
    codec = HashIdCodec(salt='custom', min_length=4)
    generator = LinkGenerator('/r', codec=codec)
    assert generator.codec is codec
    assert generator.generate_key() == codec.encode(0)


# -------------------------------
# 2. Counter policy
# -------------------------------


def test_counter_advances_per_key():
    generator = LinkGenerator('/redirect')
    assert generator.counter == 0
    generator.generate_key()
    generator.generate_url()
    assert generator.counter == 2


def test_counter_overflow():
    generator = LinkGenerator('/redirect', initial_counter=HashIdParameters.MAX_VALUE)

    last_key = generator.generate_key()
    assert generator.codec.decode(last_key) == HashIdParameters.MAX_VALUE

    with pytest.raises(CounterOverflowError):
        generator.generate_key()
    with pytest.raises(CounterOverflowError):
        generator.generate_url()
    assert generator.counter == HashIdParameters.MAX_VALUE + 1


@pytest.mark.parametrize('initial_counter', [-1, HashIdParameters.MAX_VALUE + 1, '0', 1.5, True])
def test_invalid_initial_counter(initial_counter):
    with pytest.raises(ConfigError, match='Initial counter'):
        LinkGenerator('/redirect', initial_counter=initial_counter)


def test_invalid_base_path():
    with pytest.raises(ConfigError, match='Base path'):
        LinkGenerator(None)


def test_invalid_codec_parameters():
    with pytest.raises(ConfigError):
        LinkGenerator('/redirect', min_length=-5)


def test_invalid_qr_payload():
    with pytest.raises(ConfigError, match='QR payload'):
        LinkGenerator('/redirect', qr_payload='image')


# -------------------------------
# 3. QR generation
# -------------------------------


def test_generate_qr_with_url_payload(qr_emitter, qr_image):
    generator = LinkGenerator('/some/redirect', min_length=10, qr_emitter=qr_emitter)

    image, link = generator.generate_qr()

    assert image is qr_image
    assert link == Link(key='vq5ejng0p6', url='/some/redirect/vq5ejng0p6')
    qr_emitter.render.assert_called_once_with('/some/redirect/vq5ejng0p6')


def test_generate_qr_with_key_payload(qr_emitter):
    generator = LinkGenerator('/some/redirect', min_length=10, qr_emitter=qr_emitter, qr_payload='key')

    _, link = generator.generate_qr()

    assert generator.qr_payload is QrPayload.KEY
    qr_emitter.render.assert_called_once_with(link.key)


def test_generate_qr_without_emitter():
    generator = LinkGenerator('/redirect')
    with pytest.raises(ConfigError, match='QR rendering is not enabled'):
        generator.generate_qr()
    assert generator.counter == 0


def test_generate_qr_renderer_failure_consumes_key(qr_emitter):
    qr_emitter.render.side_effect = RuntimeError('boom')
    generator = LinkGenerator('/redirect', min_length=10, qr_emitter=qr_emitter)

    with pytest.raises(QrGenerationError) as exc_info:
        generator.generate_qr()

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert generator.counter == 1
    # the next link uses the next counter value
    assert generator.generate_url().key == generator.codec.encode(1)


def test_generate_qr_propagates_qr_generation_error(qr_emitter):
    error = QrGenerationError('too long')
    qr_emitter.render.side_effect = error
    generator = LinkGenerator('/redirect', qr_emitter=qr_emitter)

    with pytest.raises(QrGenerationError) as exc_info:
        generator.generate_qr()
    assert exc_info.value is error


def test_render_qr_for_issued_link(qr_emitter, qr_image):
    generator = LinkGenerator('/redirect', qr_emitter=qr_emitter)
    link = generator.generate_url()

    assert generator.render_qr(link) is qr_image
    assert generator.counter == 1


def test_generate_qr_with_real_emitter():
    generator = LinkGenerator('https://sho.rt', min_length=10, qr_emitter=QrEmitter())

    image, link = generator.generate_qr()

    assert link.key == 'vq5ejng0p6'
    assert image.media_type == 'image/svg+xml'
    assert image.version >= 1
    assert b'svg' in image.content


# -------------------------------
# 4. Construction from settings
# -------------------------------


def test_from_settings():
    settings = GeneratorSettings(
        base_path='https://sho.rt',
        salt='salt',
        min_length=10,
        alphabet=Alphabet.LINK,
        initial_counter=7,
        qr_payload=QrPayload.KEY,
        qr_error_correction='H',
        qr_max_version=10,
    )

    generator = LinkGenerator.from_settings(settings)

    assert generator.base_path == 'https://sho.rt'
    assert generator.counter == 7
    assert generator.codec.salt == 'salt'
    assert generator.codec.min_length == 10
    assert generator.qr_payload is QrPayload.KEY
    assert isinstance(generator.qr_emitter, QrEmitter)
    assert generator.qr_emitter.error_correction == 'H'
    assert generator.qr_emitter.max_version == 10


def test_from_settings_overrides_initial_counter():
    generator = LinkGenerator.from_settings(GeneratorSettings(initial_counter=7), initial_counter=42)
    assert generator.counter == 42


def test_from_settings_with_invalid_qr_options():
    with pytest.raises(ConfigError):
        LinkGenerator.from_settings(GeneratorSettings(qr_error_correction='X'))
