"""Hash-id codec

This module provides a reversible, deterministic encoding of non-negative
integers into short, non-sequential looking strings (the hashids scheme).

The alphabet is partitioned once per codec into three disjoint sets:
    - working alphabet: digits of the encoded numbers
    - separators: delimit the numbers of a multi-value encoding
    - guards: pad encodings shorter than the minimum length

Every encoding starts with a lottery character derived from the input. The
working alphabet is re-shuffled for every encoded number, seeded by the
lottery character, the salt and the previous shuffle, so the digit mapping is
rolling rather than a fixed substitution. All shuffles are pure functions, so
a codec can be shared between threads without locking.

Classes:
    HashIdCodec(salt='', min_length=0, alphabet=Alphabet.DEFAULT):
        Encode and decode integers.

Functions:
    shuffle(alphabet, salt) -> str:
        Deterministic Fisher-Yates permutation seeded by the salt.

Example:
    >>> from linkshortener.codec import HashIdCodec
    >>> codec = HashIdCodec(min_length=10, alphabet='abcdefghijklmnopqrstuvwxyz0123456789')
    >>> codec.encode(0)
    'vq5ejng0p6'
    >>> codec.decode('vq5ejng0p6')
    0

NOTE:
    This is obfuscation, not encryption. Anyone holding the salt and the
    alphabet can decode every key.
"""

import math
from collections.abc import Iterable

from linkshortener.constants import Alphabet, HashIdParameters
from linkshortener.exceptions import ConfigError, DecodeError


def shuffle(alphabet: str, salt: str) -> str:
    """Permute the alphabet deterministically using the salt's character codes.

    Walk the alphabet from its last position down to 1, cycling through the
    salt and accumulating its character codes, and swap each position with
    an earlier one picked from those codes. An empty salt leaves the alphabet
    untouched.

    Args:
        alphabet (str):
            Characters to permute.
        salt (str):
            Seed of the permutation.

    Returns:
        str: permuted alphabet.
    """
    if not salt:
        return alphabet

    chars = list(alphabet)
    salt_index, code_sum = 0, 0
    for i in range(len(chars) - 1, 0, -1):
        code = ord(salt[salt_index])
        code_sum += code
        j = (code + salt_index + code_sum) % i
        chars[i], chars[j] = chars[j], chars[i]
        salt_index = (salt_index + 1) % len(salt)
    return ''.join(chars)


def _to_digits(number: int, alphabet: str) -> str:
    base = len(alphabet)
    digits = []
    while True:
        number, remainder = divmod(number, base)
        digits.append(alphabet[remainder])
        if not number:
            return ''.join(reversed(digits))


def _from_digits(digits: str, alphabet: str) -> int:
    number = 0
    for char in digits:
        number = number * len(alphabet) + alphabet.index(char)
    return number


def _split(value: str, splitters: str) -> list[str]:
    parts, part = [], []
    for char in value:
        if char in splitters:
            parts.append(''.join(part))
            part = []
        else:
            part.append(char)
    parts.append(''.join(part))
    return parts


def _validate_value(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f'Value must be of type integer (given type: {type(value)}).')
    if value < 0:
        raise ValueError(f'Value must be a non-negative integer (given value: {value}).')
    if value > HashIdParameters.MAX_VALUE:
        raise ValueError(f'Value must not exceed {HashIdParameters.MAX_VALUE} (given value: {value}).')


class HashIdCodec:
    """Salted, reversible integer <-> string codec.

    Attributes:
        salt (str):
            Seed of every alphabet permutation. Empty salt is allowed but
            makes the output easy to guess.
        min_length (int):
            Minimum length of every encoded string.
        alphabet (str):
            Alphabet the codec was configured with (before partitioning).

    Methods:
        encode(value: int) -> str
        encode_many(values: Iterable[int]) -> str
        decode(hashid: str) -> int
        decode_many(hashid: str) -> tuple[int, ...]

    Raises:
        ConfigError:
            On construction, if the alphabet has duplicate characters, fewer
            than 16 characters or whitespace, or if salt/min_length are invalid.
    """

    def __init__(self, salt: str = '', min_length: int = 0, alphabet: str = Alphabet.DEFAULT):
        if not isinstance(salt, str):
            raise ConfigError(f'Salt must be of type string (given type: {type(salt)}).')
        if isinstance(min_length, bool) or not isinstance(min_length, int):
            raise ConfigError(f'Minimum length must be of type integer (given type: {type(min_length)}).')
        if min_length < 0:
            raise ConfigError(f'Minimum length must be a non-negative integer (given value: {min_length}).')
        if not isinstance(alphabet, str):
            raise ConfigError(f'Alphabet must be of type string (given type: {type(alphabet)}).')

        duplicates = sorted({char for char in alphabet if alphabet.count(char) > 1})
        if duplicates:
            raise ConfigError(f'Alphabet must not contain duplicate characters (duplicates: {"".join(duplicates)!r}).')
        if len(alphabet) < HashIdParameters.MIN_ALPHABET_LENGTH:
            raise ConfigError(
                f'Alphabet must contain at least {HashIdParameters.MIN_ALPHABET_LENGTH} characters (given length: {len(alphabet)}).'
            )
        if any(char.isspace() for char in alphabet):
            raise ConfigError('Alphabet must not contain whitespace characters.')

        self._salt = salt
        self._min_length = min_length
        self._source_alphabet = alphabet

        separators = ''.join(char for char in alphabet if char in HashIdParameters.SEPARATORS)
        working = ''.join(char for char in alphabet if char not in HashIdParameters.SEPARATORS)
        separators = shuffle(separators, salt)

        # Keep roughly one separator per 3.5 working characters
        if not separators or len(working) / len(separators) > HashIdParameters.SEPARATOR_RATIO:
            separator_count = max(math.ceil(len(working) / HashIdParameters.SEPARATOR_RATIO), 2)
            if separator_count > len(separators):
                missing = separator_count - len(separators)
                separators += working[:missing]
                working = working[missing:]
            else:
                separators = separators[:separator_count]

        working = shuffle(working, salt)

        guard_count = math.ceil(len(working) / HashIdParameters.GUARD_RATIO)
        if len(working) < 3:
            guards, separators = separators[:guard_count], separators[guard_count:]
        else:
            guards, working = working[:guard_count], working[guard_count:]

        self._alphabet = working
        self._separators = separators
        self._guards = guards
        self._known = frozenset(alphabet)

    @property
    def salt(self) -> str:
        return self._salt

    @property
    def min_length(self) -> int:
        return self._min_length

    @property
    def alphabet(self) -> str:
        return self._source_alphabet

    def __repr__(self) -> str:
        return f'{type(self).__name__}(salt={self._salt!r}, min_length={self._min_length}, alphabet={self._source_alphabet!r})'

    def encode(self, value: int) -> str:
        """Encode a single non-negative integer.

        Args:
            value (int):
                Integer in the range [0, 2**64 - 1].

        Returns:
            str: hash-id of at least `min_length` characters.

        Raises:
            TypeError: If value is not an integer.
            ValueError: If value is negative or wider than 64 bits.
        """
        return self.encode_many((value,))

    def encode_many(self, values: Iterable[int]) -> str:
        """Encode a sequence of non-negative integers into one hash-id.

        Consecutive numbers are delimited by separator characters picked from
        each number's value.

        Raises:
            TypeError: If any value is not an integer.
            ValueError: If no values are given, or any value is out of range.
        """
        values = tuple(values)
        if not values:
            raise ValueError('At least one value is required for encoding.')
        for value in values:
            _validate_value(value)

        alphabet = self._alphabet
        values_hash = sum(value % (i + 100) for i, value in enumerate(values))
        lottery = alphabet[values_hash % len(alphabet)]

        encoded = [lottery]
        for i, value in enumerate(values):
            alphabet = shuffle(alphabet, (lottery + self._salt + alphabet)[: len(alphabet)])
            digits = _to_digits(value, alphabet)
            encoded.append(digits)
            if i < len(values) - 1:
                value %= ord(digits[0]) + i
                encoded.append(self._separators[value % len(self._separators)])

        hashid = ''.join(encoded)
        if len(hashid) < self._min_length:
            hashid = self._pad(hashid, values_hash, alphabet)
        return hashid

    def _pad(self, hashid: str, values_hash: int, alphabet: str) -> str:
        guard_index = (values_hash + ord(hashid[0])) % len(self._guards)
        hashid = self._guards[guard_index] + hashid

        if len(hashid) < self._min_length:
            guard_index = (values_hash + ord(hashid[2])) % len(self._guards)
            hashid += self._guards[guard_index]

        half = len(alphabet) // 2
        while len(hashid) < self._min_length:
            alphabet = shuffle(alphabet, alphabet)
            hashid = alphabet[half:] + hashid + alphabet[:half]
            excess = len(hashid) - self._min_length
            if excess > 0:
                start = excess // 2
                hashid = hashid[start : start + self._min_length]
        return hashid

    def decode(self, hashid: str) -> int:
        """Decode a hash-id produced by `encode()`.

        Args:
            hashid (str):
                Encoded string.

        Returns:
            int: the original integer.

        Raises:
            DecodeError:
                If the string was not produced by this codec configuration or
                carries more than one number.

        Example:
            >>> codec = HashIdCodec(salt='my_secret')
            >>> codec.decode(codec.encode(12345))
            12345
        """
        values = self.decode_many(hashid)
        if len(values) != 1:
            raise DecodeError(f'Hash-id {hashid!r} encodes {len(values)} values, expected exactly one.')
        return values[0]

    def decode_many(self, hashid: str) -> tuple[int, ...]:
        """Decode a hash-id into every number it carries.

        The decoded numbers are re-encoded and compared against the input, so
        only canonical encodings of this codec configuration are accepted.

        Raises:
            DecodeError: If the string is not a valid hash-id for this codec.
        """
        if not isinstance(hashid, str) or not hashid:
            raise DecodeError(f'Hash-id must be a non-empty string (given value: {hashid!r}).')
        if any(char not in self._known for char in hashid):
            raise DecodeError(f'Hash-id {hashid!r} contains characters outside the codec alphabet.')

        parts = _split(hashid, self._guards)
        core = parts[1] if 2 <= len(parts) <= 3 else parts[0]
        if not core:
            raise DecodeError(f'Hash-id {hashid!r} has no encoded content.')

        lottery, core = core[0], core[1:]
        alphabet = self._alphabet
        values = []
        for part in _split(core, self._separators):
            alphabet = shuffle(alphabet, (lottery + self._salt + alphabet)[: len(alphabet)])
            try:
                values.append(_from_digits(part, alphabet))
            except ValueError as e:
                raise DecodeError(f'Hash-id {hashid!r} is malformed.') from e

        if any(value > HashIdParameters.MAX_VALUE for value in values):
            raise DecodeError(f'Hash-id {hashid!r} decodes to a value wider than 64 bits.')
        if self.encode_many(values) != hashid:
            raise DecodeError(f'Hash-id {hashid!r} was not produced by this codec configuration.')
        return tuple(values)
