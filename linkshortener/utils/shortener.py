"""Shortcode generation utilities

This module provides the collision-free shortcode allocator used by the
shorten path, together with the code sources it draws candidates from.

Classes:
    ShortcodeGenerator:
        Draw candidates from a code source until one is unused in the registry.

Functions:
    random_source(alphabet=SHORTCODE_ALPHABET, length=6, rng=None):
        Code source drawing uniformly random fixed-length codes.
    sequential_source(salt='default_salt', length=6, start=0):
        Deterministic code source walking a counter through generate_shortcode().
    generate_shortcode(counter, salt='default_salt', length=6, mult=1315423911):
        Generate a short hash suitable for use as a URL slug.

Example:
    >>> from linkshortener.dao.memory import ShortURLMemoryDAO
    >>> from linkshortener.utils.shortener import ShortcodeGenerator
    >>> generator = ShortcodeGenerator(ShortURLMemoryDAO())
    >>> len(generator.generate())
    6
"""

import math
import random
import secrets
import itertools
import logging
from collections.abc import Callable

import xxhash

from linkshortener.exceptions import ShortcodeGenerationError
from linkshortener.utils.constants import SHORTCODE_ALPHABET, SHORTCODE_LENGTH


logger = logging.getLogger(__name__)

ALPHABET = SHORTCODE_ALPHABET
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits

type CodeSource = Callable[[], str]


def random_source(alphabet: str = ALPHABET, length: int = SHORTCODE_LENGTH, rng: random.Random | None = None) -> CodeSource:
    """Build a code source drawing random `length`-character codes from `alphabet`.

    Args:
        alphabet (str):
            Characters to draw from. Defaults to Base62.
        length (int):
            Number of characters per code. Defaults to 6.
        rng (random.Random | None):
            Random number generator. Defaults to secrets.SystemRandom().
            Pass a seeded random.Random for reproducible draws.

    Returns:
        CodeSource: zero-argument callable returning a fresh candidate code.
    """
    if not alphabet:
        raise ValueError('Alphabet must be a non-empty string.')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    rng = rng or secrets.SystemRandom()

    def draw() -> str:
        return ''.join(rng.choices(alphabet, k=length))

    return draw


def sequential_source(salt: str = 'default_salt', length: int = SHORTCODE_LENGTH, start: int = 0) -> CodeSource:
    """Build a deterministic code source from an incrementing counter.

    Codes are produced by generate_shortcode() for counter values start,
    start + 1, ... so they are unique until the counter wraps BASE**length.

    Example:
        >>> source = sequential_source(salt='my_secret')
        >>> source() != source()
        True
    """
    counter = itertools.count(start)

    def draw() -> str:
        return generate_shortcode(next(counter), salt=salt, length=length)

    return draw


def generate_shortcode(counter: int, salt: str = 'default_salt', length: int = SHORTCODE_LENGTH, mult: int = 1315423911) -> str:
    """Map `counter` to a fixed-length Base62 code, one-to-one.

    permuted = (counter * mult + xxh64(salt)) mod 62**length, written in Base62
    with leading zero digits. As long as `mult` is coprime with 62**length
    distinct counters below 62**length give distinct codes, and neighbouring
    counters give unrelated looking codes. The salt hides the offset; this is
    obfuscation, not encryption.

    Raises:
        TypeError:
            If `counter` is not an int or `salt` is not a str.
        ValueError:
            If `counter` is negative, `salt` is empty or `mult` shares a
            factor with 62**length.

    Example:
        >>> generate_shortcode(0, salt="s") != generate_shortcode(1, salt="s")
        True
    """
    if not isinstance(counter, int):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if math.gcd(mult, BASE**length) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with mod ({BASE**length}) (given value: mult={mult}).')

    # Affine permutation over the fixed modulo space: scrambles sequential
    # counters while preserving a 1:1 mapping for counter < BASE**length.
    modulo_space = BASE**length
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space

    # Base62 encode, most significant digit first, padded to a fixed length
    return ''.join(reversed([ALPHABET[(permuted // BASE**i) % BASE] for i in range(length)])).rjust(length, ALPHABET[0])


class ShortcodeGenerator:
    """Allocate shortcodes which are not present in a registry.

    Attributes:
        dao (ShortURLBaseDAO):
            Registry checked for collisions via `exists()`.
        source (CodeSource):
            Candidate producer. Defaults to random 6-character Base62 codes.
        max_attempts (int | None):
            Upper bound on draws per generate() call. None means unbounded.

    NOTE:
        - A returned code is only free at the moment of the check. Callers
          must still handle ShortURLAlreadyExistsError on insert.
    """

    def __init__(self, dao, source: CodeSource | None = None, max_attempts: int | None = None):
        if max_attempts is not None and max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.source = source or random_source()
        self.max_attempts = max_attempts

    def generate(self) -> str:
        """Draw candidates until one is not registered.

        Returns:
            str: an unused shortcode

        Raises:
            ShortcodeGenerationError:
                If `max_attempts` draws all collided.
        """
        attempts = itertools.count(1) if self.max_attempts is None else range(1, self.max_attempts + 1)
        for attempt in attempts:
            shortcode = self.source()
            if not self.dao.exists(shortcode):
                if attempt > 1:
                    logger.debug('Generated shortcode after %s attempts.', attempt, extra={'shortcode': shortcode})
                return shortcode

        raise ShortcodeGenerationError(f'Unable to generate an unused shortcode after {self.max_attempts} attempts.')
