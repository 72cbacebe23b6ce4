"""Unit tests for shortcode generation in shortener.py.

Test coverage includes:

1. random_source()
   - Produces codes of the requested length from the requested alphabet.
   - Is reproducible with a seeded random.Random.
   - Rejects empty alphabets and non-positive lengths.

2. generate_shortcode()
   - Deterministic, salted, fixed-length Base62 output.
   - Bijective over the counter space (no collisions before wrap-around).
   - Input validation.

3. sequential_source()
   - Yields distinct deterministic codes.

4. ShortcodeGenerator
   - Returns the first candidate not present in the registry.
   - Honors max_attempts with a tiny alphabet.
"""

import random
import string
from datetime import timedelta

import pytest

from linkshortener.exceptions import ShortcodeGenerationError
from linkshortener.utils import ShortcodeGenerator, generate_shortcode, random_source, sequential_source


BASE62 = set(string.ascii_letters + string.digits)


# -------------------------------
# 1. random_source()
# -------------------------------


def test_random_source_default_format():
    draw = random_source()
    for _ in range(100):
        code = draw()
        assert len(code) == 6
        assert set(code) <= BASE62


def test_random_source_custom_alphabet_and_length():
    draw = random_source(alphabet='ab', length=10)
    assert all(set(draw()) <= {'a', 'b'} and len(draw()) == 10 for _ in range(20))


def test_random_source_is_reproducible_when_seeded():
    first = random_source(rng=random.Random(42))
    second = random_source(rng=random.Random(42))
    assert [first() for _ in range(5)] == [second() for _ in range(5)]


@pytest.mark.parametrize('alphabet, length', [('', 6), ('abc', 0), ('abc', -1)])
def test_random_source_rejects_bad_parameters(alphabet, length):
    with pytest.raises(ValueError):
        random_source(alphabet=alphabet, length=length)


# -------------------------------
# 2. generate_shortcode()
# -------------------------------


def test_generate_shortcode_is_deterministic():
    assert generate_shortcode(123, salt='unit_test_salt') == generate_shortcode(123, salt='unit_test_salt')


def test_generate_shortcode_salt_changes_output():
    assert generate_shortcode(123, salt='unit_test_saltA') != generate_shortcode(123, salt='unit_test_saltB')


@pytest.mark.parametrize('counter', [0, 1, 10**6, 2**63 - 1])
@pytest.mark.parametrize('length', [4, 6, 7])
def test_generate_shortcode_fixed_length_base62(counter, length):
    code = generate_shortcode(counter, salt='edge_test', length=length)
    assert len(code) == length
    assert set(code) <= BASE62


def test_generate_shortcode_has_no_collisions_for_sequential_counters():
    codes = {generate_shortcode(i, salt='collisions') for i in range(20_000)}
    assert len(codes) == 20_000


@pytest.mark.parametrize(
    'kwargs, error',
    [
        ({'counter': -1}, ValueError),
        ({'counter': '1'}, TypeError),
        ({'counter': 1, 'salt': ''}, ValueError),
        ({'counter': 1, 'salt': None}, TypeError),
        ({'counter': 1, 'mult': 62}, ValueError),
    ],
)
def test_generate_shortcode_rejects_invalid_input(kwargs, error):
    with pytest.raises(error):
        generate_shortcode(**kwargs)


# -------------------------------
# 3. sequential_source()
# -------------------------------


def test_sequential_source_matches_generate_shortcode():
    draw = sequential_source(salt='seq', start=10)
    assert [draw(), draw()] == [generate_shortcode(10, salt='seq'), generate_shortcode(11, salt='seq')]


# -------------------------------
# 4. ShortcodeGenerator
# -------------------------------


def test_generator_skips_registered_codes(memory_dao, now):
    for code in ('aaaaaa', 'bbbbbb'):
        memory_dao.insert(code, 'https://example.com', now + timedelta(minutes=1))
    candidates = iter(['aaaaaa', 'bbbbbb', 'cccccc'])

    generator = ShortcodeGenerator(memory_dao, source=lambda: next(candidates))

    assert generator.generate() == 'cccccc'


def test_generator_default_source(memory_dao):
    code = ShortcodeGenerator(memory_dao).generate()
    assert len(code) == 6
    assert set(code) <= BASE62


def test_generator_with_tiny_alphabet_exhausts(memory_dao, now):
    memory_dao.insert('a', 'https://example.com', now + timedelta(minutes=1))
    generator = ShortcodeGenerator(memory_dao, source=random_source(alphabet='a', length=1), max_attempts=25)

    with pytest.raises(ShortcodeGenerationError, match='after 25 attempts'):
        generator.generate()


def test_generator_with_tiny_alphabet_finds_last_free_code(memory_dao, now):
    memory_dao.insert('a', 'https://example.com', now + timedelta(minutes=1))
    generator = ShortcodeGenerator(memory_dao, source=random_source(alphabet='ab', length=1, rng=random.Random(7)), max_attempts=1000)

    assert generator.generate() == 'b'


def test_generator_rejects_non_positive_max_attempts(memory_dao):
    with pytest.raises(ValueError):
        ShortcodeGenerator(memory_dao, max_attempts=0)
