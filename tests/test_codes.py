from __future__ import annotations

import random

from impostor.codes import CODE_LENGTH, CodeGenerator, is_valid_code

from tests.helpers import ScriptedRandom


def test_codes_are_eight_digits_with_leading_zeros() -> None:
    gen = CodeGenerator(rng=ScriptedRandom([42, 0, 99_999_999]))

    assert gen.generate() == "00000042"
    assert gen.generate() == "00000000"
    assert gen.generate() == "99999999"


def test_codes_draw_from_the_full_space() -> None:
    rng = ScriptedRandom([7])
    CodeGenerator(rng=rng).generate()
    assert rng.calls == [10**8]


def test_default_generator_produces_valid_codes() -> None:
    gen = CodeGenerator()
    for _ in range(50):
        code = gen.generate()
        assert len(code) == CODE_LENGTH
        assert is_valid_code(code)


def test_seeded_generator_is_reproducible() -> None:
    a = CodeGenerator(rng=random.Random(5))
    b = CodeGenerator(rng=random.Random(5))
    assert [a.generate() for _ in range(5)] == [b.generate() for _ in range(5)]


def test_is_valid_code_rejects_non_codes() -> None:
    assert not is_valid_code("1234567")
    assert not is_valid_code("12345678a")
    assert not is_valid_code("abcdefgh")
    assert not is_valid_code(12345678)
    assert not is_valid_code(None)
