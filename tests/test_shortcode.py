"""Tests for short code generation."""

import random

from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.validators import CODE_PATTERN


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_generate_default_length(self):
        """Generated codes use the default length and the base62 alphabet."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate()
        assert len(code) == 6
        assert CODE_PATTERN.fullmatch(code)

    def test_generate_custom_length(self):
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate(length=8)
        assert len(code) == 8
        assert CODE_PATTERN.fullmatch(code)

    def test_generate_with_seeded_rng_is_reproducible(self):
        code1 = ShortCodeGenerator(rng=random.Random(42)).generate()
        code2 = ShortCodeGenerator(rng=random.Random(42)).generate()

        assert code1 == code2

    def test_generated_codes_are_spread_out(self):
        """1000 draws from a 62^6 keyspace should not repeat."""
        generator = ShortCodeGenerator()

        codes = {generator.generate() for _ in range(1000)}
        assert len(codes) == 1000

    def test_alphabet(self):
        assert len(ShortCodeGenerator.BASE62_CHARS) == 62
        assert len(set(ShortCodeGenerator.BASE62_CHARS)) == 62

    def test_codes_use_only_alphabet(self):
        generator = ShortCodeGenerator(rng=random.Random(7))

        for _ in range(200):
            code = generator.generate(length=8)
            assert set(code) <= set(ShortCodeGenerator.BASE62_CHARS)
            assert CODE_PATTERN.fullmatch(code)
