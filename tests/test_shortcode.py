"""Tests for short code generation."""

import random

import pytest
from shortlinks.common.validators import is_valid_short_code
from shortlinks.shortcode import (
    ShortCodeGenerator,
    Allocated,
    Exhausted,
    find_free_code,
)


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_generate_random(self):
        """Test random code generation."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random()
        assert len(code) == 6
        assert is_valid_short_code(code)[0]

    def test_generate_random_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random(length=8)
        assert len(code) == 8
        assert is_valid_short_code(code)[0]

    def test_seeded_generators_agree(self):
        """Same seed gives the same sequence of codes."""
        first = ShortCodeGenerator(rng=random.Random(42))
        second = ShortCodeGenerator(rng=random.Random(42))

        assert [first.generate_random() for _ in range(5)] == [
            second.generate_random() for _ in range(5)
        ]

    def test_only_alphanumeric_characters(self):
        """Generated codes draw from the 62-character alphabet."""
        generator = ShortCodeGenerator(rng=random.Random(7))
        alphabet = set(ShortCodeGenerator.BASE62_CHARS)

        for _ in range(200):
            assert set(generator.generate_random()) <= alphabet

    @pytest.mark.parametrize("length", [5, 9])
    def test_rejects_out_of_range_length(self, length):
        """Default length must stay within 6-8."""
        with pytest.raises(ValueError):
            ShortCodeGenerator(default_length=length)


@pytest.mark.asyncio
class TestFindFreeCode:
    """Test the bounded collision-retry loop."""

    async def test_first_candidate_free(self):
        """A free first candidate is returned without retries."""
        generator = ShortCodeGenerator(rng=random.Random(1))
        expected = ShortCodeGenerator(rng=random.Random(1)).generate_random()
        checked = []

        async def exists(code):
            checked.append(code)
            return False

        result = await find_free_code(generator, exists)

        assert result == Allocated(expected)
        assert checked == [expected]

    async def test_retries_after_collisions(self):
        """Colliding candidates are skipped until a free one turns up."""
        generator = ShortCodeGenerator(rng=random.Random(2))
        calls = []

        async def exists(code):
            calls.append(code)
            return len(calls) <= 3

        result = await find_free_code(generator, exists, max_attempts=10)

        assert isinstance(result, Allocated)
        assert result.code == calls[-1]
        assert len(calls) == 4

    async def test_exhausted_after_max_attempts(self):
        """Every candidate colliding yields Exhausted after exactly max_attempts checks."""
        generator = ShortCodeGenerator(rng=random.Random(3))
        calls = []

        async def exists(code):
            calls.append(code)
            return True

        result = await find_free_code(generator, exists, max_attempts=10)

        assert result == Exhausted(10)
        assert len(calls) == 10
