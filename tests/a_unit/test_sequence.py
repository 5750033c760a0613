"""Unit tests for kmerbench.sequence module."""

from __future__ import annotations

import pytest

from kmerbench.sequence import generate, generate_many


class TestGenerate:
    """Tests for generate."""

    def test_length_and_alphabet(self) -> None:
        """Sequences have the requested length over ACGT."""
        dna = generate(1000, seed=3)
        assert len(dna) == 1000
        assert set(dna) <= set("ACGT")

    def test_lowercase(self) -> None:
        """lowercase switches the alphabet to acgt."""
        dna = generate(200, seed=3, lowercase=True)
        assert set(dna) <= set("acgt")
        assert dna == generate(200, seed=3).lower()

    def test_seed_reproducible(self) -> None:
        """Equal seeds give equal sequences."""
        assert generate(500, seed=12345) == generate(500, seed=12345)
        assert generate(500, seed=1) != generate(500, seed=2)

    def test_seed_is_local(self) -> None:
        """Generation does not depend on the global RNG state."""
        import random

        random.seed(0)
        first = generate(100, seed=9)
        random.seed(1)
        assert generate(100, seed=9) == first

    def test_zero_length(self) -> None:
        """Zero length gives an empty string."""
        assert generate(0, seed=1) == ""

    def test_negative_length(self) -> None:
        """Negative lengths raise ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            generate(-1)

    def test_all_bases_used(self) -> None:
        """A long sequence uses all four bases."""
        assert set(generate(10_000, seed=5)) == set("ACGT")


class TestGenerateMany:
    """Tests for generate_many."""

    def test_one_stream(self) -> None:
        """Sequences are drawn one after another from one RNG."""
        a, b = generate_many([50, 70], seed=11)
        assert len(a) == 50
        assert len(b) == 70
        assert generate_many([50, 70], seed=11) == [a, b]
        assert generate(50, seed=11) == a

    def test_empty(self) -> None:
        """No lengths, no sequences."""
        assert generate_many([], seed=1) == []
