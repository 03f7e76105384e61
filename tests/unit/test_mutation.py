"""
Unit tests for Darwin mutation operators.
"""

import numpy as np
import pytest

from darwin.operators import (
    BoundaryMutation,
    FlipMutation,
    InvertMutation,
    MoveMutation,
    NormalMutation,
    SwapMutation,
    UniformMutation,
    VectorMutation
)


class TestSequenceMutation:
    """Test suite for flip, swap, invert and move mutations."""

    def test_flip_all(self, rng):
        """Test that probability one toggles every element."""
        assert FlipMutation(1.0).mutate([True, False, True], rng) == [False, True, False]
        assert FlipMutation(1.0).mutate([1, 0], rng) == [0, 1]

        bits = FlipMutation(1.0).mutate(np.array([True, False]), rng)
        assert bits.tolist() == [False, True]

    def test_flip_none(self, rng):
        """Test that probability zero leaves the sequence unchanged."""
        assert FlipMutation(0.0).mutate([True, False], rng) == [True, False]

    def test_flip_probability_validation(self):
        """Test rejection of invalid flip probabilities."""
        with pytest.raises(ValueError):
            FlipMutation(1.5)

    def test_swap_preserves_permutation(self, rng):
        """Test that a swap exchanges exactly two positions."""
        for _ in range(20):
            value = SwapMutation().mutate(list(range(8)), rng)

            assert sorted(value) == list(range(8))
            assert sum(1 for i, v in enumerate(value) if i != v) == 2

    def test_swap_needs_two_elements(self, rng):
        """Test that swapping a single element is rejected."""
        with pytest.raises(ValueError):
            SwapMutation().mutate([1], rng)

    def test_invert_segment(self, scripted_rng):
        """Test reversal of the segment between the drawn positions."""
        value = InvertMutation().mutate([0, 1, 2, 3, 4, 5], scripted_rng(integers=[4, 1]))

        assert value == [0, 3, 2, 1, 4, 5]

    def test_invert_redraws_equal_positions(self, scripted_rng):
        """Test that equal draws are rejected until two positions differ."""
        value = InvertMutation().mutate([0, 1, 2, 3], scripted_rng(integers=[2, 2, 2, 0]))

        assert value == [1, 0, 2, 3]

    def test_move_element(self, scripted_rng):
        """Test that the later element moves forward and the rest shift right."""
        value = MoveMutation().mutate([0, 1, 2, 3, 4, 5], scripted_rng(integers=[1, 4]))

        assert value == [0, 4, 1, 2, 3, 5]

    def test_move_on_array(self, rng):
        """Test move mutation on a numpy permutation."""
        value = MoveMutation().mutate(np.arange(10), rng)

        assert sorted(value.tolist()) == list(range(10))


class TestScalarMutation:
    """Test suite for boundary, normal and uniform mutations."""

    def test_boundary(self, rng):
        """Test that boundary mutation returns one of the bounds."""
        values = {BoundaryMutation(-1.0, 2.0).mutate(0.5, rng) for _ in range(50)}

        assert values == {-1.0, 2.0}

    def test_normal_is_clamped(self, rng):
        """Test that Gaussian noise never leaves the bounds."""
        mutation = NormalMutation(std_dev=5.0, lower_bound=0.0, upper_bound=1.0)

        for _ in range(100):
            assert 0.0 <= mutation.mutate(0.5, rng) <= 1.0

    def test_normal_without_noise(self, rng):
        """Test that zero deviation keeps the value."""
        assert NormalMutation(0.0, 0.0, 1.0).mutate(0.3, rng) == pytest.approx(0.3)

    def test_uniform_noise_range(self, rng):
        """Test that uniform noise stays within its range and bounds."""
        mutation = UniformMutation(noise_range=0.1, lower_bound=0.0, upper_bound=1.0)

        for _ in range(100):
            value = mutation.mutate(0.5, rng)
            assert 0.4 <= value <= 0.6

        assert mutation.mutate(0.0, rng) >= 0.0

    @pytest.mark.parametrize("factory", [
        lambda: BoundaryMutation(1.0, 0.0),
        lambda: NormalMutation(0.1, 1.0, 0.0),
        lambda: NormalMutation(-0.1, 0.0, 1.0),
        lambda: UniformMutation(-0.1, 0.0, 1.0)
    ])
    def test_invalid_parameters(self, factory):
        """Test rejection of inverted bounds and negative spreads."""
        with pytest.raises(ValueError):
            factory()


class TestVectorMutation:
    """Test suite for element-wise mutation."""

    def test_all_elements(self, rng):
        """Test that probability one mutates every element."""
        value = VectorMutation(1.0, BoundaryMutation(0.0, 0.0)).mutate(np.ones(5), rng)

        assert value.tolist() == [0.0] * 5

    def test_no_elements(self, rng):
        """Test that probability zero leaves the vector unchanged."""
        value = VectorMutation(0.0, BoundaryMutation(0.0, 0.0)).mutate([1.0, 2.0], rng)

        assert value == [1.0, 2.0]

    def test_probability_validation(self):
        """Test rejection of invalid element probabilities."""
        with pytest.raises(ValueError):
            VectorMutation(-0.5, BoundaryMutation(0.0, 1.0))
