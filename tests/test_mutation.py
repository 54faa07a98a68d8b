"""Tests for lexicon mutation operators and generators."""

from __future__ import annotations

import pytest

from pragmalab.errors import DimensionMismatchError
from pragmalab.rsa.lexicon import Lexicon
from pragmalab.rsa.models import PragmaticModel
from pragmalab.util.rng import RandomSource

# ========================================================================
# mutate
# ========================================================================


class TestMutate:
    """Tests for per-cell flipping."""

    def test_zero_rate_is_identity(self, binary_lexicon: Lexicon, rng: RandomSource):
        assert binary_lexicon.mutate(0.0, rng) == binary_lexicon

    def test_full_rate_flips_binary(self, binary_lexicon: Lexicon, rng: RandomSource):
        flipped = binary_lexicon.mutate(1.0, rng)
        assert flipped.data == tuple(1.0 - v for v in binary_lexicon.data)

    def test_graded_values_mirror(self, graded_lexicon: Lexicon, rng: RandomSource):
        mirrored = graded_lexicon.mutate(1.0, rng)
        assert mirrored.get(0, 0) == pytest.approx(0.2)
        assert mirrored.get(1, 1) == pytest.approx(0.4)
        assert mirrored.get(0, 2) == 1.0

    def test_source_lexicon_unchanged(self, binary_lexicon: Lexicon, rng: RandomSource):
        before = binary_lexicon.data
        binary_lexicon.mutate(0.5, rng)
        assert binary_lexicon.data == before

    def test_reproducible_with_seed(self):
        lex = Lexicon.generate_random_binary_lexicon(0.5, 10, 10, RandomSource(3))
        assert lex.mutate(0.3, RandomSource(11)) == lex.mutate(0.3, RandomSource(11))

    def test_rate_controls_flip_fraction(self, rng: RandomSource):
        lex = Lexicon(50, 50, [0.0] * 2500)
        mutated = lex.mutate(0.2, rng)
        assert sum(mutated.data) / 2500 == pytest.approx(0.2, abs=0.03)

    def test_keeps_model(self, binary_lexicon: Lexicon, rng: RandomSource):
        lex = binary_lexicon.with_model(PragmaticModel.FRANK_GOODMAN)
        assert lex.mutate(0.5, rng).model == PragmaticModel.FRANK_GOODMAN


# ========================================================================
# mix_referents
# ========================================================================


class TestMixReferents:
    """Tests for mirrored referent swaps."""

    def test_zero_rate_is_identity(self, graded_lexicon: Lexicon, rng: RandomSource):
        assert graded_lexicon.mix_referents(0.0, rng) == graded_lexicon

    def test_full_rate_reverses_rows(self, rng: RandomSource):
        lex = Lexicon.from_matrix([[0.1, 0.2, 0.3, 0.4], [0.5, 0.6, 0.7, 0.8]])
        assert lex.mix_referents(1.0, rng).to_2d() == [[0.4, 0.3, 0.2, 0.1], [0.8, 0.7, 0.6, 0.5]]

    def test_odd_middle_never_moves(self, rng: RandomSource):
        lex = Lexicon.from_matrix([[0.1, 0.2, 0.3, 0.4, 0.5]])
        assert lex.mix_referents(1.0, rng).row(0) == (0.5, 0.4, 0.3, 0.2, 0.1)

    def test_half_rate_swaps_exactly_one_pair(self):
        lex = Lexicon.from_matrix([[0.1, 0.2, 0.3, 0.4]])
        for seed in range(20):
            mixed = lex.mix_referents(0.5, RandomSource(seed)).row(0)
            assert mixed in {(0.4, 0.2, 0.3, 0.1), (0.1, 0.3, 0.2, 0.4)}

    def test_preserves_row_contents(self, rng: RandomSource):
        lex = Lexicon.generate_random_binary_lexicon(0.5, 6, 7, rng)
        mixed = lex.mix_referents(0.6, rng)
        for before, after in zip(lex.rows(), mixed.rows()):
            assert sorted(before) == sorted(after)
            assert before[3] == after[3]


# ========================================================================
# additive / removal binary mutation
# ========================================================================


class TestAdditiveBinaryMutation:
    """Tests for adding relations to zero cells."""

    def test_full_rate_fills_lexicon(self, binary_lexicon: Lexicon, rng: RandomSource):
        assert binary_lexicon.additive_binary_mutation(1.0, rng).data == (1.0,) * 9

    def test_zero_rate_is_identity(self, binary_lexicon: Lexicon, rng: RandomSource):
        assert binary_lexicon.additive_binary_mutation(0.0, rng) == binary_lexicon

    def test_exact_number_of_additions(self):
        lex = Lexicon.from_matrix([[0.0, 0.0, 0.0, 0.0, 1.0], [1.0, 0.0, 0.0, 0.0, 0.0]])
        for seed in range(20):
            mutated = lex.additive_binary_mutation(0.5, RandomSource(seed))
            for before, after in zip(lex.rows(), mutated.rows()):
                assert sum(after) == 3.0
                # Existing relations are kept
                assert all(a == 1.0 for b, a in zip(before, after) if b == 1.0)

    def test_count_is_truncated(self, rng: RandomSource):
        lex = Lexicon.from_matrix([[0.0, 0.0, 0.0, 1.0]])
        # int(0.5 * 3) == 1
        assert sum(lex.additive_binary_mutation(0.5, rng).row(0)) == 2.0

    def test_additions_spread_over_positions(self):
        lex = Lexicon(1, 4, [0.0] * 4)
        hits = [0] * 4
        for seed in range(2000):
            row = lex.additive_binary_mutation(0.25, RandomSource(seed)).row(0)
            for j, v in enumerate(row):
                hits[j] += int(v)
        for count in hits:
            assert count / 2000 == pytest.approx(0.25, abs=0.05)


class TestRemovalBinaryMutation:
    """Tests for removing relations at or above a threshold."""

    def test_removal_sets_selected_cells_to_zero(self, binary_lexicon: Lexicon, rng: RandomSource):
        assert binary_lexicon.removal_binary_mutation(1.0, rng=rng).data == (0.0,) * 9

    def test_zero_rate_is_identity(self, binary_lexicon: Lexicon, rng: RandomSource):
        assert binary_lexicon.removal_binary_mutation(0.0, rng=rng) == binary_lexicon

    def test_exact_number_of_removals(self):
        lex = Lexicon.from_matrix([[1.0, 1.0, 1.0, 1.0, 0.0]])
        for seed in range(20):
            mutated = lex.removal_binary_mutation(0.5, rng=RandomSource(seed))
            assert sum(mutated.row(0)) == 2.0
            assert mutated.get(0, 4) == 0.0

    def test_threshold_selects_graded_cells(self, graded_lexicon: Lexicon, rng: RandomSource):
        mutated = graded_lexicon.removal_binary_mutation(1.0, threshold=0.5, rng=rng)
        assert mutated.to_2d() == [[0.0, 0.2, 0.0], [0.0, 0.0, 0.4]]


# ========================================================================
# Generators
# ========================================================================


class TestRandomBinaryLexicon:
    """Tests for Bernoulli lexicons."""

    def test_shape_and_values(self, rng: RandomSource):
        lex = Lexicon.generate_random_binary_lexicon(0.5, 4, 6, rng)
        assert (lex.vocabulary_size, lex.context_size) == (4, 6)
        assert set(lex.data) <= {0.0, 1.0}

    def test_extremes(self, rng: RandomSource):
        assert Lexicon.generate_random_binary_lexicon(0.0, 3, 3, rng).data == (0.0,) * 9
        assert Lexicon.generate_random_binary_lexicon(1.0, 3, 3, rng).data == (1.0,) * 9
        assert Lexicon.generate_random_binary_lexicon(-1.0, 2, 2, rng).data == (0.0,) * 4

    def test_density(self, rng: RandomSource):
        lex = Lexicon.generate_random_binary_lexicon(0.3, 100, 100, rng)
        assert sum(lex.data) / 10000 == pytest.approx(0.3, abs=0.03)

    def test_seed_reproducible(self):
        a = Lexicon.generate_random_binary_lexicon(0.5, 5, 5, RandomSource(9))
        b = Lexicon.generate_random_binary_lexicon(0.5, 5, 5, RandomSource(9))
        assert a == b


class TestConsistentAmbiguityMapping:
    """Tests for consistent fixed-ambiguity lexicons."""

    def test_vocabulary_smaller_than_context_rejected(self, rng: RandomSource):
        with pytest.raises(DimensionMismatchError):
            Lexicon.generate_consistent_ambiguity_mapping(1, 3, 4, rng)

    @pytest.mark.parametrize("ambiguity", [1, 2, 3, 4])
    def test_always_consistent(self, ambiguity: int):
        for seed in range(25):
            lex = Lexicon.generate_consistent_ambiguity_mapping(
                ambiguity, 6, 4, RandomSource(seed)
            )
            assert lex.is_consistent()

    @pytest.mark.parametrize("ambiguity,quota", [(0, 1), (1, 1), (2, 2), (4, 4), (9, 4)])
    def test_each_signal_has_its_quota(self, ambiguity: int, quota: int):
        for seed in range(25):
            lex = Lexicon.generate_consistent_ambiguity_mapping(
                ambiguity, 5, 4, RandomSource(seed)
            )
            assert [sum(r) for r in lex.rows()] == [quota] * 5

    def test_square_unambiguous_is_permutation(self, rng: RandomSource):
        lex = Lexicon.generate_consistent_ambiguity_mapping(1, 4, 4, rng)
        assert sorted(lex.data) == [0.0] * 12 + [1.0] * 4
        assert all(sum(lex.column(j)) == 1.0 for j in range(4))
