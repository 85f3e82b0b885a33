"""Tests for round generation."""

import random

import pytest

from core import round_factory
from core.modes import MODES
from core.round_factory import DEFAULT_SHAPE, RoundFactory, RoundState, Shape, Tile


class TestSingleMatch:
    @pytest.mark.parametrize("mode_id", sorted(MODES))
    @pytest.mark.parametrize("shape_mode", [False, True])
    def test_exactly_one_tile_matches(self, mode_id, shape_mode):
        factory = RoundFactory(random.Random(mode_id + str(shape_mode)))

        for _ in range(150):
            state = factory.generate(mode_id, shape_mode)

            assert len(state.tiles) == MODES[mode_id].cells
            assert state.match_count() == 1
            assert 0 <= state.correct_index < len(state.tiles)
            assert state.matches(state.correct_index)

    def test_correct_tile_carries_target(self):
        state = RoundFactory(random.Random(3)).generate("moderate", shape_mode=True)

        assert state.tiles[state.correct_index] == state.target
        assert state.shape_mode is True

    def test_placement_covers_every_cell(self):
        factory = RoundFactory(random.Random(11))

        seen = {factory.generate("easy").correct_index for _ in range(400)}

        assert seen == set(range(9))


class TestDistractors:
    def test_distractor_colors_are_unique(self):
        state = RoundFactory(random.Random(5)).generate("hard")

        colors = [tile.color for tile in state.tiles]
        assert len(set(colors)) == len(colors)

    def test_shapes_fixed_outside_shape_mode(self):
        state = RoundFactory(random.Random(8)).generate("hard", shape_mode=False)

        assert all(tile.shape == DEFAULT_SHAPE for tile in state.tiles)

    def test_shape_mode_uses_several_shapes(self):
        state = RoundFactory(random.Random(8)).generate("hard", shape_mode=True)

        assert len({tile.shape for tile in state.tiles}) > 1

    def test_same_color_distractor_never_gets_target_shape(self, monkeypatch):
        # Every palette entry is the same color, so only the shape rule
        # keeps the distractors from matching.
        monkeypatch.setattr(
            round_factory, "generate_distinct_colors",
            lambda count, rng=None: [(10, 20, 30)] * count,
        )
        factory = RoundFactory(random.Random(2))

        for _ in range(50):
            state = factory.generate("moderate", shape_mode=True)
            others = [t for i, t in enumerate(state.tiles) if i != state.correct_index]
            assert all(t.shape != state.target_shape for t in others)
            assert state.match_count() == 1


class TestRegeneration:
    def test_regenerates_until_single_match(self, monkeypatch):
        bad = RoundState(
            target_color=(1, 1, 1),
            target_shape=Shape.STAR,
            tiles=(Tile((1, 1, 1)), Tile((1, 1, 1))),
            correct_index=0,
        )
        factory = RoundFactory(random.Random(4))
        real_build = factory._build
        calls = []

        def flaky_build(mode, shape_mode):
            calls.append(mode.id)
            return bad if len(calls) == 1 else real_build(mode, shape_mode)

        monkeypatch.setattr(factory, "_build", flaky_build)

        state = factory.generate("easy")

        assert len(calls) == 2
        assert state.match_count() == 1

    def test_gives_up_when_palette_collapses(self, monkeypatch):
        monkeypatch.setattr(
            round_factory, "generate_distinct_colors",
            lambda count, rng=None: [(10, 20, 30)] * count,
        )

        with pytest.raises(RuntimeError, match="single-match"):
            RoundFactory(random.Random(0)).generate("easy", shape_mode=False)


class TestRoundState:
    def test_out_of_range_index_never_matches(self):
        state = RoundFactory(random.Random(9)).generate("easy")

        assert state.matches(-1) is False
        assert state.matches(len(state.tiles)) is False

    def test_same_seed_same_round(self):
        first = RoundFactory(random.Random(77)).generate("moderate", shape_mode=True)
        second = RoundFactory(random.Random(77)).generate("moderate", shape_mode=True)

        assert first == second

    def test_color_only_predicate_ignores_shape(self):
        state = RoundState(
            target_color=(9, 9, 9),
            target_shape=Shape.STAR,
            tiles=(Tile((9, 9, 9), Shape.CIRCLE), Tile((1, 2, 3), Shape.STAR)),
            correct_index=0,
            shape_mode=False,
        )

        assert state.matches(0)
        assert not state.matches(1)
