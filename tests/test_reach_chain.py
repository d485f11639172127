"""Tests for the two-pass reach chain solver."""

import pytest
import numpy as np

from reach import (
    ReachChain, ReachConfigurationError, ReachSolveError, validate_chain
)


def assert_chain_invariants(chain, rel_tol=1e-9):
    """Length, continuity and anchor checks on a solved chain."""
    for seg in chain.segments:
        actual = np.linalg.norm(seg.a - seg.b)
        assert abs(actual - seg.length) <= rel_tol * seg.length
    for i in range(chain.segment_count - 1):
        assert np.allclose(chain.segments[i].a, chain.segments[i + 1].b, rtol=0.0, atol=1e-9)
    assert np.allclose(chain.segments[-1].a, chain.anchor, rtol=0.0, atol=1e-12)


class TestChainConstruction:
    """Test rebuilding and configuration checks."""

    def test_builds_requested_number_of_segments(self):
        chain = ReachChain(4, 0.5, [1.0, 2.0, 3.0])
        assert chain.segment_count == 4
        assert [seg.index for seg in chain.segments] == [0, 1, 2, 3]
        assert all(seg.length == 0.5 for seg in chain.segments)
        assert np.array_equal(chain.target, [1.0, 2.0, 3.0])

    def test_parents_point_toward_anchor(self):
        chain = ReachChain(3, 1.0, [0.0, 0.0, 1.0])
        assert [seg.parent_index for seg in chain.segments] == [1, 2, None]
        assert chain.parent_of(chain.segments[0]) is chain.segments[1]
        assert chain.parent_of(chain.segments[2]) is None

    def test_positions_unset_until_solved(self):
        chain = ReachChain(2, 1.0, [0.0, 3.0, 0.0])
        for seg in chain.segments:
            assert np.array_equal(seg.a, np.zeros(3))
            assert np.array_equal(seg.b, np.zeros(3))

    @pytest.mark.parametrize('count', [0, -1, 2.5, '3', None, True])
    def test_rejects_bad_segment_count(self, count):
        with pytest.raises(ReachConfigurationError):
            ReachChain(count, 1.0, [1.0, 0.0, 0.0])

    @pytest.mark.parametrize('length', [0.0, -2.0, float('nan'), float('inf'), 'long', None])
    def test_rejects_bad_segment_length(self, length):
        with pytest.raises(ReachConfigurationError):
            ReachChain(3, length, [1.0, 0.0, 0.0])

    @pytest.mark.parametrize('target', [[1.0, 2.0], [float('nan'), 0.0, 0.0], 'abc', [1, 2, 3, 4]])
    def test_rejects_bad_target(self, target):
        with pytest.raises(ReachConfigurationError):
            ReachChain(3, 1.0, target)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ReachChain(0, 1.0, [1.0, 0.0, 0.0])

    def test_accepts_numpy_scalars(self):
        chain = ReachChain(np.int64(2), np.float64(0.5), np.array([1.0, 0.0, 0.0]))
        assert chain.segment_count == 2

    def test_bad_target_assignment_keeps_previous_target(self):
        chain = ReachChain(2, 1.0, [1.0, 0.0, 0.0])
        with pytest.raises(ReachConfigurationError):
            chain.target = [float('inf'), 0.0, 0.0]
        assert np.array_equal(chain.target, [1.0, 0.0, 0.0])


class TestSolveScenarios:
    """Worked examples of the forward + backward pass."""

    def test_three_segments_toward_far_target(self):
        """Target beyond reach: chain stretches straight toward it."""
        chain = ReachChain(3, 1.0, [5.0, 0.0, 0.0])
        chain.solve()

        lines = chain.render()
        assert lines.shape == (3, 2, 3)
        assert np.allclose(lines[0], [[2.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
        assert np.allclose(lines[1], [[1.0, 0.0, 0.0], [2.0, 0.0, 0.0]])
        assert np.allclose(lines[2], [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        assert_chain_invariants(chain)
        assert abs(np.linalg.norm(chain.tip_position()) - chain.total_reach()) < 1e-9

    def test_single_segment_points_at_target(self):
        chain = ReachChain(1, 2.0, [0.0, 0.0, 10.0])
        chain.solve()
        assert np.allclose(chain.render(), [[[0.0, 0.0, 0.0], [0.0, 0.0, 2.0]]])

    def test_single_segment_follows_moved_target(self):
        chain = ReachChain(1, 2.0, [0.0, 0.0, 10.0])
        chain.solve()
        chain.target = [0.0, 0.0, -10.0]
        chain.solve()
        assert np.allclose(chain.render(), [[[0.0, 0.0, 0.0], [0.0, 0.0, -2.0]]])
        assert_chain_invariants(chain)

    def test_tip_turns_toward_new_target(self):
        chain = ReachChain(2, 1.0, [5.0, 0.0, 0.0])
        chain.solve()
        chain.target = [0.0, 5.0, 0.0]
        chain.solve()
        assert chain.tip_position()[1] > 0.0
        assert_chain_invariants(chain)

    def test_target_on_inner_endpoint_gives_no_nan(self):
        chain = ReachChain(3, 1.0, [5.0, 0.0, 0.0])
        chain.solve()
        before = chain.render()

        chain.target = chain.segments[0].a.copy()
        chain.solve()

        after = chain.render()
        assert np.all(np.isfinite(after))
        assert np.allclose(after, before)
        assert_chain_invariants(chain)

    def test_target_on_anchor_of_fresh_chain(self):
        chain = ReachChain(1, 1.0, [0.0, 0.0, 0.0])
        chain.solve()
        assert np.allclose(chain.render(), [[[0.0, 0.0, 0.0], [0.0, 0.0, 1.0]]])

    def test_origin_offsets_target_and_lines(self):
        chain = ReachChain(3, 1.0, [15.0, 0.0, 0.0], origin=[10.0, 0.0, 0.0])
        chain.solve()
        assert np.allclose(chain.render()[2], [[10.0, 0.0, 0.0], [11.0, 0.0, 0.0]])
        assert np.allclose(chain.tip_position(), [13.0, 0.0, 0.0])

    def test_custom_anchor(self):
        chain = ReachChain(4, 0.25, [3.0, -2.0, 1.0], anchor=[1.0, 1.0, 1.0])
        for _ in range(3):
            chain.solve()
        assert np.allclose(chain.segments[-1].a, [1.0, 1.0, 1.0])
        assert_chain_invariants(chain)

    def test_solve_count(self):
        chain = ReachChain(2, 1.0, [1.0, 1.0, 0.0])
        chain.solve()
        chain.solve()
        assert chain.solve_count == 2


class TestSolveProperties:
    """Invariants that must hold for any target sequence."""

    @pytest.fixture
    def targets(self):
        rng = np.random.default_rng(1234)
        return rng.uniform(-10.0, 10.0, size=(60, 3))

    @pytest.mark.parametrize('count,length', [(1, 0.7), (2, 1.3), (5, 0.7), (12, 0.25)])
    def test_invariants_hold_over_moving_target(self, targets, count, length):
        chain = ReachChain(count, length, targets[0])
        for target in targets:
            chain.target = target
            chain.solve()
            assert_chain_invariants(chain)
            assert validate_chain(chain.segments, chain.anchor)

    def test_render_count_and_order(self, targets):
        chain = ReachChain(6, 0.5, targets[0])
        chain.solve()
        lines = chain.render()
        assert len(lines) == 6
        for i, seg in enumerate(chain.segments):
            assert np.array_equal(lines[i][0], seg.a)
            assert np.array_equal(lines[i][1], seg.b)

    def test_render_does_not_mutate(self, targets):
        chain = ReachChain(4, 0.5, targets[0])
        chain.solve()
        first = chain.render()
        second = chain.render()
        assert np.array_equal(first, second)
        assert chain.solve_count == 1

    def test_rebuild_discards_prior_state(self, targets):
        chain = ReachChain(4, 0.8, targets[0])
        for target in targets[:10]:
            chain.target = target
            chain.solve()

        chain.rebuild(4, 0.8, targets[20])
        chain.solve()

        fresh = ReachChain(4, 0.8, targets[20])
        fresh.solve()
        assert np.array_equal(chain.render(), fresh.render())
        assert chain.solve_count == 1

    def test_deterministic(self, targets):
        first = ReachChain(5, 0.6, targets[0])
        second = ReachChain(5, 0.6, targets[0])
        for target in targets:
            first.target = target
            second.target = target
            first.solve()
            second.solve()
        assert np.array_equal(first.render(), second.render())

    def test_joint_points_polyline(self, targets):
        chain = ReachChain(3, 1.0, targets[3])
        chain.solve()
        points = chain.joint_points()
        assert points.shape == (4, 3)
        assert np.array_equal(points[0], chain.tip_position())
        assert np.allclose(points[-1], chain.anchor)

    def test_directions_are_unit(self, targets):
        chain = ReachChain(5, 1.0, targets[7])
        chain.solve()
        assert np.allclose(np.linalg.norm(chain.directions(), axis=1), 1.0)


class TestAtomicSolve:
    """A failed solve leaves the chain exactly as it was."""

    @pytest.fixture
    def chain(self):
        chain = ReachChain(3, 1.0, [5.0, 0.0, 0.0])
        chain.solve()
        chain.target = [0.0, 4.0, 1.0]
        return chain

    def test_exception_mid_solve_rolls_back(self, chain, monkeypatch):
        before = chain.render()

        def broken_backward_pass():
            chain.segments[0].a = np.array([99.0, 99.0, 99.0])
            raise RuntimeError('boom')

        monkeypatch.setattr(chain, '_backward_pass', broken_backward_pass)
        with pytest.raises(ReachSolveError, match='boom'):
            chain.solve()

        assert np.array_equal(chain.render(), before)
        assert chain.solve_count == 1

    def test_invariant_violation_rolls_back(self, chain, monkeypatch):
        before = chain.render()
        monkeypatch.setattr('reach.reach_chain.find_chain_violations',
                            lambda segments, anchor: ['segment 0 length is wrong'])

        with pytest.raises(ReachSolveError, match='invariants'):
            chain.solve()

        assert np.array_equal(chain.render(), before)

    def test_solve_error_is_runtime_error(self, chain, monkeypatch):
        monkeypatch.setattr('reach.reach_chain.find_chain_violations',
                            lambda segments, anchor: ['gap'])
        with pytest.raises(RuntimeError):
            chain.solve()

    def test_failed_solve_keeps_previous_target(self, chain, monkeypatch):
        monkeypatch.setattr('reach.reach_chain.find_chain_violations',
                            lambda segments, anchor: ['gap'])

        with pytest.raises(ReachSolveError):
            chain.solve([1.0, 1.0, 1.0])

        assert np.array_equal(chain.target, [0.0, 4.0, 1.0])

    def test_successful_solve_stores_new_target(self, chain):
        chain.solve([0.0, 0.0, 3.0])
        assert np.array_equal(chain.target, [0.0, 0.0, 3.0])
        assert chain.solve_count == 2

    def test_bad_target_to_solve_changes_nothing(self, chain):
        before = chain.render()
        with pytest.raises(ReachConfigurationError):
            chain.solve([float('nan'), 0.0, 0.0])
        assert np.array_equal(chain.target, [0.0, 4.0, 1.0])
        assert np.array_equal(chain.render(), before)
        assert chain.solve_count == 1


class TestLargeCoordinates:
    """Chains far from the origin and targets of extreme magnitude."""

    def test_short_segments_on_far_anchor(self):
        chain = ReachChain(2, 1e-3, [1e6 + 1.0, 0.0, 0.0], anchor=[1e6, 0.0, 0.0])
        chain.solve()

        assert np.array_equal(chain.segments[-1].a, [1e6, 0.0, 0.0])
        assert np.allclose(chain.tip_position(), [1e6 + 2e-3, 0.0, 0.0], rtol=0.0, atol=1e-8)
        for seg in chain.segments:
            assert abs(np.linalg.norm(seg.b - seg.a) - 1e-3) < 1e-9
        assert validate_chain(chain.segments, chain.anchor)

    def test_far_anchor_over_moving_target(self):
        anchor = np.array([1e6, 2e6, 0.0])
        rng = np.random.default_rng(99)
        chain = ReachChain(3, 1e-3, anchor + [0.0, 0.0, 1.0], anchor=anchor)
        for offset in rng.uniform(-0.01, 0.01, size=(30, 3)):
            chain.solve(anchor + offset)
            assert np.array_equal(chain.segments[-1].a, anchor)
            assert validate_chain(chain.segments, chain.anchor)

    def test_huge_target_single_segment(self):
        chain = ReachChain(1, 1.0, [1e200, 0.0, 0.0])
        chain.solve()
        assert np.allclose(chain.render(), [[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]])

    def test_huge_target_stretches_chain(self):
        chain = ReachChain(3, 1.0, [0.0, -1e200, 0.0])
        chain.solve()
        assert np.allclose(chain.tip_position(), [0.0, -3.0, 0.0])
        assert_chain_invariants(chain)
