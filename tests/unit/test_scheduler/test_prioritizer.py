"""
Unit tests for the prioritizer module.
Tests aggregation, selection, fallback behaviour and ranking invariants.
"""

import itertools
import pytest
from datetime import timedelta

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from focus_planner.core.config import Config, FallbackMode
from focus_planner.core.models import EnergyLevel, Priority, ScoreBreakdown, ScoringContext
from focus_planner.scheduler.prioritizer import (
    Prioritizer,
    WEIGHTS,
    score_breakdown,
    select_top,
    total_score,
)


class TestAggregator:
    """Tests for the weighted total."""

    def test_weights_sum_to_one(self):
        assert sum(WEIGHTS.values()) == pytest.approx(1.0)
        assert (
            Prioritizer.TIME_ENERGY_WEIGHT +
            Prioritizer.DEADLINE_URGENCY_WEIGHT +
            Prioritizer.MOMENTUM_WEIGHT +
            Prioritizer.PRIORITY_WEIGHT +
            Prioritizer.DEPENDENCY_WEIGHT
        ) == pytest.approx(1.0)

    def test_deadline_urgency_has_largest_weight(self):
        assert max(WEIGHTS, key=WEIGHTS.get) == "deadline_urgency"

    def test_total_of_known_breakdown(self):
        breakdown = ScoreBreakdown(
            time_energy=100, deadline_urgency=100, momentum=100, priority=100, dependency=30
        )
        assert total_score(breakdown) == pytest.approx(93.0)

    def test_total_bounds(self):
        top = ScoreBreakdown(100, 100, 100, 100, 100)
        bottom = ScoreBreakdown(0, 0, 0, 0, 0)
        assert 0.0 <= total_score(top) <= 100.0
        assert total_score(bottom) == 0.0


class TestScoreItem:
    """Tests for scoring a single item."""

    def test_overdue_urgent_item(self, make_item, now):
        """Overdue urgent item at the morning peak scores 93 and flags overdue first."""
        item = make_item(
            id="A",
            priority=Priority.URGENT,
            energy_level=EnergyLevel.HIGH,
            due_in_hours=-1,
            progress=60,
            collaborators=("Sam",),
        )
        entry = Prioritizer().score_item(item, now)

        assert entry.breakdown == ScoreBreakdown(
            time_energy=100, deadline_urgency=100, momentum=100, priority=100, dependency=30
        )
        assert entry.total_score == pytest.approx(93.0)
        assert entry.justification.split(" • ")[0] == "Overdue - Needs immediate attention"
        assert entry.is_fallback is False

    def test_breakdown_is_exposed_for_transparency(self, make_item, now):
        entry = Prioritizer().score_item(make_item(), now)
        assert set(entry.breakdown.as_dict()) == set(WEIGHTS)
        assert sum(entry.breakdown.weighted(WEIGHTS).values()) == pytest.approx(entry.total_score)


class TestSelectTop:
    """Tests for selection and ranking."""

    def test_item_without_collaborators_excluded_when_shared_item_exists(self, make_item, now):
        shared = make_item(id="A", priority=Priority.URGENT, due_in_hours=-1, progress=60)
        personal = make_item(
            id="B",
            priority=Priority.LOW,
            energy_level=EnergyLevel.LOW,
            progress=5,
            collaborators=(),
        )
        result = Prioritizer().select_top([shared, personal], now, 2)
        assert [entry.item.id for entry in result] == ["A"]

    def test_sorted_descending(self, make_item, now):
        items = [
            make_item(id="low", priority=Priority.LOW),
            make_item(id="urgent", priority=Priority.URGENT),
            make_item(id="medium", priority=Priority.MEDIUM),
        ]
        result = Prioritizer().select_top(items, now, 3)
        assert [entry.item.id for entry in result] == ["urgent", "medium", "low"]

    def test_ties_keep_input_order(self, make_item, now):
        """Two items scoring 72.0 stay in input order."""
        kwargs = dict(priority=Priority.URGENT, energy_level=EnergyLevel.HIGH, progress=50)
        x = make_item(id="X", **kwargs)
        y = make_item(id="Y", **kwargs)

        result = Prioritizer().select_top([x, y], now, 2)
        assert [entry.total_score for entry in result] == [pytest.approx(72.0)] * 2
        assert [entry.item.id for entry in result] == ["X", "Y"]

        result = Prioritizer().select_top([y, x], now, 2)
        assert [entry.item.id for entry in result] == ["Y", "X"]

    def test_zero_k_returns_empty(self, make_item, now):
        assert Prioritizer().select_top([make_item()], now, 0) == []
        assert Prioritizer().select_top([make_item()], now, -1) == []

    def test_k_larger_than_candidates_returns_all(self, make_item, now):
        items = [make_item(id=i) for i in range(3)]
        assert len(Prioritizer().select_top(items, now, 10)) == 3

    def test_k_limits_results(self, make_item, now):
        items = [make_item(id=i) for i in range(10)]
        assert len(Prioritizer().select_top(items, now, 3)) == 3

    def test_all_completed_returns_empty(self, make_item, now):
        items = [
            make_item(id=1, completed=True),
            make_item(id=2, completed=True, collaborators=()),
        ]
        assert Prioritizer().select_top(items, now, 2) == []
        assert Prioritizer(fallback_mode=FallbackMode.SINGLE).select_top(items, now, 2) == []

    def test_empty_pool_returns_empty(self, now):
        assert Prioritizer().select_top([], now, 2) == []

    def test_completed_items_never_selected(self, make_item, now):
        items = [
            make_item(id="done", priority=Priority.URGENT, due_in_hours=-5, completed=True),
            make_item(id="open", priority=Priority.LOW),
        ]
        result = Prioritizer().select_top(items, now, 2)
        assert [entry.item.id for entry in result] == ["open"]

    def test_module_level_select_top(self, make_item, now):
        items = [make_item(id=1, priority=Priority.LOW), make_item(id=2, priority=Priority.HIGH)]
        assert [entry.item.id for entry in select_top(items, now, 1)] == [2]


class TestFallback:
    """Tests for the no-collaborator fallback."""

    @pytest.fixture
    def personal_items(self, make_item):
        return [
            make_item(id="B", priority=Priority.LOW, collaborators=()),
            make_item(id="done", priority=Priority.URGENT, collaborators=(), completed=True),
            make_item(id="C", priority=Priority.HIGH, collaborators=()),
            make_item(id="D", priority=Priority.MEDIUM, collaborators=()),
        ]

    def test_ranked_fallback_ranks_open_items(self, personal_items, now):
        result = Prioritizer(fallback_mode=FallbackMode.RANKED).select_top(personal_items, now, 2)
        assert [entry.item.id for entry in result] == ["C", "D"]
        assert all(entry.is_fallback for entry in result)

    def test_single_fallback_returns_first_open_item(self, personal_items, now):
        result = Prioritizer(fallback_mode=FallbackMode.SINGLE).select_top(personal_items, now, 2)
        assert [entry.item.id for entry in result] == ["B"]
        assert result[0].is_fallback
        assert result[0].justification

    def test_default_mode_is_ranked(self):
        assert Prioritizer().fallback_mode == FallbackMode.RANKED

    def test_mode_from_config(self, tmp_path):
        config = Config(tmp_path)
        config.set("fallback_mode", "single", "preferences")
        assert Prioritizer(config).fallback_mode == FallbackMode.SINGLE

    def test_explicit_mode_overrides_config(self, tmp_path):
        config = Config(tmp_path)
        config.set("fallback_mode", "single", "preferences")
        prioritizer = Prioritizer(config, fallback_mode=FallbackMode.RANKED)
        assert prioritizer.fallback_mode == FallbackMode.RANKED

    def test_fallback_not_used_when_shared_item_open(self, make_item, now):
        items = [
            make_item(id="P", priority=Priority.URGENT, collaborators=()),
            make_item(id="S", priority=Priority.LOW),
        ]
        result = Prioritizer().select_top(items, now, 2)
        assert [entry.item.id for entry in result] == ["S"]
        assert not result[0].is_fallback


class TestConvenienceMethods:
    """Tests for get_top_priorities and select_top_priority."""

    def test_get_top_priorities_defaults_to_two(self, make_item, now):
        items = [make_item(id=i) for i in range(5)]
        assert len(Prioritizer().get_top_priorities(items, now)) == 2

    def test_get_top_priorities_uses_configured_count(self, make_item, now, tmp_path):
        config = Config(tmp_path)
        config.set("focus_count", 3, "preferences")
        items = [make_item(id=i) for i in range(5)]
        assert len(Prioritizer(config).get_top_priorities(items, now)) == 3
        assert len(Prioritizer(config).get_top_priorities(items, now, n=1)) == 1

    def test_select_top_priority(self, make_item, now):
        items = [make_item(id=1), make_item(id=2, priority=Priority.URGENT)]
        assert Prioritizer().select_top_priority(items, now).item.id == 2

    def test_select_top_priority_none_when_nothing_open(self, make_item, now):
        assert Prioritizer().select_top_priority([make_item(completed=True)], now) is None


class TestCandidateCap:
    """Tests for the candidate pool cap."""

    def test_pool_truncated_to_cap(self, make_item, now, tmp_path, caplog):
        config = Config(tmp_path)
        config.set("max_candidates", 3)
        items = [make_item(id=i) for i in range(3)] + [make_item(id="late", priority=Priority.URGENT)]

        with caplog.at_level("WARNING"):
            result = Prioritizer(config).select_top(items, now, 10)

        assert [entry.item.id for entry in result] == [0, 1, 2]
        assert "exceeds cap" in caplog.text


class TestJustificationSettings:
    """Tests for configured justification formatting."""

    def test_clause_count_capped_at_two(self, make_item, now, tmp_path):
        config = Config(tmp_path)
        config.set("max_justification_clauses", 5, "preferences")
        item = make_item(priority=Priority.HIGH, due_in_hours=3)

        entry = Prioritizer(config).score_item(item, now)

        assert entry.justification.count(" • ") == 1


class TestTimezone:
    """Tests for the configured timezone."""

    def test_energy_uses_configured_timezone(self, make_item, now, tmp_path):
        config = Config(tmp_path)
        config.set("timezone", "America/Los_Angeles")
        item = make_item(energy_level=EnergyLevel.HIGH)

        # 10:00 UTC is 03:00 in Los Angeles (low energy)
        assert Prioritizer(config).score_item(item, now).breakdown.time_energy == 20
        assert Prioritizer().score_item(item, now).breakdown.time_energy == 100

    def test_local_time_keeps_the_instant(self, now, tmp_path):
        config = Config(tmp_path)
        config.set("timezone", "America/Los_Angeles")

        local = Prioritizer(config).local_time(now)

        assert local.hour == 3
        assert local == now

    def test_naive_clock_is_left_alone(self, now, tmp_path):
        config = Config(tmp_path)
        config.set("timezone", "America/Los_Angeles")
        naive = now.replace(tzinfo=None)

        assert Prioritizer(config).local_time(naive) is naive

    def test_unknown_timezone_is_ignored(self, now, tmp_path, caplog):
        config = Config(tmp_path)
        config.set("timezone", "Mars/Olympus_Mons")

        with caplog.at_level("WARNING"):
            prioritizer = Prioritizer(config)

        assert prioritizer.local_time(now) == now
        assert prioritizer.local_time(now).hour == 10
        assert "Unknown timezone" in caplog.text


class TestInvariants:
    """Ranking invariants over a grid of items."""

    @pytest.fixture
    def pool(self, make_item):
        combos = itertools.product(
            list(Priority),
            list(EnergyLevel),
            [None, -3, 1, 5, 30],
            [0, 15, 50, 90, 97],
        )
        return [
            make_item(
                id=i,
                priority=priority,
                energy_level=energy,
                due_in_hours=due,
                progress=progress,
                collaborators=("Sam",) if i % 3 else (),
                completed=(i % 11 == 0),
                sub_items=(False,) * (i % 5),
            )
            for i, (priority, energy, due, progress) in enumerate(combos)
        ]

    @pytest.mark.parametrize("hour", [3, 7, 10, 15, 17])
    def test_scores_within_bounds(self, pool, now, hour):
        clock = now.replace(hour=hour)
        context = ScoringContext.from_datetime(clock)
        for item in pool:
            breakdown = score_breakdown(item, context)
            assert all(0 <= score <= 100 for score in breakdown.as_dict().values())
            assert 0 <= total_score(breakdown) <= 100

    def test_ordering_and_stability(self, pool, now):
        result = Prioritizer().select_top(pool, now, len(pool))
        positions = {item.id: index for index, item in enumerate(pool)}

        for current, following in zip(result, result[1:]):
            assert current.total_score >= following.total_score
            if current.total_score == following.total_score:
                assert positions[current.item.id] < positions[following.item.id]

    def test_no_completed_or_unshared_items(self, pool, now):
        result = Prioritizer().select_top(pool, now, len(pool))
        assert result
        assert all(not entry.item.completed for entry in result)
        assert all(entry.item.collaborators for entry in result)

    def test_deterministic(self, pool, now):
        first = [entry.as_dict() for entry in Prioritizer().select_top(pool, now, 5)]
        second = [entry.as_dict() for entry in Prioritizer().select_top(pool, now, 5)]
        assert first == second

    def test_input_not_mutated(self, pool, now):
        snapshot = list(pool)
        Prioritizer().select_top(pool, now, 5)
        assert pool == snapshot

    def test_clock_is_explicit(self, make_item, now):
        """Moving the clock past the deadline changes the ranking."""
        item = make_item(due_in_hours=1)
        before = Prioritizer().score_item(item, now)
        after = Prioritizer().score_item(item, now + timedelta(hours=2))
        assert before.breakdown.deadline_urgency == 95
        assert after.breakdown.deadline_urgency == 100
