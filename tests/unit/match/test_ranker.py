"""Unit tests for CandidateRanker end to end over an in-memory snapshot."""

import logging
import math

import pytest

from rmm.config_types import RankingConfig
from rmm.db import SnapshotDataSource
from rmm.match import CandidateRanker, NotFoundError, ReasonCode
from tests.mocks.fixtures import (
    REQUESTER,
    REQUESTER_AVAILABILITY,
    build_snapshot,
    make_availability,
    make_player,
    uid,
)

LYON = (45.0, 4.0)


def km_north(km: float):
    """Point ``km`` kilometres due north of LYON."""
    return (LYON[0] + km / (6371.0 * math.pi / 180), LYON[1])


def _requester_avail(start="10:00", end="12:00", **kwargs):
    return make_availability(REQUESTER_AVAILABILITY, REQUESTER, start, end, **kwargs)


def _rank(source, cfg=None):
    return CandidateRanker(source, cfg or RankingConfig()).find_match_candidates(REQUESTER, REQUESTER_AVAILABILITY)


class TestOverlapGate:

    def test_exactly_minimum_overlap_is_eligible(self):
        source = build_snapshot([
            _requester_avail("10:00", "12:00"),
            make_availability(uid(102), uid(2), "11:00", "13:00"),
        ])
        result = _rank(source)
        assert [c.candidate_availability_id for c in result.candidates] == [uid(102)]
        candidate = result.candidates[0]
        assert candidate.score_breakdown.availability == 60
        assert candidate.overlap_range.minutes == 60

    def test_short_overlap_is_never_scored(self):
        source = build_snapshot([
            _requester_avail("10:00", "12:00"),
            make_availability(uid(102), uid(2), "11:01", "13:00"),
        ])
        assert _rank(source).candidates == []

    def test_availability_weight_scales_contribution(self):
        source = build_snapshot([
            _requester_avail("10:00", "12:00"),
            make_availability(uid(102), uid(2), "11:00", "13:00"),
        ])
        result = _rank(source, RankingConfig(weight_availability_overlap=0.5))
        assert result.candidates[0].score_breakdown.availability == 30


class TestSelfAndStatus:

    def test_own_availabilities_are_never_candidates(self):
        source = build_snapshot([
            _requester_avail(),
            make_availability(uid(150), REQUESTER, "10:00", "12:00"),
            make_availability(uid(102), uid(2), "10:00", "12:00"),
        ])
        result = _rank(source)
        assert all(c.candidate_user_id != REQUESTER for c in result.candidates)
        assert [c.candidate_availability_id for c in result.candidates] == [uid(102)]

    def test_non_open_status_is_excluded(self):
        source = build_snapshot([
            _requester_avail(),
            make_availability(uid(102), uid(2), status="matched"),
            make_availability(uid(103), uid(3), status="open"),
        ])
        assert [c.candidate_user_id for c in _rank(source).candidates] == [uid(3)]

    def test_eligible_statuses_are_configurable(self):
        source = build_snapshot([
            _requester_avail(),
            make_availability(uid(102), uid(2), status="invited"),
        ])
        cfg = RankingConfig(eligible_statuses=("open", "invited"))
        assert len(_rank(source, cfg).candidates) == 1


class TestScoring:

    def test_friend_close_level_nearby(self):
        source = build_snapshot(
            [
                _requester_avail(),
                make_availability(uid(102), uid(2), "10:00", "12:00"),
            ],
            players=[
                make_player(REQUESTER, level=4.0, confidence=0.9, coords=LYON),
                make_player(uid(2), level=4.3, confidence=0.9, coords=km_north(5)),
            ],
            friendships=[(uid(2), REQUESTER)],
        )
        candidate = _rank(source).candidates[0]
        breakdown = candidate.score_breakdown
        assert breakdown.availability == 120
        assert breakdown.social == 50
        assert breakdown.level == 20
        assert breakdown.location == pytest.approx(11.25, abs=0.01)
        assert breakdown.surface == 0
        assert candidate.score == pytest.approx(120 + 50 + 20 + 11.25, abs=0.01)
        assert candidate.score == pytest.approx(breakdown.total)
        assert candidate.reasons == [
            "120 min overlap",
            "Friends with requester",
            "Level: Close match (Δ0.3)",
            "Distance: 5.0 km",
            "Surface preference unknown",
        ]
        assert [r.code for r in candidate.reason_codes] == [
            ReasonCode.OVERLAP,
            ReasonCode.SOCIAL_FRIEND,
            ReasonCode.LEVEL_CLOSE,
            ReasonCode.LOCATION_DISTANCE,
            ReasonCode.SURFACE_UNKNOWN,
        ]

    def test_candidate_without_player_is_unknown_level(self):
        source = build_snapshot(
            [_requester_avail(), make_availability(uid(102), uid(2))],
            players=[make_player(REQUESTER, level=4.0, confidence=0.9)],
        )
        candidate = _rank(source).candidates[0]
        assert candidate.score_breakdown.level == 10
        assert candidate.candidate_player_id is None
        assert ReasonCode.LEVEL_UNKNOWN in [r.code for r in candidate.reason_codes]

    def test_previous_opponent_ranks_below_friend(self):
        source = build_snapshot(
            [
                _requester_avail(),
                make_availability(uid(102), uid(2)),
                make_availability(uid(103), uid(3)),
            ],
            friendships=[(REQUESTER, uid(3))],
            matches=[(REQUESTER, uid(2)), (REQUESTER, uid(3))],
        )
        result = _rank(source)
        assert [c.candidate_user_id for c in result.candidates] == [uid(3), uid(2)]
        assert result.candidates[0].score_breakdown.social == 50
        assert result.candidates[1].score_breakdown.social == 20

    def test_surface_bonus_when_configured(self):
        source = build_snapshot(
            [_requester_avail(), make_availability(uid(102), uid(2))],
            players=[make_player(REQUESTER, surfaces=["clay"]), make_player(uid(2), surfaces=["Terre battue"])],
        )
        candidate = _rank(source, RankingConfig(surface_match_bonus=5)).candidates[0]
        assert candidate.score_breakdown.surface == 5

    def test_min_score_filters_low_candidates(self):
        source = build_snapshot(
            [_requester_avail(), make_availability(uid(102), uid(2))],
            players=[make_player(REQUESTER, level=2.0, confidence=0.9), make_player(uid(2), level=6.0, confidence=0.9)],
        )
        cfg = RankingConfig(weight_availability_overlap=0)
        assert _rank(source, cfg).candidates == []

    def test_every_returned_candidate_meets_min_score(self):
        source = build_snapshot(
            [_requester_avail()] + [make_availability(uid(200 + i), uid(10 + i)) for i in range(5)],
        )
        cfg = RankingConfig(min_score=100)
        result = _rank(source, cfg)
        assert all(c.score >= 100 for c in result.candidates)


class TestOrdering:

    def _tied_snapshot(self, reverse=False):
        availabilities = [make_availability(uid(200 + i), uid(10 + i)) for i in range(6)]
        if reverse:
            availabilities.reverse()
        return build_snapshot([_requester_avail()] + availabilities, friendships=[(REQUESTER, uid(14))])

    def test_sorted_by_score_then_user_id(self):
        result = _rank(self._tied_snapshot())
        ids = [c.candidate_user_id for c in result.candidates]
        assert ids[0] == uid(14)
        assert ids[1:] == sorted(ids[1:])

    def test_order_independent_of_input_order(self):
        forward = _rank(self._tied_snapshot())
        backward = _rank(self._tied_snapshot(reverse=True))
        assert forward == backward

    def test_parallel_evaluation_matches_sequential(self):
        sequential = _rank(self._tied_snapshot())
        parallel = _rank(self._tied_snapshot(reverse=True), RankingConfig(max_workers=4))
        assert sequential == parallel

    def test_same_user_ties_break_on_availability_id(self):
        source = build_snapshot([
            _requester_avail(),
            make_availability(uid(302), uid(2)),
            make_availability(uid(301), uid(2)),
        ])
        assert [c.candidate_availability_id for c in _rank(source).candidates] == [uid(301), uid(302)]

    def test_max_results_caps_after_sorting(self):
        result = _rank(self._tied_snapshot(), RankingConfig(max_results=2))
        assert len(result.candidates) == 2
        assert result.candidates[0].candidate_user_id == uid(14)


class TestErrors:

    def test_unknown_availability_raises_not_found(self):
        source = build_snapshot([_requester_avail()])
        ranker = CandidateRanker(source)
        with pytest.raises(NotFoundError) as exc_info:
            ranker.find_match_candidates(REQUESTER, uid(999))
        assert exc_info.value.availability_id == uid(999)

    def test_unknown_requester_raises_not_found(self):
        source = build_snapshot(
            [_requester_avail(), make_availability(uid(102), uid(2))],
            users=[uid(2)],
        )
        with pytest.raises(NotFoundError, match="not found"):
            _rank(source)

    def test_foreign_availability_raises_not_found(self):
        source = build_snapshot([_requester_avail(), make_availability(uid(102), uid(2))])
        with pytest.raises(NotFoundError):
            CandidateRanker(source).find_match_candidates(REQUESTER, uid(102))

    def test_unresolved_candidate_user_is_skipped(self, caplog):
        caplog.set_level(logging.WARNING, logger="rmm.match.ranker")
        source = build_snapshot(
            [
                _requester_avail(),
                make_availability(uid(102), uid(2)),
                make_availability(uid(103), uid(3)),
            ],
            users=[REQUESTER, uid(3)],
        )
        result = _rank(source)
        assert [c.candidate_user_id for c in result.candidates] == [uid(3)]
        assert uid(102) in caplog.text

    def test_failing_accessor_degrades_to_zero(self, caplog):
        caplog.set_level(logging.WARNING, logger="rmm.match.ranker")

        class FlakySource(SnapshotDataSource):
            def is_friend(self, user_a, user_b):
                raise RuntimeError("social graph unavailable")

        base = build_snapshot([_requester_avail(), make_availability(uid(102), uid(2))])
        source = FlakySource(
            users=base.users.values(),
            availabilities=base.availabilities.values(),
        )
        candidate = _rank(source).candidates[0]
        assert candidate.score_breakdown.social == 0
        assert "social graph unavailable" in caplog.text

    def test_malformed_surface_preference_is_unknown(self):
        source = build_snapshot(
            [
                _requester_avail(),
                make_availability(uid(102), uid(2)),
                make_availability(uid(103), uid(3)),
            ],
            surface_preferences={REQUESTER: "clay", uid(2): ["clay"], uid(3): "clay"},
        )
        result = _rank(source, RankingConfig(surface_match_bonus=5))
        by_user = {c.candidate_user_id: c for c in result.candidates}
        assert set(by_user) == {uid(2), uid(3)}
        assert by_user[uid(2)].score_breakdown.surface == 0
        assert by_user[uid(3)].score_breakdown.surface == 5

    def test_failing_scorer_degrades_to_unknown(self, caplog, monkeypatch):
        caplog.set_level(logging.WARNING, logger="rmm.match.ranker")

        def broken(*args, **kwargs):
            raise ZeroDivisionError("bad radius")

        monkeypatch.setattr("rmm.match.ranker.score_location_proximity", broken)
        source = build_snapshot([_requester_avail(), make_availability(uid(102), uid(2))])
        candidate = _rank(source).candidates[0]
        assert candidate.score_breakdown.location == 0
        assert ReasonCode.LOCATION_UNKNOWN in [r.code for r in candidate.reason_codes]
        assert "Scoring location failed" in caplog.text

    def test_invalid_config_is_rejected(self):
        with pytest.raises(ValueError):
            CandidateRanker(build_snapshot([]), RankingConfig(weight_social_proximity=-1))


def test_logs_summary(caplog):
    caplog.set_level(logging.INFO, logger="rmm.match.ranker")
    source = build_snapshot([_requester_avail(), make_availability(uid(102), uid(2))])
    _rank(source)
    assert "Ranked 1 candidate(s) from 1 availability" in caplog.text


class TestEvaluate:

    def _source(self):
        return build_snapshot(
            [
                _requester_avail(),
                make_availability(uid(150), REQUESTER),
                make_availability(uid(102), uid(2), "11:30", "13:00"),
                make_availability(uid(103), uid(3), status="closed"),
                make_availability(uid(104), uid(4)),
            ],
            players=[make_player(REQUESTER, level=2.0, confidence=0.9), make_player(uid(4), level=6.0, confidence=0.9)],
        )

    def _evaluate(self, candidate_id, cfg=None):
        return CandidateRanker(self._source(), cfg).evaluate(REQUESTER, REQUESTER_AVAILABILITY, candidate_id)

    def test_self(self):
        assert self._evaluate(uid(150)).exclusion.code == ReasonCode.EXCLUDED_SELF

    def test_status(self):
        evaluation = self._evaluate(uid(103))
        assert evaluation.exclusion.code == ReasonCode.EXCLUDED_STATUS
        assert evaluation.exclusion.params == {"status": "closed"}

    def test_overlap(self):
        evaluation = self._evaluate(uid(102))
        assert evaluation.exclusion.code == ReasonCode.EXCLUDED_OVERLAP
        assert evaluation.exclusion.params["minutes"] == 30
        assert evaluation.candidate is None

    def test_min_score_keeps_breakdown(self):
        evaluation = self._evaluate(uid(104), RankingConfig(weight_availability_overlap=0))
        assert evaluation.exclusion.code == ReasonCode.EXCLUDED_MIN_SCORE
        assert not evaluation.accepted
        assert evaluation.candidate.score == -5

    def test_accepted(self):
        evaluation = self._evaluate(uid(104))
        assert evaluation.accepted
        assert evaluation.exclusion is None

    def test_missing_candidate_raises(self):
        with pytest.raises(NotFoundError):
            self._evaluate(uid(999))
