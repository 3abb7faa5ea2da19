from datetime import timedelta

import pytest

from scoreboard.ledger import (
    MAX_SCORE,
    InvalidScore,
    MemoryPersistenceAdapter,
    ScoreEntry,
    ScoreLedger,
    ScoreNotImproved,
    TransactionError,
)
from scoreboard.ledger.errors import ParticipantExists


def test_first_submission_creates_entry(ledger, ranking):
    outcome = ledger.submit("alice", 100)

    assert outcome.new_player is True
    assert outcome.best_score == 100
    assert ledger.best_score_of("alice") == 100
    assert ledger.player_count() == 1
    assert ranking.rank_of("alice") == 1


def test_zero_score_rejected_without_side_effects(ledger):
    ledger.submit("alice", 100)

    with pytest.raises(InvalidScore):
        ledger.submit("alice", 0)
    with pytest.raises(InvalidScore):
        ledger.submit("bob", 0)

    assert ledger.best_score_of("alice") == 100
    assert ledger.best_score_of("bob") == 0
    assert ledger.player_count() == 1


def test_lower_score_is_not_an_improvement(ledger):
    ledger.submit("alice", 100)

    with pytest.raises(ScoreNotImproved) as excinfo:
        ledger.submit("alice", 50)

    assert excinfo.value.current_best == 100
    assert "100" in excinfo.value.user_message
    assert ledger.best_score_of("alice") == 100


def test_equal_score_is_not_an_improvement(ledger, adapter):
    ledger.submit("alice", 100)
    before = adapter.get("alice")

    with pytest.raises(ScoreNotImproved):
        ledger.submit("alice", 100)

    assert adapter.get("alice") == before


def test_improvement_updates_score_and_timestamp(ledger, adapter):
    first = ledger.submit("alice", 100)
    stamp = adapter.get("alice").submitted_at

    second = ledger.submit("alice", 200)

    assert first.new_player is True
    assert second.new_player is False
    entry = adapter.get("alice")
    assert entry.best_score == 200
    assert entry.submitted_at > stamp
    assert ledger.player_count() == 1


def test_best_score_tracks_maximum_of_accepted_submissions(ledger):
    submitted = [5, 3, 9, 9, 2, 14, 0, 11, 20]
    seen = []
    for score in submitted:
        try:
            ledger.submit("alice", score)
        except (InvalidScore, ScoreNotImproved):
            pass
        seen.append(ledger.best_score_of("alice"))

    assert seen == sorted(seen)
    assert ledger.best_score_of("alice") == max(submitted)


def test_player_count_counts_distinct_participants(ledger):
    for name, score in [("a", 1), ("b", 2), ("a", 3), ("c", 4), ("b", 5), ("a", 6)]:
        ledger.submit(name, score)

    assert ledger.player_count() == 3


def test_unknown_participant_reads_as_zero(ledger):
    assert ledger.best_score_of("nobody") == 0
    assert ledger.player_count() == 0


def test_largest_storable_score_accepted(ledger, ranking):
    ledger.submit("alice", MAX_SCORE - 1)
    ledger.submit("alice", MAX_SCORE)
    ledger.submit("bob", 10)

    assert ledger.best_score_of("alice") == MAX_SCORE
    assert ranking.rank_of("alice") == 1
    assert ranking.rank_of("bob") == 2


def test_score_above_storable_range_rejected(ledger):
    ledger.submit("alice", 100)

    with pytest.raises(InvalidScore) as excinfo:
        ledger.submit("alice", MAX_SCORE + 1)
    with pytest.raises(InvalidScore):
        ledger.submit("bob", 2**64)

    assert str(MAX_SCORE) in excinfo.value.user_message
    assert ledger.best_score_of("alice") == 100
    assert ledger.best_score_of("bob") == 0
    assert ledger.player_count() == 1


def test_stored_timestamps_come_back_as_utc(ledger, adapter, clock):
    expected = clock.current
    ledger.submit("alice", 100)

    stamp = adapter.get("alice").submitted_at
    assert stamp == expected
    assert stamp.utcoffset() == timedelta(0)
    assert adapter.top(1, since=expected)[0].participant_id == "alice"
    assert adapter.top(1, since=expected + timedelta(seconds=1)) == []


def test_resubmissions_never_add_entries(ledger, ranking):
    for name, score in [("a", 1), ("b", 2), ("a", 3), ("b", 4), ("a", 5)]:
        ledger.submit(name, score)

    assert ledger.player_count() == 2
    assert len(ranking.top_n(ledger.player_count() + 5)) == ledger.player_count()


def test_adapter_delete_drops_only_the_row(adapter, clock):
    adapter.insert(ScoreEntry("alice", 10, clock()))
    adapter.insert(ScoreEntry("bob", 20, clock()))

    assert adapter.delete("alice") is True
    assert adapter.delete("alice") is False
    assert adapter.get("alice") is None
    assert [entry.participant_id for entry in adapter.top(10)] == ["bob"]
    assert adapter.player_count() == 2


class _InsertRace(MemoryPersistenceAdapter):
    """Another writer creates the row between our read and our insert."""

    def __init__(self):
        super().__init__()
        self.races = 1

    def insert(self, entry):
        if self.races:
            self.races -= 1
            super().insert(ScoreEntry(entry.participant_id, 50, entry.submitted_at))
            raise ParticipantExists(entry.participant_id)
        super().insert(entry)


class _StaleUpdates(MemoryPersistenceAdapter):
    def __init__(self):
        super().__init__()
        self.update_calls = 0

    def update(self, entry, expected_best):
        self.update_calls += 1
        return False


def test_insert_race_retries_as_update(clock):
    store = _InsertRace()
    ledger = ScoreLedger(store, clock=clock)

    outcome = ledger.submit("alice", 100)

    assert outcome.new_player is False
    assert ledger.best_score_of("alice") == 100
    assert ledger.player_count() == 1


def test_insert_race_with_better_score_rejects(clock):
    store = _InsertRace()
    ledger = ScoreLedger(store, clock=clock)

    with pytest.raises(ScoreNotImproved):
        ledger.submit("alice", 40)
    assert ledger.best_score_of("alice") == 50


def test_exhausted_retries_raise_transaction_error(clock):
    store = _StaleUpdates()
    ledger = ScoreLedger(store, clock=clock, max_attempts=3)
    ledger.submit("alice", 10)

    with pytest.raises(TransactionError) as excinfo:
        ledger.submit("alice", 20)

    assert excinfo.value.attempts == 3
    assert store.update_calls == 3
    assert ledger.best_score_of("alice") == 10


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        ScoreLedger(MemoryPersistenceAdapter(), max_attempts=0)


def test_paused_flag_round_trips(ledger):
    assert ledger.is_paused() is False
    ledger.set_paused(True)
    assert ledger.is_paused() is True
    ledger.set_paused(False)
    assert ledger.is_paused() is False
