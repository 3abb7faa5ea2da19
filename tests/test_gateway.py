import pytest

from scoreboard.ledger import (
    ADMIN,
    ANONYMOUS,
    MAX_SCORE,
    Caller,
    InvalidParticipant,
    InvalidScore,
    ScoreNotImproved,
    SystemPaused,
    Unauthorized,
    normalize_participant_id,
)

ADDRESS = "0xAbCdEf0123456789aBcDeF0123456789AbCdEf01"


def test_pause_blocks_then_unpause_allows(gateway, ledger):
    gateway.pause(ADMIN)
    assert gateway.is_paused() is True

    with pytest.raises(SystemPaused):
        gateway.submit("carol", 10)
    assert ledger.player_count() == 0
    assert ledger.best_score_of("carol") == 0

    gateway.unpause(ADMIN)
    outcome = gateway.submit("carol", 10)
    assert outcome.new_player is True


def test_paused_rejection_leaves_state_unchanged(gateway, ledger, ranking):
    gateway.submit("alice", 100)
    gateway.submit("bob", 50)
    gateway.pause(ADMIN)

    with pytest.raises(SystemPaused):
        gateway.submit("bob", 500)

    assert ledger.best_score_of("bob") == 50
    assert ranking.rank_of("bob") == 2
    assert ledger.player_count() == 2


@pytest.mark.parametrize("caller", [ANONYMOUS, Caller(role="user")])
def test_non_admin_cannot_pause_or_unpause(gateway, caller):
    with pytest.raises(Unauthorized):
        gateway.pause(caller)
    assert gateway.is_paused() is False

    gateway.pause(ADMIN)
    with pytest.raises(Unauthorized):
        gateway.unpause(caller)
    assert gateway.is_paused() is True


def test_zero_score_rejected(gateway, ledger):
    with pytest.raises(InvalidScore):
        gateway.submit("alice", 0)
    assert ledger.player_count() == 0


def test_oversized_score_rejected_without_event(gateway, ledger, events):
    received = []
    events.subscribe(received.append)

    with pytest.raises(InvalidScore):
        gateway.submit("alice", MAX_SCORE + 1)

    assert received == []
    assert ledger.player_count() == 0


def test_events_emitted_only_for_accepted(gateway, events):
    received = []
    events.subscribe(received.append)

    gateway.submit("alice", 100)
    with pytest.raises(ScoreNotImproved):
        gateway.submit("alice", 90)
    gateway.submit("alice", 120)

    assert [(e.participant_id, e.new_best_score) for e in received] == [
        ("alice", 100),
        ("alice", 120),
    ]


def test_failing_subscriber_does_not_undo_submission(gateway, events, ledger):
    received = []

    def broken(event):
        raise RuntimeError("subscriber down")

    events.subscribe(broken)
    events.subscribe(received.append)

    outcome = gateway.submit("alice", 10)

    assert outcome.best_score == 10
    assert ledger.best_score_of("alice") == 10
    assert len(received) == 1


def test_unsubscribe_stops_delivery(gateway, events):
    received = []
    unsubscribe = events.subscribe(received.append)
    gateway.submit("alice", 1)
    unsubscribe()
    gateway.submit("alice", 2)

    assert len(received) == 1


def test_address_ids_are_case_insensitive(gateway, ledger):
    gateway.submit(ADDRESS, 100)

    with pytest.raises(ScoreNotImproved):
        gateway.submit(ADDRESS.lower(), 100)
    assert ledger.best_score_of(ADDRESS.lower()) == 100
    assert ledger.player_count() == 1


@pytest.mark.parametrize("raw", ["", "   ", None, 42, "x" * 65])
def test_invalid_participant_rejected(gateway, ledger, raw):
    with pytest.raises(InvalidParticipant):
        gateway.submit(raw, 10)
    assert ledger.player_count() == 0


def test_normalize_participant_id():
    assert normalize_participant_id("  player-one ") == "player-one"
    assert normalize_participant_id("MixedCase") == "MixedCase"
    assert normalize_participant_id(ADDRESS) == ADDRESS.lower()
