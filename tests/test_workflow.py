"""Tests for the two-step add workflow correlator."""

import pytest

from todobot.core.workflow import WorkflowCorrelator
from todobot.errors import SessionExpired, WrongInitiator

GUILD = 10
USER = 100
OTHER_USER = 200


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def correlator(clock: FakeClock) -> WorkflowCorrelator:
    return WorkflowCorrelator(60, clock=clock)


class TestOpen:
    def test_open_records_session(self, correlator: WorkflowCorrelator, clock: FakeClock) -> None:
        session = correlator.open(1, GUILD, USER, "buy milk")
        assert session.expires_at == clock.now + 60
        assert 1 in correlator
        assert len(correlator) == 1

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            WorkflowCorrelator(0)


class TestConsume:
    def test_consume_returns_and_removes(self, correlator: WorkflowCorrelator) -> None:
        correlator.open(1, GUILD, USER, "buy milk")
        session = correlator.consume(1, guild_id=GUILD, user_id=USER)
        assert session.content == "buy milk"
        assert 1 not in correlator

    def test_sessions_are_never_reused(self, correlator: WorkflowCorrelator) -> None:
        correlator.open(1, GUILD, USER, "x")
        correlator.consume(1, guild_id=GUILD, user_id=USER)
        with pytest.raises(SessionExpired):
            correlator.consume(1, guild_id=GUILD, user_id=USER)

    def test_other_interaction_is_a_miss(self, correlator: WorkflowCorrelator) -> None:
        correlator.open(1, GUILD, USER, "x")
        with pytest.raises(SessionExpired):
            correlator.consume(2, guild_id=GUILD, user_id=USER)
        assert 1 in correlator

    def test_missing_origin_is_a_miss(self, correlator: WorkflowCorrelator) -> None:
        with pytest.raises(SessionExpired):
            correlator.consume(None, guild_id=GUILD, user_id=USER)

    def test_expired_session(self, correlator: WorkflowCorrelator, clock: FakeClock) -> None:
        correlator.open(1, GUILD, USER, "x")
        clock.now += 60
        with pytest.raises(SessionExpired):
            correlator.consume(1, guild_id=GUILD, user_id=USER)
        assert 1 not in correlator

    def test_just_before_expiry(self, correlator: WorkflowCorrelator, clock: FakeClock) -> None:
        correlator.open(1, GUILD, USER, "x")
        clock.now += 59.9
        assert correlator.consume(1, guild_id=GUILD, user_id=USER).content == "x"

    def test_other_guild_cannot_consume(self, correlator: WorkflowCorrelator) -> None:
        correlator.open(1, GUILD, USER, "x")
        with pytest.raises(SessionExpired):
            correlator.consume(1, guild_id=GUILD + 1, user_id=USER)
        assert 1 in correlator

    def test_other_user_rejected_and_session_kept(self, correlator: WorkflowCorrelator) -> None:
        correlator.open(1, GUILD, USER, "x")
        with pytest.raises(WrongInitiator) as excinfo:
            correlator.consume(1, guild_id=GUILD, user_id=OTHER_USER)
        assert excinfo.value.initiator_id == USER
        assert correlator.consume(1, guild_id=GUILD, user_id=USER).content == "x"

    def test_other_user_allowed_when_not_enforced(self, clock: FakeClock) -> None:
        correlator = WorkflowCorrelator(60, enforce_initiator=False, clock=clock)
        correlator.open(1, GUILD, USER, "x")
        session = correlator.consume(1, guild_id=GUILD, user_id=OTHER_USER)
        assert session.user_id == USER

    def test_two_prompts_do_not_cross(self, correlator: WorkflowCorrelator) -> None:
        correlator.open(1, GUILD, USER, "first")
        correlator.open(2, GUILD, OTHER_USER, "second")
        assert correlator.consume(2, guild_id=GUILD, user_id=OTHER_USER).content == "second"
        assert correlator.consume(1, guild_id=GUILD, user_id=USER).content == "first"


class TestPurge:
    def test_purge_drops_only_expired(
        self, correlator: WorkflowCorrelator, clock: FakeClock
    ) -> None:
        correlator.open(1, GUILD, USER, "old")
        clock.now += 30
        correlator.open(2, GUILD, USER, "new")
        clock.now += 30
        assert correlator.purge_expired() == 1
        assert 1 not in correlator
        assert 2 in correlator

    def test_open_purges_expired(self, correlator: WorkflowCorrelator, clock: FakeClock) -> None:
        correlator.open(1, GUILD, USER, "old")
        clock.now += 61
        correlator.open(2, GUILD, USER, "new")
        assert len(correlator) == 1
