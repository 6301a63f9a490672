import pytest

from twophase.coordinator import (
    InvalidStateError,
    TransactionError,
    TransactionNotFoundError,
    TransactionState,
)
from twophase.participant import BaseParticipant, OrderNotFoundError, Participant


@pytest.fixture
def participant():
    return BaseParticipant()


def _run_two_phase(p: Participant, transaction_id: str) -> TransactionState:
    p.prepare(transaction_id)
    p.commit(transaction_id)
    return p.get_state(transaction_id)


def test_base_participant_works_through_protocol(participant):
    assert isinstance(participant, Participant)
    assert _run_two_phase(participant, "tx") is TransactionState.COMMITTED


def test_unknown_transaction_state_raises(participant):
    with pytest.raises(TransactionNotFoundError, match="transaction not found"):
        participant.get_state("tx")


def test_prepare_then_commit(participant):
    participant.prepare("tx")
    assert participant.get_state("tx") is TransactionState.PREPARED
    participant.commit("tx")
    assert participant.get_state("tx") is TransactionState.COMMITTED


def test_prepare_twice_raises(participant):
    participant.prepare("tx")
    with pytest.raises(InvalidStateError, match="invalid transaction state"):
        participant.prepare("tx")
    assert participant.get_state("tx") is TransactionState.PREPARED


def test_commit_unknown_raises(participant):
    with pytest.raises(InvalidStateError, match="transaction not in prepared state"):
        participant.commit("tx")


def test_commit_twice_raises(participant):
    participant.prepare("tx")
    participant.commit("tx")
    with pytest.raises(InvalidStateError):
        participant.commit("tx")


def test_abort_without_prepare_records_aborted(participant):
    participant.abort("tx")
    assert participant.get_state("tx") is TransactionState.ABORTED


def test_prepare_after_abort_raises(participant):
    participant.abort("tx")
    with pytest.raises(InvalidStateError):
        participant.prepare("tx")


def test_transactions_are_independent(participant):
    participant.prepare("a")
    participant.abort("b")
    assert participant.get_state("a") is TransactionState.PREPARED
    assert participant.get_state("b") is TransactionState.ABORTED


def test_order_not_found_error_message():
    err = OrderNotFoundError()
    assert str(err) == "order not found"
    assert isinstance(err, TransactionError)