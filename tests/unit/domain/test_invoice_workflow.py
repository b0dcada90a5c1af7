"""Unit tests for the invoice status workflow table"""

import itertools
import pytest

from src.domain.actor import ActorRole
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_workflow import (
    TRANSITION_RULES,
    TransitionEffect,
    TransitionKind,
    find_transition,
    requestable_statuses,
)

SENT = InvoiceStatus.SENT
APPROVED = InvoiceStatus.APPROVED
CORRECTION = InvoiceStatus.CORRECTION_REQUESTED
PAID = InvoiceStatus.PAID


def expected_status_change(role, current, requested):
    if role == ActorRole.BUYER:
        return current == SENT and requested in (APPROVED, CORRECTION)
    return requested in (SENT, PAID)


class TestTransitionTable:
    """Conformance over every (kind, role, current, requested) combination"""

    @pytest.mark.parametrize(
        "role, current, requested",
        list(itertools.product(ActorRole, InvoiceStatus, InvoiceStatus)),
    )
    def test_status_change_conformance(self, role, current, requested):
        rule = find_transition(TransitionKind.STATUS_CHANGE, role, current, requested)

        assert (rule is not None) == expected_status_change(role, current, requested)
        if rule is not None:
            assert rule.to_status == requested
            assert rule.from_status == current

    @pytest.mark.parametrize(
        "role, current, requested",
        list(itertools.product(ActorRole, InvoiceStatus, InvoiceStatus)),
    )
    def test_resubmission_conformance(self, role, current, requested):
        rule = find_transition(TransitionKind.RESUBMISSION, role, current, requested)

        allowed = role == ActorRole.SELLER and current == CORRECTION and requested == SENT
        assert (rule is not None) == allowed

    def test_correction_request_stores_notes(self):
        rule = find_transition(TransitionKind.STATUS_CHANGE, ActorRole.BUYER, SENT, CORRECTION)

        assert rule.effect == TransitionEffect.STORE_CORRECTION_NOTES

    def test_resubmission_recomputes_and_clears_notes(self):
        rule = find_transition(TransitionKind.RESUBMISSION, ActorRole.SELLER, CORRECTION, SENT)

        assert rule.effect == TransitionEffect.RECOMPUTE_AND_CLEAR_NOTES

    def test_approval_has_no_side_effect(self):
        rule = find_transition(TransitionKind.STATUS_CHANGE, ActorRole.BUYER, SENT, APPROVED)

        assert rule.effect == TransitionEffect.NONE

    def test_rule_keys_are_unique(self):
        keys = [rule.key for rule in TRANSITION_RULES]

        assert len(keys) == len(set(keys))


class TestRequestableStatuses:
    """Statuses each role may ask for"""

    def test_buyer(self):
        assert requestable_statuses(ActorRole.BUYER) == frozenset({APPROVED, CORRECTION})

    def test_seller(self):
        assert requestable_statuses(ActorRole.SELLER) == frozenset({SENT, PAID})

    def test_resubmission(self):
        assert requestable_statuses(ActorRole.SELLER, TransitionKind.RESUBMISSION) == frozenset({SENT})
        assert requestable_statuses(ActorRole.BUYER, TransitionKind.RESUBMISSION) == frozenset()
