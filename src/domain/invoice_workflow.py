"""Invoice status workflow

Every permitted transition is one TransitionRule keyed by
(kind, role, current status, requested status). Anything not listed is
rejected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple
from src.domain.actor import ActorRole
from src.domain.invoice import InvoiceStatus


class TransitionKind(str, Enum):
    """How the transition is requested"""
    STATUS_CHANGE = "status_change"
    RESUBMISSION = "resubmission"


class TransitionEffect(str, Enum):
    """Side effect applied together with the status change"""
    NONE = "none"
    STORE_CORRECTION_NOTES = "store_correction_notes"
    RECOMPUTE_AND_CLEAR_NOTES = "recompute_and_clear_notes"


@dataclass(frozen=True)
class TransitionRule:
    kind: TransitionKind
    role: ActorRole
    from_status: InvoiceStatus
    to_status: InvoiceStatus
    effect: TransitionEffect = TransitionEffect.NONE

    @property
    def key(self) -> Tuple[TransitionKind, ActorRole, InvoiceStatus, InvoiceStatus]:
        return (self.kind, self.role, self.from_status, self.to_status)


TRANSITION_RULES: Tuple[TransitionRule, ...] = (
    TransitionRule(
        TransitionKind.STATUS_CHANGE,
        ActorRole.BUYER,
        InvoiceStatus.SENT,
        InvoiceStatus.APPROVED,
    ),
    TransitionRule(
        TransitionKind.STATUS_CHANGE,
        ActorRole.BUYER,
        InvoiceStatus.SENT,
        InvoiceStatus.CORRECTION_REQUESTED,
        TransitionEffect.STORE_CORRECTION_NOTES,
    ),
    TransitionRule(
        TransitionKind.RESUBMISSION,
        ActorRole.SELLER,
        InvoiceStatus.CORRECTION_REQUESTED,
        InvoiceStatus.SENT,
        TransitionEffect.RECOMPUTE_AND_CLEAR_NOTES,
    ),
) + tuple(
    # Sellers may (re)send or mark paid from any status
    TransitionRule(TransitionKind.STATUS_CHANGE, ActorRole.SELLER, current, requested)
    for current in InvoiceStatus
    for requested in (InvoiceStatus.SENT, InvoiceStatus.PAID)
)

_RULES_BY_KEY: Dict[Tuple[TransitionKind, ActorRole, InvoiceStatus, InvoiceStatus], TransitionRule] = {
    rule.key: rule for rule in TRANSITION_RULES
}


def find_transition(
    kind: TransitionKind,
    role: ActorRole,
    current: InvoiceStatus,
    requested: InvoiceStatus,
) -> Optional[TransitionRule]:
    return _RULES_BY_KEY.get((kind, role, current, requested))


def requestable_statuses(
    role: ActorRole, kind: TransitionKind = TransitionKind.STATUS_CHANGE
) -> FrozenSet[InvoiceStatus]:
    """Statuses a role can ask for through the given kind, from any state"""
    return frozenset(
        rule.to_status for rule in TRANSITION_RULES if rule.role == role and rule.kind == kind
    )
