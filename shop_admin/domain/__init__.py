"""
Domain layer для бизнес-логики
"""

from shop_admin.domain.order_state_machine import (
    BusinessRuleViolation,
    OrderStateMachine,
    TransitionResult,
)


__all__ = [
    "BusinessRuleViolation",
    "OrderStateMachine",
    "TransitionResult",
]
