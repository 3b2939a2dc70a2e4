"""Rules deciding which order status may follow which."""

from hotel_orders.models.order import OrderStatus

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class TransitionPolicy:
    """Single decision point for status transitions."""

    name = "base"

    def can_transition(self, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        raise NotImplementedError


class PermissiveTransitionPolicy(TransitionPolicy):
    """Any status may follow any other (admin override behaviour)."""

    name = "permissive"

    def can_transition(self, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        return True


class StrictTransitionPolicy(TransitionPolicy):
    """Forward-only progression; cancellation from any non-terminal status."""

    name = "strict"

    TRANSITIONS = {
        OrderStatus.PENDING: [OrderStatus.CONFIRMED],
        OrderStatus.CONFIRMED: [OrderStatus.PREPARING],
        OrderStatus.PREPARING: [OrderStatus.COOKING],
        OrderStatus.COOKING: [OrderStatus.READY_FOR_PICKUP],
        OrderStatus.READY_FOR_PICKUP: [
            OrderStatus.OUT_FOR_DELIVERY,
            OrderStatus.DELIVERED,  # Pickup and dine-in orders skip delivery
        ],
        OrderStatus.OUT_FOR_DELIVERY: [OrderStatus.DELIVERED],
    }

    def can_transition(self, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        if from_status in TERMINAL_STATUSES:
            return False
        if to_status == OrderStatus.CANCELLED:
            return True
        return to_status in self.TRANSITIONS.get(from_status, [])


_POLICIES: dict[str, type[TransitionPolicy]] = {
    PermissiveTransitionPolicy.name: PermissiveTransitionPolicy,
    StrictTransitionPolicy.name: StrictTransitionPolicy,
}


def get_transition_policy(name: str) -> TransitionPolicy:
    """Instantiate a policy by its configuration name."""
    try:
        return _POLICIES[name]()
    except KeyError:
        raise ValueError(f"Unknown transition policy: {name}") from None
