"""
Order State Machine for validating order status transitions.

Admins move orders through the lifecycle from the dashboard; every accepted
change is written to the log as an ORDER_STATUS_TRANSITION line.
"""

import logging

from enums.order_status import OrderStatus

logger = logging.getLogger(__name__)


class OrderStatusTransition:
    """Represents a valid status transition with metadata"""

    def __init__(self, from_status: OrderStatus, to_status: OrderStatus, description: str = ""):
        self.from_status = from_status
        self.to_status = to_status
        self.description = description

    def __repr__(self):
        return f"{self.from_status.value} -> {self.to_status.value}"


class OrderStateMachine:
    """
    Finite state machine for order status transitions.

    Valid status transitions:
    - PENDING -> PROCESSING (admin starts preparing the order)
    - PENDING -> COMPLETED (delivered without a separate processing step)
    - PENDING -> CANCELLED
    - PROCESSING -> COMPLETED
    - PROCESSING -> CANCELLED

    Final states (no transitions out):
    - COMPLETED
    - CANCELLED

    Setting the status an order already has is a no-op and always allowed.
    """

    VALID_TRANSITIONS: list[OrderStatusTransition] = [
        # From PENDING
        OrderStatusTransition(OrderStatus.PENDING, OrderStatus.PROCESSING, "Order accepted for preparation"),
        OrderStatusTransition(OrderStatus.PENDING, OrderStatus.COMPLETED, "Order delivered"),
        OrderStatusTransition(OrderStatus.PENDING, OrderStatus.CANCELLED, "Order cancelled"),

        # From PROCESSING
        OrderStatusTransition(OrderStatus.PROCESSING, OrderStatus.COMPLETED, "Order delivered"),
        OrderStatusTransition(OrderStatus.PROCESSING, OrderStatus.CANCELLED, "Order cancelled during processing"),
    ]

    FINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})

    _transition_map: dict[OrderStatus, set[OrderStatus]] = {}
    _transition_descriptions: dict[tuple[OrderStatus, OrderStatus], str] = {}

    @classmethod
    def _build_transition_map(cls):
        if cls._transition_map:
            return

        for transition in cls.VALID_TRANSITIONS:
            cls._transition_map.setdefault(transition.from_status, set()).add(transition.to_status)
            cls._transition_descriptions[(transition.from_status, transition.to_status)] = transition.description

    @classmethod
    def is_valid_transition(cls, from_status: OrderStatus, to_status: OrderStatus) -> bool:
        """
        Check if a status transition is valid according to the state machine.

        Same-status changes are allowed (no-op).
        """
        cls._build_transition_map()
        from_status, to_status = OrderStatus(from_status), OrderStatus(to_status)

        if from_status == to_status:
            return True

        return to_status in cls._transition_map.get(from_status, set())

    @classmethod
    def get_valid_transitions(cls, from_status: OrderStatus) -> list[OrderStatus]:
        """Get all valid next statuses from the current status, in lifecycle order."""
        cls._build_transition_map()
        destinations = cls._transition_map.get(OrderStatus(from_status), set())
        return [status for status in OrderStatus if status in destinations]

    @classmethod
    def get_transition_description(cls, from_status: OrderStatus, to_status: OrderStatus) -> str:
        cls._build_transition_map()
        return cls._transition_descriptions.get(
            (OrderStatus(from_status), OrderStatus(to_status)),
            f"Transition from {OrderStatus(from_status).value} to {OrderStatus(to_status).value}"
        )

    @classmethod
    def is_final_status(cls, status: OrderStatus) -> bool:
        return OrderStatus(status) in cls.FINAL_STATUSES

    @classmethod
    def validate_and_log_transition(cls, order_id: str, from_status: OrderStatus, to_status: OrderStatus,
                                    admin_id: str | None = None) -> bool:
        """
        Validate a status transition and write an audit log line.

        Returns:
            True if transition is valid and logged, False otherwise
        """
        if not cls.is_valid_transition(from_status, to_status):
            logger.error(f"Invalid status transition for order {order_id}: "
                         f"{OrderStatus(from_status).value} -> {OrderStatus(to_status).value}")
            return False

        transition_desc = cls.get_transition_description(from_status, to_status)
        performer = f"admin {admin_id}" if admin_id else "system"

        logger.info(f"ORDER_STATUS_TRANSITION: Order {order_id} {OrderStatus(from_status).value} -> "
                    f"{OrderStatus(to_status).value} by {performer}: {transition_desc}")
        return True
