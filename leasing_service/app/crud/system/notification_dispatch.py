import logging
from typing import Iterable, List, Protocol

from fastapi import BackgroundTasks

from ...enum.notification_enum import NotificationTopic, NotificationType
from ...models.leasing.rental_contracts import RentalContract
from ...models.space_sites.commercial_spaces import CommercialSpace
from ...schemas.system.notification_schemas import NotificationEvent

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Fan-out transport. Delivery is best-effort and at-most-once."""

    def publish(self, topic: str, event: NotificationEvent) -> None:
        ...


class LoggingNotificationSink:
    """Default sink: writes each event to the service log."""

    def publish(self, topic: str, event: NotificationEvent) -> None:
        logger.info("[%s] %s -> %s: %s", topic, event.type.value,
                    event.recipient_id, event.message)


_default_sink = LoggingNotificationSink()


def get_notification_sink() -> NotificationSink:
    return _default_sink


# ----------------------------------------------------
# Delivery
# ----------------------------------------------------
def publish_safely(sink: NotificationSink, event: NotificationEvent) -> bool:
    try:
        sink.publish(event.topic, event)
        return True
    except Exception:
        # never fails the use case that produced the event
        logger.exception("Failed to publish %s notification to %s",
                         event.type.value, event.topic)
        return False


def dispatch_events(background_tasks: BackgroundTasks, sink: NotificationSink, events: Iterable[NotificationEvent]):
    """Queue events to run after the response has been sent."""
    for event in events:
        background_tasks.add_task(publish_safely, sink, event)


def dispatch_now(sink: NotificationSink, events: Iterable[NotificationEvent]) -> int:
    return sum(1 for event in events if publish_safely(sink, event))


# ----------------------------------------------------
# Event builders
# ----------------------------------------------------
def _space_data(space: CommercialSpace) -> dict:
    return {
        "space_id": str(space.id),
        "name": space.name,
        "available": bool(space.available),
    }


def _contract_data(contract: RentalContract) -> dict:
    return {
        "contract_id": str(contract.id),
        "contract_number": contract.contract_number,
        "space_id": str(contract.space_id),
        "tenant_id": str(contract.tenant_id),
        "status": contract.status.value,
    }


def new_space_event(space: CommercialSpace) -> NotificationEvent:
    return NotificationEvent(
        type=NotificationType.NEW_SPACE,
        message=f"New commercial space available: {space.name}",
        topic=NotificationTopic.SPACES,
        data=_space_data(space),
    )


def space_status_event(space: CommercialSpace) -> NotificationEvent:
    status = "available" if space.available else "unavailable"
    return NotificationEvent(
        type=NotificationType.SPACE_STATUS_CHANGE,
        message=f"Space '{space.name}' is now {status}",
        topic=NotificationTopic.SPACES,
        data=_space_data(space),
    )


def new_contract_events(contract: RentalContract, space: CommercialSpace) -> List[NotificationEvent]:
    """Owner's queue plus the contracts topic for admin visibility."""
    if space.owner_id is None:
        return []

    owner_id = str(space.owner_id)
    message = f"New contract for your space: {space.name}"
    return [
        NotificationEvent(
            type=NotificationType.NEW_CONTRACT,
            message=message,
            topic=NotificationTopic.user_queue(owner_id),
            recipient_id=owner_id,
            data=_contract_data(contract),
        ),
        NotificationEvent(
            type=NotificationType.NEW_CONTRACT,
            message=message,
            topic=NotificationTopic.CONTRACTS,
            recipient_id=owner_id,
            data=_contract_data(contract),
        ),
    ]


def contract_update_event(contract: RentalContract, space: CommercialSpace) -> NotificationEvent:
    tenant_id = str(contract.tenant_id)
    return NotificationEvent(
        type=NotificationType.CONTRACT_UPDATE,
        message=f"Your contract for {space.name} has been updated to {contract.status.value}",
        topic=NotificationTopic.user_queue(tenant_id),
        recipient_id=tenant_id,
        data=_contract_data(contract),
    )
