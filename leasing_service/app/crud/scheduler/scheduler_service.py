import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.database import LeasingSessionLocal
from shared.core.exceptions import LeasingError
from shared.core.logging_config import setup_logging
from ...enum.leasing_enum import ContractStatus
from ...models.leasing.rental_contracts import RentalContract
from ..leasing import leasing_coordinator
from ..system.notification_dispatch import NotificationSink, dispatch_now, get_notification_sink

logger = logging.getLogger(__name__)


def process_expired_contracts(db: Session, sink: Optional[NotificationSink] = None,
                              today: Optional[date] = None) -> List[UUID]:
    """Expire every ACTIVE contract past its end date, one transaction each."""
    today = today or date.today()
    sink = sink or get_notification_sink()

    due = (
        db.query(RentalContract.id)
        .filter(
            RentalContract.status == ContractStatus.ACTIVE,
            RentalContract.end_date < today,
        )
        .order_by(RentalContract.end_date)
        .all()
    )

    expired = []
    for (contract_id,) in due:
        try:
            outcome = leasing_coordinator.expire_contract(
                db, contract_id, today=today)
        except LeasingError as e:
            # one bad contract must not stall the rest of the batch
            logger.warning("Skipping expiry of contract %s: %s",
                           contract_id, e.message)
            continue

        dispatch_now(sink, outcome.events)
        expired.append(contract_id)

    logger.info("Expiry run for %s: %s of %s contracts expired",
                today, len(expired), len(due))
    return expired


def run_expiration_job():
    db = LeasingSessionLocal()
    try:
        return process_expired_contracts(db)
    finally:
        db.close()


if __name__ == "__main__":
    setup_logging()
    run_expiration_job()
