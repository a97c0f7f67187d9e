from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from restro_admin.core.config import settings
from restro_admin.models.enums import ActivityAction
from restro_admin.models.user import AdminUser
from restro_admin.services.activity_log import record_activity
from restro_admin.services.users import create_admin

logger = logging.getLogger(__name__)

# (module, sub_module, action, restaurant, target)
DEMO_ACTIVITY = [
    ("Restaurants", "Onboarding", ActivityAction.APPROVE, "Spice Route", "Spice Route"),
    ("Orders", "Order Requests", ActivityAction.REJECT, "Spice Route", "ORD-1001"),
    ("Orders", "Cancel & Refund", ActivityAction.APPROVE, "Green Bowl", "ORD-1002"),
    ("Payments", "Withdrawals", ActivityAction.APPROVE, "Green Bowl", None),
    ("Menu", "Items", ActivityAction.CREATE, "Spice Route", "Paneer Tikka"),
    ("Menu", "Addon Items", ActivityAction.UPDATE, "Spice Route", "Extra Cheese"),
    ("Coupons", "Platform Coupons", ActivityAction.DELETE, None, "WELCOME50"),
]


def seed_demo_activity(db: Session, admin: AdminUser) -> None:
    for module, sub_module, action, restaurant, target in DEMO_ACTIVITY:
        record_activity(
            db,
            module=module,
            sub_module=sub_module,
            action=action,
            user_id=admin.id,
            restaurant_name=restaurant,
            target_name=target,
        )


def ensure_seeded(db: Session) -> None:
    """
    Development seed: one super admin plus a handful of activity entries,
    only when the admin table is empty.
    """
    if db.query(AdminUser).first():
        return
    admin = create_admin(
        db,
        name=settings.seed_admin_name,
        email=settings.seed_admin_email,
        password=settings.seed_admin_password,
    )
    seed_demo_activity(db, admin)
    logger.info("Seeded admin %s with %d activity entries", admin.email, len(DEMO_ACTIVITY))


if __name__ == "__main__":
    from restro_admin.db.session import SessionLocal

    db = SessionLocal()
    try:
        ensure_seeded(db)
        print("Seeded initial admin.")
    finally:
        db.close()
