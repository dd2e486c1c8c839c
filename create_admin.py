"""
Bootstrap the first admin account
Run once after deploying: python create_admin.py admin@example.com "Admin Name"
The password is read from ADMIN_PASSWORD or prompted for.
"""

import getpass
import logging
import os
import sys

from salon_api import models_billing, models_booking, models_engagement, models_salon, models_tryon  # noqa: F401
from salon_api.database import Base, SessionLocal, engine
from salon_api.domain.users.repository import UserRepository
from salon_api.models import UserRole
from salon_api.security_utils import hash_password_bcrypt

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


def create_admin(email: str, name: str, password: str) -> None:
    Base.metadata.create_all(bind=engine, checkfirst=True)
    db = SessionLocal()
    try:
        if UserRepository.get_user_by_email(db, email):
            logger.warning(f"⚠️ {email} already exists, nothing to do")
            return
        user = UserRepository.create_user(
            db,
            email=email.strip().lower(),
            name=name,
            password=hash_password_bcrypt(password),
            role=UserRole.ADMIN.value,
        )
        logger.info(f"✅ Admin {user.email} created (id={user.id})")
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)

    admin_password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    try:
        create_admin(sys.argv[1], sys.argv[2], admin_password)
    except Exception as e:
        logger.error(f"❌ Admin bootstrap failed: {e}")
        sys.exit(1)
