"""AI try-on service - quota gate, session lifecycle, saving and sharing"""

import logging
from typing import Optional

from fastapi import BackgroundTasks, HTTPException
from sqlalchemy.orm import Session

from ...config import APP_URL, FREE_WEEKLY_TRYONS, TRYON_USE_QUEUE
from ...models import CustomerProfile, CustomerTier, User
from ...models_tryon import Hairstyle, TryOnSession, TryOnStatus
from ...shared.dates import utcnow
from ...shared.identifiers import generate_share_token
from ..users.repository import UserRepository
from .processing import process_tryon_session
from .quota import evaluate_quota
from .repository import TryOnRepository
from .schemas import HairstyleCreate, TryOnCreate

logger = logging.getLogger(__name__)

# Attempts at the free-tier compare-and-swap before giving up
MAX_QUOTA_ATTEMPTS = 3


class TryOnService:
    """Service layer for AI try-on business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = TryOnRepository()
        self.user_repo = UserRepository()

    # ============================================================================
    # QUOTA
    # ============================================================================

    def _consume_try_on(self, profile: CustomerProfile) -> None:
        """Take one try-on from the profile's allowance or raise 400. Caller commits"""
        if profile.subscription_tier != CustomerTier.FREE.value:
            if not self.repo.consume_paid_credit(self.db, profile.id):
                raise HTTPException(status_code=400, detail="Insufficient try-on credits")
            return

        for _ in range(MAX_QUOTA_ATTEMPTS):
            decision = evaluate_quota(
                profile.subscription_tier,
                profile.try_on_credits,
                profile.weekly_try_ons_used,
                profile.weekly_reset_date,
                utcnow(),
                FREE_WEEKLY_TRYONS,
            )
            if not decision.allowed:
                logger.warning(f"⚠️ User {profile.user_id} reached the free weekly try-on limit")
                raise HTTPException(status_code=400, detail="Insufficient try-on credits")

            if self.repo.consume_weekly_try_on(
                self.db,
                profile.id,
                profile.weekly_try_ons_used,
                profile.weekly_reset_date,
                decision.weekly_try_ons_used,
                decision.weekly_reset_date,
            ):
                return

            # Another request changed the counter first; re-read and re-evaluate
            self.db.refresh(profile)

        raise HTTPException(status_code=409, detail="Try-on quota changed concurrently, please retry")

    # ============================================================================
    # SESSIONS
    # ============================================================================

    def create_session(self, data: TryOnCreate, user: User) -> TryOnSession:
        profile = self.user_repo.get_profile_by_user_id(self.db, user.id)
        if not profile:
            raise HTTPException(status_code=404, detail="Customer profile not found")

        hairstyle = self.repo.get_hairstyle(self.db, data.hairstyle_id)
        if not hairstyle or not hairstyle.is_active:
            raise HTTPException(status_code=404, detail="Hairstyle not found")

        if hairstyle.is_premium and profile.subscription_tier == CustomerTier.FREE.value:
            raise HTTPException(status_code=400, detail="This hairstyle is only available for premium users")

        self._consume_try_on(profile)

        session = self.repo.add_session(
            self.db,
            user_id=user.id,
            original_image_url=data.original_image_url,
            hairstyle_id=hairstyle.id,
            hairstyle_name=hairstyle.name,
            status=TryOnStatus.PENDING.value,
        )
        self.db.commit()
        self.db.refresh(session)

        logger.info(f"📸 Try-on session {session.id} created for user {user.id} ({hairstyle.name})")
        return session

    async def dispatch_processing(self, session_id: int, background_tasks: BackgroundTasks) -> None:
        """Hand the session to the ARQ worker, or run it after the response when the queue is off"""
        if TRYON_USE_QUEUE:
            from ...worker import get_job_pool

            pool = await get_job_pool()
            if pool is not None:
                try:
                    job = await pool.enqueue_job("process_tryon_session_task", session_id)
                    logger.info(f"📤 Try-on session {session_id} queued as job {job.job_id if job else None}")
                    return
                except Exception as e:
                    logger.error(f"❌ Failed to queue try-on session {session_id}, processing in-process: {e}")

        background_tasks.add_task(process_tryon_session, session_id)

    def get_user_sessions(self, user: User) -> list[TryOnSession]:
        return self.repo.get_user_sessions(self.db, user.id)

    def get_session(self, session_id: int, user: User) -> TryOnSession:
        session = self.repo.get_session(self.db, session_id)
        if not session:
            raise HTTPException(status_code=404, detail="Try-on session not found")
        if session.user_id != user.id:
            raise HTTPException(status_code=403, detail="Not authorized")
        return session

    def save_session(self, session_id: int, user: User) -> TryOnSession:
        session = self.get_session(session_id, user)
        if self.repo.mark_saved(self.db, session.id):
            self.repo.increment_hairstyle_counter(self.db, session.hairstyle_id, "save_count")
        self.db.commit()
        self.db.refresh(session)
        return session

    def share_session(self, session_id: int, user: User) -> dict:
        """Return the session's share link, creating the token on first use"""
        session = self.get_session(session_id, user)

        if not session.share_token:
            token = generate_share_token()
            while self.repo.share_token_exists(self.db, token):
                token = generate_share_token()
            if self.repo.set_share_token_if_missing(self.db, session.id, token):
                logger.info(f"🔗 Share link created for try-on session {session.id}")
            self.db.refresh(session)

        return {
            "share_token": session.share_token,
            "share_url": f"{APP_URL}/shared/tryon/{session.share_token}",
        }

    def view_shared_session(self, share_token: str) -> TryOnSession:
        session = self.repo.get_session_by_share_token(self.db, share_token)
        if not session:
            raise HTTPException(status_code=404, detail="Shared try-on not found")

        self.repo.increment_view_count(self.db, session.id)
        self.db.refresh(session)
        return session

    # ============================================================================
    # HAIRSTYLES
    # ============================================================================

    def list_hairstyles(
        self, category: Optional[str] = None, gender: Optional[str] = None, is_premium: Optional[bool] = None
    ) -> list[Hairstyle]:
        return self.repo.get_hairstyles(self.db, category, gender, is_premium)

    def create_hairstyle(self, data: HairstyleCreate, admin: User) -> Hairstyle:
        hairstyle = self.repo.create_hairstyle(self.db, **data.column_values(exclude_unset=False))
        logger.info(f"💇 Admin {admin.id} added hairstyle {hairstyle.id} ({hairstyle.name})")
        return hairstyle
