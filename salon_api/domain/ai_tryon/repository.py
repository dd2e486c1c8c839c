"""AI try-on repository - sessions, hairstyles and credit counters"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import CustomerProfile
from ...models_tryon import Hairstyle, TryOnSession, TryOnStatus


class TryOnRepository:
    """Repository for try-on database operations"""

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    @staticmethod
    def get_session(db: Session, session_id: int) -> Optional[TryOnSession]:
        return db.query(TryOnSession).filter(TryOnSession.id == session_id).first()

    @staticmethod
    def get_session_by_share_token(db: Session, share_token: str) -> Optional[TryOnSession]:
        return db.query(TryOnSession).filter(TryOnSession.share_token == share_token).first()

    @staticmethod
    def get_user_sessions(db: Session, user_id: int) -> list[TryOnSession]:
        return (
            db.query(TryOnSession)
            .filter(TryOnSession.user_id == user_id)
            .order_by(TryOnSession.created_at.desc(), TryOnSession.id.desc())
            .all()
        )

    @staticmethod
    def add_session(db: Session, **session_data) -> TryOnSession:
        session = TryOnSession(**session_data)
        db.add(session)
        return session

    @staticmethod
    def share_token_exists(db: Session, share_token: str) -> bool:
        return db.query(TryOnSession.id).filter(TryOnSession.share_token == share_token).first() is not None

    @staticmethod
    def set_share_token_if_missing(db: Session, session_id: int, share_token: str) -> bool:
        """Attach a share token unless one was set concurrently. Returns True if this call set it"""
        updated = (
            db.query(TryOnSession)
            .filter(TryOnSession.id == session_id, TryOnSession.share_token.is_(None))
            .update(
                {TryOnSession.share_token: share_token, TryOnSession.is_shared: True},
                synchronize_session=False,
            )
        )
        db.commit()
        return updated == 1

    @staticmethod
    def increment_view_count(db: Session, session_id: int) -> None:
        db.query(TryOnSession).filter(TryOnSession.id == session_id).update(
            {TryOnSession.view_count: TryOnSession.view_count + 1}, synchronize_session=False
        )
        db.commit()

    @staticmethod
    def mark_saved(db: Session, session_id: int) -> bool:
        """Flip is_saved once. Returns True on the first save"""
        updated = (
            db.query(TryOnSession)
            .filter(TryOnSession.id == session_id, TryOnSession.is_saved.is_(False))
            .update({TryOnSession.is_saved: True}, synchronize_session=False)
        )
        return updated == 1

    @staticmethod
    def transition_status(db: Session, session_id: int, expected: TryOnStatus, **changes) -> bool:
        """Move a session out of `expected` status; False if it was not in that status. Caller commits"""
        values = {getattr(TryOnSession, key): value for key, value in changes.items()}
        updated = (
            db.query(TryOnSession)
            .filter(TryOnSession.id == session_id, TryOnSession.status == expected.value)
            .update(values, synchronize_session=False)
        )
        return updated == 1

    # ------------------------------------------------------------------
    # Hairstyles
    # ------------------------------------------------------------------

    @staticmethod
    def get_hairstyle(db: Session, hairstyle_id: int) -> Optional[Hairstyle]:
        return db.query(Hairstyle).filter(Hairstyle.id == hairstyle_id).first()

    @staticmethod
    def get_hairstyles(
        db: Session,
        category: Optional[str] = None,
        gender: Optional[str] = None,
        is_premium: Optional[bool] = None,
    ) -> list[Hairstyle]:
        query = db.query(Hairstyle).filter(Hairstyle.is_active.is_(True))
        if category:
            query = query.filter(Hairstyle.category == category)
        if gender:
            query = query.filter(Hairstyle.gender == gender)
        if is_premium is not None:
            query = query.filter(Hairstyle.is_premium.is_(is_premium))
        return query.order_by(
            Hairstyle.is_featured.desc(),
            Hairstyle.try_on_count.desc(),
            Hairstyle.sort_order.asc(),
            Hairstyle.id.asc(),
        ).all()

    @staticmethod
    def create_hairstyle(db: Session, **hairstyle_data) -> Hairstyle:
        hairstyle = Hairstyle(**hairstyle_data)
        db.add(hairstyle)
        db.commit()
        db.refresh(hairstyle)
        return hairstyle

    @staticmethod
    def increment_hairstyle_counter(db: Session, hairstyle_id: int, column: str) -> None:
        """Atomic +1 on try_on_count or save_count; caller commits"""
        counter = getattr(Hairstyle, column)
        db.query(Hairstyle).filter(Hairstyle.id == hairstyle_id).update(
            {counter: counter + 1}, synchronize_session=False
        )

    # ------------------------------------------------------------------
    # Credits
    # ------------------------------------------------------------------

    @staticmethod
    def consume_paid_credit(db: Session, profile_id: int) -> bool:
        """Decrement try_on_credits only if a credit is left. Caller commits"""
        updated = (
            db.query(CustomerProfile)
            .filter(CustomerProfile.id == profile_id, CustomerProfile.try_on_credits > 0)
            .update(
                {CustomerProfile.try_on_credits: CustomerProfile.try_on_credits - 1},
                synchronize_session=False,
            )
        )
        return updated == 1

    @staticmethod
    def consume_weekly_try_on(
        db: Session,
        profile_id: int,
        seen_used: int,
        seen_reset_date: Optional[datetime],
        new_used: int,
        new_reset_date: datetime,
    ) -> bool:
        """Compare-and-swap on the free-tier counter: applies only if nobody changed it since it was read"""
        query = db.query(CustomerProfile).filter(
            CustomerProfile.id == profile_id,
            CustomerProfile.weekly_try_ons_used == seen_used,
        )
        if seen_reset_date is None:
            query = query.filter(CustomerProfile.weekly_reset_date.is_(None))
        else:
            query = query.filter(CustomerProfile.weekly_reset_date == seen_reset_date)

        updated = query.update(
            {
                CustomerProfile.weekly_try_ons_used: new_used,
                CustomerProfile.weekly_reset_date: new_reset_date,
            },
            synchronize_session=False,
        )
        return updated == 1
