"""User repository - Database operations for users and customer profiles"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import CustomerProfile, User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.strip().lower()).first()

    @staticmethod
    def create_user(db: Session, with_customer_profile: bool = False, **user_data) -> User:
        """Create a user, optionally with an empty free-tier customer profile in the same commit"""
        user = User(**user_data)
        db.add(user)
        if with_customer_profile:
            user.customer_profile = CustomerProfile()
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Update a user with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def get_profile_by_user_id(db: Session, user_id: int) -> Optional[CustomerProfile]:
        return db.query(CustomerProfile).filter(CustomerProfile.user_id == user_id).first()

    @staticmethod
    def update_profile(db: Session, profile: CustomerProfile, **updates) -> CustomerProfile:
        for key, value in updates.items():
            if value is not None and hasattr(profile, key):
                setattr(profile, key, value)

        db.commit()
        db.refresh(profile)
        return profile
