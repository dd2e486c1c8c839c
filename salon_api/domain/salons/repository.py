"""Salon repository - Database operations for salons, services and staff"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from ...models_engagement import Review
from ...models_salon import Salon, Service, Staff, VerificationStatus


class SalonRepository:
    """Repository for salon catalog database operations"""

    # ------------------------------------------------------------------
    # Salons
    # ------------------------------------------------------------------

    @staticmethod
    def get_salon_by_id(db: Session, salon_id: int) -> Optional[Salon]:
        return db.query(Salon).filter(Salon.id == salon_id).first()

    @staticmethod
    def get_salon_for_update(db: Session, salon_id: int) -> Optional[Salon]:
        """Fetch a salon row with a write lock held until commit (no-op on SQLite)"""
        return db.query(Salon).filter(Salon.id == salon_id).with_for_update().first()

    @staticmethod
    def get_salon_by_slug(db: Session, slug: str) -> Optional[Salon]:
        return db.query(Salon).filter(Salon.slug == slug).first()

    @staticmethod
    def get_salon_by_owner(db: Session, owner_id: int) -> Optional[Salon]:
        return db.query(Salon).filter(Salon.owner_id == owner_id).first()

    @staticmethod
    def slug_exists(db: Session, slug: str) -> bool:
        return db.query(Salon.id).filter(Salon.slug == slug).first() is not None

    @staticmethod
    def search_salons(
        db: Session,
        city: Optional[str] = None,
        gender: Optional[str] = None,
        min_rating: Optional[float] = None,
        search: Optional[str] = None,
    ) -> list[Salon]:
        """Publicly listed salons (verified and active), best rated first"""
        query = db.query(Salon).filter(
            Salon.is_active.is_(True),
            Salon.verification_status == VerificationStatus.VERIFIED.value,
        )

        if city:
            query = query.filter(func.lower(Salon.city) == city.strip().lower())
        if gender:
            query = query.filter(Salon.gender_specialization == gender)
        if min_rating is not None:
            query = query.filter(Salon.average_rating >= min_rating)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(Salon.business_name.ilike(pattern), Salon.description.ilike(pattern)))

        return query.order_by(Salon.average_rating.desc(), Salon.total_reviews.desc(), Salon.id).all()

    @staticmethod
    def get_listed_salons_with_coordinates(db: Session) -> list[Salon]:
        return (
            db.query(Salon)
            .filter(
                Salon.is_active.is_(True),
                Salon.verification_status == VerificationStatus.VERIFIED.value,
                Salon.latitude.isnot(None),
                Salon.longitude.isnot(None),
            )
            .all()
        )

    @staticmethod
    def create_salon(db: Session, owner_id: int, **salon_data) -> Salon:
        salon = Salon(owner_id=owner_id, **salon_data)
        db.add(salon)
        db.commit()
        db.refresh(salon)
        return salon

    @staticmethod
    def update_salon(db: Session, salon: Salon, **updates) -> Salon:
        for key, value in updates.items():
            if value is not None and hasattr(salon, key):
                setattr(salon, key, value)

        db.commit()
        db.refresh(salon)
        return salon

    @staticmethod
    def delete_salon(db: Session, salon: Salon) -> None:
        db.delete(salon)
        db.commit()

    @staticmethod
    def increment_view_count(db: Session, salon_id: int) -> None:
        db.query(Salon).filter(Salon.id == salon_id).update(
            {Salon.view_count: Salon.view_count + 1}, synchronize_session=False
        )
        db.commit()

    @staticmethod
    def refresh_rating(db: Session, salon_id: int) -> None:
        """Recompute average rating and review count from visible reviews"""
        average, total = (
            db.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.salon_id == salon_id, Review.is_visible.is_(True))
            .one()
        )
        db.query(Salon).filter(Salon.id == salon_id).update(
            {
                Salon.average_rating: round(float(average or 0), 2),
                Salon.total_reviews: int(total or 0),
            },
            synchronize_session=False,
        )
        db.commit()

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------

    @staticmethod
    def get_service(db: Session, service_id: int, salon_id: Optional[int] = None) -> Optional[Service]:
        query = db.query(Service).filter(Service.id == service_id)
        if salon_id is not None:
            query = query.filter(Service.salon_id == salon_id)
        return query.first()

    @staticmethod
    def get_services(db: Session, salon_id: int, active_only: bool = True) -> list[Service]:
        query = db.query(Service).filter(Service.salon_id == salon_id)
        if active_only:
            query = query.filter(Service.is_active.is_(True))
        return query.order_by(Service.is_popular.desc(), Service.name).all()

    @staticmethod
    def create_service(db: Session, salon_id: int, **service_data) -> Service:
        service = Service(salon_id=salon_id, **service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def update_service(db: Session, service: Service, **updates) -> Service:
        for key, value in updates.items():
            if value is not None and hasattr(service, key):
                setattr(service, key, value)

        db.commit()
        db.refresh(service)
        return service

    @staticmethod
    def delete_service(db: Session, service: Service) -> None:
        db.delete(service)
        db.commit()

    @staticmethod
    def increment_service_booking_count(db: Session, service_id: int) -> None:
        """Caller commits"""
        db.query(Service).filter(Service.id == service_id).update(
            {Service.booking_count: Service.booking_count + 1}, synchronize_session=False
        )

    # ------------------------------------------------------------------
    # Staff
    # ------------------------------------------------------------------

    @staticmethod
    def get_staff_member(db: Session, staff_id: int, salon_id: Optional[int] = None) -> Optional[Staff]:
        query = db.query(Staff).filter(Staff.id == staff_id)
        if salon_id is not None:
            query = query.filter(Staff.salon_id == salon_id)
        return query.first()

    @staticmethod
    def get_staff(db: Session, salon_id: int, active_only: bool = True) -> list[Staff]:
        query = db.query(Staff).filter(Staff.salon_id == salon_id)
        if active_only:
            query = query.filter(Staff.is_active.is_(True))
        return query.order_by(Staff.name).all()

    @staticmethod
    def create_staff(db: Session, salon_id: int, **staff_data) -> Staff:
        member = Staff(salon_id=salon_id, **staff_data)
        db.add(member)
        db.commit()
        db.refresh(member)
        return member

    @staticmethod
    def update_staff(db: Session, member: Staff, **updates) -> Staff:
        for key, value in updates.items():
            if value is not None and hasattr(member, key):
                setattr(member, key, value)

        db.commit()
        db.refresh(member)
        return member

    @staticmethod
    def delete_staff(db: Session, member: Staff) -> None:
        db.delete(member)
        db.commit()
