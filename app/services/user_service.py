import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.user import User
from app.models.department import Department
from app.schemas.user import UserCreateRequest
from app.services.department_service import department_service
from app.utils.exceptions import (
    DataAccessException, DepartmentNotFoundException, DuplicateEmailException,
)

logger = logging.getLogger(__name__)


def _serialize_user(u: User) -> dict:
    return {
        "id":           u.id,
        "name":         u.name,
        "email":        u.email,
        "departmentId": u.departmentId,
    }


class UserService:

    # ─── Users by Department ──────────────────────────────────────────────────
    def users_by_department(self, db: Session) -> list[dict]:
        """
        Count users per department.

        Inner join, so departments without users are left out. Ordered by
        department id. Anything already loaded in the session is expired
        first so counts are read from the database, not the identity map.
        """
        logger.info("Fetching user counts by department")
        try:
            db.expire_all()
            rows = (
                db.query(Department.id, Department.name, func.count(User.id))
                .join(User, User.departmentId == Department.id)
                .group_by(Department.id, Department.name)
                .order_by(Department.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching user counts by department: {e}", exc_info=True)
            raise DataAccessException("Error retrieving users by department") from e

        return [
            {"departmentId": dep_id, "departmentName": dep_name, "userCount": count}
            for dep_id, dep_name, count in rows
        ]

    # ─── Exists by Email ──────────────────────────────────────────────────────
    def exists_by_email(self, db: Session, email: str) -> bool:
        return db.query(User.id).filter(User.email == email).first() is not None

    # ─── Create ───────────────────────────────────────────────────────────────
    def create_user(self, db: Session, data: UserCreateRequest) -> dict:
        logger.info(f"Registering user {data.name} ({data.email})")
        try:
            if self.exists_by_email(db, data.email):
                logger.warning(f"Registration rejected, email already in use: {data.email}")
                raise DuplicateEmailException()

            if not department_service.get_department(db, data.departmentId):
                logger.warning(f"Registration rejected, unknown department: {data.departmentId}")
                raise DepartmentNotFoundException(data.departmentId)

            u = User(name=data.name, email=data.email, departmentId=data.departmentId)
            db.add(u)
            db.commit()
            db.refresh(u)
        except IntegrityError as e:
            # The unique index on email is the real guard against concurrent registrations
            db.rollback()
            logger.warning(f"Constraint rejected user {data.email}: {e.orig}")
            if self.exists_by_email(db, data.email):
                raise DuplicateEmailException() from e
            # Otherwise the foreign key failed: the department vanished after the lookup
            raise DepartmentNotFoundException(data.departmentId) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving user {data.email}: {e}", exc_info=True)
            raise DataAccessException("Error saving user") from e

        return _serialize_user(u)


user_service = UserService()
