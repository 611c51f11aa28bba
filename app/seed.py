"""
Seed the departments table.

Users always reference an existing department and no endpoint creates
departments, so a fresh database must be seeded before registrations can
succeed:

    python -m app.seed

Idempotent: departments that already exist (by name) are left alone.
"""
import logging
import sys

from sqlalchemy.orm import Session

from app.config import settings
from app.database import SessionLocal, init_db
from app.models.department import Department
from app.services.department_service import department_service

logger = logging.getLogger(__name__)


def seed_departments(db: Session, names: list[str]) -> int:
    """Insert each missing department and commit. Returns how many were created."""
    created = 0
    for name in names:
        if department_service.get_by_name(db, name):
            continue
        db.add(Department(name=name))
        created += 1
    db.commit()
    return created


def main() -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    init_db()
    db = SessionLocal()
    try:
        created = seed_departments(db, settings.get_seed_departments())
    except Exception:
        db.rollback()
        logger.exception("Seeding departments failed")
        return 1
    finally:
        db.close()

    logger.info(f"Seeded {created} department(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
