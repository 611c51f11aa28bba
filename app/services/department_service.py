from sqlalchemy.orm import Session

from app.models.department import Department


class DepartmentService:

    def get_department(self, db: Session, department_id: int) -> Department | None:
        return db.query(Department).filter(Department.id == department_id).first()

    def get_by_name(self, db: Session, name: str) -> Department | None:
        return db.query(Department).filter(Department.name == name).first()

    def list_departments(self, db: Session) -> list[dict]:
        deps = db.query(Department).order_by(Department.id).all()
        return [{"id": d.id, "name": d.name} for d in deps]


department_service = DepartmentService()
