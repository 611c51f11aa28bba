from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.database import Base


class Department(Base):
    __tablename__ = "departments"

    id   = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)

    # ─── Relationships ─────────────────────────────────────────────────────────
    # No cascade: a department that still has users cannot be deleted
    users = relationship("User", back_populates="department", passive_deletes="all")

    def __repr__(self):
        return f"<Department id={self.id} name={self.name}>"
