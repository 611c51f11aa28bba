from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class User(Base):
    __tablename__ = "users"

    id           = Column(Integer, primary_key=True, index=True)
    name         = Column(String(50), nullable=False)
    email        = Column(String(150), unique=True, nullable=False, index=True)
    departmentId = Column(Integer, ForeignKey("departments.id", ondelete="RESTRICT"),
                          nullable=False, index=True)

    # ─── Relationships ─────────────────────────────────────────────────────────
    department = relationship("Department", back_populates="users", lazy="joined")

    def __repr__(self):
        return f"<User id={self.id} email={self.email} department={self.departmentId}>"
