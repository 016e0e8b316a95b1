"""Identity Model"""

from sqlalchemy import Column, Date, String
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class User(BaseModel):
    """
    A registered driver.
    email, id_number and dl_number are each unique across all users.
    """
    __tablename__ = "users"

    # Personal Information
    name = Column(String(255), nullable=False)
    id_number = Column(String(64), unique=True, nullable=False, index=True)
    phone = Column(String(32), nullable=False)

    # Driver's license as declared at registration
    dl_number = Column(String(64), unique=True, nullable=False, index=True)
    dl_expire_date = Column(Date, nullable=False)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Relationships
    license = relationship("License", back_populates="user", uselist=False)
    fines = relationship("Fine", back_populates="user")
    payments = relationship("Payment", back_populates="user")

    def __repr__(self) -> str:
        return f"<User {self.id_number} ({self.email})>"
