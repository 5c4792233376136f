"""ORM model for application users (auth, approval workflow and lockout)."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utc_now

ROLE_USER = "user"
ROLE_ADMIN = "admin"

STATUS_PENDING = "pending"
STATUS_ACTIVE = "active"
STATUS_SUSPENDED = "suspended"


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'
    status: 'pending' (waiting for admin approval), 'active' or 'suspended'

    email and username are stored lower-cased so uniqueness is case-insensitive.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default=ROLE_USER)
    status = Column(String(32), nullable=False, default=STATUS_PENDING, index=True)
    language = Column(String(8), nullable=False, default="en")
    failed_login_attempts = Column(Integer, nullable=False, default=0)
    locked_until = Column(DateTime(timezone=True), nullable=True)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
    )

    fabrics = relationship("Fabric", back_populates="owner", cascade="all, delete-orphan")
    usage_entries = relationship(
        "UsageEntry", back_populates="user", cascade="all, delete-orphan"
    )
    projects = relationship("Project", back_populates="owner", cascade="all, delete-orphan")
    patterns = relationship("Pattern", back_populates="owner", cascade="all, delete-orphan")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
