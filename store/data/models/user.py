from sqlalchemy import Column, Integer, String, Boolean, DateTime
from store.data.database import Base, utcnow

class UserModel(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    username = Column(String(64), nullable=False, unique=True)
    email = Column(String(128), nullable=True, unique=True)
    # bcrypt digest, never the plain password
    password = Column(String(128), nullable=False)
    admin = Column(Boolean, nullable=False, default=False)
    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
