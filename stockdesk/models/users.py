# stockdesk/models/users.py
from sqlalchemy import Column, Integer, String
from stockdesk.database import Base

# Represents an admin-panel account with authentication details and role
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    username = Column(String, unique=True, nullable=True, index=True)
    fullname = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False, default="staff")
