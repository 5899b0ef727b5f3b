from sqlalchemy import Column, Integer, String

from products_api.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    username = Column(String(255), unique=True, index=True, nullable=False)

    # hash of (plain password + salt)
    salted_password_hash = Column(String(255), nullable=False)
    salt = Column(String(255), nullable=False)
