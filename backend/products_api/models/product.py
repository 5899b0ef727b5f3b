from sqlalchemy import Column, Integer, String

from products_api.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=False)
    manufacturer = Column(String(255), nullable=False)
