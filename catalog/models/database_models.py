from sqlalchemy import Column, Integer, NUMERIC, String
from sqlalchemy.orm import declarative_base


Base = declarative_base()


class ProductRecord(Base):
    """Catalog product row; prices are held in the base currency"""

    __tablename__ = "Product"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    base_price = Column(NUMERIC(10, 2), nullable=False)
