from datetime import datetime
from sqlalchemy import Column, DateTime, Integer
from ..database import Base  # This is the same Base created by declarative_base()

class BaseModel(Base):
    """Common columns for every table: surrogate key and audit timestamps."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
