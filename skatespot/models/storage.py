from sqlalchemy import Column, String, Text, DateTime, func
from skatespot.core.db import Base


class KeyValueEntry(Base):
    __tablename__ = "key_value_store"
    name = Column(String(255), primary_key=True)
    blob = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
