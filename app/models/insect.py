from sqlalchemy import Column, Integer, String, Float, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Insect(Base):
    __tablename__ = "insects"

    id = Column(Integer, primary_key=True, index=True)

    # Natural key: the insect's common name
    name = Column(String(255), nullable=False, unique=True, index=True)

    description = Column(Text, nullable=False)
    fact = Column(Text, nullable=False)
    territory = Column(String(255), nullable=False)
    millimeters = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    trees = relationship(
        "Tree",
        secondary="insect_trees",
        back_populates="insects",
        order_by="Tree.tree",
        viewonly=True,
    )
