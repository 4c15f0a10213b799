from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Tree(Base):
    __tablename__ = "trees"

    id = Column(Integer, primary_key=True, index=True)

    # Natural key: the tree's name
    tree = Column(String(255), nullable=False, unique=True, index=True)

    location = Column(String(255), nullable=False)
    height_ft = Column(Float, nullable=False)
    ground_circumference_ft = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Links are written through InsectTree only
    insects = relationship(
        "Insect",
        secondary="insect_trees",
        back_populates="trees",
        order_by="Insect.name",
        viewonly=True,
    )
