from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base


class InsectTree(Base):
    __tablename__ = "insect_trees"
    __table_args__ = (
        UniqueConstraint('insect_id', 'tree_id', name='uq_insect_tree_pair'),
    )

    id = Column(Integer, primary_key=True, index=True)
    insect_id = Column(Integer, ForeignKey("insects.id", ondelete="CASCADE"), nullable=False, index=True)
    tree_id = Column(Integer, ForeignKey("trees.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
