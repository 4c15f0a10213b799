from app.models.tree import Tree
from app.models.insect import Insect
from app.models.insect_tree import InsectTree

__all__ = ["Tree", "Insect", "InsectTree"]
