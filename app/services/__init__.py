from app.services.resolver_service import EntityResolver, tree_resolver, insect_resolver
from app.services.association_service import AssociationService

__all__ = [
    "EntityResolver", "tree_resolver", "insect_resolver",
    "AssociationService"
]
