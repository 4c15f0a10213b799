from app.schemas.tree import (
    TreeDescriptor,
    TreeSummary,
    TreeResponse,
    TreeRef,
    TreeEnvelope
)
from app.schemas.insect import (
    InsectDescriptor,
    InsectSummary,
    InsectResponse,
    InsectRef
)
from app.schemas.joined import (
    TreeWithInsects,
    InsectWithTrees,
    AssociationRequest,
    AssociationData,
    AssociationResponse
)

__all__ = [
    "TreeDescriptor",
    "TreeSummary",
    "TreeResponse",
    "TreeRef",
    "TreeEnvelope",
    "InsectDescriptor",
    "InsectSummary",
    "InsectResponse",
    "InsectRef",
    "TreeWithInsects",
    "InsectWithTrees",
    "AssociationRequest",
    "AssociationData",
    "AssociationResponse"
]
