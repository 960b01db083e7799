from wopihost.db.base import Base
from wopihost.db.models.document import Document

__all__ = [
    "Base",
    "Document",
]
