from wopihost.db.repositories.document_repository import SqlDocument, SqlDocumentRepository

__all__ = [
    "SqlDocument",
    "SqlDocumentRepository",
]
