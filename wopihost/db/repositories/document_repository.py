import logging
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from wopihost.db.models.document import Document as DocumentModel
from wopihost.domains.documents.capabilities import Capability
from wopihost.domains.documents.contracts import (
    AbstractDocument, DocumentContext, DocumentRepository, content_sha256
)
from wopihost.domains.documents.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


class SqlDocument(AbstractDocument):
    """Документ, хранящийся в базе данных"""

    capabilities = AbstractDocument.capabilities | {
        Capability.LAST_MODIFIED_TIME,
        Capability.SHA256_HASH,
    }

    def __init__(self, context: DocumentContext, session: Session, model: DocumentModel):
        super().__init__(context)
        self.session = session
        self.model = model

    def id(self) -> str:
        return self.model.id

    def basename(self) -> str:
        return self.model.basename

    def owner(self) -> str:
        return self.model.owner_id

    def size(self) -> int:
        return self.model.size

    def version(self) -> str:
        return str(self.model.revision)

    def content(self) -> bytes:
        return self.model.content

    def is_locked(self) -> bool:
        return self.model.lock_id is not None

    def get_lock(self) -> str:
        return self.model.lock_id or ""

    def put(self, content: bytes, editor_ids: Optional[List[str]] = None) -> None:
        # Ревизия увеличивается атомарно на стороне БД
        self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == self.model.id)
            .values(
                content=content,
                size=len(content),
                revision=DocumentModel.revision + 1,
                last_editors=list(editor_ids or [])
            )
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        self.session.refresh(self.model)

        logger.info(f"Document {self.model.id} updated to version {self.model.revision}")

    def lock(self, lock_id: str) -> None:
        self.model.lock_id = lock_id
        self._save()
        logger.info(f"Document {self.model.id} locked")

    def delete_lock(self) -> None:
        self.model.lock_id = None
        self._save()
        logger.info(f"Document {self.model.id} unlocked")

    def last_modified_time(self) -> Optional[str]:
        updated_at = self.model.updated_at or self.model.created_at
        return updated_at.isoformat() if updated_at else None

    def sha256_hash(self) -> str:
        return content_sha256(self.model.content)

    def _save(self) -> None:
        self.session.add(self.model)
        self.session.commit()
        self.session.refresh(self.model)


class SqlDocumentRepository(DocumentRepository):
    """Репозиторий документов в базе данных"""

    def __init__(self, context: DocumentContext, session: Session, owner: str = "Unknown User"):
        super().__init__(context)
        self.session = session
        self.owner = owner

    def find(self, file_id: str) -> SqlDocument:
        db_document = self.session.get(DocumentModel, file_id)
        if db_document is None:
            raise DocumentNotFoundError(file_id)
        return self._to_domain(db_document)

    def find_by_name(self, filename: str) -> SqlDocument:
        result = self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.basename == filename)
            .order_by(DocumentModel.created_at)
            .limit(1)
        )
        db_document = result.scalar_one_or_none()
        if db_document is None:
            raise DocumentNotFoundError(filename)
        return self._to_domain(db_document)

    def create(self, name: str, content: bytes, size: int) -> SqlDocument:
        self.validate_new_file(name, size)

        db_document = DocumentModel(
            basename=name,
            owner_id=self.owner,
            content=content,
            size=size,
            revision=1,
            last_editors=[]
        )

        self.session.add(db_document)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DocumentNotFoundError(name, "Document rejected by storage")

        self.session.refresh(db_document)
        logger.info(f"Created document {db_document.id} ({name})")
        return self._to_domain(db_document)

    def _to_domain(self, db_document: DocumentModel) -> SqlDocument:
        """Преобразование модели БД в документ"""
        return SqlDocument(self.context, self.session, db_document)
