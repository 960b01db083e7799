import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from wopihost.domains.documents.capabilities import Capability
from wopihost.domains.documents.contracts import (
    AbstractDocument, DocumentContext, DocumentRepository, content_sha256
)
from wopihost.domains.documents.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    """Запись о файле во внутреннем хранилище"""
    basename: str
    owner: str
    content: bytes
    size: int
    revision: int = 1
    lock: Optional[str] = None
    editors: List[str] = field(default_factory=list)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryStorage:
    """Хранилище файлов в памяти процесса"""

    def __init__(self):
        self.files: Dict[str, StoredFile] = {}
        self.mutex = threading.Lock()

    def get(self, file_id: str) -> StoredFile:
        stored = self.files.get(file_id)
        if stored is None:
            raise DocumentNotFoundError(file_id)
        return stored


class InMemoryDocument(AbstractDocument):
    """Документ из InMemoryStorage"""

    capabilities = AbstractDocument.capabilities | {
        Capability.LAST_MODIFIED_TIME,
        Capability.SHA256_HASH,
    }

    def __init__(self, context: DocumentContext, storage: InMemoryStorage, file_id: str):
        super().__init__(context)
        self.storage = storage
        self.file_id = file_id

    @property
    def stored(self) -> StoredFile:
        return self.storage.get(self.file_id)

    def id(self) -> str:
        return self.file_id

    def basename(self) -> str:
        return self.stored.basename

    def owner(self) -> str:
        return self.stored.owner

    def size(self) -> int:
        return self.stored.size

    def version(self) -> str:
        return str(self.stored.revision)

    def content(self) -> bytes:
        return self.stored.content

    def is_locked(self) -> bool:
        return self.stored.lock is not None

    def get_lock(self) -> str:
        return self.stored.lock or ""

    def put(self, content: bytes, editor_ids: Optional[List[str]] = None) -> None:
        with self.storage.mutex:
            stored = self.stored
            stored.content = content
            stored.size = len(content)
            stored.revision += 1
            stored.editors = list(editor_ids or [])
            stored.updated_at = datetime.now(timezone.utc)

        logger.info(f"Document {self.file_id} updated to version {stored.revision}")

    def lock(self, lock_id: str) -> None:
        with self.storage.mutex:
            self.stored.lock = lock_id
        logger.info(f"Document {self.file_id} locked")

    def delete_lock(self) -> None:
        with self.storage.mutex:
            self.stored.lock = None
        logger.info(f"Document {self.file_id} unlocked")

    def last_modified_time(self) -> str:
        return self.stored.updated_at.isoformat()

    def sha256_hash(self) -> str:
        return content_sha256(self.stored.content)


class InMemoryDocumentRepository(DocumentRepository):
    """Репозиторий документов в памяти, для разработки и тестов"""

    def __init__(
        self,
        context: DocumentContext,
        storage: Optional[InMemoryStorage] = None,
        owner: str = "Unknown User"
    ):
        super().__init__(context)
        self.storage = storage if storage is not None else InMemoryStorage()
        self.owner = owner

    def find(self, file_id: str) -> InMemoryDocument:
        self.storage.get(file_id)
        return InMemoryDocument(self.context, self.storage, file_id)

    def find_by_name(self, filename: str) -> InMemoryDocument:
        with self.storage.mutex:
            file_id = next(
                (file_id for file_id, stored in self.storage.files.items() if stored.basename == filename),
                None
            )
        if file_id is None:
            raise DocumentNotFoundError(filename)
        return InMemoryDocument(self.context, self.storage, file_id)

    def create(self, name: str, content: bytes, size: int) -> InMemoryDocument:
        self.validate_new_file(name, size)

        file_id = uuid.uuid4().hex
        with self.storage.mutex:
            self.storage.files[file_id] = StoredFile(
                basename=name,
                owner=self.owner,
                content=content,
                size=size
            )

        logger.info(f"Created document {file_id} ({name})")
        return InMemoryDocument(self.context, self.storage, file_id)
