from wopihost.domains.documents.actions import ActionUrlBuilder, document_extension, host_source_url
from wopihost.domains.documents.capabilities import (
    Capability, PROPERTY_CAPABILITIES, RESERVED_PROPERTIES, project_properties
)
from wopihost.domains.documents.contracts import (
    AbstractDocument, DocumentContext, DocumentRepository, MAX_FILE_SIZE, content_sha256
)
from wopihost.domains.documents.exceptions import (
    WopiError, DocumentNotFoundError, UnsupportedActionError, ActionUrlsNotConfiguredError
)
from wopihost.domains.documents.identity import (
    DEFAULT_USER_ID, LiteralUser, DeferredUser, UserResolver
)
from wopihost.domains.documents.memory import (
    InMemoryDocument, InMemoryDocumentRepository, InMemoryStorage
)
from wopihost.domains.documents.schemas import ActionUrlResponse

__all__ = [
    "ActionUrlBuilder", "document_extension", "host_source_url",
    "Capability", "PROPERTY_CAPABILITIES", "RESERVED_PROPERTIES", "project_properties",
    "AbstractDocument", "DocumentContext", "DocumentRepository", "MAX_FILE_SIZE", "content_sha256",
    "WopiError", "DocumentNotFoundError", "UnsupportedActionError", "ActionUrlsNotConfiguredError",
    "DEFAULT_USER_ID", "LiteralUser", "DeferredUser", "UserResolver",
    "InMemoryDocument", "InMemoryDocumentRepository", "InMemoryStorage",
    "ActionUrlResponse"
]
