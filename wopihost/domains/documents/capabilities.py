from enum import Enum
from typing import Any, Dict, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from wopihost.domains.documents.contracts import AbstractDocument


class Capability(str, Enum):
    """Необязательные операции документа. Значение - имя метода документа"""
    BASENAME = "basename"
    OWNER = "owner"
    SIZE = "size"
    VERSION = "version"
    USER_ID = "user_id"

    IS_READ_ONLY = "is_read_only"
    USER_CAN_NOT_WRITE_RELATIVE = "user_can_not_write_relative"
    CAN_USER_RENAME = "can_user_rename"
    CAN_USER_WRITE = "can_user_write"

    CLOSE_URL = "close_url"
    DOWNLOAD_URL = "download_url"
    FILE_VERSION_URL = "file_version_url"

    SHARING_URL = "sharing_url"
    SUPPORTED_SHARE_URL_TYPES = "supported_share_url_types"

    FILE_CONTENT_URL = "file_content_url"
    EXTENSION = "extension"
    LAST_MODIFIED_TIME = "last_modified_time"
    SHA256_HASH = "sha256_hash"

    DISABLE_PRINT = "disable_print"
    HIDE_PRINT_OPTION = "hide_print_option"
    DISABLE_EXPORT = "disable_export"
    HIDE_EXPORT_OPTION = "hide_export_option"
    DISABLE_COPY = "disable_copy"

    SUPPORT_DELETE = "support_delete"
    SUPPORT_LOCKS = "support_locks"
    SUPPORT_UPDATE = "support_update"
    SUPPORT_RENAME = "support_rename"
    SUPPORT_USER_INFO = "support_user_info"


# Ни одно свойство не должно быть null. Если свойство не поддерживается,
# оно просто пропускается, и WOPI-клиент использует значение по умолчанию.
PROPERTY_CAPABILITIES: Tuple[Tuple[str, Capability], ...] = (
    # Обязательные свойства
    ("BaseFileName", Capability.BASENAME),
    ("OwnerId", Capability.OWNER),
    ("Size", Capability.SIZE),
    ("Version", Capability.VERSION),
    ("UserId", Capability.USER_ID),

    # Права доступа
    ("ReadOnly", Capability.IS_READ_ONLY),
    ("UserCanNotWriteRelative", Capability.USER_CAN_NOT_WRITE_RELATIVE),
    ("UserCanRename", Capability.CAN_USER_RENAME),
    ("UserCanWrite", Capability.CAN_USER_WRITE),

    # Ссылки на файл
    ("CloseUrl", Capability.CLOSE_URL),
    ("DownloadUrl", Capability.DOWNLOAD_URL),
    ("FileVersionUrl", Capability.FILE_VERSION_URL),

    # Совместный доступ
    ("FileSharingUrl", Capability.SHARING_URL),
    ("SupportedShareUrlTypes", Capability.SUPPORTED_SHARE_URL_TYPES),

    # Своя ссылка на содержимое файла
    ("FileUrl", Capability.FILE_CONTENT_URL),

    # Своя логика определения расширения
    ("FileExtension", Capability.EXTENSION),

    # Метаданные
    ("LastModifiedTime", Capability.LAST_MODIFIED_TIME),

    ("SHA256", Capability.SHA256_HASH),

    # Запрет печати
    ("DisablePrint", Capability.DISABLE_PRINT),
    ("HidePrintOption", Capability.HIDE_PRINT_OPTION),

    # Запрет экспорта
    ("DisableExport", Capability.DISABLE_EXPORT),
    ("HideExportOption", Capability.HIDE_EXPORT_OPTION),

    # Запрет копирования
    ("DisableCopy", Capability.DISABLE_COPY),

    # Поддерживаемые операции
    ("SupportsDeleteFile", Capability.SUPPORT_DELETE),
    ("SupportsLocks", Capability.SUPPORT_LOCKS),
    ("SupportsUpdate", Capability.SUPPORT_UPDATE),
    ("SupportsRename", Capability.SUPPORT_RENAME),
)

# Зарезервированы и никогда не попадают в ответ
RESERVED_PROPERTIES: Tuple[Tuple[str, Capability], ...] = (
    ("SupportsUserInfo", Capability.SUPPORT_USER_INFO),
)


def project_properties(document: "AbstractDocument") -> Dict[str, Any]:
    """Свойства ответа CheckFileInfo на основе заявленных возможностей документа"""
    properties: Dict[str, Any] = {}

    for property_name, capability in PROPERTY_CAPABILITIES:
        if capability not in document.capabilities:
            continue

        value = getattr(document, capability.value)()
        if value is not None:
            properties[property_name] = value

    return properties
