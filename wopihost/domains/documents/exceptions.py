class WopiError(Exception):
    """Базовая ошибка WOPI-хоста"""


class DocumentNotFoundError(WopiError, LookupError):
    """Документ не найден или не может быть создан"""

    def __init__(self, lookup: str, message: str = "Document not found"):
        self.lookup = lookup
        super().__init__(f"{message}: {lookup}")


class UnsupportedActionError(WopiError, ValueError):
    """Для расширения файла нет такого действия в discovery"""

    def __init__(self, extension: str, action: str):
        self.extension = extension
        self.action = action
        super().__init__(
            f"Unsupported action '{action}' for extension '{extension}'"
        )


class ActionUrlsNotConfiguredError(WopiError, RuntimeError):
    """Не настроены discovery или построение ссылки на файл"""

    def __init__(self):
        super().__init__("Discovery and source url must be configured to build action urls")
