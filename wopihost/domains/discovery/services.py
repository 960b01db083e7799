import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)


class Discovery(Protocol):
    """Сопоставление (расширение, действие) с шаблоном ссылки WOPI-клиента"""

    def discover_action(self, extension: str, action: str) -> Optional[Dict[str, str]]: ...


class XmlDiscovery:
    """Discovery на основе XML-документа, который отдает WOPI-клиент по /hosting/discovery"""

    def __init__(self, root: ET.Element):
        self.root = root

    @classmethod
    def from_xml(cls, xml: str) -> "XmlDiscovery":
        return cls(ET.fromstring(xml))

    @classmethod
    def from_file(cls, path: str) -> "XmlDiscovery":
        logger.info(f"Loading WOPI discovery from {path}")
        return cls.from_xml(Path(path).read_text(encoding="utf-8"))

    def _apps(self) -> List[ET.Element]:
        return self.root.findall("./net-zone/app")

    def discover_action(self, extension: str, action: str) -> Optional[Dict[str, str]]:
        """Атрибуты действия (name, ext, urlsrc, ...) или None"""
        for app in self._apps():
            for element in app.findall("action"):
                if element.get("ext") == extension and element.get("name") == action:
                    return dict(element.attrib)
        return None

    def discover_extension(self, extension: str) -> List[Dict[str, str]]:
        """Все действия, доступные для расширения"""
        return [
            dict(element.attrib)
            for app in self._apps()
            for element in app.findall("action")
            if element.get("ext") == extension
        ]

    def discover_mime_type(self, mime_type: str) -> List[Dict[str, str]]:
        """Действия приложения, имя которого совпадает с mime-типом"""
        for app in self._apps():
            if app.get("name") == mime_type:
                return [dict(element.attrib) for element in app.findall("action")]
        return []
