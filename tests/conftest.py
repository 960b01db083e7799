"""
Общие фикстуры тестов wopihost
"""

from typing import Dict, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from wopihost.db.models import Base
from wopihost.domains.discovery.services import XmlDiscovery
from wopihost.domains.documents.contracts import DocumentContext
from wopihost.domains.documents.memory import InMemoryDocumentRepository, InMemoryStorage


DISCOVERY_XML = """<?xml version="1.0" encoding="utf-8"?>
<wopi-discovery>
  <net-zone name="external-https">
    <app name="Word" favIconUrl="https://editor.example/word.ico">
      <action name="view" ext="docx" urlsrc="https://editor.example/word/view?" />
      <action name="edit" ext="docx" urlsrc="https://editor.example/x?" requires="locks,update" />
      <action name="editnew" ext="docx" />
    </app>
    <app name="application/vnd.oasis.opendocument.text">
      <action name="edit" ext="" default="true" urlsrc="https://editor.example/cool.html?" />
    </app>
    <app name="Excel">
      <action name="view" ext="xlsx" urlsrc="https://editor.example/excel/view?" />
    </app>
  </net-zone>
</wopi-discovery>
"""


class StaticConfig:
    """ConfigRepository с фиксированными флагами"""

    def __init__(self, locks=True, update=True, rename=True, delete=True):
        self.locks = locks
        self.update = update
        self.rename = rename
        self.delete = delete

    def support_locks(self) -> bool:
        return self.locks

    def support_update(self) -> bool:
        return self.update

    def support_rename(self) -> bool:
        return self.rename

    def support_delete(self) -> bool:
        return self.delete


class StaticDiscovery:
    """Discovery с заранее заданными записями по ключу (расширение, действие)"""

    def __init__(self, entries: Dict[tuple, Optional[dict]]):
        self.entries = entries

    def discover_action(self, extension: str, action: str) -> Optional[dict]:
        return self.entries.get((extension, action))


def source_url(file_id: str) -> str:
    return f"https://host/wopi/files/{file_id}"


@pytest.fixture
def config() -> StaticConfig:
    return StaticConfig()


@pytest.fixture
def discovery() -> XmlDiscovery:
    return XmlDiscovery.from_xml(DISCOVERY_XML)


@pytest.fixture
def context(config, discovery) -> DocumentContext:
    return DocumentContext(config=config, discovery=discovery, source_url=source_url)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def repository(context, storage) -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository(context, storage, owner="owner-1")


@pytest.fixture
def session():
    """Сессия SQLAlchemy поверх SQLite в памяти"""
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, expire_on_commit=False)

    with factory() as session:
        yield session

    engine.dispose()
