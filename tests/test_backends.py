"""
Тесты контракта документа для каждого хранилища
"""

import base64
import hashlib
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from wopihost.db.models import Base
from wopihost.db.repositories.document_repository import SqlDocumentRepository
from wopihost.domains.documents.contracts import MAX_FILE_SIZE
from wopihost.domains.documents.exceptions import DocumentNotFoundError
from wopihost.domains.documents.memory import InMemoryDocumentRepository


@pytest.fixture(params=["memory", "sql"])
def backend(request, context, storage, session):
    if request.param == "memory":
        return InMemoryDocumentRepository(context, storage, owner="owner-1")
    return SqlDocumentRepository(context, session, owner="owner-1")


class TestLookup:
    def test_create_then_find_round_trip(self, backend):
        created = backend.create("notes.docx", b"first draft", 11)
        found = backend.find(created.id())

        assert found.id() == created.id()
        assert found.basename() == "notes.docx"
        assert found.size() == 11
        assert found.content() == b"first draft"

    def test_find_by_name(self, backend):
        created = backend.create("budget.xlsx", b"1,2,3", 5)
        assert backend.find_by_name("budget.xlsx").id() == created.id()

    def test_find_missing(self, backend):
        with pytest.raises(DocumentNotFoundError) as exc_info:
            backend.find("does-not-exist")
        assert exc_info.value.lookup == "does-not-exist"

    def test_find_by_name_missing(self, backend):
        with pytest.raises(DocumentNotFoundError):
            backend.find_by_name("missing.docx")

    def test_not_found_is_lookup_error(self, backend):
        with pytest.raises(LookupError):
            backend.find("does-not-exist")

    @pytest.mark.parametrize("name", ["", "   ", "dir/file.docx", "dir\\file.docx"])
    def test_create_rejects_invalid_name(self, backend, name):
        with pytest.raises(DocumentNotFoundError):
            backend.create(name, b"", 0)

    @pytest.mark.parametrize("size", [-1, MAX_FILE_SIZE + 1])
    def test_create_rejects_invalid_size(self, backend, size):
        with pytest.raises(DocumentNotFoundError):
            backend.create("file.docx", b"", size)

    def test_ids_are_unique(self, backend):
        first = backend.create("a.docx", b"a", 1)
        second = backend.create("a.docx", b"a", 1)
        assert first.id() != second.id()

    def test_owner_comes_from_repository(self, backend):
        assert backend.create("a.docx", b"a", 1).owner() == "owner-1"


class TestContent:
    def test_put_replaces_content_and_size(self, backend):
        document = backend.create("a.docx", b"short", 5)
        document.put(b"a much longer body")

        found = backend.find(document.id())
        assert found.content() == b"a much longer body"
        assert found.size() == 18

    def test_put_changes_version(self, backend):
        document = backend.create("a.docx", b"one", 3)
        before = document.version()

        document.put(b"two")

        assert document.version() != before

    def test_versions_never_repeat(self, backend):
        document = backend.create("a.docx", b"one", 3)
        seen = {document.version()}

        for body in (b"two", b"one", b"two"):
            document.put(body, ["alice"])
            assert document.version() not in seen
            seen.add(document.version())

    def test_sha256_hash(self, backend):
        document = backend.create("a.docx", b"hash me", 7)
        expected = base64.b64encode(hashlib.sha256(b"hash me").digest()).decode()
        assert document.sha256_hash() == expected


class TestLocks:
    def test_unlocked_by_default(self, backend):
        assert backend.create("a.docx", b"", 0).is_locked() is False

    def test_lock_and_unlock(self, backend):
        document = backend.create("a.docx", b"", 0)

        document.lock("lock-1")
        assert document.is_locked() is True
        assert backend.find(document.id()).get_lock() == "lock-1"

        document.delete_lock()
        assert backend.find(document.id()).is_locked() is False

    def test_relock_with_same_token(self, backend):
        document = backend.create("a.docx", b"", 0)
        document.lock("lock-1")
        document.lock("lock-1")
        assert document.get_lock() == "lock-1"

    def test_delete_missing_lock(self, backend):
        document = backend.create("a.docx", b"", 0)
        document.delete_lock()
        assert document.is_locked() is False


class TestCheckFileInfo:
    def test_response_properties(self, backend):
        document = backend.create("report.docx", b"body", 4).set_user_id("alice")
        properties = document.get_response_properties()

        assert list(properties) == [
            "BaseFileName", "OwnerId", "Size", "Version", "UserId",
            "UserCanWrite", "LastModifiedTime", "SHA256",
            "SupportsDeleteFile", "SupportsLocks", "SupportsUpdate", "SupportsRename",
        ]
        assert properties["BaseFileName"] == "report.docx"
        assert properties["OwnerId"] == "owner-1"
        assert properties["Size"] == 4
        assert properties["Version"] == "1"
        assert properties["UserId"] == "alice"

    def test_action_url(self, backend):
        document = backend.create("report.docx", b"body", 4)
        expected = f"https://editor.example/x?WOPISrc=https://host/wopi/files/{document.id()}"
        assert document.get_url_for_action("edit") == expected


class TestConcurrentSqlWrites:
    """Две сессии с одной и той же строкой документа"""

    @pytest.fixture
    def session_factory(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'wopi.db'}")
        Base.metadata.create_all(engine)
        yield sessionmaker(bind=engine, expire_on_commit=False)
        engine.dispose()

    def test_puts_from_stale_sessions_get_distinct_versions(self, context, session_factory):
        with session_factory() as setup:
            file_id = SqlDocumentRepository(context, setup).create("a.docx", b"one", 3).id()

        with session_factory() as first_session, session_factory() as second_session:
            first = SqlDocumentRepository(context, first_session).find(file_id)
            second = SqlDocumentRepository(context, second_session).find(file_id)

            first.put(b"alpha")
            second.put(b"beta")

            assert first.version() == "2"
            assert second.version() == "3"
            assert second.content() == b"beta"

        with session_factory() as check:
            stored = SqlDocumentRepository(context, check).find(file_id)
            assert stored.version() == "3"
            assert stored.content() == b"beta"


class TestInMemoryNameLookup:
    def test_find_by_name_waits_for_storage_mutex(self, context, storage):
        repository = InMemoryDocumentRepository(context, storage)
        created = repository.create("a.docx", b"a", 1)
        found = []

        storage.mutex.acquire()
        try:
            worker = threading.Thread(target=lambda: found.append(repository.find_by_name("a.docx")))
            worker.start()
            worker.join(timeout=0.2)
            assert worker.is_alive()
        finally:
            storage.mutex.release()

        worker.join(timeout=5)
        assert not worker.is_alive()
        assert found[0].id() == created.id()
