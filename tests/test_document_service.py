"""Tests for document service CRUD, search and status listing."""

import time
from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError

pytestmark = pytest.mark.unit

from wikidocs.exceptions import (
    DuplicateError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from wikidocs.models.document import Document
from wikidocs.services.document_service import DocumentService
from wikidocs.storage.repositories import DocumentRepository


class TestCreateDocument:
    """Tests for document creation."""

    def test_create_document_basic(self, document_service, admin):
        doc = document_service.create_document(
            title="Getting Started", path="guides/getting-started", author_id=admin.id
        )
        assert doc.id is not None
        assert doc.status == "draft"
        assert doc.content == ""
        assert doc.author_id == admin.id
        assert doc.last_editor_id == admin.id
        assert doc.meta == {}
        assert doc.github_path is None
        assert doc.github_sha is None

    def test_create_document_with_metadata(self, document_service, admin):
        doc = document_service.create_document(
            title="Doc", path="doc", author_id=admin.id, metadata={"tags": ["a"]}
        )
        assert doc.meta == {"tags": ["a"]}

    def test_create_document_duplicate_path(self, document_service, admin):
        document_service.create_document(title="One", path="api/auth", author_id=admin.id)
        with pytest.raises(DuplicateError):
            document_service.create_document(title="Two", path="api/auth", author_id=admin.id)

    @pytest.mark.parametrize("title", ["", "   ", "x" * 501])
    def test_create_document_invalid_title(self, document_service, admin, title):
        with pytest.raises(ValidationError) as exc_info:
            document_service.create_document(title=title, path="doc", author_id=admin.id)
        assert exc_info.value.field == "title"

    @pytest.mark.parametrize("path", ["", "/api/auth", "api/auth/", "api//auth", "api/../auth", "api/auth.md"])
    def test_create_document_invalid_path(self, document_service, admin, path):
        with pytest.raises(ValidationError) as exc_info:
            document_service.create_document(title="Doc", path=path, author_id=admin.id)
        assert exc_info.value.field == "path"

    def test_create_document_must_start_as_draft(self, document_service, admin):
        with pytest.raises(PreconditionError):
            document_service.create_document(
                title="Doc", path="doc", author_id=admin.id, status="approved"
            )

    def test_create_document_any_status_when_not_enforced(self, db_session, admin):
        service = DocumentService(db_session, enforce_transitions=False)
        doc = service.create_document(
            title="Doc", path="doc", author_id=admin.id, status="approved"
        )
        assert doc.status == "approved"

    def test_database_rejects_duplicate_path(self, db_session, admin):
        repo = DocumentRepository(db_session)
        repo.create(Document(title="One", path="dup", author_id=admin.id))
        db_session.commit()
        with pytest.raises(IntegrityError):
            repo.create(Document(title="Two", path="dup", author_id=admin.id))
        db_session.rollback()

    def test_racing_create_raises_duplicate(self, document_service, admin):
        document_service.create_document(title="One", path="api/auth", author_id=admin.id)
        # The second writer did its existence check before the first one committed
        with patch.object(document_service.document_repo, "get_by_path", return_value=None):
            with pytest.raises(DuplicateError):
                document_service.create_document(
                    title="Two", path="api/auth", author_id=admin.id
                )
        assert [d.title for d in document_service.list_documents()] == ["One"]

    def test_create_document_unknown_status(self, document_service, admin):
        with pytest.raises(ValidationError):
            document_service.create_document(
                title="Doc", path="doc", author_id=admin.id, status="published"
            )


class TestGetDocument:
    """Tests for document retrieval."""

    def test_get_document(self, document_service, admin):
        created = document_service.create_document(title="Doc", path="doc", author_id=admin.id)
        fetched = document_service.get_document(created.id)
        assert fetched.id == created.id
        assert fetched.title == "Doc"

    def test_get_document_not_found(self, document_service):
        with pytest.raises(NotFoundError):
            document_service.get_document("missing")

    def test_get_document_by_path(self, document_service, admin):
        created = document_service.create_document(title="Doc", path="a/b", author_id=admin.id)
        assert document_service.get_document_by_path("a/b").id == created.id
        assert document_service.get_document_by_path("a/c") is None

    def test_list_documents_newest_first(self, document_service, admin):
        first = document_service.create_document(title="First", path="first", author_id=admin.id)
        time.sleep(0.01)
        second = document_service.create_document(title="Second", path="second", author_id=admin.id)
        ids = [doc.id for doc in document_service.list_documents()]
        assert ids == [second.id, first.id]


class TestUpdateDocument:
    """Tests for document updates."""

    def test_update_fields(self, document_service, admin):
        doc = document_service.create_document(title="Old", path="old", author_id=admin.id)
        updated = document_service.update_document(
            doc.id, editor_id="editor-2", title="New", content="Body", path="new"
        )
        assert updated.title == "New"
        assert updated.content == "Body"
        assert updated.path == "new"
        assert updated.last_editor_id == "editor-2"
        assert updated.author_id == admin.id

    def test_update_leaves_missing_fields(self, document_service, admin):
        doc = document_service.create_document(
            title="Title", path="p", author_id=admin.id, content="Body"
        )
        updated = document_service.update_document(doc.id, editor_id=admin.id, title="T2")
        assert updated.content == "Body"
        assert updated.path == "p"

    def test_update_refreshes_updated_at(self, document_service, admin):
        doc = document_service.create_document(title="Doc", path="doc", author_id=admin.id)
        before = doc.updated_at
        time.sleep(0.01)
        updated = document_service.update_document(doc.id, editor_id=admin.id, content="x")
        assert updated.updated_at > before

    def test_update_path_conflict(self, document_service, admin):
        document_service.create_document(title="A", path="a", author_id=admin.id)
        doc_b = document_service.create_document(title="B", path="b", author_id=admin.id)
        with pytest.raises(DuplicateError):
            document_service.update_document(doc_b.id, editor_id=admin.id, path="a")

    def test_racing_rename_raises_duplicate(self, document_service, admin):
        document_service.create_document(title="A", path="a", author_id=admin.id)
        doc_b = document_service.create_document(title="B", path="b", author_id=admin.id)
        with patch.object(document_service.document_repo, "get_by_path", return_value=None):
            with pytest.raises(DuplicateError):
                document_service.update_document(doc_b.id, editor_id=admin.id, path="a")
        assert document_service.get_document(doc_b.id).path == "b"

    def test_content_edit_sends_approved_back_to_draft(
        self, approved_document, document_service, admin
    ):
        updated = document_service.update_document(
            approved_document.id, editor_id=admin.id, content="# Auth\n\nRewritten."
        )
        assert updated.status == "draft"

    def test_title_edit_keeps_approval(self, approved_document, document_service, admin):
        updated = document_service.update_document(
            approved_document.id, editor_id=admin.id, title="Authentication"
        )
        assert updated.status == "approved"

    def test_unchanged_content_keeps_approval(self, approved_document, document_service, admin):
        updated = document_service.update_document(
            approved_document.id, editor_id=admin.id, content=approved_document.content
        )
        assert updated.status == "approved"

    def test_content_edit_keeps_status_when_not_enforced(
        self, db_session, approved_document, admin
    ):
        service = DocumentService(db_session, enforce_transitions=False)
        updated = service.update_document(approved_document.id, editor_id=admin.id, content="new")
        assert updated.status == "approved"

    def test_update_not_found(self, document_service, admin):
        with pytest.raises(NotFoundError):
            document_service.update_document("missing", editor_id=admin.id, title="x")

    def test_update_validation_runs_before_lookup(self, document_service, admin):
        with pytest.raises(ValidationError):
            document_service.update_document("missing", editor_id=admin.id, title="")


class TestDeleteDocument:
    def test_delete_document(self, document_service, admin):
        doc = document_service.create_document(title="Doc", path="doc", author_id=admin.id)
        assert document_service.delete_document(doc.id) is True
        with pytest.raises(NotFoundError):
            document_service.get_document(doc.id)

    def test_delete_missing_document(self, document_service):
        assert document_service.delete_document("missing") is False


class TestSearchDocuments:
    """Tests for substring search."""

    @pytest.fixture
    def docs(self, document_service, admin):
        return [
            document_service.create_document(
                title="Authentication Guide", path="api/authentication", author_id=admin.id,
                content="Use tokens.",
            ),
            document_service.create_document(
                title="Deploying", path="ops/deploy", author_id=admin.id,
                content="Run the Pipeline.",
            ),
            document_service.create_document(
                title="100% coverage", path="testing/coverage", author_id=admin.id,
            ),
        ]

    def test_search_title_case_insensitive(self, document_service, docs):
        results = document_service.search_documents("AUTHENTICATION")
        assert [d.path for d in results] == ["api/authentication"]

    def test_search_content(self, document_service, docs):
        results = document_service.search_documents("pipeline")
        assert [d.path for d in results] == ["ops/deploy"]

    def test_search_path(self, document_service, docs):
        results = document_service.search_documents("ops/")
        assert [d.path for d in results] == ["ops/deploy"]

    def test_search_wildcards_are_literal(self, document_service, docs):
        results = document_service.search_documents("100%")
        assert [d.path for d in results] == ["testing/coverage"]
        assert document_service.search_documents("_") == []

    def test_search_non_ascii_case_insensitive(self, document_service, admin):
        document_service.create_document(title="École guide", path="ecole", author_id=admin.id)
        document_service.create_document(
            title="Straße", path="strasse", author_id=admin.id, content="ÜBER ALLES"
        )
        assert [d.path for d in document_service.search_documents("école")] == ["ecole"]
        assert [d.path for d in document_service.search_documents("ÉCOLE")] == ["ecole"]
        assert [d.path for d in document_service.search_documents("über")] == ["strasse"]

    def test_search_no_match(self, document_service, docs):
        assert document_service.search_documents("kubernetes") == []

    @pytest.mark.parametrize("query", ["", "   "])
    def test_search_empty_query(self, document_service, query):
        with pytest.raises(ValidationError):
            document_service.search_documents(query)


class TestDocumentsByStatus:
    def test_filters_by_status(self, document_service, admin):
        draft = document_service.create_document(title="D", path="d", author_id=admin.id)
        pending = document_service.create_document(
            title="P", path="p", author_id=admin.id, content="Body"
        )
        document_service.update_document(pending.id, editor_id=admin.id, status="pending_review")

        assert [d.id for d in document_service.get_documents_by_status("pending_review")] == [pending.id]
        assert [d.id for d in document_service.get_documents_by_status("draft")] == [draft.id]
        assert document_service.get_documents_by_status("approved") == []

    def test_unknown_status(self, document_service):
        with pytest.raises(ValidationError):
            document_service.get_documents_by_status("published")
