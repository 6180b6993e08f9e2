"""
Unit tests for Note model.
"""

import uuid

from sqlalchemy import select

from tenantnotes.core.models import Note


class TestNoteModel:
    async def test_create_note(self, test_session, test_user):
        note = Note(
            title="Test Note",
            content="This is test content",
            user_id=test_user.id,
            tenant_id=test_user.tenant_id,
        )
        test_session.add(note)
        await test_session.commit()

        assert isinstance(note.id, uuid.UUID)
        assert note.tags == []
        assert note.is_private is False
        assert note.belongs_to(test_user.tenant_id)

    async def test_tags_keep_order_after_reload(self, test_session, test_user):
        note = Note(
            title="Tagged",
            content="c",
            tags=["zeta", "alpha", "mid"],
            user_id=test_user.id,
            tenant_id=test_user.tenant_id,
        )
        test_session.add(note)
        await test_session.commit()
        test_session.expunge_all()

        loaded = (await test_session.execute(select(Note))).scalar_one()
        assert loaded.tags == ["zeta", "alpha", "mid"]

    def test_visibility_and_ownership(self):
        owner, other = uuid.uuid4(), uuid.uuid4()
        note = Note(title="t", content="c", user_id=owner, tenant_id=uuid.uuid4(), is_private=True)

        assert note.is_owned_by(owner)
        assert not note.is_owned_by(other)
        assert note.is_visible_to(owner)
        assert not note.is_visible_to(other)

        note.is_private = False
        assert note.is_visible_to(other)

    def test_has_any_tag(self):
        note = Note(title="Meeting Notes", content="Quarterly PLAN", tags=["work", "q3"])
        assert note.has_any_tag(["home", "q3"])
        assert not note.has_any_tag(["home"])

    def test_repr_truncates_long_titles(self):
        note = Note(title="x" * 40, content="c", user_id=uuid.uuid4())
        assert "..." in repr(note)
