"""Tests for memory_kb.core.KnowledgeBase."""

import pytest

from memory_kb import core, markup
from memory_kb.core import KnowledgeBase
from memory_kb.errors import DuplicateNameError, EditorError, FormatError, StorageIOError
from memory_kb.models import EntryType, QuerySpec, new_entry


@pytest.fixture
def fake_editor(monkeypatch):
    """Replace the editor launcher; `edits` maps the rendered text to the edited text."""
    calls: list[tuple[str, str]] = []

    def install(edit):
        def use_editor(text, command):
            calls.append((text, command))
            return edit(text)

        monkeypatch.setattr(core, "use_editor", use_editor)
        return calls

    return install


class TestLifecycle:
    """Loading and saving."""

    def test_open_empty_home(self, tmp_home):
        kb = KnowledgeBase.open()
        assert kb.home == tmp_home
        assert kb.count() == 0
        assert not kb.data_path.exists()

    def test_open_reads_saved_entries(self, kb):
        reopened = KnowledgeBase.open(kb.home)
        assert reopened.count() == 4
        assert reopened.get_entry("note", "Banana").linked_from == ["apple-pie", "apple-tree"]

    def test_independent_instances(self, kb):
        """Two knowledge bases in one process do not share state."""
        other = KnowledgeBase.open(kb.home)
        other.delete_entry("note", "Banana")
        assert kb.count() == 4
        assert other.count() == 3


class TestEntries:
    """Entry operations through the facade."""

    def test_description_links_detected_on_create(self, kb):
        created = kb.create_entry(new_entry(EntryType.NOTE, "Smoothie", "Blend [[Banana]] and [[Kiwi]]."))
        assert created.links_to == ["banana", "kiwi"]
        assert "smoothie" in kb.get_entry("note", "Banana").linked_from

    def test_description_links_detected_on_update(self, kb):
        tree = kb.get_entry("note", "Apple Tree")
        tree.description = "Related to [[Ada Lovelace]]"
        kb.update_entry(tree)
        assert kb.get_entry("person", "Ada Lovelace").linked_from == ["apple-tree"]

    def test_rename_entry(self, kb):
        renamed = kb.rename_entry("note", "Apple Pie", "Apple Tart")
        assert renamed.name == "Apple Tart"
        assert kb.get_entry("note", "Banana").linked_from == ["apple-tart", "apple-tree"]
        assert kb.check() == []

    def test_rename_collision(self, kb):
        with pytest.raises(DuplicateNameError):
            kb.rename_entry("note", "Apple Pie", "Banana")
        assert kb.get_entry("note", "Apple Pie").name == "Apple Pie"

    def test_delete_entry(self, kb):
        kb.delete_entry("note", "Apple Pie")
        assert kb.get_entry("note", "Banana").linked_from == ["apple-tree"]

    def test_query_accepts_spec_or_keywords(self, kb):
        by_spec = kb.query(QuerySpec(starts_with="Apple", sort="name"))
        by_kwargs = kb.query(starts_with="Apple", sort="name")
        assert by_spec.names == by_kwargs.names == ["Apple Pie", "Apple Tree"]

    def test_dangling_links(self, kb):
        kb.create_entry(new_entry(EntryType.NOTE, "Smoothie", links_to=["Kiwi"]))
        assert kb.dangling_links() == [("smoothie", "kiwi")]

    def test_tag_counts(self, kb):
        kb.create_entry(new_entry(EntryType.THING, "Calculator", tags=["math", "Tools"]))
        assert kb.tag_counts() == {"food": 2, "Math": 2, "plant": 1, "Tools": 1}


class TestEditEntry:
    """Editor round trip through the facade."""

    def test_unchanged_text_keeps_entry(self, kb, fake_editor):
        before = kb.get_entry("note", "Apple Pie")
        calls = fake_editor(lambda text: text)

        after = kb.edit_entry("note", "Apple Pie", editor="nano")

        assert calls[0][1] == "nano"
        assert after.model_dump(exclude={"modified"}) == before.model_dump(exclude={"modified"})

    def test_edit_renames_and_relinks(self, kb, fake_editor):
        def edit(text):
            return text.replace("name: Apple Pie", "name: Apple Tart") + "\nServe with [[Ada Lovelace]].\n"

        fake_editor(edit)
        edited = kb.edit_entry("note", "Apple Pie", editor="vi")

        assert edited.name == "Apple Tart"
        assert edited.links_to == ["ada-lovelace", "banana"]
        assert kb.get_entry("note", "Banana").linked_from == ["apple-tart", "apple-tree"]
        assert kb.get_entry("person", "Ada Lovelace").linked_from == ["apple-tart"]
        assert kb.check() == []

    def test_uses_configured_editor(self, kb, fake_editor, monkeypatch):
        monkeypatch.setenv("EDITOR", "nano")
        calls = fake_editor(lambda text: text)
        kb.edit_entry("note", "Banana")
        assert calls[0][1] == "nano"

    def test_retry_text(self, kb, fake_editor):
        calls = fake_editor(lambda text: text)
        retry = markup.render(kb.get_entry("note", "Banana")).replace("name: Banana", "name: Plantain")

        kb.edit_entry("note", "Banana", editor="vi", text=retry)

        assert calls[0][0] == retry
        assert "Plantain" in kb.store

    def test_parse_failure_leaves_entry(self, kb, fake_editor):
        fake_editor(lambda text: "garbage without frontmatter")
        with pytest.raises(FormatError) as exc_info:
            kb.edit_entry("note", "Banana", editor="vi")
        assert exc_info.value.text == "garbage without frontmatter"
        assert kb.get_entry("note", "Banana").description == ""

    def test_editor_failure_propagates(self, kb, monkeypatch, tmp_path):
        def failing(text, command):
            raise EditorError("Editor 'vi' exited with status 1", tmp_path / "x.md", text)

        monkeypatch.setattr(core, "use_editor", failing)
        with pytest.raises(EditorError):
            kb.edit_entry("note", "Banana", editor="vi")

    def test_save_recovery(self, kb):
        path = kb.save_recovery("Apple Pie", "unsaved edits")
        assert path.parent == kb.home / "recovered"
        assert path.name.startswith("apple-pie-")
        assert path.read_text(encoding="utf-8") == "unsaved edits"


class TestMentionsFollowGraph:
    """[[Name]] mentions in descriptions stay consistent with renames and deletes."""

    @pytest.fixture
    def mentioned(self, kb):
        banana = kb.get_entry("note", "Banana")
        banana.description = "Goes with [[Apple Pie]]"
        kb.update_entry(banana)
        assert kb.get_entry("note", "Banana").links_to == ["apple-pie"]
        return kb

    def test_rename_rewrites_mention(self, mentioned, fake_editor):
        mentioned.rename_entry("note", "Apple Pie", "Apple Tart")

        banana = mentioned.get_entry("note", "Banana")
        assert banana.description == "Goes with [[Apple Tart]]"
        assert banana.links_to == ["apple-tart"]
        assert markup.parse(markup.render(banana)) == banana

        fake_editor(lambda text: text)
        edited = mentioned.edit_entry("note", "Banana", editor="vi")
        assert edited.links_to == ["apple-tart"]
        assert mentioned.dangling_links() == []

    def test_delete_keeps_mention_unlinked(self, mentioned, fake_editor):
        mentioned.delete_entry("note", "Apple Pie")

        banana = mentioned.get_entry("note", "Banana")
        assert banana.description == "Goes with [[Apple Pie]]"
        assert banana.links_to == []
        assert markup.parse(markup.render(banana)) == banana

        fake_editor(lambda text: text)
        edited = mentioned.edit_entry("note", "Banana", editor="vi")
        assert edited.links_to == []
        assert mentioned.dangling_links() == []

    def test_update_after_delete_stays_unlinked(self, mentioned):
        mentioned.delete_entry("note", "Apple Pie")

        banana = mentioned.get_entry("note", "Banana")
        banana.tags = ["food", "yellow"]
        updated = mentioned.update_entry(banana)

        assert updated.links_to == []
        assert mentioned.dangling_links() == []

    def test_new_mention_still_detected(self, mentioned):
        mentioned.delete_entry("note", "Apple Pie")

        banana = mentioned.get_entry("note", "Banana")
        banana.description += " and [[Ada Lovelace]]"
        updated = mentioned.update_entry(banana)

        assert updated.links_to == ["ada-lovelace"]


class TestTypeNames:
    """Queries accept type names in any spelling."""

    def test_plural_and_lowercase(self, kb):
        result = kb.query(types=["notes"], sort="name")
        assert result.names == ["Apple Pie", "Apple Tree", "Banana"]

    def test_comma_separated(self, kb):
        result = kb.query(types="notes,people", sort="name")
        assert result.names == ["Ada Lovelace", "Apple Pie", "Apple Tree", "Banana"]

    def test_unknown_names_dropped(self):
        assert QuerySpec(types=["note", "bogus"]).types == [EntryType.NOTE]
        assert QuerySpec(types=[EntryType.PERSON]).types == [EntryType.PERSON]


class TestSaveRecovery:
    """Parking unparsed edits."""

    def test_writes_file(self, kb):
        path = kb.save_recovery("Banana", "not an entry")
        assert path.parent == kb.home / "recovered"
        assert path.read_text(encoding="utf-8") == "not an entry"

    def test_write_failure_raises_storage_error(self, kb):
        (kb.home / "recovered").write_text("in the way", encoding="utf-8")
        with pytest.raises(StorageIOError) as exc_info:
            kb.save_recovery("Banana", "not an entry")
        assert "recovery" in exc_info.value.message
