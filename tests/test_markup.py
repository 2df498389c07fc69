"""Tests for memory_kb.markup."""

from datetime import UTC, datetime

import pytest

from memory_kb import markup
from memory_kb.errors import FormatError
from memory_kb.models import EntryType, PlaceDetails, new_entry


def _saved(entry):
    stamp = datetime(2024, 1, 15, 9, 30, tzinfo=UTC)
    return entry.model_copy(update={"created": stamp, "modified": stamp})


class TestExtractLinks:
    """Tests for [[Name]] extraction."""

    def test_extracts_in_order(self):
        text = "Made with [[Banana]] and [[Apple Tree]], more [[Banana]]."
        assert markup.extract_links(text) == ["Banana", "Apple Tree"]

    def test_label_syntax(self):
        assert markup.extract_links("See [[Ada Lovelace|Ada]]") == ["Ada Lovelace"]

    def test_slugs(self):
        assert markup.extract_link_slugs("[[Banana]] [[apple tree]] [[ ]]") == ["apple-tree", "banana"]


class TestRender:
    """Tests for markup.render."""

    def test_frontmatter_fields(self):
        entry = _saved(new_entry(EntryType.PLACE, "Home", "Where I live", ["house"], address="1 Main St"))
        text = markup.render(entry)

        assert text.startswith("---\n")
        assert "name: Home" in text
        assert "type: Place" in text
        assert "address: 1 Main St" in text
        assert "- house" in text
        assert text.rstrip().endswith("Where I live")

    def test_mentioned_links_not_repeated(self):
        entry = new_entry(EntryType.NOTE, "Apple Pie", "Needs [[Banana]]", links_to=["banana", "cherry"])
        text = markup.render(entry)
        front = text.split("---")[1]
        assert "cherry" in front
        assert "banana" not in front


class TestParse:
    """Tests for markup.parse."""

    def test_round_trip_is_equal(self):
        entry = _saved(
            new_entry(
                EntryType.EVENT,
                "Launch Party",
                "Bring [[Banana]] bread.",
                ["Work", "fun"],
                links_to=["banana", "ada-lovelace"],
                custom={"room": "4B"},
                start="2024-05-01",
                end="2024-05-02",
            )
        )
        entry.linked_from = ["apple-pie"]
        assert markup.parse(markup.render(entry)) == entry

    def test_place_round_trip(self):
        entry = _saved(new_entry(EntryType.PLACE, "Home", latitude="51.5", longitude="-0.12"))
        parsed = markup.parse(markup.render(entry))
        assert isinstance(parsed.details, PlaceDetails)
        assert parsed.details.latitude == "51.5"
        assert parsed == entry

    def test_description_links_become_links_to(self):
        text = "---\nname: Apple Pie\ntype: Note\n---\nNeeds [[Banana]] and [[Cinnamon|spice]].\n"
        entry = markup.parse(text)
        assert entry.links_to == ["banana", "cinnamon"]

    def test_comma_separated_tags(self):
        entry = markup.parse("---\nname: Apple Pie\ntags: food, dessert\n---\n")
        assert entry.tags == ["food", "dessert"]
        assert entry.type is EntryType.NOTE

    @pytest.mark.parametrize(
        "text",
        [
            "just a body, no frontmatter",
            "---\ntype: Note\n---\nbody",
            "---\nname: X\ntype: Recipe\n---\n",
            "---\nname: X\ntags: {a: 1}\n---\n",
            "---\nname: X\ncustom: [a, b]\n---\n",
            "---\nname: [unclosed\n---\n",
            "---\nname: X\ncreated: not a date\n---\n",
        ],
    )
    def test_invalid_text_keeps_edits(self, text):
        with pytest.raises(FormatError) as exc_info:
            markup.parse(text)
        assert exc_info.value.text == text


class TestUnlinkedMentions:
    """Mentions without a link survive the round trip without becoming links."""

    def test_unlinked_listed_in_frontmatter(self):
        entry = new_entry(EntryType.NOTE, "Banana", "Goes with [[Apple Pie]]")
        text = markup.render(entry)
        assert "unlinked:\n- apple-pie" in text

    def test_round_trip_keeps_mention_unlinked(self):
        entry = _saved(new_entry(EntryType.NOTE, "Banana", "Goes with [[Apple Pie]] and [[Kiwi]]", links_to=["kiwi"]))
        parsed = markup.parse(markup.render(entry))
        assert parsed.links_to == ["kiwi"]
        assert parsed == entry

    def test_removing_from_unlinked_relinks(self):
        text = "---\nname: Banana\nunlinked: []\n---\nGoes with [[Apple Pie]]\n"
        assert markup.parse(text).links_to == ["apple-pie"]

    def test_no_unlinked_key_when_all_linked(self):
        entry = new_entry(EntryType.NOTE, "Banana", "Goes with [[Apple Pie]]", links_to=["apple-pie"])
        assert "unlinked" not in markup.render(entry)


class TestReplaceLinks:
    """Tests for markup.replace_links."""

    def test_rewrites_every_spelling(self):
        text = "[[Apple Pie]], [[apple pie|the pie]] and [[Banana]]"
        assert markup.replace_links(text, "apple-pie", "Apple Tart") == (
            "[[Apple Tart]], [[Apple Tart|the pie]] and [[Banana]]"
        )

    def test_leaves_other_links(self):
        assert markup.replace_links("[[Apple Tree]]", "apple-pie", "Apple Tart") == "[[Apple Tree]]"


class TestExcludeFlag:
    """`exclude` must be a real boolean."""

    def test_boolean_values(self):
        assert markup.parse("---\nname: X\nexclude: true\n---\n").exclude is True
        assert markup.parse("---\nname: X\nexclude: false\n---\n").exclude is False
        assert markup.parse("---\nname: X\nexclude:\n---\n").exclude is False

    @pytest.mark.parametrize("value", ['"false"', "'true'", "1", "maybe"])
    def test_non_boolean_rejected(self, value):
        text = f"---\nname: X\nexclude: {value}\n---\n"
        with pytest.raises(FormatError) as exc_info:
            markup.parse(text)
        assert "exclude" in exc_info.value.message
        assert exc_info.value.text == text
