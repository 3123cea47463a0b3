"""Unit tests for atom construction and serialization."""

from dataclasses import FrozenInstanceError

import pytest

from mowenpub.converter.atoms import Atom, AtomKind, Mark, MarkKind


class TestAtomSerialization:
    """Test Atom.to_dict output."""

    def test_text_atom_without_marks(self) -> None:
        """Test plain text omits marks, attrs and content."""
        assert Atom.text_node("hello").to_dict() == {"type": "text", "text": "hello"}

    def test_text_atom_with_marks(self) -> None:
        """Test marks serialize in order."""
        atom = Atom.text_node("x", Mark(kind=MarkKind.BOLD), Mark(kind=MarkKind.ITALIC))

        assert atom.to_dict() == {
            "type": "text",
            "text": "x",
            "marks": [{"type": "bold"}, {"type": "italic"}],
        }

    def test_empty_block_keeps_content(self) -> None:
        """Test block atoms always carry a content list."""
        assert Atom.block(AtomKind.QUOTE, []).to_dict() == {"type": "quote", "content": []}

    def test_heading_attrs(self) -> None:
        """Test heading attributes are serialized as given."""
        atom = Atom.block(AtomKind.HEADING, [Atom.text_node("T")], attrs={"level": "2"})

        assert atom.to_dict() == {
            "type": "heading",
            "attrs": {"level": "2"},
            "content": [{"type": "text", "text": "T"}],
        }

    def test_image_is_leaf(self) -> None:
        """Test image atoms have attrs and no content."""
        atom = Atom.image(uuid="abc", alt="", align="center")

        assert atom.is_leaf
        assert atom.to_dict() == {
            "type": "image",
            "attrs": {"uuid": "abc", "alt": "", "align": "center"},
        }

    def test_document_root(self) -> None:
        """Test document() builds a doc root around the given atoms."""
        doc = Atom.document([Atom.block(AtomKind.PARAGRAPH, [Atom.text_node("a")])])

        assert doc.kind is AtomKind.DOC
        assert doc.to_dict()["type"] == "doc"
        assert len(doc.to_dict()["content"]) == 1

    def test_link_mark(self) -> None:
        """Test link marks open in a new tab."""
        assert Mark.link("https://example.com").to_dict() == {
            "type": "link",
            "attrs": {"href": "https://example.com", "target": "_blank"},
        }


class TestAtomImmutability:
    """Test atoms cannot be reassigned after construction."""

    def test_atom_is_frozen(self) -> None:
        """Test assigning a field raises."""
        atom = Atom.text_node("a")

        with pytest.raises(FrozenInstanceError):
            atom.text = "b"  # type: ignore[misc]

    def test_attrs_are_read_only(self) -> None:
        """Test attribute mappings cannot be changed in place."""
        atom = Atom.image(uuid="u", alt="", align="center")
        mark = Mark.link("https://example.com")

        with pytest.raises(TypeError):
            atom.attrs["uuid"] = "other"  # type: ignore[index]
        with pytest.raises(TypeError):
            mark.attrs["href"] = "https://other.example"  # type: ignore[index]

    def test_attrs_are_copied(self) -> None:
        """Test the attrs dict passed in is not shared with the atom."""
        attrs = {"level": "1"}
        atom = Atom.block(AtomKind.HEADING, [Atom.text_node("T")], attrs=attrs)

        attrs["level"] = "2"

        assert atom.attrs == {"level": "1"}
        assert atom.to_dict()["attrs"] == {"level": "1"}

    def test_atoms_are_hashable(self) -> None:
        """Test equal trees hash equally and can be used in sets."""
        first = Atom.block(
            AtomKind.PARAGRAPH,
            [Atom.text_node("a", Mark.link("https://x")), Atom.image(uuid="u", alt="", align="left")],
        )
        second = Atom.block(
            AtomKind.PARAGRAPH,
            [Atom.text_node("a", Mark.link("https://x")), Atom.image(uuid="u", alt="", align="left")],
        )

        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_block_copies_children(self) -> None:
        """Test the children list passed in is not shared with the atom."""
        children = [Atom.text_node("a")]
        atom = Atom.block(AtomKind.PARAGRAPH, children)

        children.append(Atom.text_node("b"))

        assert atom.children == (Atom.text_node("a"),)
