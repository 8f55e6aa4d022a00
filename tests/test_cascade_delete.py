"""
Tests for cascade delete.

Deleting a folder removes its whole subtree together with the comments
and properties of every removed file.
"""

import pytest

from memdrive.exceptions import NodeNotFoundError, RootDeletionError


@pytest.fixture
def populated(store):
    """
    Home/
        A/
            B/
                deep.jpg  (1 comment, 1 property)
            a.txt
        keep.txt
    """
    a = store.create_folder(store.root_id, "A")
    b = store.create_folder(a.id, "B")
    deep = store.create_file(b.id, "deep.jpg", "image/jpeg", 10)
    a_txt = store.create_file(a.id, "a.txt", "text/plain", 5)
    keep = store.create_file(store.root_id, "keep.txt", "text/plain", 1)
    store.add_comment(deep.id, "nice")
    store.add_property(deep.id, "Model: X")
    return store, a, b, deep, a_txt, keep


class TestDeleteFile:
    """Test deleting single files."""

    def test_delete_file_removes_annotations(self, populated):
        store, _, _, deep, _, _ = populated
        result = store.delete_item(deep.id)
        assert result.file_ids == {deep.id}
        assert result.folder_ids == frozenset()
        assert result.comment_count == 1
        assert result.property_count == 1
        assert not store.has(deep.id)
        assert store.stats().comments == 0
        store.check_invariants()

    def test_parent_listing_updated(self, populated):
        store, a, _, _, a_txt, _ = populated
        store.delete_item(a_txt.id)
        _, files = store.children_of(a.id)
        assert files == []


class TestDeleteFolder:
    """Test recursive folder deletion."""

    def test_delete_removes_subtree(self, populated):
        store, a, b, deep, a_txt, keep = populated
        result = store.delete_item(a.id)

        assert result.folder_ids == {a.id, b.id}
        assert result.file_ids == {deep.id, a_txt.id}
        assert result.comment_count == 1
        assert result.property_count == 1
        for node_id in (a.id, b.id, deep.id, a_txt.id):
            assert not store.has(node_id)
        assert store.has(keep.id)
        assert store.item_count(store.root_id) == 1
        store.check_invariants()

    def test_delete_inner_folder_keeps_siblings(self, populated):
        store, a, b, deep, a_txt, _ = populated
        store.delete_item(b.id)
        folders, files = store.children_of(a.id)
        assert folders == []
        assert files == [a_txt]
        assert not store.has(deep.id)

    def test_delete_empty_folder(self, store):
        empty = store.create_folder(store.root_id, "Empty")
        result = store.delete_item(empty.id)
        assert result.removed_ids == {empty.id}

    def test_descendants(self, populated):
        store, a, b, deep, a_txt, _ = populated
        folder_ids, file_ids = store.descendants(a.id)
        assert folder_ids == {a.id, b.id}
        assert file_ids == {deep.id, a_txt.id}

    def test_wide_and_deep_tree(self, store):
        parent = store.root_id
        chain = []
        for depth in range(50):
            folder = store.create_folder(parent, f"level-{depth}")
            for i in range(3):
                store.create_file(folder.id, f"f{i}.bin", "", i)
            chain.append(folder.id)
            parent = folder.id

        result = store.delete_item(chain[0])
        assert len(result.folder_ids) == 50
        assert len(result.file_ids) == 150
        assert len(store) == 1
        store.check_invariants()


class TestDeleteRejections:
    """Test rejected deletes leave the store unchanged."""

    def test_root_cannot_be_deleted(self, populated):
        store = populated[0]
        before = len(store)
        with pytest.raises(RootDeletionError):
            store.delete_item(store.root_id)
        assert len(store) == before

    def test_unknown_id(self, populated):
        store = populated[0]
        with pytest.raises(NodeNotFoundError):
            store.delete_item("missing")

    def test_double_delete(self, populated):
        store, a, _, _, _, _ = populated
        store.delete_item(a.id)
        with pytest.raises(NodeNotFoundError):
            store.delete_item(a.id)


class TestIdsNotReused:
    """Ids of deleted items are never handed out again."""

    def test_new_ids_after_delete(self, store):
        folder = store.create_folder(store.root_id, "A")
        store.delete_item(folder.id)
        again = store.create_folder(store.root_id, "A")
        assert again.id != folder.id
