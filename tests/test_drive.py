"""
Tests for the Drive session: navigation, uploads, selection, details
and previews on top of the store.
"""

import pytest

from memdrive.api.drive import Drive
from memdrive.config.settings import DriveConfig
from memdrive.exceptions import (
    EmptyNameError,
    FolderNotFoundError,
    NavigationError,
    NodeNotFoundError,
)
from memdrive.store.filesystem import FilesystemStore
from memdrive.types.inputs import SortKey, Upload
from memdrive.types.nodes import Folder, NodeKind
from memdrive.types.results import PreviewKind, RenameStatus


def _names(items):
    return [item.name for item in items]


class TestDemoDrive:
    """Test the seeded starting state."""

    def test_initial_listing(self, demo_drive):
        assert _names(demo_drive.items()) == [
            "Documents",
            "cat-photo.jpg",
            "ocean-waves.mp4",
            "Welcome.txt",
        ]

    def test_sort_by_size_desc(self, demo_drive):
        demo_drive.set_sort("size", "desc")
        assert _names(demo_drive.items()) == [
            "Documents",
            "ocean-waves.mp4",
            "cat-photo.jpg",
            "Welcome.txt",
        ]

    def test_config_sort_is_default(self):
        drive = Drive(config=DriveConfig(sort_key="size", sort_order="asc"))
        assert drive.sort.key is SortKey.SIZE
        assert _names(drive.items())[1:] == ["Welcome.txt", "cat-photo.jpg", "ocean-waves.mp4"]

    def test_existing_store(self):
        store = FilesystemStore("Shared")
        drive = Drive(config=DriveConfig(), store=store)
        assert drive.store is store
        assert drive.items() == []


class TestNavigation:
    """Test opening folders and breadcrumbs."""

    def test_open_folder_and_back(self, empty_drive):
        docs = empty_drive.create_folder("Documents")
        empty_drive.open_folder(docs.id)
        assert empty_drive.current_folder_id == docs.id
        assert _names(empty_drive.breadcrumbs()) == ["Home", "Documents"]
        assert empty_drive.go_back() is True
        assert empty_drive.current_folder_id == empty_drive.store.root_id
        assert empty_drive.go_back() is False

    def test_open_non_child_rejected(self, empty_drive):
        docs = empty_drive.create_folder("Documents")
        empty_drive.open_folder(docs.id)
        inner = empty_drive.create_folder("Inner")
        empty_drive.go_back()
        with pytest.raises(NavigationError):
            empty_drive.open_folder(inner.id)
        assert empty_drive.navigation.is_at_root

    def test_open_file_rejected(self, demo_drive):
        file = demo_drive.find_child("Welcome.txt")
        with pytest.raises(FolderNotFoundError):
            demo_drive.open_folder(file.id)

    def test_go_to_breadcrumb(self, empty_drive):
        a = empty_drive.create_folder("A")
        empty_drive.open_folder(a.id)
        b = empty_drive.create_folder("B")
        empty_drive.open_folder(b.id)
        assert empty_drive.go_to_breadcrumb(0).id == empty_drive.store.root_id
        assert empty_drive.navigation.path == (empty_drive.store.root_id,)


class TestUploads:
    """Test file and folder uploads."""

    def test_upload_files_into_current_folder(self, empty_drive):
        docs = empty_drive.create_folder("Docs")
        empty_drive.open_folder(docs.id)
        files = empty_drive.upload_files([
            Upload(name="report.pdf", type="application/pdf", size=52_000),
            Upload(name="photo.png", type="image/png", size=10),
        ])
        assert [f.parent_id for f in files] == [docs.id, docs.id]
        assert files[0].url is None
        assert files[1].url.startswith("memory://")
        assert files[1].url.endswith("/photo.png")

    def test_source_url_used_for_media(self, empty_drive):
        (file,) = empty_drive.upload_files([
            Upload(name="clip.mp4", type="video/mp4", size=1, source_url="blob:abc"),
        ])
        assert file.url == "blob:abc"

    def test_non_media_drops_source_url(self, empty_drive):
        (file,) = empty_drive.upload_files([
            Upload(name="a.txt", type="text/plain", size=1, source_url="blob:abc"),
        ])
        assert file.url is None

    def test_upload_rejects_blank_name(self, empty_drive):
        with pytest.raises(EmptyNameError):
            empty_drive.upload_files([Upload(name="ok.txt"), Upload(name=" ")])
        assert empty_drive.items() == []

    def test_upload_folder(self, empty_drive):
        result = empty_drive.upload_folder([
            Upload(name="vacation/day1/beach.jpg", type="image/jpeg", size=5),
            Upload(name="vacation/day1/notes.txt", type="text/plain", size=2),
            Upload(name="vacation/day2/", type="", size=0),
        ])
        assert _names(result.folders) == ["vacation", "day1"]
        assert _names(result.files) == ["beach.jpg", "notes.txt"]
        assert result.files[0].url.endswith("/beach.jpg")
        assert result.files[1].url is None
        empty_drive.store.check_invariants()


class TestMutations:
    """Test rename, delete and annotations through the session."""

    def test_rename(self, demo_drive):
        docs = demo_drive.find_child("Documents")
        assert demo_drive.rename(docs.id, "Papers") is RenameStatus.UPDATED
        assert demo_drive.find_child("Papers").id == docs.id

    def test_delete_current_folder_returns_to_parent(self, empty_drive):
        a = empty_drive.create_folder("A")
        empty_drive.open_folder(a.id)
        b = empty_drive.create_folder("B")
        empty_drive.open_folder(b.id)

        empty_drive.delete(a.id)
        assert empty_drive.navigation.path == (empty_drive.store.root_id,)

    def test_delete_selected_clears_selection(self, demo_drive):
        photo = demo_drive.find_child("cat-photo.jpg")
        demo_drive.select(photo.id)
        demo_drive.open_preview(photo.id)
        result = demo_drive.delete(photo.id)
        assert result.comment_count == 1
        assert demo_drive.selected_item() is None
        assert demo_drive.is_opened(photo.id) is False

    def test_delete_other_keeps_selection(self, demo_drive):
        photo = demo_drive.find_child("cat-photo.jpg")
        welcome = demo_drive.find_child("Welcome.txt")
        demo_drive.select(photo.id)
        demo_drive.delete(welcome.id)
        assert demo_drive.selected_item() == photo


class TestSelectionAndDetails:
    """Test selection and the details panel."""

    def test_select_toggles(self, demo_drive):
        photo = demo_drive.find_child("cat-photo.jpg")
        assert demo_drive.select(photo.id) == photo
        assert demo_drive.select(photo.id) is None

    def test_select_missing_rejected(self, demo_drive):
        with pytest.raises(NodeNotFoundError):
            demo_drive.select("ghost")

    def test_open_folder_clears_selection(self, demo_drive):
        docs = demo_drive.find_child("Documents")
        demo_drive.select(docs.id)
        demo_drive.open_folder(docs.id)
        assert demo_drive.selected_item() is None

    def test_details_nothing_selected(self, demo_drive):
        assert demo_drive.details() is None

    def test_folder_details(self, demo_drive):
        details = demo_drive.details(demo_drive.store.root_id)
        assert details.kind is NodeKind.FOLDER
        assert details.type_label == "Folder"
        assert details.size_label == "4 items"
        assert details.comments == []

    def test_file_details(self, demo_drive):
        photo = demo_drive.find_child("cat-photo.jpg")
        demo_drive.add_comment(photo.id, "Second comment")
        demo_drive.select(photo.id)

        details = demo_drive.details()
        assert details.kind is NodeKind.FILE
        assert details.type_label == "image/jpeg"
        assert details.size_label == "200 KB"
        assert [c.text for c in details.comments] == ["Second comment", "This is a great photo!"]
        assert [p.text for p in details.properties] == ["Model: Imagen 4.0"]
        assert details.opened is False


class TestPreview:
    """Test previews of media files."""

    def test_open_image(self, demo_drive):
        photo = demo_drive.find_child("cat-photo.jpg")
        preview = demo_drive.open_preview(photo.id)
        assert preview.kind is PreviewKind.IMAGE
        assert preview.url == "https://picsum.photos/800/600"
        assert demo_drive.is_opened(photo.id)
        assert demo_drive.details(photo.id).opened is True

    def test_open_video(self, demo_drive):
        video = demo_drive.find_child("ocean-waves.mp4")
        assert demo_drive.open_preview(video.id).kind is PreviewKind.VIDEO

    def test_text_file_has_no_preview(self, demo_drive):
        welcome = demo_drive.find_child("Welcome.txt")
        assert demo_drive.open_preview(welcome.id) is None
        assert not demo_drive.is_opened(welcome.id)


class TestFindChild:
    """Test name lookup within a folder."""

    def test_find_in_other_folder(self, empty_drive):
        docs = empty_drive.create_folder("Docs")
        empty_drive.store.create_file(docs.id, "x.txt", "", 1)
        assert empty_drive.find_child("x.txt", docs.id).parent_id == docs.id

    def test_missing_name(self, empty_drive):
        with pytest.raises(NodeNotFoundError):
            empty_drive.find_child("nothing")

    def test_folder_wins_over_file_with_same_name(self, empty_drive):
        empty_drive.upload_files([Upload(name="dup")])
        empty_drive.create_folder("dup")
        assert isinstance(empty_drive.find_child("dup"), Folder)
