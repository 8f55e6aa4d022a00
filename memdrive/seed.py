"""
Demo Seed

Starting content for a fresh drive: a Documents folder, a welcome note,
a photo and a video, with one comment and one property on the photo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memdrive.store.filesystem import FilesystemStore

DEMO_IMAGE_URL = "https://picsum.photos/800/600"
DEMO_VIDEO_URL = "https://storage.googleapis.com/gtv-videos-bucket/sample/ForBiggerBlazes.mp4"


def seed_demo(store: "FilesystemStore") -> None:
    """Populate the store's root with the demo content."""
    root_id = store.root_id
    store.create_folder(root_id, "Documents")
    store.create_file(root_id, "Welcome.txt", "text/plain", 1024)
    photo = store.create_file(root_id, "cat-photo.jpg", "image/jpeg", 204800, url=DEMO_IMAGE_URL)
    store.create_file(root_id, "ocean-waves.mp4", "video/mp4", 15728640, url=DEMO_VIDEO_URL)
    store.add_comment(photo.id, "This is a great photo!")
    store.add_property(photo.id, "Model: Imagen 4.0")
