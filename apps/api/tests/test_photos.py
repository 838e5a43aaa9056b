import io
from pathlib import Path

import pytest

from orgchart.core.config import get_settings
from orgchart.services import photos


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk",
        "https://cdn.example.com/people/jane.jpg",
        "http://testserver/newPhoto-1700000000000-42.png",
    ],
)
def test_non_managed_values_pass_through(value):
    assert photos.resolve_photo_url(value) == value


def test_managed_reference_resolves_to_base_url_and_file_name():
    stored = str(get_settings().upload_dir / "newPhoto-1700000000000-42.png")

    assert photos.resolve_photo_url(stored) == "http://testserver/newPhoto-1700000000000-42.png"


def test_relative_and_windows_paths_resolve():
    assert photos.resolve_photo_url("uploads/a.jpg", base_url="http://h:3000/") == "http://h:3000/a.jpg"
    assert photos.resolve_photo_url("C:\\srv\\uploads\\b.jpg", base_url="http://h:3000") == "http://h:3000/b.jpg"


def test_marker_follows_configured_upload_dir():
    assert photos.resolve_photo_url("photos/c.jpg", base_url="http://h", upload_dir=Path("/srv/photos")) == "http://h/c.jpg"
    assert photos.resolve_photo_url("uploads/c.jpg", base_url="http://h", upload_dir=Path("/srv/photos")) == "uploads/c.jpg"


def test_generated_names_keep_extension_and_do_not_collide():
    names = [photos.generate_photo_filename("portrait.JPG") for _ in range(200)]

    assert len(set(names)) == len(names)
    assert all(name.startswith("newPhoto-") and name.endswith(".JPG") for name in names)


def test_generated_name_without_extension():
    name = photos.generate_photo_filename(None)
    assert name.startswith("newPhoto-")
    assert "." not in name


def test_generated_timestamps_never_decrease():
    stamps = [int(photos.generate_photo_filename("a.png").split("-")[1]) for _ in range(50)]
    assert stamps == sorted(stamps)


def test_store_uploaded_file_writes_distinct_files():
    refs = [
        photos.store_uploaded_file(io.BytesIO(f"img{i}".encode()), name)
        for i, name in enumerate(["a.png", "a.png", "b.gif", "a.png"])
    ]

    assert len(set(refs)) == 4
    for i, ref in enumerate(refs):
        path = Path(ref)
        assert path.parent == get_settings().upload_dir
        assert path.read_bytes() == f"img{i}".encode()
        assert photos.is_managed_reference(ref)


def test_discard_stored_file(tmp_path):
    ref = photos.store_uploaded_file(io.BytesIO(b"x"), "a.png", upload_dir=tmp_path / "uploads")

    photos.discard_stored_file(ref)
    photos.discard_stored_file(ref)

    assert not Path(ref).exists()


class FailingUpload(io.RawIOBase):
    """Yields one chunk, then fails like a dropped connection."""

    def __init__(self):
        self.calls = 0

    def read(self, size=-1):
        self.calls += 1
        if self.calls == 1:
            return b"partial"
        raise OSError("connection reset")


def test_failed_copy_leaves_no_partial_file():
    upload_dir = get_settings().upload_dir

    with pytest.raises(OSError):
        photos.store_uploaded_file(FailingUpload(), "a.png")

    assert list(upload_dir.iterdir()) == []
