import base64

import pytest

from gridstudio.exceptions import IngestionError
from gridstudio.ingestion import encode_batch, encode_image, parse_data_uri
from gridstudio.session import StoryboardSession


def test_encode_image_builds_data_uri(png_upload):
    uri = encode_image(png_upload)

    assert uri.startswith("data:image/png;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == png_upload["file_bytes"]


def test_mime_type_follows_detected_format(jpeg_upload):
    # Declared content type is wrong on purpose.
    jpeg_upload["file_content_type"] = "image/png"
    assert encode_image(jpeg_upload).startswith("data:image/jpeg;base64,")


def test_encode_image_rejects_undecodable_payload(broken_upload):
    with pytest.raises(IngestionError) as exc_info:
        encode_image(broken_upload)
    assert exc_info.value.filename == "broken.png"


def test_encode_image_rejects_empty_and_oversized(png_upload):
    with pytest.raises(IngestionError):
        encode_image({"file_bytes": b"", "file_filename": "empty.png"})
    with pytest.raises(IngestionError):
        encode_image(png_upload, max_bytes=10)


def test_encode_batch_keeps_submission_order(png_upload, jpeg_upload):
    uris = encode_batch([jpeg_upload, png_upload, jpeg_upload])

    assert [u.split(";")[0] for u in uris] == ["data:image/jpeg", "data:image/png", "data:image/jpeg"]


def test_encode_batch_empty_is_noop():
    assert encode_batch([]) == []


def test_ingest_appends_whole_batch(png_upload, jpeg_upload):
    session = StoryboardSession()
    session.ingest([png_upload])
    session.ingest([jpeg_upload, png_upload])

    assert len(session.images) == 3
    assert session.images[1].startswith("data:image/jpeg")


def test_ingest_with_one_bad_file_leaves_images_unchanged(png_upload, broken_upload):
    session = StoryboardSession()
    session.ingest([png_upload])
    before = list(session.images)

    with pytest.raises(IngestionError):
        session.ingest([png_upload, broken_upload, png_upload])

    assert session.images == before


def test_remove_image_in_and_out_of_range():
    session = StoryboardSession()
    session.images = ["a", "b", "c"]

    session.remove_image(1)
    assert session.images == ["a", "c"]

    session.remove_image(5)
    session.remove_image(-1)
    assert session.images == ["a", "c"]


def test_parse_data_uri(png_upload):
    mime_type, data = parse_data_uri(encode_image(png_upload))
    assert mime_type == "image/png"
    assert data == png_upload["file_bytes"]

    with pytest.raises(ValueError):
        parse_data_uri("not-a-data-uri")
