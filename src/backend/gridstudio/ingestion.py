import base64
import binascii
import logging
from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from typing import Any, Dict, List, Optional, Tuple

from PIL import Image

from gridstudio.config import settings
from gridstudio.exceptions import IngestionError

logger = logging.getLogger(__name__)


def encode_image(file: Dict[str, Any], max_bytes: Optional[int] = None) -> str:
    """
    Turns one uploaded file into a data URI.

    `file` follows the upload dict shape used by the routers:
    {"file_bytes": bytes, "file_content_type": str, "file_filename": str}.
    The payload must be an image Pillow can identify; its detected format
    decides the MIME tag.
    """
    filename = file.get("file_filename") or "upload"
    file_bytes = file.get("file_bytes") or b""
    max_bytes = settings.MAX_IMAGE_BYTES if max_bytes is None else max_bytes

    if not file_bytes:
        raise IngestionError(filename, "file is empty")
    if len(file_bytes) > max_bytes:
        raise IngestionError(filename, f"file exceeds the {max_bytes} byte limit")

    try:
        with Image.open(BytesIO(file_bytes)) as image:
            image_format = image.format
            image.verify()
    except Exception as e:
        raise IngestionError(filename, f"failed to read file as an image ({e})") from e

    mime_type = Image.MIME.get(image_format) or file.get("file_content_type")
    if not mime_type or not mime_type.startswith("image/"):
        raise IngestionError(filename, f"unsupported image format '{image_format}'")

    payload = base64.b64encode(file_bytes).decode('utf-8')
    return f"data:{mime_type};base64,{payload}"


def encode_batch(files: List[Dict[str, Any]], max_workers: Optional[int] = None) -> List[str]:
    """
    Encodes a batch concurrently and returns the data URIs in submission order.

    Raises IngestionError for the first failing file (in submission order);
    nothing from a failed batch is returned.
    """
    if not files:
        return []

    max_workers = max_workers or settings.INGEST_WORKERS
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(encode_image, file) for file in files]
        errors = [e for e in (f.exception() for f in futures) if e is not None]
        if errors:
            logger.warning(f"Rejected upload batch of {len(files)} file(s): {errors[0]}")
            raise errors[0]
        results = [f.result() for f in futures]

    logger.info(f"Encoded upload batch of {len(results)} image(s).")
    return results


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """Splits a data URI back into its MIME type and raw bytes."""
    header, sep, payload = uri.partition(',')
    if not sep or not header.startswith('data:') or not header.endswith(';base64'):
        raise ValueError("Not a base64 data URI")
    mime_type = header[len('data:'):-len(';base64')] or 'image/png'
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
