import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import aiofiles
import httpx
import piexif

from photoloc.core.config import configs
from photoloc.models.exif import ExifFields

logger = logging.getLogger(__name__)


class MetadataExtractor:
    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else configs.HTTP_TIMEOUT

    async def extract(self, image_path: str) -> ExifFields:
        """Asynchronously extracts EXIF fields from an image file or URL."""
        exif = None
        try:
            if image_path.startswith(("http://", "https://")):
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(image_path)
                    resp.raise_for_status()
                    content = resp.content
            else:
                async with aiofiles.open(image_path, "rb") as f:
                    content = await f.read()
            exif = self._export_exif_sync(content)
        except (OSError, httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Failed to read image for exif extraction {image_path}: {e}")
            exif = None

        # The path as given identifies the photo; basenames may repeat across folders
        return self._build_fields(image_path, exif)

    async def extract_many(self, image_paths: Iterable[str]) -> Dict[str, ExifFields]:
        """Extracts every path concurrently; keys are the file identifiers, in input order."""
        paths: List[str] = []
        for p in image_paths:
            if p in paths:
                logger.warning(f"Duplicate path in batch, extracting it once: {p}")
                continue
            paths.append(p)
        results = await asyncio.gather(*(self.extract(p) for p in paths))
        return {fields.file_name: fields for fields in results}

    def extract_from_bytes(self, content: bytes, file_name: str) -> ExifFields:
        """Extracts EXIF fields directly from image bytes."""
        exif = self._export_exif_sync(content)
        return self._build_fields(file_name, exif)

    def _build_fields(self, file_name: str, exif: Optional[dict]) -> ExifFields:
        lat, lon = self._get_gps_from_exif(exif)
        return ExifFields(
            file_name=file_name,
            creation_date=self._creation_date_from_exif(exif),
            gps_latitude=lat,
            gps_longitude=lon,
            who=self._who_from_exif(exif),
        )

    def _export_exif_sync(self, img_input: Union[str, bytes]) -> Optional[dict]:
        """Synchronous helper for loading EXIF data from file path or bytes."""
        try:
            return piexif.load(img_input)
        except Exception as e:  # piexif raises several unrelated types on bad input
            logger.warning(f"Failed to load EXIF from input: {e}")
            return None

    @staticmethod
    def _decode(value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, bytes):
            try:
                value = value.decode()
            except UnicodeDecodeError:
                value = value.decode("latin-1")
        return str(value).strip("\x00 ").strip()

    def _creation_date_from_exif(self, exif: Optional[dict]) -> str:
        # Kept as written by the camera; offset appended when recorded separately
        if exif is None:
            return ""
        exif_exif = exif.get("Exif", {})
        exif_0th = exif.get("0th", {})

        date_text = (
            self._decode(exif_exif.get(piexif.ExifIFD.DateTimeOriginal))
            or self._decode(exif_exif.get(piexif.ExifIFD.DateTimeDigitized))
            or self._decode(exif_0th.get(piexif.ImageIFD.DateTime))
        )
        if not date_text:
            return ""

        offset_text = self._decode(exif_exif.get(piexif.ExifIFD.OffsetTimeOriginal))
        if offset_text and offset_text[0] in "+-" and len(offset_text) >= 6:
            date_text += offset_text[:6]
        elif offset_text:
            logger.warning(f"Invalid OffsetTime format: {offset_text}")
        return date_text

    def _who_from_exif(self, exif: Optional[dict]) -> str:
        if exif is None:
            return ""
        exif_0th = exif.get("0th", {})
        return (
            self._decode(exif_0th.get(piexif.ImageIFD.Artist))
            or self._decode(exif_0th.get(piexif.ImageIFD.Copyright))
        )

    def _get_gps_from_exif(self, exif: Optional[dict]) -> Tuple[Optional[float], Optional[float]]:
        if exif is None or not exif.get("GPS"):
            return None, None

        gps = exif["GPS"]

        def convert_coord(coord, ref) -> Optional[float]:
            try:
                degrees, minutes, seconds = [x[0] / x[1] for x in coord]
            except (TypeError, ValueError, ZeroDivisionError, IndexError):
                return None
            result = degrees + (minutes / 60.0) + (seconds / 3600.0)

            ref = self._decode(ref).upper()
            if ref in ("S", "W"):
                return -result
            return result

        lat = convert_coord(gps.get(piexif.GPSIFD.GPSLatitude), gps.get(piexif.GPSIFD.GPSLatitudeRef))
        lon = convert_coord(gps.get(piexif.GPSIFD.GPSLongitude), gps.get(piexif.GPSIFD.GPSLongitudeRef))
        if lat is None or lon is None:
            return None, None

        # Filter out invalid (0, 0) coordinates which often indicate GPS init failure
        if lat == 0.0 and lon == 0.0:
            return None, None

        return lat, lon
