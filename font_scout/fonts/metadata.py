"""
Font metadata extraction: provenance and licensing data from raw font bytes.

The pipeline is detect → (decompress) → parse → read fields. Each stage
raises its own :mod:`font_scout.fonts.errors` type; once the tables are
parsed, a missing field only yields ``None``.
"""
from __future__ import annotations

import enum
import struct
from datetime import datetime, timedelta, timezone
from io import BytesIO
from typing import Final, List, Optional, Sequence, Union

from fontTools.ttLib import TTFont, woff2

from font_scout.fonts.errors import DecompressionError, FontFormatError, InvalidFontDataError
from font_scout.fonts.models import EmbeddingPermissions, FontMetadata
from font_scout.fonts.names import NameRecordEntry, NameTable, lookup_name, name_table_from_records
from font_scout.logger import logger

__all__: Sequence[str] = (
    "FontFormat",
    "MAC_EPOCH_OFFSET",
    "detect_format",
    "is_likely_parseable",
    "decompress_woff2",
    "parse_font",
    "creation_date_from_head",
    "permissions_from_fs_type",
    "metadata_from_tables",
    "extract_metadata",
    "metadata_summary",
)

BytesLike = Union[bytes, bytearray, memoryview]

# seconds between 1904-01-01 and 1970-01-01
MAC_EPOCH_OFFSET: Final[int] = 2_082_844_800
_UNIX_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
_METADATA_TABLES: Final[tuple[str, ...]] = ("name", "head", "OS/2")


class FontFormat(enum.Enum):
    TRUETYPE = 0x00010000
    CFF_OPENTYPE = 0x4F54544F  # 'OTTO'
    MAC_TRUETYPE = 0x74727565  # 'true'
    TYPE1 = 0x74797031  # 'typ1'
    WOFF2 = 0x774F4632  # 'wOF2'


def detect_format(data: BytesLike) -> FontFormat:
    """Identify the container from the big-endian 32-bit signature."""
    if len(data) < 4:
        raise FontFormatError(f"Buffer of {len(data)} bytes is too short for a font signature")
    (signature,) = struct.unpack(">I", bytes(data[:4]))
    try:
        return FontFormat(signature)
    except ValueError:
        raise FontFormatError(f"Unknown font signature 0x{signature:08X}") from None


def is_likely_parseable(data: BytesLike) -> bool:
    """Quick check for an uncompressed sfnt signature, without parsing anything."""
    try:
        return detect_format(data) is not FontFormat.WOFF2
    except FontFormatError:
        return False


def decompress_woff2(data: bytes) -> bytes:
    """Unpack a WOFF2 container into a plain sfnt buffer."""
    out = BytesIO()
    try:
        woff2.decompress(BytesIO(data), out)
    except Exception as exc:
        raise DecompressionError(f"WOFF2 decompression failed: {exc}") from exc
    return out.getvalue()


def parse_font(sfnt: bytes) -> TTFont:
    """Open *sfnt* and decompile the tables metadata is read from.

    Table loading is forced here so that truncated data fails now, as one
    :class:`InvalidFontDataError`, instead of half-way through field extraction.
    """
    try:
        font = TTFont(BytesIO(sfnt), lazy=True, recalcBBoxes=False, recalcTimestamp=False)
        for tag in _METADATA_TABLES:
            if tag in font:
                font[tag]  # decompiles
    except Exception as exc:
        raise InvalidFontDataError(f"Cannot parse font data: {exc}") from exc
    return font


def _name_records(font: TTFont) -> List[NameRecordEntry]:
    if "name" not in font:
        return []
    records: List[NameRecordEntry] = []
    for record in font["name"].names:
        try:
            text = record.toUnicode(errors="replace")
        except (TypeError, LookupError) as exc:
            # unknown platform encoding
            logger.debug("Skipping name record %d: %s", record.nameID, exc)
            continue
        records.append(
            NameRecordEntry(
                name_id=record.nameID,
                platform_id=record.platformID,
                language_id=record.langID,
                text=text,
            )
        )
    return records


def creation_date_from_head(created: Optional[int]) -> Optional[str]:
    """``head.created`` (seconds since 1904) as ISO-8601 UTC with milliseconds."""
    if not created:
        return None
    try:
        moment = _UNIX_EPOCH + timedelta(seconds=created - MAC_EPOCH_OFFSET)
    except OverflowError:
        logger.debug("head.created out of range: %s", created)
        return None
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def permissions_from_fs_type(fs_type: Optional[int]) -> Optional[EmbeddingPermissions]:
    """Decode the ``OS/2.fsType`` embedding bits."""
    if fs_type is None:
        return None
    return EmbeddingPermissions(
        installable=not fs_type & 0x0001,
        editable=not fs_type & 0x0008,
        preview_and_print=not fs_type & 0x0004,
        restricted_license=bool(fs_type & 0x0002),
    )


def metadata_from_tables(
    names: NameTable,
    created: Optional[int] = None,
    fs_type: Optional[int] = None,
) -> FontMetadata:
    """Assemble the metadata record from already decoded table values."""
    return FontMetadata(
        font_name=lookup_name(names, 1, 4),
        font_family=lookup_name(names, 16),
        foundry=lookup_name(names, 8, 11),
        copyright=lookup_name(names, 0),
        version=lookup_name(names, 5),
        license_info=lookup_name(names, 13, 14),
        unique_identifier=lookup_name(names, 3),
        creation_date=creation_date_from_head(created),
        designer=lookup_name(names, 9),
        embedding_permissions=permissions_from_fs_type(fs_type),
    )


def extract_metadata(data: BytesLike, url: Optional[str] = None) -> FontMetadata:
    """Read provenance metadata from a raw font buffer.

    Raises :class:`FontFormatError`, :class:`DecompressionError` or
    :class:`InvalidFontDataError`; the caller decides whether a failed font
    aborts anything.
    """
    context = url or "<buffer>"
    raw = bytes(data)
    fmt = detect_format(raw)
    logger.debug("Extracting metadata from %s (%s, %d bytes)", context, fmt.name, len(raw))

    if fmt is FontFormat.WOFF2:
        raw = decompress_woff2(raw)
        logger.debug("Decompressed WOFF2 %s to %d bytes", context, len(raw))

    font = parse_font(raw)
    try:
        names = name_table_from_records(_name_records(font))
        created = getattr(font["head"], "created", None) if "head" in font else None
        fs_type = getattr(font["OS/2"], "fsType", None) if "OS/2" in font else None
    finally:
        font.close()

    metadata = metadata_from_tables(names, created, fs_type)
    logger.debug("Metadata for %s: %s", context, metadata_summary(metadata))
    return metadata


def metadata_summary(metadata: FontMetadata) -> str:
    """One-line human summary, used in log messages and the CLI."""
    parts = []
    if metadata.font_name:
        parts.append(f"Name: {metadata.font_name}")
    if metadata.foundry:
        parts.append(f"Foundry: {metadata.foundry}")
    if metadata.version:
        parts.append(f"Version: {metadata.version}")
    perms = metadata.embedding_permissions
    if perms:
        flags = [
            label
            for label, enabled in (
                ("Installable", perms.installable),
                ("Editable", perms.editable),
                ("Preview&Print", perms.preview_and_print),
                ("Restricted", perms.restricted_license),
            )
            if enabled
        ]
        if flags:
            parts.append(f"Permissions: {', '.join(flags)}")
    return " | ".join(parts) or "No metadata available"
