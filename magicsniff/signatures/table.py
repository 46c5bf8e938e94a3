"""Known file signatures.

Reference: https://en.wikipedia.org/wiki/List_of_file_signatures

One entry per extension. Lookup is always keyed by the claimed extension,
so formats sharing a header (DOC/PPT/XLS, the OOXML family) never compete.
Adding a format means appending one entry here.
"""

from magicsniff.signatures.models import FileTypeSignature, Signature


# ZIP markers shared by the OOXML family
_ZIP_LOCAL_HEADER = Signature(b"PK\x03\x04\x14\x00\x06\x00")
# End of central directory record is 22 bytes long without an archive comment
_ZIP_END_OF_CENTRAL_DIR = Signature(b"PK\x05\x06", offset=18)
_ZIP_DATA_DESCRIPTOR = Signature(b"PK\x07\x08")

# OLE2 compound document (DOC, PPT and legacy XLS containers)
_OLE_HEADER = Signature(b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1")


FILE_SIGNATURES: tuple[FileTypeSignature, ...] = (
    # PNG - 89 50 4E 47 0D 0A 1A 0A ... IEND chunk CRC
    FileTypeSignature(
        extension=".PNG",
        mime_type="image/png",
        headers=(Signature(b"\x89PNG\r\n\x1a\n"),),
        trailers=(Signature(b"IEND\xaeB`\x82"),),
    ),
    # JPEG - FF D8 FF xx ... FF D9
    FileTypeSignature(
        extension=".JPG",
        mime_type="image/jpeg",
        headers=(
            Signature(b"\xff\xd8\xff\xe0"),
            Signature(b"\xff\xd8\xff\xe1"),
            Signature(b"\xff\xd8\xff\xdb"),
            Signature(b"\xff\xd8\xff\xee"),
            Signature(b"\xff\xd8\xff\xe2"),
            Signature(b"\xff\xd8\xff\xe3"),
        ),
        trailers=(Signature(b"\xff\xd9"),),
    ),
    FileTypeSignature(
        extension=".JPEG",
        mime_type="image/jpeg",
        headers=(
            Signature(b"\xff\xd8\xff\xe0"),
            Signature(b"\xff\xd8\xff\xe2"),
            Signature(b"\xff\xd8\xff\xe3"),
        ),
        trailers=(Signature(b"\xff\xd9"),),
    ),
    FileTypeSignature(
        extension=".DOC",
        mime_type="application/msword",
        headers=(_OLE_HEADER,),
    ),
    # PDF - %PDF ... %%EOF with any of the usual line endings
    FileTypeSignature(
        extension=".PDF",
        mime_type="application/pdf",
        headers=(Signature(b"%PDF"),),
        trailers=(
            Signature(b"\n%%EOF"),
            Signature(b"\n%%EOF\n"),
            Signature(b"\r\n%%EOF\r\n"),
            Signature(b"\r%%EOF\r"),
        ),
    ),
    # XLS - BIFF or sub-stream markers right after the 512 byte OLE header
    FileTypeSignature(
        extension=".XLS",
        mime_type="application/vnd.ms-excel",
        headers=(
            Signature(b"\t\x08\x10\x00\x00\x06\x05\x00", offset=512),
            Signature(b"\xfd\xff\xff\xff", offset=512),
        ),
    ),
    FileTypeSignature(
        extension=".XLSX",
        mime_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=(_ZIP_LOCAL_HEADER,),
        trailers=(_ZIP_END_OF_CENTRAL_DIR, _ZIP_DATA_DESCRIPTOR),
        content_sniff_target="xl/workbook.xml",
    ),
    FileTypeSignature(
        extension=".BMP",
        mime_type="image/bmp",
        headers=(Signature(b"BM"),),
    ),
    # MP4 - ftyp box with the isom brand
    FileTypeSignature(
        extension=".MP4",
        mime_type="video/mp4",
        headers=(Signature(b"\x00\x00\x00\x20ftypisom"),),
    ),
    FileTypeSignature(
        extension=".DOCX",
        mime_type="application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        headers=(_ZIP_LOCAL_HEADER,),
        trailers=(_ZIP_END_OF_CENTRAL_DIR, _ZIP_DATA_DESCRIPTOR),
        content_sniff_target="word/document.xml",
    ),
    FileTypeSignature(
        extension=".PPT",
        mime_type="application/mspowerpoint",
        headers=(
            _OLE_HEADER,
            Signature(b"\xa0\x46\x1d\xf0", offset=512),
        ),
    ),
    FileTypeSignature(
        extension=".PPTX",
        mime_type="application/vnd.openxmlformats-officedocument.presentationml.presentation",
        headers=(_ZIP_LOCAL_HEADER,),
        trailers=(_ZIP_END_OF_CENTRAL_DIR, _ZIP_DATA_DESCRIPTOR),
        content_sniff_target="ppt/presentation.xml",
    ),
)

_SIGNATURES_BY_EXTENSION: dict[str, FileTypeSignature] = {}
for _entry in FILE_SIGNATURES:
    _SIGNATURES_BY_EXTENSION.setdefault(_entry.extension.upper(), _entry)
del _entry


def get_file_signatures() -> tuple[FileTypeSignature, ...]:
    """Return every known signature in table order."""
    return FILE_SIGNATURES


def find_signature(extension: str) -> FileTypeSignature | None:
    """Look up the signature for an extension (case-insensitive, leading dot)."""
    return _SIGNATURES_BY_EXTENSION.get(extension.upper())
