"""
File persistence boundary for requesttree documents.

Hosts with their own storage only need ``DocumentCore.encode``/``decode``;
these helpers cover the plain-file case: load bytes, decode, validate; encode,
validate, write bytes.
"""

import logging
from pathlib import Path

from requesttree.config import DocumentSettings, get_settings
from requesttree.document import DocumentCore

logger = logging.getLogger(__name__)


def load_document(path: str | Path, settings: DocumentSettings | None = None) -> DocumentCore:
    """
    Read and decode a document file.

    Params:
        path: File to read
        settings: Settings for the loaded document

    Returns:
        The validated document, with no unsaved changes

    Raises:
        OSError: If the file cannot be read
        DocumentFormatError: If the content is not a document
        StructuralError: If the document violates a structural invariant
    """
    data = Path(path).read_bytes()
    document = DocumentCore.decode(data, settings=settings)
    logger.info("Loaded %s", path)
    return document


def save_document(document: DocumentCore, path: str | Path) -> Path:
    """
    Encode ``document`` and write it to ``path``.

    The document is only marked saved once the bytes are written.

    Returns:
        The path written to
    """
    target = Path(path)
    data = document.encode()
    target.write_bytes(data)
    document.mark_saved()
    logger.info("Saved %s (%d bytes)", target, len(data))
    return target


def write_template(directory: str | Path, settings: DocumentSettings | None = None) -> Path:
    """
    Write a fresh, empty document to use as a "new document" template.

    The file is named after the default root folder, e.g. ``Requests.requesttree``.

    Params:
        directory: Existing directory to write into
        settings: Controls the root folder name and the file extension

    Returns:
        Path of the template file
    """
    settings = settings or get_settings()
    document = DocumentCore(settings=settings)
    path = Path(directory) / f"{document.root_folder.name}{settings.file_extension}"
    return save_document(document, path)
