"""Text-blob storage adapters.

Every resource gwuptime persists is one flat text blob addressed by name and
replaced as a whole.  There is no native append: :func:`append_lines` reads
the current content and writes it back with the new lines concatenated.
"""

from gwuptime.storage.base import BlobStore, append_lines
from gwuptime.storage.files import FileBlobStore
from gwuptime.storage.gist import GistBlobStore
from gwuptime.storage.memory import MemoryBlobStore

__all__ = [
    "BlobStore",
    "FileBlobStore",
    "GistBlobStore",
    "MemoryBlobStore",
    "append_lines",
]
