"""BinaryStore is a storage facade that provides persistent file-based storage of binary
content addressed by an opaque identifier.

BinaryStore is mainly focused on keeping binaries (uploads, attachments, rendered
documents...) of a hosting application on a local file system, without any metadata.
Some properties:

- A binary is named using its identifier, random UUIDs by default
- Binaries are spread over a tree of directories derived from their identifier
    to avoid too many files in a single directory
- Each binary handle opens new read and write streams on request, the caller owns
    and must close them
"""

from binarystore.binarystore import Binary, BinaryStore, BinaryStoreFactory

__all__ = ("Binary", "BinaryStore", "BinaryStoreFactory")
__version__ = "1.0.0"
