"""Tree response: the materialized result of reading a page tree.

Holds the ordered entries produced by TreeBuilder and exposes them as a
file list, a gzipped tar archive, or files written into a directory.
"""

import gzip
import hashlib
import io
import logging
import os
import tarfile
from typing import List, Sequence

from src.models.tree_entry import ReadTreeFile, TreeEntry
from .errors import FilesystemError

logger = logging.getLogger(__name__)


class TreeResponse:
    """Accumulated tree entries with retrieval operations.

    Paths are kept exactly as emitted by files(); the leading "/" of page
    and attachment paths is only dropped when writing to an archive or a
    directory. When two entries share a path the later one wins.

    Example:
        >>> response = TreeResponse(entries)
        >>> [f.path for f in response.files()]
        ['/docs/attachments/Attachment-1.png', '/docs/Page title.md', 'docs/index.md']
        >>> response.dir("./out")
        './out'
    """

    def __init__(self, entries: Sequence[TreeEntry]):
        self._entries = list(entries)
        self.etag = self._compute_etag(self._entries)

    @staticmethod
    def _compute_etag(entries: Sequence[TreeEntry]) -> str:
        """SHA-256 over every path and content, in emission order."""
        digest = hashlib.sha256()
        for entry in entries:
            digest.update(entry.path.encode('utf-8'))
            digest.update(b'\0')
            digest.update(hashlib.sha256(entry.content).digest())
        return digest.hexdigest()

    @property
    def entries(self) -> List[TreeEntry]:
        return list(self._entries)

    def files(self) -> List[ReadTreeFile]:
        """Return every file in emission order with its final path and bytes."""
        return [ReadTreeFile(path=entry.path, content=entry.content) for entry in self._entries]

    @staticmethod
    def _relative_path(path: str) -> str:
        """Strip the leading slash and reject paths that leave the tree root."""
        relative = path.lstrip('/')
        parts = relative.split('/')
        if not relative or any(part in ('', '.', '..') for part in parts):
            raise FilesystemError(path, 'validate', 'Unsafe path in page tree')
        return relative

    def archive(self) -> bytes:
        """Pack all files into a gzipped tar archive.

        Returns:
            The archive as bytes; members are ordered as in files()
        """
        buffer = io.BytesIO()
        # Fixed mtimes keep archives byte-identical across runs
        with gzip.GzipFile(fileobj=buffer, mode='wb', mtime=0) as gz:
            with tarfile.open(fileobj=gz, mode='w') as tar:
                for entry in self._entries:
                    info = tarfile.TarInfo(name=self._relative_path(entry.path))
                    info.size = len(entry.content)
                    info.mtime = 0
                    info.mode = 0o644
                    tar.addfile(info, io.BytesIO(entry.content))
        return buffer.getvalue()

    def _validate_path_safety(self, file_path: str, base_directory: str) -> None:
        """Ensure a resolved file path stays inside the base directory.

        Raises:
            FilesystemError: If the path resolves outside base_directory
        """
        real_base = os.path.realpath(base_directory)
        real_path = os.path.realpath(file_path)
        if not real_path.startswith(real_base + os.sep) and real_path != real_base:
            raise FilesystemError(
                file_path,
                'validate',
                f'Path traversal detected: {file_path} is outside base directory {base_directory}'
            )

    def dir(self, target_dir: str) -> str:
        """Write every file under target_dir, creating directories as needed.

        Args:
            target_dir: Directory to materialize the tree into

        Returns:
            target_dir

        Raises:
            FilesystemError: If a path is unsafe or a write fails
        """
        try:
            os.makedirs(target_dir, exist_ok=True)
        except OSError as e:
            raise FilesystemError(target_dir, 'create_directory', str(e))

        for entry in self._entries:
            file_path = os.path.join(target_dir, *self._relative_path(entry.path).split('/'))
            self._validate_path_safety(file_path, target_dir)
            try:
                os.makedirs(os.path.dirname(file_path), exist_ok=True)
                with open(file_path, 'wb') as f:
                    f.write(entry.content)
            except OSError as e:
                raise FilesystemError(file_path, 'write', str(e))

        logger.info(f"Wrote {len(self._entries)} file(s) to {target_dir}")
        return target_dir
