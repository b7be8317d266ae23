"""
Sample file index and copying.

The index is built once per batch by walking the samples directory and
is read-only afterwards, so it can be shared by every file conversion.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Tuple, Union

from exsconvert.utils.validation import SampleNotFoundError

logger = logging.getLogger(__name__)


def walk_files(root: Union[str, Path]) -> Iterator[Path]:
    """
    Yield every file under root, depth first, entries in name order.

    A sub-directory is visited at its own position among the names, so
    root/a/x.wav comes before root/b.wav.
    """
    with os.scandir(root) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        if entry.is_dir():
            yield from walk_files(entry.path)
        elif entry.is_file():
            yield Path(entry.path)


def upper_extension(file_name: str) -> str:
    """Return file_name with its extension upper-cased ("kick.wav" -> "kick.WAV")."""
    stem, ext = os.path.splitext(file_name)
    return stem + ext.upper()


class SampleIndex(Mapping[str, Path]):
    """
    Map of sample file name to the first path found for it.

    Example:
        index = SampleIndex.build("Samples")
        name, file = index.copy_sample("kick.wav", "out/Kit")
    """

    def __init__(self, paths: Optional[Dict[str, Path]] = None):
        self._paths: Dict[str, Path] = dict(paths or {})

    @classmethod
    def build(cls, root: Union[str, Path]) -> "SampleIndex":
        """
        Walk root recursively and index every file by name.

        Entries are visited in name order with sub-directories in place;
        when two files share a name the first one wins and later ones are
        ignored.

        Raises:
            FileNotFoundError: If root does not exist
        """
        root = Path(root)
        if not root.exists():
            raise FileNotFoundError(f"Samples path not found: {root}")

        paths: Dict[str, Path] = {}
        for path in walk_files(root):
            existing = paths.get(path.name)
            if existing is not None:
                logger.debug("Duplicate sample %s (keeping %s, ignoring %s)", path.name, existing, path)
                continue
            paths[path.name] = path

        logger.debug("Indexed %d sample files under %s", len(paths), root)
        return cls(paths)

    def __getitem__(self, file_name: str) -> Path:
        return self._paths[file_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def copy_sample(self, file_name: str, dest_dir: Union[str, Path]) -> Tuple[str, str]:
        """
        Copy a sample next to a program, upper-casing its extension.

        Args:
            file_name: Sample file name as stored in the instrument
            dest_dir: Program output directory

        Returns:
            (sample name without extension, copied file name)

        Raises:
            SampleNotFoundError: If the file name is not indexed
        """
        source = self._paths.get(file_name)
        if source is None:
            raise SampleNotFoundError(f"no sample found for {file_name}")

        sample_file = upper_extension(source.name)
        destination = Path(dest_dir) / sample_file
        logger.debug("Copying %s -> %s", source, destination)
        shutil.copyfile(source, destination)

        return os.path.splitext(file_name)[0], sample_file
