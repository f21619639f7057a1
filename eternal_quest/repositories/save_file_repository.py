"""
Save file repository - Data access layer for the save file.
Handles reading and writing the text file; knows nothing about its format.
"""
import os
import stat
import tempfile
from pathlib import Path
from typing import List

from eternal_quest.constants import SAVE_FILE_ENCODING
from eternal_quest.exceptions import PersistenceException, SaveFileNotFoundException


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


class SaveFileRepository:
    """Repository for save file access"""

    @staticmethod
    def read_lines(path: str) -> List[str]:
        """
        Read every line of the save file, without line endings.

        Only "\\n", "\\r" and "\\r\\n" end a line; other Unicode line
        separators are part of the text.

        Raises:
            SaveFileNotFoundException: file does not exist
            PersistenceException: file exists but cannot be read
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise SaveFileNotFoundException(str(path))

        try:
            with open(file_path, "r", encoding=SAVE_FILE_ENCODING, newline="") as f:
                return [line.rstrip("\r\n") for line in f]
        except FileNotFoundError:
            raise SaveFileNotFoundException(str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceException("read", str(e))

    @staticmethod
    def write_text(path: str, text: str) -> None:
        """
        Replace the save file with the given text.

        Writes to a temporary file next to the target first so a failed
        write leaves the previous save intact. The file keeps its previous
        permissions, or gets the umask default when it is new.

        Raises:
            PersistenceException: the file cannot be written
        """
        file_path = Path(path)
        tmp_name = None
        try:
            if file_path.exists():
                mode = stat.S_IMODE(os.stat(file_path).st_mode)
            else:
                mode = 0o666 & ~_current_umask()

            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent
            )
            with os.fdopen(fd, "w", encoding=SAVE_FILE_ENCODING, newline="\n") as f:
                f.write(text)
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, file_path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise PersistenceException("write", str(e))
