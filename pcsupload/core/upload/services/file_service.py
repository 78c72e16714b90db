"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Union
import aiofiles

from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.
    
    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """
    
    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.
        
        Args:
            file_path: Path to the file
            
        Returns:
            Tuple of (absolute Path, file size in bytes)
            
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If path is not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path
        
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        
        if not path.is_file():
            raise ValueError(f"Path is not a file: {path}")
        
        file_size = path.stat().st_size
        
        return path.absolute(), file_size


class AsyncFileReader:
    """
    Asynchronous reader for byte ranges of a file.
    
    Uses aiofiles for non-blocking I/O operations. The file is opened
    and closed on every read, so no handle is held between slice pulls.
    """
    
    def __init__(self):
        """Initialize file reader."""
        self._logger = get_logger('pcsupload.upload.file')
    
    async def read_range(self, file_path: Union[str, Path], start: int, size: int) -> bytes:
        """
        Read exactly size bytes starting at start.
        
        Args:
            file_path: Path to the file
            start: Start position in bytes
            size: Number of bytes to read
            
        Returns:
            The requested bytes
            
        Raises:
            OSError: If the file cannot be read or ends before start + size
        """
        if size <= 0:
            return b''
        
        async with aiofiles.open(file_path, 'rb') as f:
            await f.seek(start)
            data = await f.read(size)
        
        if len(data) != size:
            raise OSError(
                f"Short read at {start}: expected {size} bytes, got {len(data)}"
            )
        
        self._logger.debug(f"Read range: {start}-{start + size} ({size} bytes)")
        return data
