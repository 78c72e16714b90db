"""
Protocol definitions for upload module.

Defines the interfaces the upload engine depends on. The remote storage
client is supplied by the caller; the engine only drives it.
"""
from typing import Protocol, List, Tuple, Optional, Callable, Awaitable

from .models import RemoteFileInfo, RapidUploadResult, Slice
from ..events import EventAction


# Pull callback handed to the transport for one slice. It returns the
# next bytes of the slice, b'' once the slice is exhausted, or
# READ_ABORT (None) to make the transport abort the request.
ReadFunction = Callable[[int], Awaitable[Optional[bytes]]]

# Whole-file progress hook for direct uploads: (uploaded, total).
TransferProgressFunction = Callable[[int, int], EventAction]

READ_ABORT = None


class StorageClientProtocol(Protocol):
    """Protocol for the remote storage primitives."""
    
    async def md5_file(self, local_path: str) -> Optional[str]:
        """
        Compute the content hash of a local file.
        
        Returns:
            Hex digest, or None if the file could not be hashed
        """
        ...
    
    async def rapid_upload(
        self,
        remote_path: str,
        local_path: str,
        overwrite: bool
    ) -> RapidUploadResult:
        """
        Create a remote file from content the remote side already stores.
        
        Returns:
            Result carrying the created file (if any) and the local hashes
        """
        ...
    
    async def upload(
        self,
        remote_path: str,
        local_path: str,
        overwrite: bool,
        progress: Optional[TransferProgressFunction] = None
    ) -> Optional[RemoteFileInfo]:
        """
        Upload a whole file in one request.
        
        Args:
            remote_path: Remote absolute path
            local_path: Local file to send
            overwrite: Replace an existing remote file
            progress: Called by the transport while sending; returning
                EventAction.CANCEL aborts the request
        """
        ...
    
    async def upload_slice(
        self,
        read: ReadFunction,
        slice_: Slice,
        size: int
    ) -> Optional[RemoteFileInfo]:
        """
        Upload one slice, pulling its bytes through read.
        
        Returns:
            Metadata whose md5 is the slice hash; an empty md5 (or None)
            means the remote side rejected the slice
        """
        ...
    
    async def create_superfile(
        self,
        remote_path: str,
        block_list: List[str],
        overwrite: bool
    ) -> Optional[RemoteFileInfo]:
        """
        Merge uploaded slices, in list order, into one remote file.
        """
        ...


class SlicingStrategy(Protocol):
    """Protocol for file slicing strategies."""
    
    def calculate_slices(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate slice boundaries for a file.
        
        Args:
            file_size: Total file size in bytes
            
        Returns:
            List of (start, end) tuples representing slice boundaries
        """
        ...
    
    def plan(self, file_size: int) -> List[Slice]:
        """Build pending Slice records for a file."""
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""
    
    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
