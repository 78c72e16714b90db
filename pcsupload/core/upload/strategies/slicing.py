"""
Slicing strategies for file uploads.

Implements Strategy Pattern for partitioning a file into slices.
Open for extension (new strategies), closed for modification.
"""
from abc import ABC, abstractmethod
from typing import List, Tuple

from ..config import (
    MIN_UPLOAD_SLICE_SIZE,
    MAX_UPLOAD_SLICE_SIZE,
    MAX_UPLOAD_SLICE_COUNT
)
from ..models import Slice, SliceStatus
from ...logging import get_logger

logger = get_logger('pcsupload.upload.slicing')


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


class BaseSlicingStrategy(ABC):
    """Abstract base class for slicing strategies."""
    
    @abstractmethod
    def calculate_slices(self, file_size: int) -> List[Tuple[int, int]]:
        """Calculate slice boundaries."""
        pass
    
    def plan(self, file_size: int) -> List[Slice]:
        """
        Build the slice list for a file.
        
        Every slice starts PENDING with nothing transferred.
        """
        return [
            Slice(
                index=i,
                offset=start,
                length=end - start,
                bytes_finished=0,
                status=SliceStatus.PENDING
            )
            for i, (start, end) in enumerate(self.calculate_slices(file_size))
        ]


class PcsSlicingStrategy(BaseSlicingStrategy):
    """
    Slicing with a minimum slice size and a maximum slice count.
    
    Slices are min_slice_size long until that would need more than
    max_slice_count slices; then the size grows to
    ceil(file_size / max_slice_count). The last slice ends at EOF and
    may be shorter than the others.
    
    max_slice_size is advisory: a plan that exceeds it is only logged.
    """
    
    def __init__(
        self,
        min_slice_size: int = MIN_UPLOAD_SLICE_SIZE,
        max_slice_count: int = MAX_UPLOAD_SLICE_COUNT,
        max_slice_size: int = MAX_UPLOAD_SLICE_SIZE
    ):
        """
        Initialize with slice limits.
        
        Args:
            min_slice_size: Size of every slice for small enough files
            max_slice_count: Maximum number of slices
            max_slice_size: Advisory maximum slice size
        """
        if min_slice_size <= 0:
            raise ValueError("Slice size must be positive")
        if max_slice_count <= 0:
            raise ValueError("Slice count must be positive")
        self.min_slice_size = min_slice_size
        self.max_slice_count = max_slice_count
        self.max_slice_size = max_slice_size
    
    def slice_size_for(self, file_size: int) -> int:
        """Returns the size of every slice but the last one."""
        slice_size = self.min_slice_size
        if _ceil_div(file_size, slice_size) > self.max_slice_count:
            slice_size = _ceil_div(file_size, self.max_slice_count)
        return slice_size
    
    def calculate_slices(self, file_size: int) -> List[Tuple[int, int]]:
        """
        Calculate slice boundaries for a file.
        
        Args:
            file_size: Total file size in bytes
            
        Returns:
            List of (start, end) tuples
        """
        if file_size <= 0:
            return []
        
        slice_size = self.slice_size_for(file_size)
        if slice_size > self.max_slice_size:
            logger.warning(
                f"Slice size {slice_size} exceeds advised maximum {self.max_slice_size}"
            )
        
        slices = []
        position = 0
        while position < file_size:
            end = min(position + slice_size, file_size)
            slices.append((position, end))
            position = end
        
        logger.debug(f"Planned {len(slices)} slices of {slice_size} bytes for {file_size} bytes")
        return slices
