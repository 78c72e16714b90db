"""
Upload configuration module.

Provides configuration for the slice upload engine.
"""
from dataclasses import dataclass, field
from typing import Optional


MIN_UPLOAD_SLICE_SIZE = 512 * 1024
MAX_UPLOAD_SLICE_SIZE = 10 * 1024 * 1024
MAX_UPLOAD_SLICE_COUNT = 1024


@dataclass
class RetryConfig:
    """
    Retry configuration for failed slices.
    
    The defaults retry a failed slice immediately and without limit,
    until it succeeds or the session is cancelled.
    """
    max_retries: Optional[int] = None  # None = unbounded
    base_delay: float = 0.0  # 0 disables backoff
    max_delay: float = 16.0
    exponential_base: float = 2.0
    
    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay before the given retry attempt (0-based)."""
        if self.base_delay <= 0:
            return 0.0
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)
    
    def should_retry(self, retry_count: int) -> bool:
        """Determines if another attempt is allowed after retry_count retries."""
        return self.max_retries is None or retry_count < self.max_retries


@dataclass
class UploadConfig:
    """
    Complete upload configuration.
    
    Attributes:
        rapid_upload_enabled: Try content-addressed upload first
        slice_upload_enabled: Use resumable sliced upload for large files
        progress_enabled: Emit 'progress' events
        slice_dir: Directory for slice state files ('' = current directory)
        min_slice_size: Smallest slice; files not larger are sent directly
        max_slice_size: Advisory upper bound, only logged when exceeded
        max_slice_count: Maximum number of slices per file
        retry: Retry behaviour for failed slices
    """
    rapid_upload_enabled: bool = True
    slice_upload_enabled: bool = True
    progress_enabled: bool = False
    slice_dir: str = ''
    min_slice_size: int = MIN_UPLOAD_SLICE_SIZE
    max_slice_size: int = MAX_UPLOAD_SLICE_SIZE
    max_slice_count: int = MAX_UPLOAD_SLICE_COUNT
    retry: RetryConfig = field(default_factory=RetryConfig)
    
    @classmethod
    def default(cls) -> 'UploadConfig':
        """Create default configuration."""
        return cls()
