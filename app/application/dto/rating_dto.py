"""Data Transfer Objects for rating operations."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class RatingSubmission:
    """Stars and optional comment an administrator submits for a vehicle."""
    stars: int
    comment: Optional[str] = None
