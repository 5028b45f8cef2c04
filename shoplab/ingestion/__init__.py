"""
Data Ingestion Module
"""
from .seed_db import seed_database, frame_to_records

__all__ = [
    "seed_database",
    "frame_to_records",
]
