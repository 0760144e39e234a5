"""Background workers for the workshop service"""
from .due_digest import DueDigestWorker

__all__ = ["DueDigestWorker"]
