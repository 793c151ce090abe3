"""Validators module - page assertions."""

from .title_assertion import Deadline, TitleCheck, wait_for_title

__all__ = [
    "Deadline",
    "TitleCheck",
    "wait_for_title",
]
