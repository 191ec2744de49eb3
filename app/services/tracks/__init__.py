"""Listener track submissions.

This module provides the weekly-limited submission and review workflow:
- TrackWorkflow: Submit, review, approve and delete tracks
- ApprovalResult: Approved track, its broadcast slot and the e-mail outcome
"""

from app.services.tracks.workflow import ApprovalResult, TrackWorkflow

__all__ = [
    "ApprovalResult",
    "TrackWorkflow",
]
