"""Data models for vmscrub.

This module exports the action models used across the cleanup run.
"""

from vmscrub.models.action import Action, ActionResult, create_action

__all__ = ["Action", "ActionResult", "create_action"]
