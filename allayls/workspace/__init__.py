"""Workspace access for AllayLS."""
from .project import ProjectFile, ProjectWorkspace

__all__ = ['ProjectFile', 'ProjectWorkspace']
