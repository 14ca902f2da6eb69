"""Internal controller exports for drivesh."""

from __future__ import annotations

from .drive_controller import ROOT_ID, GoogleDriveController

__all__ = ["GoogleDriveController", "ROOT_ID"]
