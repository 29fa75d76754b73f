"""Audit reporting for selection runs."""

from .audit import AuditEntry, AuditKind, AuditLog

__all__ = ["AuditEntry", "AuditKind", "AuditLog"]
