"""
Verse delivery for the Bible Verse dispatcher.

This module handles:
- Deciding which subscribers are due at the current hour
- Resolving email and SMS gateway destinations
- Sending verse and verification emails via Resend
- Running scheduled dispatch passes and logging each delivery
"""

from .dispatch_run import DispatchRun, build_dispatch_run
from .due_check import is_due
from .email_sender import send_verification_email, send_verse_email, send_verse_sms

__all__ = [
    'DispatchRun',
    'build_dispatch_run',
    'is_due',
    'send_verification_email',
    'send_verse_email',
    'send_verse_sms',
]
