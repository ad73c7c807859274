"""
Feedback Blueprint
"""

from flask import Blueprint
from complaintdesk.api.feedback.routes import feedback_bp

__all__ = ['feedback_bp']
