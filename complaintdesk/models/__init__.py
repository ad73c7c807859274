"""
Models package initialization
Import all models here for easy access
"""

from complaintdesk.models.user import User, UserRole
from complaintdesk.models.complaint import Complaint, ComplaintStatus, ComplaintUpdate
from complaintdesk.models.escalation import Escalation
from complaintdesk.models.feedback import Feedback
from complaintdesk.models.system_config import SystemConfig

__all__ = [
    'User',
    'UserRole',
    'Complaint',
    'ComplaintStatus',
    'ComplaintUpdate',
    'Escalation',
    'Feedback',
    'SystemConfig',
]
