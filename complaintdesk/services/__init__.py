"""
Services Package
Business logic for the complaint workflow and its integrations
"""

from complaintdesk.services.complaint_service import ComplaintService
from complaintdesk.services.email_service import EmailService
from complaintdesk.services.query_service import QueryService
from complaintdesk.services.report_service import ReportService
from complaintdesk.services.stats_service import StatsService
from complaintdesk.services.storage_service import LocalStorageService

__all__ = [
    'ComplaintService',
    'EmailService',
    'QueryService',
    'ReportService',
    'StatsService',
    'LocalStorageService',
]
