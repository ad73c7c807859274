"""
Admin Blueprints
"""

from complaintdesk.api.admin.routes import admin_bp
from complaintdesk.api.admin.user_routes import admin_users_bp

__all__ = ['admin_bp', 'admin_users_bp']
