from restro_admin.models.activity_log import ActivityLog
from restro_admin.models.user import AdminUser

__all__ = ["ActivityLog", "AdminUser"]
