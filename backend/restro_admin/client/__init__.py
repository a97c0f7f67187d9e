from restro_admin.client.api import ActivityLogClient, NotAuthenticated
from restro_admin.client.browser import ActivityLogBrowser, BrowserState
from restro_admin.client.notifier import LoggingNotifier, Notifier, RecordingNotifier

__all__ = [
    "ActivityLogBrowser",
    "ActivityLogClient",
    "BrowserState",
    "LoggingNotifier",
    "NotAuthenticated",
    "Notifier",
    "RecordingNotifier",
]
