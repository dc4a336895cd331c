"""
System Logs Service
"""


class SystemLogsService:
    """Service for System Logs component

    Reads the entries collected by the portal's LogBufferHandler.
    """

    def __init__(self, log_buffer):
        self.log_buffer = log_buffer

    def get_logs(self, level_filter='ALL', limit=50):
        """Get buffered logs, most recent last"""
        logs = self.log_buffer.get_entries()

        if level_filter != 'ALL':
            logs = [log for log in logs if log.get('level') == level_filter]

        # Apply limit (most recent logs)
        if limit and len(logs) > limit:
            logs = logs[-limit:]

        return logs
