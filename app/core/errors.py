class DashboardError(RuntimeError):
    """Base class for dashboard service errors."""
    pass


class BroadcastError(DashboardError):
    """Push to a subscriber channel failed. broadcaster 밖으로는 전파되지 않음."""
    pass
