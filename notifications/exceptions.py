class NotificationError(Exception):
    """
    Domain-specific exception for a notification that cannot be built
    for one user (for example, missing skill activity data).
    """
