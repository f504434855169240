class TransientError(Exception):
    """Marker for network-like failures that a caller may reasonably retry.

    Nothing in the pipeline retries automatically; the flag only tells the
    caller which failures are worth re-submitting unchanged.
    """
