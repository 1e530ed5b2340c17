def select_targets(pods, match):
    """Return the pods whose name contains match, in listing order.

    The match is a literal, case-sensitive substring. There is no label
    shared by every variant of the target workload, so the filtering
    cannot be pushed to the API server.
    """
    return [pod for pod in pods if match in pod.metadata.name]
