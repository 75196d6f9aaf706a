"""URL helpers for turning GitHub API links into website links."""

API_PREFIX = "api."


def normalize_url(url: str) -> str:
    """
    Rewrite an API-host URL into the matching browsable website URL.

    The first ``api.<host>/<segment>/`` occurrence is replaced with
    ``<host>/``. Only one substitution is made; URLs that do not contain
    the pattern are returned unchanged.

    Args:
        url: URL as returned by the GitHub REST API

    Returns:
        str: Website URL, or the input when nothing matched

    Example:
        >>> normalize_url("https://api.github.com/users/octocat")
        'https://github.com/octocat'
        >>> normalize_url("https://github.com/octocat")
        'https://github.com/octocat'
    """
    start = url.find(API_PREFIX)
    while start != -1:
        host_start = start + len(API_PREFIX)
        host_end = url.find("/", host_start)
        if host_end > host_start:
            segment_end = url.find("/", host_end + 1)
            if segment_end > host_end + 1:
                return url[:start] + url[host_start:host_end] + "/" + url[segment_end + 1:]
        start = url.find(API_PREFIX, start + 1)
    return url
