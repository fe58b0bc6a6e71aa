import hashlib


def fingerprint(url: str) -> str:
    """Return a deterministic digest of the exact bytes of url.

    The URL is not normalized: trailing slashes, letter case and query
    parameter order all produce different fingerprints. The digest only
    serves as a deduplication key, not as a security primitive.

    Example:
        >>> len(fingerprint('https://www.baidu.com'))
        40
        >>> fingerprint('https://example.com') == fingerprint('https://example.com/')
        False
    """
    if not isinstance(url, str):
        raise TypeError(f'URL must be of type string (given type: {type(url)}).')
    return hashlib.sha1(url.encode('utf-8')).hexdigest()  # noqa: S324
