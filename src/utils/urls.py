"""
URL and Title Utilities

Pure helpers shared by the curator and the reconciler:
- URL normalization (comparison key only, never displayed)
- YouTube video id / thumbnail extraction
- Source hostname derivation
- Title cleaning for grounded and model-proposed resources
"""

import re
from urllib.parse import urlparse

# Hosts treated as video platforms when synthesizing titles
VIDEO_HOST_MARKERS: tuple[str, ...] = ("youtube", "youtu.be", "vimeo")

# Site names stripped when they trail a title ("Intro to SQL - YouTube")
KNOWN_SITE_SUFFIXES: tuple[str, ...] = (
    "YouTube",
    "Coursera",
    "GeeksforGeeks",
    "Wikipedia",
    "MDN Web Docs",
    "freeCodeCamp",
    "W3Schools",
)

# Titles that say nothing about the resource
GENERIC_TITLES: frozenset[str] = frozenset({
    "youtube",
    "youtube.com",
    "video",
    "article",
    "home",
    "index",
})

_SCHEME_RE = re.compile(r"^https?://")
_SUFFIX_RE = re.compile(
    r"\s*[-|]\s*(?:" + "|".join(re.escape(s) for s in KNOWN_SITE_SUFFIXES) + r")$",
    re.IGNORECASE,
)
_YOUTUBE_ID_RE = re.compile(
    r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=|shorts/)([^#&?]*).*"
)


def normalize_url(url: str) -> str:
    """
    Canonical comparison key for a URL.

    Lower-cases, then strips the scheme, a leading ``www.`` and one
    trailing slash. ``http://Example.com/X``, ``https://www.example.com/x``
    and ``example.com/x`` all map to ``example.com/x``.
    """
    key = url.strip().lower()
    key = _SCHEME_RE.sub("", key)
    if key.startswith("www."):
        key = key[4:]
    if key.endswith("/"):
        key = key[:-1]
    return key


def is_video_uri(url: str) -> bool:
    """Check whether a URL points at a known video host."""
    key = normalize_url(url)
    return any(marker in key for marker in VIDEO_HOST_MARKERS)


def youtube_video_id(url: str) -> str | None:
    """Extract an 11-character YouTube video id (watch, embed, shorts, youtu.be)."""
    if not url:
        return None
    match = _YOUTUBE_ID_RE.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def youtube_thumbnail(url: str) -> str | None:
    """Thumbnail URL for a YouTube video link, or None for anything else."""
    video_id = youtube_video_id(url)
    if video_id is None:
        return None
    return f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg"


def source_hostname(url: str) -> str | None:
    """Hostname without a leading ``www.``; None when the URL has no host."""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    return host[4:] if host.startswith("www.") else host


def _fallback_title(url: str, topic_title: str) -> str:
    if is_video_uri(url):
        return f"{topic_title} (Video)".strip()
    return f"{topic_title} Guide".strip()


def _is_generic(title: str) -> bool:
    lower = title.lower()
    return lower in GENERIC_TITLES or lower.startswith("http")


def clean_title(title: str | None, url: str, topic_title: str) -> str:
    """
    Produce a readable title for a resource.

    Empty titles and generic placeholders ("YouTube", bare URLs, "home")
    become "<topic> (Video)" or "<topic> Guide" depending on the host.
    Trailing site names are stripped. The function is idempotent.
    """
    cleaned = (title or "").strip()
    if not cleaned:
        return _fallback_title(url, topic_title)

    while True:
        stripped = _SUFFIX_RE.sub("", cleaned).strip()
        if stripped == cleaned:
            break
        cleaned = stripped

    if not cleaned or _is_generic(cleaned):
        return _fallback_title(url, topic_title)
    return cleaned
