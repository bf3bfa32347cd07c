"""Path resolution between public URLs and the Hugo source tree.

Pure string/path transforms — no filesystem access. Resolved paths are
guarded against escaping their root, the same way content paths are
checked before any write.
"""

from __future__ import annotations

from pathlib import Path

from micropress.config.models import SiteConfig
from micropress.domain.errors import InvalidURL


def _relative_part(url: str, site: SiteConfig) -> str:
    if not url.startswith(site.base_url):
        msg = f"URL is not under {site.base_url}: {url}"
        raise InvalidURL(msg, url=url)
    return url[len(site.base_url) :]


def _guard(path: Path, root: Path, url: str) -> Path:
    if not path.resolve().is_relative_to(root.resolve()):
        msg = f"URL escapes the site root: {url}"
        raise InvalidURL(msg, url=url)
    return path


def url_to_path(url: str, site: SiteConfig) -> Path:
    """Map a public post URL to its markdown source file.

    - ``.../slug/index.html`` -> ``slug.md``
    - ``.../slug/``           -> ``slug.md``
    - ``.../slug``            -> ``slug.md``

    Raises:
        InvalidURL: *url* is not under ``base_url`` or escapes the content root.
    """
    relative = _relative_part(url, site)
    if relative.endswith("/index.html"):
        relative = relative.removesuffix("/index.html") + ".md"
    elif relative.endswith("/"):
        relative = relative.rstrip("/") + ".md"
    else:
        relative += ".md"
    if relative == ".md":
        msg = f"URL does not name a post: {url}"
        raise InvalidURL(msg, url=url)
    return _guard(site.content_root / relative, site.content_root, url)


def url_to_artifact(url: str, site: SiteConfig) -> Path:
    """Map a public post URL to the rendered ``index.html`` Hugo wrote for it."""
    relative = _relative_part(url, site)
    if not relative.endswith("index.html"):
        relative = relative.rstrip("/") + "/index.html"
    return _guard(site.public_root / relative.lstrip("/"), site.public_root, url)


def post_location(post_type: str, slug: str, site: SiteConfig) -> tuple[Path, str]:
    """Return ``(source_path, public_url)`` for a new post.

    Types listed in ``content_paths`` live in their own subdirectory;
    everything else sits at the content root.
    """
    subdir = site.content_paths.get(post_type, "").strip("/")
    directory = site.content_root / subdir if subdir else site.content_root
    url_prefix = f"{site.base_url}{subdir}/" if subdir else site.base_url
    path = _guard(directory / f"{slug}.md", site.content_root, slug)
    return path, f"{url_prefix}{slug}/index.html"
