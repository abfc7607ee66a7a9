"""Static site configuration consumed by build tooling.

Sitemap generation, the image proxy allowlist and the styling theme are all
process-lifetime constants; nothing here mutates after import.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Tuple
from urllib.parse import urlsplit


@dataclass(frozen=True)
class SitemapConfig:
    """Sitemap generator options."""

    site_url: str = "https://sixfigjob.com"
    generate_robots_txt: bool = True
    sitemap_size: int = 7000


@dataclass(frozen=True)
class RemotePattern:
    protocol: str
    hostname: str


@dataclass(frozen=True)
class ImageConfig:
    """Image optimizer options and the remote host allowlist."""

    remote_patterns: Tuple[RemotePattern, ...] = (
        RemotePattern(protocol="https", hostname="d2q79iu7y748jz.cloudfront.net"),
    )
    domains: Tuple[str, ...] = (
        "images.unsplash.com",
        "www.sixfigjob.com",
        "upload.wikimedia.org",
    )
    formats: Tuple[str, ...] = ("image/webp", "image/avif")
    device_sizes: Tuple[int, ...] = (640, 750, 828, 1080, 1200, 1920)
    image_sizes: Tuple[int, ...] = (16, 32, 48, 64, 96, 128, 256)
    minimum_cache_ttl: int = 31536000  # 1 year


@dataclass(frozen=True)
class ThemeConfig:
    """Styling toolchain configuration."""

    dark_mode: str = "class"
    content: Tuple[str, ...] = (
        "./app/**/*.{js,ts,jsx,tsx}",
        "./pages/**/*.{js,ts,jsx,tsx}",
        "./components/**/*.{js,ts,jsx,tsx}",
    )
    colors: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"blue-900": "#1E3A8A"})
    )
    plugins: Tuple[str, ...] = ()


SITEMAP = SitemapConfig()
IMAGES = ImageConfig()
THEME = ThemeConfig()


def _absolute_url(site_url: str, path: str) -> str:
    if path.startswith(("http://", "https://")):
        return path
    return f"{site_url.rstrip('/')}/{path.lstrip('/')}"


def iter_sitemap_chunks(
    paths: Iterable[str], config: SitemapConfig = SITEMAP
) -> Iterator[List[str]]:
    """Yield absolute URLs in chunks of at most ``config.sitemap_size``."""

    if config.sitemap_size <= 0:
        raise ValueError("sitemap_size must be positive")

    chunk: List[str] = []
    for path in paths:
        chunk.append(_absolute_url(config.site_url, path))
        if len(chunk) == config.sitemap_size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def render_robots_txt(config: SitemapConfig = SITEMAP) -> str:
    """Return the robots.txt body pointing crawlers at the sitemap."""

    lines = [
        "# *",
        "User-agent: *",
        "Allow: /",
        "",
        "# Host",
        f"Host: {config.site_url}",
        "",
        "# Sitemaps",
        f"Sitemap: {config.site_url.rstrip('/')}/sitemap.xml",
    ]
    return "\n".join(lines) + "\n"


def is_allowed_image_url(url: str, config: ImageConfig = IMAGES) -> bool:
    """Whether the image optimizer may proxy ``url``."""

    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        return False

    for pattern in config.remote_patterns:
        if parts.scheme == pattern.protocol and parts.hostname == pattern.hostname:
            return True

    return parts.scheme in {"http", "https"} and parts.hostname in config.domains
