"""
Fetch a public profile page and return its visible text.

Static HTML only: the page is fetched with httpx and parsed with BeautifulSoup.
Profile-like regions are collected in a fixed order (top card first, so the
owner's name leads the text) and the whole body is the fallback.
"""

import ipaddress
import logging
from typing import List, Optional, Set
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from app.config import get_settings
from app.core.errors import EmptyExtractionError, InvalidInputError, ScrapeError

logger = logging.getLogger(__name__)


PROFILE_SELECTORS = [
    ".pv-top-card",
    ".pv-text-details__left-panel",
    '[data-section="summary"]',
    ".pv-about-section",
    '[data-section="experience"]',
    ".pv-experience-section",
    '[data-section="education"]',
    ".pv-education-section",
    '[data-section="skills"]',
    ".pv-skill-categories-section",
]

# Page-level containers, used only when no profile region matched
CONTAINER_SELECTORS = ["main", ".scaffold-layout__main"]

STRIP_TAGS = ["script", "style", "noscript", "template"]

MAX_REDIRECTS = 5


def _is_internal_host(host: str) -> bool:
    """localhost names and IP literals outside the public internet (private, loopback, link-local, ...)."""
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    return not ip.is_global


def validate_profile_url(url: str) -> str:
    """
    Return the stripped URL or raise InvalidInputError.

    Checked for the first URL and again for every redirect target.
    """
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        raise InvalidInputError("Invalid profile URL: only http(s) URLs are supported.")

    host = parsed.hostname.lower().rstrip(".")
    if _is_internal_host(host):
        raise InvalidInputError(f"Scraping is not allowed for internal host '{host}'.")

    allowed = [h.lower() for h in get_settings().scrape_allowed_hosts]
    if allowed and not any(host == h or host.endswith("." + h) for h in allowed):
        raise InvalidInputError(f"Scraping is not enabled for host '{host}'.")
    return url


def _collect_regions(soup: BeautifulSoup, selectors: List[str]) -> List[str]:
    """Text of every element matching `selectors`, skipping ones nested in an earlier match."""
    collected: List[str] = []
    seen: Set[int] = set()
    for selector in selectors:
        for el in soup.select(selector):
            if id(el) in seen or any(id(p) in seen for p in el.parents):
                continue
            seen.add(id(el))
            text = el.get_text("\n", strip=True)
            if text:
                collected.append(text)
    return collected


def extract_visible_text(html: str) -> str:
    """
    Visible text of the page, one text node per line, regions separated by a blank line.

    Fallback chain: profile regions -> page containers (<main>) -> whole body.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(STRIP_TAGS):
        tag.decompose()

    regions = _collect_regions(soup, PROFILE_SELECTORS) or _collect_regions(soup, CONTAINER_SELECTORS)
    if regions:
        return "\n\n".join(regions)

    body = soup.body or soup
    return body.get_text("\n", strip=True)


def scrape_profile_text(url: str, client: Optional[httpx.Client] = None) -> str:
    """
    Fetch `url` and return the profile text.

    Redirects are followed by hand, at most MAX_REDIRECTS hops, and every
    target goes through validate_profile_url before it is requested.

    Raises:
        InvalidInputError: not an http(s) URL, internal or disallowed host (first URL or redirect)
        ScrapeError: network failure, non-2xx response or too many redirects
        EmptyExtractionError: the page has no visible text
    """
    url = validate_profile_url(url)
    settings = get_settings()

    own_client = client is None
    if own_client:
        client = httpx.Client(
            timeout=settings.scrape_timeout_seconds,
            follow_redirects=False,
            headers={
                "User-Agent": settings.scrape_user_agent,
                "Accept-Language": "en-US,en;q=0.9",
            },
        )
    try:
        for _ in range(MAX_REDIRECTS + 1):
            response = client.get(url, follow_redirects=False)
            if not response.is_redirect:
                break
            target = str(response.next_request.url)
            logger.debug(f"Scrape of {url} redirected to {target}")
            url = validate_profile_url(target)
        else:
            raise ScrapeError(f"Failed to fetch profile page: more than {MAX_REDIRECTS} redirects.")
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning(f"Scrape of {url} returned HTTP {exc.response.status_code}")
        raise ScrapeError(
            f"Failed to fetch profile page (HTTP {exc.response.status_code}). "
            "The profile might be private or require authentication."
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning(f"Scrape of {url} failed: {exc!r}")
        raise ScrapeError("Failed to fetch profile page.") from exc
    finally:
        if own_client:
            client.close()

    text = extract_visible_text(response.text or "")
    if not text.strip():
        raise EmptyExtractionError("No content could be extracted from the profile page")

    logger.info(f"Scraped {len(text)} chars from {url}")
    return text
