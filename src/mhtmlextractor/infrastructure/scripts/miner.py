from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.parse
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from html.parser import HTMLParser
from posixpath import basename

from mhtmlextractor.core.config import AppConfig
from mhtmlextractor.core.errors import ScriptMiningError
from mhtmlextractor.core.filenames import sanitize_filename, synthesized_name
from mhtmlextractor.domain.models.resource import Resource, ResourceOrigin

logger = logging.getLogger(__name__)

SCRIPT_KIND = "text/javascript"


@dataclass(slots=True)
class ScriptElement:
    has_src: bool
    src: str | None
    text_parts: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.text_parts)


class _ScriptCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.scripts: list[ScriptElement] = []
        self._current: ScriptElement | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag.lower() != "script":
            return
        amap = {k.lower(): v for k, v in attrs}
        element = ScriptElement(has_src="src" in amap, src=amap.get("src"))
        self.scripts.append(element)
        self._current = element

    def handle_data(self, data: str) -> None:
        if self._current is not None:
            self._current.text_parts.append(data)

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() == "script":
            self._current = None


def collect_scripts(html: str) -> list[ScriptElement]:
    """Return every ``<script>`` element of ``html`` in document order."""
    collector = _ScriptCollector()
    try:
        collector.feed(html)
        collector.close()
    except (AssertionError, ValueError) as exc:
        raise ScriptMiningError(f"Failed to parse HTML: {exc}") from exc
    return collector.scripts


def _http_get(url: str, *, timeout: float, user_agent: str) -> bytes:
    request = urllib.request.Request(url, headers={"User-Agent": user_agent}, method="GET")
    with urllib.request.urlopen(request, timeout=timeout) as response:
        return response.read()


class ScriptMiner:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()

    def extract_inline(self, html: str) -> list[Resource]:
        results: list[Resource] = []
        for element in collect_scripts(html):
            if element.has_src:
                continue
            code = element.text.strip()
            if not code:
                continue
            results.append(
                Resource(
                    kind=SCRIPT_KIND,
                    filename=synthesized_name("inline_script", ".js", self.config.id_length),
                    payload=code.encode("utf-8"),
                    origin=ResourceOrigin.INLINE,
                )
            )
        return results

    def external_script_urls(self, html: str) -> list[str]:
        urls: list[str] = []
        for element in collect_scripts(html):
            src = (element.src or "").strip()
            if src.lower().startswith(("http://", "https://")):
                urls.append(src)
        return urls

    def fetch_external(self, html: str) -> list[Resource]:
        urls = self.external_script_urls(html)
        if not urls:
            return []

        workers = min(self.config.fetch_workers, len(urls))
        if workers <= 1:
            fetched = [self._fetch_one(url) for url in urls]
        else:
            # map() yields in input order, so first-appearance order survives.
            with ThreadPoolExecutor(max_workers=workers) as executor:
                fetched = list(executor.map(self._fetch_one, urls))
        return [resource for resource in fetched if resource is not None]

    def _fetch_one(self, url: str) -> Resource | None:
        try:
            data = _http_get(
                url,
                timeout=self.config.fetch_timeout_seconds,
                user_agent=self.config.user_agent,
            )
        except urllib.error.HTTPError as exc:
            logger.warning("Failed to download %s: status %s", url, exc.code)
            return None
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            logger.warning("Failed to download %s: %s", url, exc)
            return None

        return Resource(
            kind=SCRIPT_KIND,
            filename=self.filename_for_url(url),
            payload=data,
            origin=ResourceOrigin.EXTERNAL,
            location=url,
        )

    def filename_for_url(self, url: str) -> str:
        path = url.split("?", 1)[0].split("#", 1)[0]
        path = urllib.parse.urlsplit(path).path
        last_segment = basename(path)
        name = sanitize_filename(last_segment, self.config.id_length) if last_segment else ""
        if not name or not name.endswith(".js"):
            return synthesized_name("script", ".js", self.config.id_length)
        return name
