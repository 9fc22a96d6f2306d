from __future__ import annotations

import logging
from email import errors, policy
from email.message import EmailMessage
from email.parser import BytesParser
from pathlib import Path

from mhtmlextractor.core.config import AppConfig
from mhtmlextractor.core.content_types import extension_for, normalize_content_type
from mhtmlextractor.core.errors import ArchiveIOError, HeaderError, PartDecodeError, ScriptMiningError
from mhtmlextractor.core.filenames import sanitize_filename, synthesized_name
from mhtmlextractor.domain.models.resource import ParseResult, Resource, ResourceOrigin
from mhtmlextractor.infrastructure.scripts.miner import ScriptMiner

logger = logging.getLogger(__name__)

HTML_KIND = "text/html"
_PASSTHROUGH_ENCODINGS = {"", "7bit", "8bit", "binary"}
_DECODED_ENCODINGS = {"base64", "quoted-printable", "x-uuencode", "uuencode", "uue", "x-uue"}
_CORRUPT_BODY_DEFECTS = (
    errors.InvalidBase64CharactersDefect,
    errors.InvalidBase64PaddingDefect,
    errors.InvalidBase64LengthDefect,
)


class MhtmlDecoder:
    """
    Decodes one MHTML archive into an ordered ParseResult.

    Order of resources: MIME parts as they appear, then inline scripts, then
    external scripts. A part that cannot be decoded is skipped with a warning;
    only failures to open the file or read its envelope header are fatal.
    """

    def __init__(self, config: AppConfig | None = None, script_miner: ScriptMiner | None = None) -> None:
        self.config = config or AppConfig()
        self.script_miner = script_miner or ScriptMiner(self.config)

    def parse(self, file_path: Path, fetch_external: bool = False) -> ParseResult:
        path = Path(file_path).expanduser()
        try:
            handle = path.open("rb")
        except OSError as exc:
            raise ArchiveIOError(f"Failed to open file {path}: {exc}") from exc

        try:
            with handle:
                message = BytesParser(policy=policy.default).parse(handle)
        except OSError as exc:
            raise ArchiveIOError(f"Failed to read file {path}: {exc}") from exc

        _check_envelope(message)
        resources, html_content, skipped = self._read_parts(message)

        embedded_count = len(resources)
        if html_content:
            resources.extend(self._mine_scripts(html_content, fetch_external))

        logger.info(
            "Parsed %s: %d parts, %d skipped, %d scripts mined",
            path,
            embedded_count,
            skipped,
            len(resources) - embedded_count,
        )
        return ParseResult(
            source_path=path,
            resources=tuple(resources),
            html_content=html_content,
            skipped_parts=skipped,
        )

    def _read_parts(self, message: EmailMessage) -> tuple[list[Resource], str, int]:
        resources: list[Resource] = []
        html_content = ""
        html_seen = False
        skipped = 0

        if not message.is_multipart():
            logger.warning("No MIME parts found: the body never opens with its boundary")
            return resources, html_content, skipped

        truncated = _truncated_parts(message)
        leaves = [part for part in message.walk() if not part.is_multipart()]
        for index, part in enumerate(leaves):
            try:
                if id(part) in truncated:
                    raise PartDecodeError(f"part {index} ends before its closing delimiter")
                resource = self._decode_part(index, part)
            except PartDecodeError as exc:
                logger.warning("Skipping MIME part: %s", exc)
                skipped += 1
                continue

            if resource.kind == HTML_KIND and not html_seen:
                html_seen = True
                html_content = _decode_text(resource.payload, part.get_content_charset())
            resources.append(resource)

        return resources, html_content, skipped

    def _decode_part(self, index: int, part: EmailMessage) -> Resource:
        try:
            kind = normalize_content_type(part.get("Content-Type"))
            encoding = str(part.get("Content-Transfer-Encoding") or "").strip().lower()
            payload = part.get_payload(decode=True) or b""
            declared = part.get_filename()
        except (ValueError, LookupError) as exc:
            raise PartDecodeError(f"part {index} could not be decoded: {exc}") from exc

        corrupt = [defect for defect in part.defects if isinstance(defect, _CORRUPT_BODY_DEFECTS)]
        if corrupt:
            raise PartDecodeError(f"part {index} has an invalid {encoding} body ({corrupt[0].__class__.__name__})")
        if encoding not in _PASSTHROUGH_ENCODINGS | _DECODED_ENCODINGS:
            logger.debug("Unknown Content-Transfer-Encoding %r; keeping body as-is", encoding)

        id_length = self.config.id_length
        if kind == HTML_KIND:
            filename = synthesized_name("page", ".html", id_length)
        elif declared:
            filename = sanitize_filename(declared, id_length)
        else:
            filename = synthesized_name("resource", extension_for(kind), id_length)

        location = str(part.get("Content-Location") or "").strip() or None
        return Resource(
            kind=kind,
            filename=filename,
            payload=payload,
            origin=ResourceOrigin.EMBEDDED,
            location=location,
        )

    def _mine_scripts(self, html_content: str, fetch_external: bool) -> list[Resource]:
        mined: list[Resource] = []
        try:
            mined.extend(self.script_miner.extract_inline(html_content))
        except ScriptMiningError as exc:
            logger.warning("Failed to extract inline scripts: %s", exc)

        if fetch_external:
            try:
                mined.extend(self.script_miner.fetch_external(html_content))
            except ScriptMiningError as exc:
                logger.warning("Failed to download external scripts: %s", exc)
        return mined


def _check_envelope(message: EmailMessage) -> None:
    if not message.keys():
        raise HeaderError("Failed to read MIME header: no header block")
    if message.get("Content-Type") is None:
        raise HeaderError("Missing Content-Type header")
    if message.get_content_maintype() != "multipart":
        raise HeaderError(f"Expected a multipart Content-Type, got {message.get_content_type()}")
    if not message.get_boundary():
        raise HeaderError("Multipart Content-Type has no boundary parameter")


def _truncated_parts(message: EmailMessage) -> set[int]:
    """Ids of parts cut off by end-of-file before their container's closing delimiter."""
    cut: set[int] = set()
    for container in message.walk():
        if not container.is_multipart():
            continue
        if not any(isinstance(d, errors.CloseBoundaryNotFoundDefect) for d in container.defects):
            continue
        children = container.get_payload()
        if children:
            cut.add(id(children[-1]))
    return cut


def _decode_text(payload: bytes, charset: str | None) -> str:
    try:
        return payload.decode(charset or "utf-8", errors="replace")
    except LookupError:
        logger.debug("Unknown charset %r; decoding HTML as UTF-8", charset)
        return payload.decode("utf-8", errors="replace")
