"""Reading documents from disk and scanning directories of them."""
from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from hashlib import sha256
from pathlib import Path

from bs4 import BeautifulSoup
from docx import Document

from .detect import Dialect, detect_dialect
from .model import ParsedDocument, VideoPackage
from .parser import parse_document, parse_video_package

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse document. Please check the format."

DEFAULT_PDF_BACKENDS = ["pypdf", "pdfminer"]
PDF_BACKENDS_ENV = "CONTENT_PDF_BACKENDS"

SUPPORTED_EXTENSIONS = {
    ".md",
    ".markdown",
    ".txt",
    ".html",
    ".htm",
    ".pdf",
    ".docx",
}

PACKAGE_PARTS = ("script", "visuals", "metadata", "branding")


class DocumentParseError(RuntimeError):
    """Raised when a document cannot be read or parsed."""


@dataclass
class FileScanResult:
    """Outcome of parsing a single file during a directory scan."""

    file: str
    sha256: str
    dialect: str | None = None
    doc_type: str | None = None
    scene_count: int = 0
    cue_count: int = 0
    status: str = "ok"
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "sha256": self.sha256,
            "dialect": self.dialect,
            "doc_type": self.doc_type,
            "scene_count": self.scene_count,
            "cue_count": self.cue_count,
            "status": self.status,
            "error": self.error,
        }


def resolve_pdf_backends(prefer_backends: Iterable[str] | None = None) -> list[str]:
    if prefer_backends:
        order = [backend.strip() for backend in prefer_backends if backend and backend.strip()]
    else:
        env_value = os.environ.get(PDF_BACKENDS_ENV)
        if env_value:
            order = [backend.strip() for backend in env_value.split(",") if backend.strip()]
        else:
            order = list(DEFAULT_PDF_BACKENDS)
    unique_order = list(dict.fromkeys(order))
    return unique_order or list(DEFAULT_PDF_BACKENDS)


def extract_pdf_text(path: Path, prefer_backends: Iterable[str] | None = None) -> str:
    """Return the text of the first backend that produces any."""

    for backend in resolve_pdf_backends(prefer_backends):
        try:
            text = _extract_with_backend(backend, path)
        except Exception as exc:
            logger.debug("PDF backend %s failed for %s: %s", backend, path, exc)
            continue
        if text.strip():
            logger.debug("Extracted %d characters from %s with %s", len(text), path, backend)
            return text
    logger.warning("No text could be extracted from %s", path)
    return ""


def _extract_with_backend(backend: str, path: Path) -> str:
    if backend == "pypdf":
        from pypdf import PdfReader

        reader = PdfReader(str(path))
        return "\n".join(page.extract_text() or "" for page in reader.pages)
    if backend == "pdfminer":
        from pdfminer.high_level import extract_text

        return extract_text(str(path)) or ""
    raise RuntimeError(f"unknown backend: {backend}")


def html_to_text(markup: str) -> str:
    soup = BeautifulSoup(markup, "lxml")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text("\n", strip=True)


def docx_to_text(path: Path) -> str:
    document = Document(str(path))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def read_text(path: Path, *, pdf_backends: Iterable[str] | None = None) -> str:
    suffix = path.suffix.lower()
    if suffix in {".md", ".markdown", ".txt"}:
        return path.read_text(encoding="utf-8", errors="ignore")
    if suffix in {".html", ".htm"}:
        return html_to_text(path.read_text(encoding="utf-8", errors="ignore"))
    if suffix == ".docx":
        return docx_to_text(path)
    if suffix == ".pdf":
        return extract_pdf_text(path, pdf_backends)
    raise DocumentParseError(f"Unsupported file type: {path.suffix or path.name}")


def parse_path(path: Path, *, pdf_backends: Iterable[str] | None = None) -> ParsedDocument:
    """Read and parse ``path``, reporting any failure as :class:`DocumentParseError`."""

    try:
        content = read_text(path, pdf_backends=pdf_backends)
        return parse_document(content)
    except DocumentParseError:
        raise
    except Exception as exc:
        logger.exception("Failed to parse %s", path)
        raise DocumentParseError(PARSE_FAILURE_MESSAGE) from exc


def find_package_files(directory: Path) -> dict[str, Path]:
    found: dict[str, Path] = {}
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            continue
        stem = path.stem.lower()
        for part in PACKAGE_PARTS:
            if part not in found and (stem == part or stem.endswith(f"_{part}")):
                found[part] = path
    return found


def load_video_package(directory: Path) -> VideoPackage:
    files = find_package_files(directory)
    missing = [part for part in ("script", "visuals") if part not in files]
    if missing:
        raise DocumentParseError(
            f"Video package in {directory} is missing: {', '.join(missing)}"
        )
    texts = {part: read_text(path) for part, path in files.items()}
    return VideoPackage(
        script=texts["script"],
        visuals=texts["visuals"],
        metadata=texts.get("metadata", ""),
        branding=texts.get("branding", ""),
    )


def parse_package_directory(directory: Path) -> ParsedDocument:
    package = load_video_package(directory)
    try:
        return parse_video_package(package)
    except Exception as exc:
        logger.exception("Failed to parse video package %s", directory)
        raise DocumentParseError(PARSE_FAILURE_MESSAGE) from exc


def iter_supported_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS:
            yield path


def scan_directory(
    target_dir: Path,
    *,
    pdf_backends: Iterable[str] | None = None,
) -> tuple[dict[str, ParsedDocument], dict[str, FileScanResult]]:
    documents: dict[str, ParsedDocument] = {}
    files: dict[str, FileScanResult] = {}
    for file_path in iter_supported_files(target_dir):
        rel_file = file_path.relative_to(target_dir).as_posix()
        try:
            raw_bytes = file_path.read_bytes()
        except OSError as exc:  # pragma: no cover - disk errors
            logger.error("Failed to read %s: %s", file_path, exc)
            files[rel_file] = FileScanResult(file=rel_file, sha256="", status="error", error=str(exc))
            continue
        file_sha = sha256(raw_bytes).hexdigest()
        try:
            content = read_text(file_path, pdf_backends=pdf_backends)
            dialect: Dialect = detect_dialect(content)
            document = parse_document(content)
        except Exception as exc:
            logger.exception("Failed to parse %s", file_path)
            files[rel_file] = FileScanResult(
                file=rel_file, sha256=file_sha, status="error", error=str(exc)
            )
            continue
        documents[rel_file] = document
        files[rel_file] = FileScanResult(
            file=rel_file,
            sha256=file_sha,
            dialect=dialect.value,
            doc_type=document.doc_type.value,
            scene_count=len(document.scenes),
            cue_count=len(document.visual_cues),
        )
    return documents, files
