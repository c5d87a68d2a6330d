#!/usr/bin/env python3
"""CLI entrypoint for the content script parser."""
from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from content_studio.script_parser import export, settings, sources, storage
from content_studio.script_parser.model import ParsedDocument

logger = logging.getLogger("content_studio.script_parser.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def resolve_existing(path: str, *, directory: bool = False) -> Path:
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise SystemExit(f"Path not found: {resolved}")
    if directory and not resolved.is_dir():
        raise SystemExit(f"Not a directory: {resolved}")
    return resolved


def parse_backend_list(value: str | None) -> list[str] | None:
    if not value:
        return None
    parts = [entry.strip() for entry in value.split(",") if entry.strip()]
    return parts or None


def load_or_exit(path: Path, pdf_backends: list[str] | None = None) -> ParsedDocument:
    try:
        return sources.parse_path(path, pdf_backends=pdf_backends)
    except sources.DocumentParseError as exc:
        raise SystemExit(f"{path}: {exc}") from exc


def emit_json(data: Mapping[str, Any], output: str | None) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        output_path = Path(output).expanduser()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text + "\n", encoding="utf-8")
        logger.info("Document written to %s", output_path)
    else:
        print(text)


def command_parse(args: argparse.Namespace) -> None:
    path = resolve_existing(args.file)
    document = load_or_exit(path, parse_backend_list(args.pdf_backends))
    logger.info(
        "Parsed %s as %s (%d scenes, %d visual cues)",
        path.name,
        document.doc_type.value,
        len(document.scenes),
        len(document.visual_cues),
    )
    emit_json(document.to_dict(), args.output)
    if args.store:
        store_paths = storage.StoragePaths(Path(args.store).expanduser())
        storage.save_document(store_paths, document)
        logger.info("Document stored in %s", store_paths.document_path)


def command_prompts(args: argparse.Namespace) -> None:
    store_paths = storage.StoragePaths(Path(args.store).expanduser()) if args.store else None
    saved_settings = None
    if store_paths is None:
        document = load_or_exit(resolve_existing(args.file))
    else:
        stored = storage.load_document(store_paths)
        if stored is None:
            raise SystemExit(f"No stored document in {store_paths.base_dir}. Run 'parse --store' first.")
        document = stored
        saved_settings = storage.load_settings(store_paths)
    # Flags win over stored settings, which win over the environment.
    base = settings.resolve_settings(
        style=args.style or (saved_settings.style if saved_settings else None),
        aspect_ratio=args.aspect_ratio or (saved_settings.aspect_ratio if saved_settings else None),
        tone=args.tone or (saved_settings.tone if saved_settings else None),
    )
    if store_paths is not None and (args.style or args.aspect_ratio or args.tone):
        storage.save_settings(store_paths, base)
        logger.info("Image settings stored in %s", store_paths.settings_path)
    for scene in document.scenes:
        print_prompt(f"scene-{scene.scene_number}", settings.scene_generation_prompt(scene), base, "scene")
    for index, cue in enumerate(document.visual_cues):
        print_prompt(f"cue-{index}", cue.background_prompt, base, "cue")
    if document.transparent_image_prompt:
        print_prompt("transparent", document.transparent_image_prompt, base, "transparent")


def print_prompt(key: str, prompt: str, base: settings.ImageSettings, asset: str) -> None:
    asset_settings = settings.settings_for_asset(base, asset)
    print(f"[{key}] ({asset_settings.aspect_ratio}) {settings.build_image_prompt(prompt, asset_settings)}")


def command_package(args: argparse.Namespace) -> None:
    directory = resolve_existing(args.directory, directory=True)
    try:
        document = sources.parse_package_directory(directory)
    except sources.DocumentParseError as exc:
        raise SystemExit(str(exc)) from exc
    logger.info("Parsed video package %s (%d scenes)", directory.name, len(document.scenes))
    emit_json(document.to_dict(), args.output)


def command_check(args: argparse.Namespace) -> None:
    directory = resolve_existing(args.directory, directory=True)
    _, files = sources.scan_directory(directory, pdf_backends=parse_backend_list(args.pdf_backends))
    print_status_table(files)


def command_export(args: argparse.Namespace) -> None:
    path = resolve_existing(args.file)
    document = load_or_exit(path)
    output_path = export.write_package(document, Path(args.output).expanduser())
    logger.info("Export package written to %s", output_path)


def print_status_table(files: Mapping[str, sources.FileScanResult]) -> None:
    print(
        "File".ljust(50),
        "Dialect".ljust(16),
        "Type".ljust(18),
        "Scenes".ljust(7),
        "Cues".ljust(5),
        "Status",
    )
    print("-" * 105)
    for file_path, result in sorted(files.items()):
        print(
            file_path.ljust(50),
            (result.dialect or "-").ljust(16),
            (result.doc_type or "-").ljust(18),
            str(result.scene_count).ljust(7),
            str(result.cue_count).ljust(5),
            result.status if not result.error else f"{result.status}: {result.error}",
        )
    print(f"\n{len(files)} files scanned")


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Parse generated content scripts")
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser_obj.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Parse a single document to JSON")
    parse_parser.add_argument("file", help="Document to parse")
    parse_parser.add_argument("--output", help="Write JSON here instead of stdout")
    parse_parser.add_argument(
        "--pdf-backends",
        help="Comma-separated PDF extraction backend order (overrides CONTENT_PDF_BACKENDS)",
    )
    parse_parser.add_argument("--store", help="Also save the document into this storage directory")
    parse_parser.set_defaults(func=command_parse)

    prompts_parser = subparsers.add_parser("prompts", help="Print image prompts for a document")
    source_group = prompts_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--file", help="Document to parse")
    source_group.add_argument("--store", help="Storage directory holding a parsed document")
    prompts_parser.add_argument("--style", help="Image style (overrides CONTENT_IMAGE_STYLE)")
    prompts_parser.add_argument(
        "--aspect-ratio", help="Aspect ratio for scenes (overrides CONTENT_IMAGE_ASPECT_RATIO)"
    )
    prompts_parser.add_argument("--tone", help="Image tone (overrides CONTENT_IMAGE_TONE)")
    prompts_parser.set_defaults(func=command_prompts)

    package_parser = subparsers.add_parser(
        "package", help="Parse a video package directory (script, visuals, metadata, branding)"
    )
    package_parser.add_argument("directory", help="Directory holding the package files")
    package_parser.add_argument("--output", help="Write JSON here instead of stdout")
    package_parser.set_defaults(func=command_package)

    check_parser = subparsers.add_parser("check", help="Report how each file in a directory parses")
    check_parser.add_argument("directory", help="Directory to scan")
    check_parser.add_argument(
        "--pdf-backends",
        help="Comma-separated PDF extraction backend order (overrides CONTENT_PDF_BACKENDS)",
    )
    check_parser.set_defaults(func=command_check)

    export_parser = subparsers.add_parser("export", help="Write a zip export package")
    export_parser.add_argument("file", help="Document to parse")
    export_parser.add_argument("--output", required=True, help="Zip file to create")
    export_parser.set_defaults(func=command_export)

    return parser_obj


def main(argv: list[str] | None = None) -> None:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
