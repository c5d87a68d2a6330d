from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest

from content_studio.script_parser import storage
from content_studio.scripts import parse_documents


def test_parse_writes_json_and_stores(tmp_path: Path, samples_dir: Path) -> None:
    output = tmp_path / "reels.json"
    store = tmp_path / "store"
    parse_documents.main(
        ["parse", str(samples_dir / "reels.txt"), "--output", str(output), "--store", str(store)]
    )
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["doc_type"] == "Reels"
    assert len(data["scenes"]) == 3
    stored = storage.load_document(storage.StoragePaths(store))
    assert stored is not None
    assert stored.title == "Rise and Shine"


def test_package_command_prints_json(
    capsys: pytest.CaptureFixture[str], samples_dir: Path
) -> None:
    parse_documents.main(["package", str(samples_dir / "video_package")])
    data = json.loads(capsys.readouterr().out)
    assert data["title"] == "Secrets of the Deep Ocean"
    assert [scene["scene_number"] for scene in data["scenes"]] == [1, 2]


def test_check_prints_table(capsys: pytest.CaptureFixture[str], samples_dir: Path) -> None:
    parse_documents.main(["check", str(samples_dir)])
    out = capsys.readouterr().out
    assert "parable.txt" in out
    assert "podcast_segment" in out
    assert "files scanned" in out


def test_prompts_command_uses_asset_settings(
    capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch, samples_dir: Path
) -> None:
    monkeypatch.delenv("CONTENT_IMAGE_ASPECT_RATIO", raising=False)
    monkeypatch.delenv("CONTENT_IMAGE_STYLE", raising=False)
    monkeypatch.delenv("CONTENT_IMAGE_TONE", raising=False)
    parse_documents.main(
        ["prompts", "--file", str(samples_dir / "podcast_segments.txt"), "--tone", "moody"]
    )
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("[cue-0] (16:9) A host in a cozy studio")
    assert lines[0].endswith("photorealistic style, moody, cinematic lighting")


def test_prompts_from_store_remembers_settings(
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    samples_dir: Path,
) -> None:
    for name in ("CONTENT_IMAGE_ASPECT_RATIO", "CONTENT_IMAGE_STYLE", "CONTENT_IMAGE_TONE"):
        monkeypatch.delenv(name, raising=False)
    store = tmp_path / "store"
    parse_documents.main(["parse", str(samples_dir / "reels.txt"), "--store", str(store)])
    capsys.readouterr()

    parse_documents.main(
        ["prompts", "--store", str(store), "--style", "cartoonish", "--aspect-ratio", "1:1"]
    )
    capsys.readouterr()
    saved = storage.load_settings(storage.StoragePaths(store))
    assert saved is not None
    assert (saved.style, saved.aspect_ratio, saved.tone) == ("cartoonish", "1:1", "cinematic")

    parse_documents.main(["prompts", "--store", str(store), "--tone", "moody"])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("[scene-1] (1:1) A city skyline at sunrise")
    assert lines[0].endswith("cartoonish style, moody, cinematic lighting")
    saved = storage.load_settings(storage.StoragePaths(store))
    assert saved is not None
    assert saved.tone == "moody"


def test_prompts_without_stored_document_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="No stored document"):
        parse_documents.main(["prompts", "--store", str(tmp_path)])


def test_export_command(tmp_path: Path, samples_dir: Path) -> None:
    output = tmp_path / "parable.zip"
    parse_documents.main(["export", str(samples_dir / "parable.txt"), "--output", str(output)])
    with zipfile.ZipFile(output) as archive:
        assert "scripts/voiceover_script.txt" in archive.namelist()


def test_missing_file_exits(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Path not found"):
        parse_documents.main(["parse", str(tmp_path / "missing.txt")])
