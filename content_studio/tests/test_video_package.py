from __future__ import annotations

from pathlib import Path

import pytest

from content_studio.script_parser import parse_video_package, sources
from content_studio.script_parser.model import DocType, VideoPackage


@pytest.fixture()
def package(samples_dir: Path) -> VideoPackage:
    return sources.load_video_package(samples_dir / "video_package")


def test_package_truncates_to_shorter_block_list(package: VideoPackage) -> None:
    document = parse_video_package(package)
    assert document.doc_type is DocType.YOUTUBE_SHORT
    assert [scene.scene_number for scene in document.scenes] == [1, 2]


def test_package_scene_fields(package: VideoPackage) -> None:
    first, second = parse_video_package(package).scenes
    assert first.text_overlay == (
        "The ocean covers most of our planet. It is still mostly unexplored."
    )
    assert first.background_prompt == "Aerial shot of endless blue ocean at golden hour"
    assert first.action_prompt == "Slow drone push forward Waves catching the light"
    assert first.pexels_search == "ocean aerial waves"
    assert second.action_prompt == "Camera drifts past slowly"
    assert second.pexels_search == "Bioluminescent jellyfish in dark water"


def test_package_metadata_and_branding(package: VideoPackage) -> None:
    document = parse_video_package(package)
    assert document.title == "Secrets of the Deep Ocean"
    assert document.topic == document.title
    assert document.summary == (
        "A short tour of the unexplored ocean.\nWhy it matters for all of us."
    )
    assert document.transparent_image_prompt == "A cartoon submarine mascot, no background"
    assert document.voiceover_script == (
        "Scene 1: The ocean covers most of our planet. It is still mostly unexplored.\n\n"
        "Scene 2: Deep below, creatures make their own light."
    )


def test_package_raw_content_labels_every_part(package: VideoPackage) -> None:
    raw = parse_video_package(package).raw_content
    labels = ["=== SCRIPT ===", "=== VISUALS ===", "=== METADATA ===", "=== BRANDING ==="]
    positions = [raw.index(label) for label in labels]
    assert positions == sorted(positions)
    assert "Deep below, creatures make their own light." in raw


def test_package_rejects_script_blocks_without_scene_marker() -> None:
    package = VideoPackage(
        script="Intro without marker\n---\nScene 4: Only narration",
        visuals="Cinematic Prompts:\n- A forest path",
    )
    document = parse_video_package(package)
    assert len(document.scenes) == 1
    scene = document.scenes[0]
    assert scene.scene_number == 4
    assert scene.background_prompt == "A forest path"
    assert scene.action_prompt == ""
    assert document.title == "Untitled Video"


def test_package_with_no_visuals_has_no_scenes() -> None:
    document = parse_video_package(VideoPackage(script="Scene 1: Hello", visuals=""))
    assert document.scenes == ()
    assert document.voiceover_script == ""


def test_load_video_package_requires_script_and_visuals(tmp_path: Path) -> None:
    (tmp_path / "script.txt").write_text("Scene 1: Hi", encoding="utf-8")
    with pytest.raises(sources.DocumentParseError, match="visuals"):
        sources.load_video_package(tmp_path)


def test_load_video_package_accepts_prefixed_names(tmp_path: Path) -> None:
    (tmp_path / "ocean_script.md").write_text("Scene 1: Hi", encoding="utf-8")
    (tmp_path / "ocean_visuals.txt").write_text("Cinematic Prompts:\n- Waves", encoding="utf-8")
    package = sources.load_video_package(tmp_path)
    assert package.script == "Scene 1: Hi"
    assert package.metadata == ""
    assert parse_video_package(package).scenes[0].pexels_search == "Waves"
