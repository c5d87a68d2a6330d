from __future__ import annotations

from collections.abc import Callable

from content_studio.script_parser import parse_document
from content_studio.script_parser.assemble import derive_search_hint
from content_studio.script_parser.model import DocType, Scene, VisualCue


def test_derive_search_hint_cuts_at_period_then_comma() -> None:
    prompt = "A lighthouse at dusk, golden light. extra clause"
    assert derive_search_hint(prompt) == "A lighthouse at dusk"
    assert derive_search_hint("  no punctuation at all  ") == "no punctuation at all"
    assert derive_search_hint("") == ""


def test_parable_scenes_keep_source_numbers_and_order(
    read_sample: Callable[[str], str],
) -> None:
    document = parse_document(read_sample("parable.txt"))
    assert document.doc_type is DocType.YOUTUBE_SHORT
    assert document.title == "The Potter and the Cracked Jar"
    assert document.topic == document.title
    assert [scene.scene_number for scene in document.scenes] == [1, 3, 4]
    first = document.scenes[0]
    assert first.background_prompt == (
        "An old potter walking a dusty path at sunrise, warm golden light. Wide shot."
    )
    assert first.pexels_search == "An old potter walking a dusty path at sunrise"
    assert first.text_overlay == "Every morning, the old potter walked to the well."
    assert document.scenes[1].text_overlay == "One jar was cracked, and it leaked along the way."
    assert document.scenes[2].text_overlay == ""
    assert document.scenes[2].pexels_search == "Wildflowers blooming along the path"
    assert document.visual_cues == ()


def test_parable_voiceover_includes_scenes_without_visuals(
    read_sample: Callable[[str], str],
) -> None:
    document = parse_document(read_sample("parable.txt"))
    assert document.voiceover_script == (
        "Scene 1: Every morning, the old potter walked to the well.\n\n"
        "Scene 3: One jar was cracked, and it leaked along the way.\n\n"
        "Scene 2: But the potter never replaced it."
    )
    assert document.summary == (
        "A potter kept a cracked jar beside the well.\n"
        "Each morning it leaked water on the path, and flowers grew where it dripped."
    )
    assert document.transparent_image_prompt == (
        "A glowing cracked jar on a wooden table, bold title text"
    )


def test_parable_without_title_uses_default() -> None:
    content = "🎬 Title:\n🎬 Scene-by-Scene Script\nScene 1\n🖼 Visual: A quiet lake"
    document = parse_document(content)
    assert document.title == "Untitled Story"
    assert document.scenes == (
        Scene(
            scene_number=1,
            background_prompt="A quiet lake",
            text_overlay="",
            pexels_search="A quiet lake",
        ),
    )


def test_short_form_numbers_scenes_by_sequence(read_sample: Callable[[str], str]) -> None:
    document = parse_document(read_sample("short_form.md"))
    assert document.doc_type is DocType.YOUTUBE_SHORT
    assert document.title == "Five Habits of Calm People"
    assert document.transparent_image_prompt == (
        "A serene person meditating on a cliff at dawn, minimalist."
    )
    assert [scene.scene_number for scene in document.scenes] == [1, 2, 3]
    first, second, third = document.scenes
    assert first.background_prompt == "A quiet bedroom at dawn, soft light through curtains."
    assert first.text_overlay == "Wake up slowly"
    assert first.pexels_search == "Wake up slowly"
    assert second.text_overlay == ""
    assert second.pexels_search == "A steaming cup of tea on a windowsill, rain outside"
    assert third.background_prompt == ""
    assert third.pexels_search == "Breathe"


def test_short_form_voiceover(read_sample: Callable[[str], str]) -> None:
    document = parse_document(read_sample("short_form.md"))
    assert document.voiceover_script == (
        "Scene 1: Calm people never rush the first minutes of their day.\n\n"
        "Scene 2: They make time for one small ritual.\n\n"
        "Scene 3: And they breathe before they answer."
    )


def test_podcast_segments(read_sample: Callable[[str], str]) -> None:
    document = parse_document(read_sample("podcast_segments.txt"))
    assert document.doc_type is DocType.PODCAST
    assert document.title == "The Science of Sleep"
    assert document.summary == (
        "Sleep is a skill you can train.\nSmall habits compound into better rest."
    )
    assert document.scenes == ()
    assert document.visual_cues == (
        VisualCue(
            cue_point="Introduction (0:00-2:00)",
            image_type="",
            background_prompt=(
                "A host in a cozy studio holding a coffee mug, warm lamps. Evening mood"
            ),
            purpose="Hook the listener with a surprising fact.",
            pexels_search="A host in a cozy studio holding a coffee mug",
        ),
        VisualCue(
            cue_point="Practical Tips (8:00-12:00)",
            image_type="",
            background_prompt="A dark bedroom with blackout curtains",
            purpose="Give listeners three actions.",
            pexels_search="A dark bedroom with blackout curtains",
        ),
    )


def test_podcast_segment_voiceover_uses_cue_labels(read_sample: Callable[[str], str]) -> None:
    document = parse_document(read_sample("podcast_segments.txt"))
    assert document.voiceover_script == (
        "Introduction (0:00-2:00):\n"
        "Did you know that one in three adults doesn't get enough sleep?\n\n"
        "The Sleep Cycle (2:00-8:00):\n"
        "Every night you cycle through four distinct stages.\n\n"
        "Practical Tips (8:00-12:00):\n"
        "Keep your room cool, dark, and quiet."
    )


def test_parsing_is_idempotent(read_sample: Callable[[str], str]) -> None:
    for name in ("parable.txt", "short_form.md", "podcast_segments.txt", "reels.txt"):
        content = read_sample(name)
        assert parse_document(content) == parse_document(content)
