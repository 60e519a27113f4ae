from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakeMedia, FakeVoice, make_words
from infill_eval.models.trial import EvaluationTrial, TrialStatus
from infill_eval.models.word import Word
from infill_eval.pipeline.artifacts import build_trial_artifacts
from infill_eval.pipeline.driver import InfillTrialRunner
from infill_eval.providers.media.base import JoinOptions
from infill_eval.utils.segment_boundaries import compute_boundaries


def _trial(start_index: int = 0) -> EvaluationTrial:
    return EvaluationTrial(
        index=1,
        source_audio="/src/example.mp3",
        start_index=start_index,
        left_count=6,
        middle_count=3,
        right_count=6,
        voice_id="voice-123",
    )


def _runner(tmp_path, media: FakeMedia, voice: FakeVoice, **kwargs) -> InfillTrialRunner:
    return InfillTrialRunner(
        media=media,
        voice=voice,
        output_dir=tmp_path / "out",
        source_key="src-key",
        **kwargs,
    )


@pytest.mark.asyncio
async def test_run_extracts_contexts_infills_and_joins(tmp_path) -> None:
    media, voice = FakeMedia(), FakeVoice()
    runner = _runner(tmp_path, media, voice, join_options=JoinOptions("crossfade", 0.05))
    words = make_words(21)

    result = await runner.run(_trial(), words)

    assert result.status == TrialStatus.COMPLETED
    assert result.middle_text == "w6 w7 w8"
    final = Path(result.final_path)
    assert final.read_bytes() == b"joined"
    assert final.name.startswith("001-final-w0-w1-w2")

    extracts = media.names("extract")
    assert [c[1].split("-")[1] for c in extracts] == ["left", "right"]
    assert extracts[0][2:] == (words[0].start, words[5].end)
    assert extracts[1][2:] == (words[9].start, words[14].end)
    assert [c[0] for c in media.calls] == ["extract", "extract", "fade_out", "fade_in", "join"]

    call = voice.infill_calls[0]
    assert call["transcript"] == "w6 w7 w8"
    assert call["voice_id"] == "voice-123"
    assert call["left"].endswith("-faded.wav") and call["right"].endswith("-faded.wav")
    assert call["left_exists"]

    join = media.names("join")[0]
    assert [n.split("-")[1] for n in join[1]] == ["left", "gen", "right"]
    assert join[3] == JoinOptions("crossfade", 0.05)

    out = tmp_path / "out"
    assert not list(out.glob("*-faded.wav"))
    assert not list(out.glob("*.partial.wav"))
    assert len(list(out.glob("001-gen-*.wav"))) == 1


@pytest.mark.asyncio
async def test_run_skips_when_final_exists(tmp_path) -> None:
    media, voice = FakeMedia(), FakeVoice()
    runner = _runner(tmp_path, media, voice)
    words = make_words(21)
    trial = _trial()
    artifacts = build_trial_artifacts(
        tmp_path / "out", trial, compute_boundaries(words, 0, 6, 3, 6), source_key="src-key"
    )
    artifacts.final.parent.mkdir(parents=True)
    artifacts.final.write_bytes(b"old")

    assert runner.is_complete(trial, words)
    result = await runner.run(trial, words)

    assert result.status == TrialStatus.SKIPPED
    assert result.final_path == str(artifacts.final)
    assert media.calls == []
    assert voice.infill_calls == []


@pytest.mark.asyncio
async def test_changed_transcript_is_not_masked_by_old_final(tmp_path) -> None:
    media, voice = FakeMedia(), FakeVoice()
    runner = _runner(tmp_path, media, voice)
    words = make_words(21)
    await runner.run(_trial(), words)

    edited = list(words)
    edited[7] = Word(text=" changed", start=words[7].start, duration=words[7].duration)

    assert not runner.is_complete(_trial(), edited)


@pytest.mark.asyncio
async def test_failed_join_leaves_no_final_file(tmp_path) -> None:
    media, voice = FakeMedia(fail_join_on_call=1), FakeVoice()
    runner = _runner(tmp_path, media, voice)
    words = make_words(21)

    with pytest.raises(RuntimeError):
        await runner.run(_trial(), words)

    assert not runner.is_complete(_trial(), words)
    assert not list((tmp_path / "out").glob("*final*"))


@pytest.mark.asyncio
async def test_failed_infill_still_removes_faded_copies(tmp_path) -> None:
    media, voice = FakeMedia(), FakeVoice(fail_transcripts={"w6 w7 w8"})
    runner = _runner(tmp_path, media, voice)

    with pytest.raises(Exception, match="cannot infill"):
        await runner.run(_trial(), make_words(21))

    assert not list((tmp_path / "out").glob("*-faded.wav"))
    assert media.names("join") == []


@pytest.mark.asyncio
async def test_zero_fade_sends_raw_contexts(tmp_path) -> None:
    media, voice = FakeMedia(), FakeVoice()
    runner = _runner(tmp_path, media, voice, fade_s=0)

    await runner.run(_trial(), make_words(21))

    assert media.names("fade_in") == media.names("fade_out") == []
    assert "-faded" not in voice.infill_calls[0]["left"]
