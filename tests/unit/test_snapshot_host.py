"""Tests for generator wiring and host build passes."""

from __future__ import annotations

import msgspec
import pytest

from host_model.state import HostState
from incremental.cancellation import CancellationToken
from incremental.generator import ConfigSnapshotGenerator, GeneratorContext
from incremental.host import SnapshotHost
from incremental.providers import InputProvider
from incremental.sink import InMemoryArtifactSink
from incremental.stage import PipelineStage
from incremental.types import (
    ADDITIONAL_TEXTS_HINT,
    COMPILATION_HINT,
    GLOBAL_OPTIONS_HINT,
    HINT_NAMES,
    PARSE_OPTIONS_HINT,
    SYNTAX_TREES_HINT,
)
from tests.test_helpers.host_states import with_flag


def _run(host: SnapshotHost, token: CancellationToken | None = None) -> InMemoryArtifactSink:
    sink = InMemoryArtifactSink()
    host.run_pass(sink, token)
    return sink


def _formatter_calls(host: SnapshotHost) -> dict[str, int]:
    return {stage.hint_name: stage.stats.formatter_calls for stage in host.context.stages}


def test_disabled_flag_emits_nothing(disabled_host_state: HostState) -> None:
    """Ensure no artifacts are produced when the flag is missing."""
    host = SnapshotHost()
    host.apply(disabled_host_state)
    sink = InMemoryArtifactSink()
    report = host.run_pass(sink)
    assert sink.artifacts == {}
    assert report.registered == ()
    assert report.skipped == HINT_NAMES
    assert set(_formatter_calls(host).values()) == {0}


@pytest.mark.parametrize("value", ["false", "1", "", None])
def test_non_true_flag_values_emit_nothing(
    disabled_host_state: HostState,
    value: str | None,
) -> None:
    """Ensure flag values other than true keep every stage gated off."""
    host = SnapshotHost()
    host.apply(with_flag(disabled_host_state, value))
    assert _run(host).artifacts == {}


def test_enabled_flag_emits_all_snapshots(host_state: HostState) -> None:
    """Ensure all five artifacts are registered in stage order."""
    host = SnapshotHost()
    host.apply(host_state)
    sink = _run(host)
    assert list(sink.artifacts) == list(HINT_NAMES)
    assert '= "true"' in sink.artifacts[GLOBAL_OPTIONS_HINT]


def test_additional_texts_keep_host_order(host_state: HostState) -> None:
    """Ensure additional texts render in the order the host supplied them."""
    host = SnapshotHost()
    host.apply(host_state)
    text = _run(host).artifacts[ADDITIONAL_TEXTS_HINT]
    assert text.index("// [/src/fileB.txt]:") < text.index("// [/src/fileA.txt]:")
    assert '//   |> [kind]  = "b"' in text
    assert '//   |> [kind]  = "a"' in text


def test_compilation_references_and_aliases(host_state: HostState) -> None:
    """Ensure reference tags, interop suffix and alias order are preserved."""
    host = SnapshotHost()
    host.apply(host_state)
    text = _run(host).artifacts[COMPILATION_HINT]
    assert text.endswith(
        "//   | 'lib/Extra.dll' #r Assembly\n"
        "//     > [Alias]: zeta\n"
        "//     > [Alias]: alpha\n"
        "//   | '/ref/Interop.dll' ex Assembly (EmbedInteropTypes)\n"
        "//   | '/ref/Native.netmodule' ex Module\n"
    )


def test_repeated_pass_is_idempotent(host_state: HostState) -> None:
    """Ensure a second pass over unchanged inputs reuses every snapshot."""
    host = SnapshotHost()
    host.apply(host_state)
    first = _run(host).artifacts
    assert host.apply(host_state) == ()
    second = _run(host).artifacts
    assert first == second
    assert set(_formatter_calls(host).values()) == {1}
    assert all(stage.stats.cache_hits == 1 for stage in host.context.stages)


def test_parse_option_change_recomputes_only_its_stage(host_state: HostState) -> None:
    """Ensure an input change reruns only the stages that read it."""
    host = SnapshotHost()
    host.apply(host_state)
    _run(host)
    changed = msgspec.structs.replace(
        host_state,
        parse_options=msgspec.structs.replace(host_state.parse_options, kind="Script"),
    )
    assert host.apply(changed) == ("parse_options",)
    sink = _run(host)
    assert "// [Kind]:                    Script\n" in sink.artifacts[PARSE_OPTIONS_HINT]
    calls = _formatter_calls(host)
    assert calls[PARSE_OPTIONS_HINT] == 2
    assert calls[COMPILATION_HINT] == 1
    assert calls[GLOBAL_OPTIONS_HINT] == 1


def test_unrelated_file_option_change_keeps_syntax_trees(host_state: HostState) -> None:
    """Ensure per-path option edits only affect snapshots that include the path."""
    host = SnapshotHost()
    host.apply(host_state)
    _run(host)
    file_options = dict(host_state.file_options)
    file_options["/src/fileA.txt"] = {"kind": "changed"}
    host.apply(msgspec.structs.replace(host_state, file_options=file_options))
    sink = _run(host)
    assert '"changed"' in sink.artifacts[ADDITIONAL_TEXTS_HINT]
    calls = _formatter_calls(host)
    assert calls[ADDITIONAL_TEXTS_HINT] == 2
    assert calls[SYNTAX_TREES_HINT] == 1
    assert calls[COMPILATION_HINT] == 1


def test_disabling_flag_drops_artifacts(host_state: HostState) -> None:
    """Ensure turning the flag off stops registering artifacts."""
    host = SnapshotHost()
    host.apply(host_state)
    assert len(_run(host).artifacts) == len(HINT_NAMES)
    host.apply(with_flag(host_state, "false"))
    assert _run(host).artifacts == {}


def test_cancelled_pass_emits_nothing_and_recovers(host_state: HostState) -> None:
    """Ensure a cancelled pass registers nothing and the next pass completes."""
    host = SnapshotHost()
    host.apply(host_state)
    token = CancellationToken()
    token.cancel()
    sink = InMemoryArtifactSink()
    report = host.run_pass(sink, token)
    assert sink.artifacts == {}
    assert report.registered == ()
    assert list(_run(host).artifacts) == list(HINT_NAMES)


def test_pass_report_tracks_changed_inputs(host_state: HostState) -> None:
    """Ensure the report lists inputs changed since the previous pass."""
    host = SnapshotHost()
    host.apply(host_state)
    report = host.run_pass(InMemoryArtifactSink())
    assert set(report.changed_inputs) == {
        "options",
        "additional_texts",
        "parse_options",
        "compilation",
    }
    assert report.stage_stats[PARSE_OPTIONS_HINT]["formatter_calls"] == 1
    assert host.run_pass(InMemoryArtifactSink()).changed_inputs == ()


def test_custom_property_name(host_state: HostState) -> None:
    """Ensure the generator can be gated on a different build property."""
    host = SnapshotHost(ConfigSnapshotGenerator("OtherFlag"))
    host.apply(host_state)
    assert _run(host).artifacts == {}
    global_options = {**host_state.global_options, "build_property.OtherFlag": "True"}
    host.apply(msgspec.structs.replace(host_state, global_options=global_options))
    assert len(_run(host).artifacts) == len(HINT_NAMES)


def test_duplicate_hint_registration_is_rejected() -> None:
    """Ensure two stages cannot share a hint name."""
    gate = InputProvider("gate", True)
    context = GeneratorContext(
        options=InputProvider("options", None),
        additional_texts=InputProvider("additional_texts", ()),
        parse_options=InputProvider("parse_options", None),
        compilation=InputProvider("compilation", None),
    )
    source = InputProvider("source", "x")
    context.register_source_output(PipelineStage(gate, source, lambda v, _c: v, "_X"))
    with pytest.raises(ValueError, match="_X"):
        context.register_source_output(PipelineStage(gate, source, lambda v, _c: v, "_X"))


def test_package_exports_resolve_lazily() -> None:
    """Ensure the incremental package re-exports its public names on access."""
    import incremental

    assert incremental.SnapshotHost is SnapshotHost
    assert incremental.HINT_NAMES == HINT_NAMES
    with pytest.raises(AttributeError):
        _ = incremental.NotAThing
