"""Tests for JSON-Lines sink plugin."""

import json
from pathlib import Path

import pytest

from jsonds.contracts import DataStoreParams
from jsonds.plugins.config_base import PluginConfigError
from jsonds.plugins.protocols import SinkProtocol


class TestJSONLSink:
    """Tests for JSONLSink plugin."""

    @pytest.fixture
    def params(self) -> DataStoreParams:
        return DataStoreParams.from_dict({"files": "in.jsonl"})

    def test_implements_protocol(self) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        sink = JSONLSink({"path": "/tmp/test.jsonl"})
        assert isinstance(sink, SinkProtocol)
        assert JSONLSink.name == "jsonl"

    def test_writes_one_line_per_record(self, tmp_path: Path, params: DataStoreParams) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "out.jsonl"
        sink = JSONLSink({"path": str(output)})

        sink.store(params, {"id": "1", "title": "Test"})
        sink.store(params, {"id": "2", "tags": ["a", "b"]})
        sink.close()

        lines = output.read_text().splitlines()
        assert [json.loads(line) for line in lines] == [
            {"id": "1", "title": "Test"},
            {"id": "2", "tags": ["a", "b"]},
        ]
        assert sink.records_written == 2

    def test_no_file_until_first_store(self, tmp_path: Path) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "nested" / "out.jsonl"
        sink = JSONLSink({"path": str(output)})
        sink.close()

        assert not output.exists()

    def test_creates_parent_directories(self, tmp_path: Path, params: DataStoreParams) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "a" / "b" / "out.jsonl"
        sink = JSONLSink({"path": str(output)})
        sink.store(params, {"x": 1})
        sink.close()

        assert output.exists()
        assert sink.path == str(output)

    def test_append_mode_keeps_existing_lines(
        self, tmp_path: Path, params: DataStoreParams
    ) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "out.jsonl"
        output.write_text('{"old": true}\n')

        sink = JSONLSink({"path": str(output), "mode": "append"})
        sink.store(params, {"new": True})
        sink.close()

        assert output.read_text().splitlines() == ['{"old": true}', '{"new": true}']

    def test_write_mode_truncates(self, tmp_path: Path, params: DataStoreParams) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "out.jsonl"
        output.write_text('{"old": true}\n')

        sink = JSONLSink({"path": str(output)})
        sink.store(params, {"new": True})
        sink.close()

        assert output.read_text() == '{"new": true}\n'

    def test_non_ascii_written_verbatim(self, tmp_path: Path, params: DataStoreParams) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "out.jsonl"
        sink = JSONLSink({"path": str(output)})
        sink.store(params, {"title": "テスト"})
        sink.close()

        assert "テスト" in output.read_text(encoding="utf-8")

    def test_unserializable_record_raises_and_writes_nothing(
        self, tmp_path: Path, params: DataStoreParams
    ) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        output = tmp_path / "out.jsonl"
        sink = JSONLSink({"path": str(output)})
        sink.store(params, {"ok": 1})

        with pytest.raises(TypeError):
            sink.store(params, {"bad": object()})
        sink.close()

        assert output.read_text() == '{"ok": 1}\n'
        assert sink.records_written == 1

    def test_close_is_idempotent(self, tmp_path: Path, params: DataStoreParams) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        sink = JSONLSink({"path": str(tmp_path / "out.jsonl")})
        sink.store(params, {"x": 1})
        sink.flush()
        sink.close()
        sink.close()

    def test_invalid_mode_rejected(self, tmp_path: Path) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        with pytest.raises(PluginConfigError):
            JSONLSink({"path": str(tmp_path / "o.jsonl"), "mode": "overwrite"})

    def test_path_required(self) -> None:
        from jsonds.plugins.sinks.jsonl_sink import JSONLSink

        with pytest.raises(PluginConfigError):
            JSONLSink({})
