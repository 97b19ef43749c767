"""
Command-line tests using click's CliRunner
"""
import json

import pytest

from priority_desk.cli import cli
from priority_desk.db import TASKS_KEY, Store


@pytest.fixture
def invoke(runner, store_path):
    def _invoke(*args):
        return runner.invoke(cli, ["--db", str(store_path), *args])

    return _invoke


class TestBoardCommands:
    def test_add_classifies_and_persists(self, invoke, store_path):
        result = invoke("add", "Urgent:", "fix", "critical", "bug", "today")
        assert result.exit_code == 0
        assert "DELEGATE" in result.output

        with Store(store_path) as store:
            tasks = store.load_tasks()
        assert len(tasks) == 1
        assert tasks[0].text == "Urgent: fix critical bug today"
        assert tasks[0].quadrant == "urgent-not-important"

    def test_add_blank(self, invoke, store_path):
        result = invoke("add", "   ")
        assert result.exit_code == 0
        assert "nothing added" in result.output
        with Store(store_path) as store:
            assert store.load_tasks() == ()

    def test_board(self, invoke):
        invoke("add", "Plan our strategic growth goal")
        result = invoke("board")
        assert result.exit_code == 0
        assert "SCHEDULE" in result.output
        assert "Plan our strategic growth goal" in result.output

    def test_board_empty(self, invoke):
        result = invoke("board")
        assert result.exit_code == 0
        assert "No tasks yet" in result.output

    def test_move_and_delete(self, invoke, store_path):
        invoke("add", "water the plants")
        with Store(store_path) as store:
            task_id = store.load_tasks()[0].id

        result = invoke("move", task_id, "urgent-important")
        assert result.exit_code == 0
        with Store(store_path) as store:
            assert store.load_tasks()[0].quadrant == "urgent-important"

        result = invoke("delete", task_id)
        assert result.exit_code == 0
        with Store(store_path) as store:
            assert store.load_tasks() == ()

    def test_move_unknown_task(self, invoke):
        result = invoke("move", "123", "urgent-important")
        assert result.exit_code == 0
        assert "not found" in result.output

    def test_move_rejects_bad_quadrant(self, invoke):
        result = invoke("move", "123", "someday")
        assert result.exit_code != 0

    def test_classify(self, invoke):
        result = invoke("classify", "URGENT", "and", "important")
        assert result.exit_code == 0
        assert "DO FIRST" in result.output
        assert "urgent" in result.output

    def test_corrupt_store_is_reported(self, invoke, store_path):
        with Store(store_path) as store:
            store.put_record(TASKS_KEY, {"not": "a list"})
        result = invoke("board")
        assert result.exit_code == 0
        assert "invalid" in result.output
        assert "desk reset tasks" in result.output

    def test_reset(self, invoke, store_path):
        invoke("add", "something")
        assert "Refusing" in invoke("reset", "tasks").output
        result = invoke("reset", "tasks", "--yes")
        assert result.exit_code == 0
        with Store(store_path) as store:
            assert store.load_tasks() == ()


class TestBlueprintCommands:
    @pytest.fixture
    def files(self, tmp_path, sample_kcs):
        ir = tmp_path / "rules.md"
        ir.write_text("You are a helpful assistant.\n\n\n\n* be polite", encoding="utf-8")
        kcs = tmp_path / "kb.txt"
        kcs.write_text(sample_kcs, encoding="utf-8")
        return ir, kcs

    def test_save_and_list(self, invoke, files):
        ir, kcs = files
        result = invoke("save", "bot", "--ir", str(ir), "--kcs", str(kcs), "--format", "jsonl")
        assert result.exit_code == 0
        assert "saved successfully" in result.output

        result = invoke("blueprints")
        assert "bot" in result.output
        assert "jsonl" in result.output

    def test_save_blank_name(self, invoke, store_path):
        result = invoke("save", "  ")
        assert result.exit_code == 0
        assert "Please enter a blueprint name" in result.output
        with Store(store_path) as store:
            assert store.load_blueprints() == ()

    def test_save_missing_file_keeps_field(self, invoke, store_path, files, tmp_path):
        ir, _ = files
        invoke("save", "bot", "--ir", str(ir))
        result = invoke("save", "bot", "--ir", str(tmp_path / "absent.md"))
        assert result.exit_code == 0
        with Store(store_path) as store:
            saved = store.load_blueprints()
        assert saved[0].data.instructional_ruleset == ir.read_text(encoding="utf-8")

    def test_import_file(self, invoke, store_path, files):
        _, kcs = files
        invoke("save", "bot")
        result = invoke("import-file", "bot", "kcs", str(kcs))
        assert result.exit_code == 0
        with Store(store_path) as store:
            saved = store.load_blueprints()
        assert saved[0].data.knowledge_compendium == kcs.read_text(encoding="utf-8")

    def test_import_file_unknown_blueprint(self, invoke, files):
        ir, _ = files
        result = invoke("import-file", "ghost", "ir", str(ir))
        assert "not found" in result.output

    def test_export(self, invoke, files, tmp_path):
        ir, kcs = files
        invoke("save", "bot", "--ir", str(ir), "--kcs", str(kcs))
        out = tmp_path / "out"
        result = invoke("export", "bot", "--out", str(out), "--chunk-size", "80")
        assert result.exit_code == 0

        assert (out / "bot-IR.md").read_text(encoding="utf-8").startswith("# AI Model Instructional Ruleset")
        segments = json.loads((out / "bot-KCS.json").read_text(encoding="utf-8"))
        assert [s["id"] for s in segments] == ["chunk-0", "chunk-1", "chunk-2"]

    def test_chunks_preview(self, invoke, files):
        _, kcs = files
        invoke("save", "bot", "--kcs", str(kcs))
        result = invoke("chunks", "bot", "--chunk-size", "80")
        assert result.exit_code == 0
        assert "KCS Segments (3)" in result.output

    def test_show_and_remove(self, invoke, files):
        ir, _ = files
        invoke("save", "bot", "--ir", str(ir))
        result = invoke("show", "bot")
        assert result.exit_code == 0
        assert "bot" in result.output

        result = invoke("remove", "bot")
        assert result.exit_code == 0
        assert "No saved blueprints" in invoke("blueprints").output

    def test_save_latin1_file(self, invoke, store_path, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_bytes(b"caf\xe9 rules")
        result = invoke("save", "bot", "--kcs", str(notes))
        assert result.exit_code == 0
        with Store(store_path) as store:
            saved = store.load_blueprints()
        assert saved[0].data.knowledge_compendium == "caf\ufffd rules"

    def test_export_name_with_slash(self, invoke, files, tmp_path):
        _, kcs = files
        invoke("save", "team/bot", "--kcs", str(kcs))
        out = tmp_path / "out"
        result = invoke("export", "team/bot", "--out", str(out))
        assert result.exit_code == 0
        assert (out / "team_bot-IR.md").is_file()
        assert (out / "team_bot-KCS.json").is_file()

    def test_normalize_latin1_file(self, invoke, tmp_path):
        path = tmp_path / "rules.txt"
        path.write_bytes(b"# R\xe9gles\n")
        result = invoke("normalize", str(path))
        assert result.exit_code == 0
        assert result.output == "# R\ufffdgles\n\n"

    def test_normalize(self, invoke, files):
        ir, _ = files
        result = invoke("normalize", str(ir))
        assert result.exit_code == 0
        assert result.output == "# AI Model Instructional Ruleset\n\nYou are a helpful assistant.\n\n- be polite\n"

    def test_stats(self, invoke, files, monkeypatch):
        from priority_desk import stats

        monkeypatch.setattr(stats, "count_tokens", lambda text: 0)
        _, kcs = files
        invoke("add", "Plan our strategic growth goal")
        invoke("save", "bot", "--kcs", str(kcs))
        result = invoke("stats", "bot")
        assert result.exit_code == 0
        assert "SCHEDULE" in result.output
        assert "Actual Chunks" in result.output
