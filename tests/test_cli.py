"""
CLI tests — argument handling, prompting, exit codes and report output.
"""
import sys
from unittest import mock
import pytest
from dupfind.cli import CLIApplication, main


def _run_cli(argv):
    app = CLIApplication()
    app.run(argv)
    return app


class TestArgumentHandling:
    def test_defaults(self):
        args = CLIApplication.parse_args(["--input", "/data"])
        assert args.input == "/data"
        assert args.min_size is None
        assert args.max_size is None
        assert args.excluded_dirs == []
        assert args.workers == 1
        assert not args.quiet and not args.verbose

    @pytest.mark.parametrize("raw, expected", [
        ('"/path/with space"', "/path/with space"),
        ("'/quoted'", "/quoted"),
        ("/plain", "/plain"),
        ('"/unbalanced', '"/unbalanced'),
        ('"', '"'),
        ("  /padded  ", "/padded"),
    ])
    def test_strip_quotes(self, raw, expected):
        assert CLIApplication.strip_quotes(raw) == expected

    def test_create_params_converts_sizes(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args(["-i", str(temp_dir), "--min-size", "1KB", "--max-size", "2MB", "-w", "3"])
        params = app.create_params(args, str(temp_dir))

        assert params.min_size_bytes == 1024
        assert params.max_size_bytes == 2 * 1024 * 1024
        assert params.max_workers == 3

    def test_invalid_size_exits(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli(["-i", str(temp_dir), "--min-size", "lots"])
        assert exc.value.code == 1
        assert "Parameter error" in capsys.readouterr().err

    def test_max_less_than_min_exits(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli(["-i", str(temp_dir), "--min-size", "2KB", "--max-size", "1KB"])
        assert exc.value.code == 1


class TestInvalidRoot:
    def test_missing_directory_exits_with_error(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            _run_cli(["--input", str(temp_dir / "missing")])
        assert exc.value.code == 1
        assert "Directory does not exist" in capsys.readouterr().err

    def test_file_instead_of_directory_exits(self, temp_dir, capsys):
        path = temp_dir / "file.txt"
        path.write_bytes(b"x")
        with pytest.raises(SystemExit) as exc:
            _run_cli(["--input", str(path)])
        assert exc.value.code == 1
        assert "not a directory" in capsys.readouterr().err

    def test_empty_prompt_answer_exits(self, capsys):
        with mock.patch("builtins.input", return_value="   "):
            with pytest.raises(SystemExit) as exc:
                _run_cli([])
        assert exc.value.code == 1
        assert "No directory provided" in capsys.readouterr().err

    def test_zero_workers_exits(self, temp_dir):
        with pytest.raises(SystemExit):
            _run_cli(["--input", str(temp_dir), "--workers", "0"])


class TestOutput:
    def test_prints_groups_and_total(self, temp_dir, capsys):
        (temp_dir / "a").write_bytes(b"X" * 100)
        (temp_dir / "b").write_bytes(b"X" * 100)
        (temp_dir / "c").write_bytes(b"Y" * 100)

        _run_cli(["--input", str(temp_dir)])
        out = capsys.readouterr().out

        assert "Results: Found 1 duplicate groups" in out
        assert "Group 1: 2 files, 100.00 B each, wasted: 100.00 B" in out
        assert f"  - {temp_dir / 'a'}" in out
        assert f"  - {temp_dir / 'b'}" in out
        assert str(temp_dir / "c") not in out.split("Results:")[1]
        assert "Total wasted space: 100.00 B" in out

    def test_prompts_for_directory_and_strips_quotes(self, temp_dir, capsys):
        (temp_dir / "a").write_bytes(b"same")
        (temp_dir / "b").write_bytes(b"same")

        with mock.patch("builtins.input", return_value=f'"{temp_dir}"') as prompt:
            _run_cli([])

        prompt.assert_called_once_with("Enter directory path: ")
        assert "Results: Found 1 duplicate groups" in capsys.readouterr().out

    def test_no_duplicates(self, temp_dir, capsys):
        (temp_dir / "a").write_bytes(b"1")
        (temp_dir / "b").write_bytes(b"22")

        _run_cli(["--input", str(temp_dir)])
        out = capsys.readouterr().out

        assert "Results: Found 0 duplicate groups" in out
        assert "Total wasted space: 0.00 B" in out

    def test_quiet_prints_summary_only(self, temp_dir, capsys):
        (temp_dir / "a").write_bytes(b"K" * 2048)
        (temp_dir / "b").write_bytes(b"K" * 2048)

        _run_cli(["--input", str(temp_dir), "--quiet"])
        out = capsys.readouterr().out

        assert out.strip() == "1 duplicate groups, total wasted space: 2.00 KB"

    def test_verbose_prints_statistics(self, temp_dir, capsys):
        (temp_dir / "a").write_bytes(b"same")
        (temp_dir / "b").write_bytes(b"same")

        app = _run_cli(["--input", str(temp_dir), "--verbose"])
        out = capsys.readouterr().out

        assert app.verbose
        assert "Deduplication Statistics:" in out
        assert "Scanned 2 files" in out
        assert "Completed in" in out

    def test_skipped_entries_reported(self, temp_dir, capsys, monkeypatch):
        (temp_dir / "a").write_bytes(b"same")
        (temp_dir / "b").write_bytes(b"same")
        (temp_dir / "c").write_bytes(b"same")

        from dupfind.core.hasher import HasherImpl
        original = HasherImpl.compute_hash

        def flaky(self, path, limit=None):
            if path.endswith("c"):
                return ""
            return original(self, path, limit)

        monkeypatch.setattr(HasherImpl, "compute_hash", flaky)

        _run_cli(["--input", str(temp_dir), "--verbose"])
        out = capsys.readouterr().out

        assert "Skipped 1 entries:" in out
        assert f"[Partial Hash] {temp_dir / 'c'}: unreadable" in out
        assert "Group 1: 2 files" in out


class TestMain:
    def test_keyboard_interrupt_exits_130(self):
        with mock.patch.object(CLIApplication, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc:
                main()
        assert exc.value.code == 130

    def test_unexpected_error_exits_1(self, capsys, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run", side_effect=RuntimeError("boom")):
            with pytest.raises(SystemExit) as exc:
                main()
        assert exc.value.code == 1
        assert "Unexpected error: boom" in capsys.readouterr().err

    def test_debug_env_reraises(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        with mock.patch.object(CLIApplication, "run", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                main()

    def test_main_reads_sys_argv(self, temp_dir, capsys):
        with mock.patch.object(sys, "argv", ["dupfind", "--input", str(temp_dir), "-q"]):
            main()
        assert "0 duplicate groups" in capsys.readouterr().out
