"""Tests for the omni-agent CLI."""

import os

import pytest

from omni_agent import cli

posix_only = pytest.mark.skipif(os.name == "nt", reason="requires a POSIX shell")


class TestRun:
    @posix_only
    def test_prints_output(self, write_cpi, capsys):
        path = write_cpi({"start_container": {"command": "echo started {name}"}})
        code = cli.main(["run", "start_container", "--cpi", str(path), "-p", "name=web"])
        assert code == 0
        assert capsys.readouterr().out == "started web\n"

    @posix_only
    def test_create_container_options(self, write_cpi, capsys):
        path = write_cpi({"create_container": {"command": "echo {image} {name} {ports} {env}"}})
        code = cli.main(
            [
                "run",
                "create_container",
                "--cpi",
                str(path),
                "-p",
                "image=nginx",
                "-p",
                "name=web",
                "--port",
                "80:80",
                "-e",
                "MODE=prod",
            ]
        )
        assert code == 0
        assert capsys.readouterr().out == "nginx web 80:80 MODE:prod\n"

    @posix_only
    def test_failure_exit_code(self, write_cpi, capsys):
        path = write_cpi({"start_container": {"command": "echo 'No such container: {name}' >&2; exit 1"}})
        code = cli.main(["run", "start_container", "--cpi", str(path), "-p", "name=web"])
        assert code == 1
        assert "NonZeroExit: No such container: web" in capsys.readouterr().err

    def test_undefined_action(self, write_cpi, capsys):
        path = write_cpi({})
        code = cli.main(["run", "list_containers", "--cpi", str(path)])
        assert code == 1
        assert "ActionNotDefined" in capsys.readouterr().err

    def test_missing_parameter(self, write_cpi, capsys):
        path = write_cpi({"start_container": {"command": "docker start {name}"}})
        code = cli.main(["run", "start_container", "--cpi", str(path)])
        assert code == 2
        assert "Invalid parameters" in capsys.readouterr().err

    def test_malformed_param(self, write_cpi, capsys):
        path = write_cpi({"start_container": {"command": "docker start {name}"}})
        code = cli.main(["run", "start_container", "--cpi", str(path), "-p", "name"])
        assert code == 2

    def test_unsafe_name_is_not_run(self, write_cpi, tmp_path, capsys):
        marker = tmp_path / "pwned"
        path = write_cpi({"start_container": {"command": "docker start {name}"}})
        code = cli.main(
            ["run", "start_container", "--cpi", str(path), "-p", f"name=web;touch {marker}"]
        )
        assert code == 2
        assert "Invalid parameters" in capsys.readouterr().err
        assert not marker.exists()

    def test_unknown_tag_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            cli.main(["run", "scale_container"])


class TestActions:
    def test_lists_actions(self, write_cpi, capsys):
        path = write_cpi(
            {
                "start_container": {"command": "docker start {name}"},
                "create_container": {"command": "docker run {image}", "post_exec": ["a", "b"]},
            }
        )
        assert cli.main(["actions", "--cpi", str(path)]) == 0
        out = capsys.readouterr().out
        assert "start_container: docker start {name}\n" in out
        assert "create_container: docker run {image} (+2 post-exec)\n" in out

    def test_missing_file(self, tmp_path, capsys):
        assert cli.main(["actions", "--cpi", str(tmp_path / "gone.json")]) == 1
        assert "ConfigNotFound" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "omni-agent" in capsys.readouterr().out
