# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import structlog
from click.testing import CliRunner

from typed_extconf.cli.main import cli

TEMPLATE = """\
# cat=basic; type=string; label=API endpoint
api.endpoint = /api

# cat=basic; type=int+; label=Timeout
api.timeout = 30

# cat=advanced; type=boolean; label=Debug mode
debug = 0
"""


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


def _answers(mock: MagicMock, prompt: str, values: list) -> None:
    getattr(mock, prompt).return_value.unsafe_ask.side_effect = values


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "show" in result.output

    def test_generate_help(self):
        result = CliRunner().invoke(cli, ["generate", "--help"])
        assert result.exit_code == 0
        assert "--template" in result.output
        assert "--manual" in result.output

    def test_invalid_tool_settings(self, tmp_path: Path):
        config = tmp_path / "typed-extconf.yaml"
        config.write_text("typed_extconf:\n  logging:\n    level: [1, 2]\n")

        result = CliRunner().invoke(cli, ["--config", str(config), "generate", "--help"])

        assert result.exit_code == 1
        assert "Invalid tool settings" in result.output


class TestGenerateFromTemplate:
    def test_writes_class(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text(TEMPLATE)
        output = tmp_path / "out" / "my_ext_configuration.py"

        result = CliRunner().invoke(
            cli,
            [
                "--config", str(tmp_path / "missing.yaml"),
                "generate",
                "--extension", "my_ext",
                "--template", str(template),
                "--class-name", "MyExtConfiguration",
                "--output", str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        source = output.read_text()
        assert "@extension_config('my_ext')" in source
        assert "class MyExtConfiguration:" in source
        assert "api_endpoint: Annotated[str, ExtConfProperty(path='api.endpoint')] = '/api'" in source
        assert "api_timeout: Annotated[int, ExtConfProperty(path='api.timeout')] = 30" in source
        assert "debug: Annotated[bool, ExtConfProperty()] = False" in source
        assert "Configuration class generated" in result.output

    def test_default_output_uses_configured_directory(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text(TEMPLATE)
        out_dir = tmp_path / "generated"
        config = tmp_path / "typed-extconf.yaml"
        config.write_text(f"typed_extconf:\n  generator:\n    output_dir: {out_dir}\n")

        result = CliRunner().invoke(
            cli,
            ["--config", str(config), "generate", "-e", "shop", "-t", str(template), "-c", "ShopConfiguration"],
        )

        assert result.exit_code == 0, result.output
        assert (out_dir / "shop_configuration.py").exists()

    def test_empty_template(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text("# nothing here\n")
        output = tmp_path / "config.py"

        result = CliRunner().invoke(
            cli,
            ["--config", str(tmp_path / "none.yaml"), "generate", "-e", "e", "-t", str(template), "-o", str(output)],
        )

        assert result.exit_code == 0
        assert "No configuration fields found" in result.output
        assert not output.exists()

    def test_missing_template_without_fallback(self, tmp_path: Path):
        with patch("typed_extconf.cli.generate.questionary") as q:
            _answers(q, "confirm", [False])
            result = CliRunner().invoke(
                cli,
                [
                    "--config", str(tmp_path / "none.yaml"),
                    "generate", "-e", "e", "-t", str(tmp_path / "missing.txt"), "-c", "EConfiguration",
                ],
            )

        assert result.exit_code == 1
        assert "No template found" in result.output

    def test_existing_output_is_kept_when_overwrite_declined(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text(TEMPLATE)
        output = tmp_path / "config.py"
        output.write_text("# keep me\n")

        with patch("typed_extconf.cli.generate.questionary") as q:
            _answers(q, "confirm", [False])
            result = CliRunner().invoke(
                cli,
                [
                    "--config", str(tmp_path / "none.yaml"),
                    "generate", "-e", "e", "-t", str(template), "-c", "EConfiguration", "-o", str(output),
                ],
            )

        assert result.exit_code == 0
        assert "Operation cancelled" in result.output
        assert output.read_text() == "# keep me\n"

    def test_force_overwrites(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text(TEMPLATE)
        output = tmp_path / "config.py"
        output.write_text("# old\n")

        result = CliRunner().invoke(
            cli,
            [
                "--config", str(tmp_path / "none.yaml"),
                "generate", "-e", "e", "-t", str(template), "-c", "EConfiguration", "-o", str(output), "--force",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "class EConfiguration:" in output.read_text()

    def test_invalid_class_name_fails(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text(TEMPLATE)

        result = CliRunner().invoke(
            cli,
            [
                "--config", str(tmp_path / "none.yaml"),
                "generate", "-e", "e", "-t", str(template), "-c", "not-valid", "-o", str(tmp_path / "x.py"),
            ],
        )

        assert result.exit_code == 1
        assert "Invalid class name" in result.output


class TestGenerateManual:
    def test_prompts_for_fields(self, tmp_path: Path):
        output = tmp_path / "manual_configuration.py"

        with patch("typed_extconf.cli.generate.questionary") as q:
            _answers(q, "text", ["timeout", "30", "api.timeout", "token", "", "auth.token", ""])
            _answers(q, "select", ["int", "string"])
            _answers(q, "confirm", [False, True])
            result = CliRunner().invoke(
                cli,
                [
                    "--config", str(tmp_path / "none.yaml"),
                    "generate", "--manual", "-e", "manual_ext", "-c", "ManualConfiguration", "-o", str(output),
                ],
            )

        assert result.exit_code == 0, result.output
        source = output.read_text()
        assert "token: Annotated[str, ExtConfProperty(path='auth.token', required=True)]\n" in source
        assert "timeout: Annotated[int, ExtConfProperty(path='api.timeout')] = 30" in source
        assert source.index("token: Annotated") < source.index("timeout: Annotated")

    def test_no_fields(self, tmp_path: Path):
        with patch("typed_extconf.cli.generate.questionary") as q:
            _answers(q, "text", [""])
            result = CliRunner().invoke(
                cli,
                ["--config", str(tmp_path / "none.yaml"), "generate", "--manual", "-e", "e"],
            )

        assert result.exit_code == 0
        assert "No fields defined" in result.output

    def test_missing_template_falls_back_to_manual(self, tmp_path: Path):
        output = tmp_path / "fallback.py"

        with patch("typed_extconf.cli.generate.questionary") as q:
            _answers(q, "confirm", [True, False])
            _answers(q, "text", ["name", "", "name", ""])
            _answers(q, "select", ["string"])
            result = CliRunner().invoke(
                cli,
                [
                    "--config", str(tmp_path / "none.yaml"),
                    "generate", "-e", "e", "-t", str(tmp_path / "missing.txt"), "-c", "EConfiguration",
                    "-o", str(output),
                ],
            )

        assert result.exit_code == 0, result.output
        assert "name: Annotated[str, ExtConfProperty()] = ''" in output.read_text()

    def test_interactive_extension_and_mode(self, tmp_path: Path):
        template = tmp_path / "ext_conf_template.txt"
        template.write_text(TEMPLATE)
        output = tmp_path / "asked.py"

        with patch("typed_extconf.cli.generate.questionary") as q, patch(
            "typed_extconf.cli.generate.DEFAULT_TEMPLATE", str(template)
        ):
            _answers(q, "text", ["asked_ext", "AskedConfiguration"])
            _answers(q, "select", ["template"])
            result = CliRunner().invoke(
                cli,
                ["--config", str(tmp_path / "none.yaml"), "generate", "-o", str(output)],
            )

        assert result.exit_code == 0, result.output
        source = output.read_text()
        assert "@extension_config('asked_ext')" in source
        assert "class AskedConfiguration:" in source


class TestShow:
    def test_prints_mapped_configuration(self, tmp_path: Path):
        config = tmp_path / "typed-extconf.yaml"
        config.write_text("test_ext:\n  basic:\n    string: from_file\n    integer: '77'\n")

        result = CliRunner().invoke(
            cli, ["--config", str(config), "show", "--class", "fixtures:SimpleTestConfiguration"]
        )

        assert result.exit_code == 0, result.output
        assert "'from_file'" in result.output
        assert "77" in result.output

    def test_extension_override(self, tmp_path: Path):
        config = tmp_path / "typed-extconf.yaml"
        config.write_text("other_ext:\n  basic:\n    string: other\n")

        result = CliRunner().invoke(
            cli,
            ["--config", str(config), "show", "--class", "fixtures:SimpleTestConfiguration", "-e", "other_ext"],
        )

        assert result.exit_code == 0, result.output
        assert "'other'" in result.output

    def test_mapping_errors_exit_with_failure(self, tmp_path: Path):
        config = tmp_path / "typed-extconf.yaml"
        config.write_text("error_test:\n  invalidType: not-a-number\n")

        result = CliRunner().invoke(
            cli, ["--config", str(config), "show", "--class", "fixtures:ErrorTestConfiguration"]
        )

        assert result.exit_code == 1
        assert "invalidType" in result.output

    def test_missing_required_field(self, tmp_path: Path):
        result = CliRunner().invoke(
            cli,
            ["--config", str(tmp_path / "none.yaml"), "show", "--class", "fixtures:RequiredTestConfiguration"],
        )

        assert result.exit_code == 1
        assert 'Required configuration key "required.value" is missing' in result.output

    def test_bad_class_reference(self, tmp_path: Path):
        result = CliRunner().invoke(
            cli, ["--config", str(tmp_path / "none.yaml"), "show", "--class", "fixtures.SimpleTestConfiguration"]
        )

        assert result.exit_code == 2
        assert "module:ClassName" in result.output
