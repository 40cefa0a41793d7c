"""
CLI tests.

Success paths go through typer's CliRunner; exit codes for failures are
checked through `main(argv)`, which maps every error onto status 1.
"""

from __future__ import annotations

import json

import click
import pytest
import typer
import typer.testing

from vault_ids import adapter_id, collateral_id, encode_market_params, market_id
import vault_ids.cli.main as cli_main
from vault_ids.cli.main import app, main
from vault_ids.examples import (ADAPTIVE_IRM, CBBTC, CBBTC_USDC_ORACLE,
                                MARKET_ADAPTER, USDC, VAULT_V1_ADAPTER,
                                cbbtc_usdc_market)
from vault_ids.utils.bytes import to_hex
from vault_ids.version import __version__

runner = typer.testing.CliRunner()

LLTV = "860000000000000000"
MARKET_ARGS = [USDC, CBBTC, CBBTC_USDC_ORACLE, ADAPTIVE_IRM, LLTV]


class TestCommands:
    def test_adapter(self) -> None:
        result = runner.invoke(app, ["adapter", VAULT_V1_ADAPTER])
        assert result.exit_code == 0
        expected = adapter_id(VAULT_V1_ADAPTER)
        assert "ADAPTER ID" in result.stdout
        assert f'abi.encode("this", {VAULT_V1_ADAPTER})' in result.stdout
        assert expected.encoded_hex in result.stdout
        assert expected.hash_hex in result.stdout

    def test_collateral(self) -> None:
        result = runner.invoke(app, ["collateral", CBBTC.lower()])
        assert result.exit_code == 0
        assert collateral_id(CBBTC).hash_hex in result.stdout
        # displayed checksummed regardless of input case
        assert CBBTC in result.stdout

    def test_market(self) -> None:
        result = runner.invoke(app, ["market", MARKET_ADAPTER, *MARKET_ARGS])
        assert result.exit_code == 0
        assert market_id(MARKET_ADAPTER, cbbtc_usdc_market()).hash_hex in result.stdout
        assert "86%" in result.stdout

    def test_market_data(self) -> None:
        result = runner.invoke(app, ["market-data", *MARKET_ARGS])
        assert result.exit_code == 0
        assert to_hex(encode_market_params(cbbtc_usdc_market())) in result.stdout
        assert "160 bytes" in result.stdout

    def test_command_names_ignore_case(self) -> None:
        upper = runner.invoke(app, ["ADAPTER", VAULT_V1_ADAPTER])
        lower = runner.invoke(app, ["adapter", VAULT_V1_ADAPTER])
        assert upper.exit_code == 0
        assert upper.stdout == lower.stdout

    def test_no_arguments_prints_examples(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "Market id (cbBTC/USDC)" in result.stdout
        assert runner.invoke(app, ["examples"]).stdout == result.stdout

    @pytest.mark.parametrize("args", [["help"], ["--help"], ["-h"]])
    def test_help(self, args) -> None:
        result = runner.invoke(app, args)
        assert result.exit_code == 0
        assert "adapter" in result.stdout
        assert "market-data" in result.stdout

    def test_version(self) -> None:
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestJsonOutput:
    def test_adapter_json(self) -> None:
        result = runner.invoke(app, ["--json", "adapter", VAULT_V1_ADAPTER])
        assert result.exit_code == 0
        doc = json.loads(result.stdout)
        expected = adapter_id(VAULT_V1_ADAPTER)
        assert doc["scheme"] == "adapter"
        assert doc["inputs"] == {"address": VAULT_V1_ADAPTER}
        assert doc["encoded"] == expected.encoded_hex
        assert doc["hash"] == expected.hash_hex

    def test_market_json(self) -> None:
        result = runner.invoke(app, ["--json", "market", MARKET_ADAPTER, *MARKET_ARGS])
        doc = json.loads(result.stdout)
        assert doc["marketParams"]["lltv"] == LLTV
        assert doc["lltvPercent"] == "86%"

    def test_env_selects_json(self, monkeypatch) -> None:
        monkeypatch.setenv("VAULT_IDS_OUTPUT", "json")
        result = runner.invoke(app, ["market-data", *MARKET_ARGS])
        assert json.loads(result.stdout)["length"] == 160

    def test_examples_json(self) -> None:
        result = runner.invoke(app, ["--json", "examples"])
        doc = json.loads(result.stdout)
        assert len(doc["examples"]) == 5


class TestExitCodes:
    def test_success_returns_zero(self, capsys) -> None:
        assert main(["adapter", VAULT_V1_ADAPTER]) == 0
        assert adapter_id(VAULT_V1_ADAPTER).hash_hex in capsys.readouterr().out

    @pytest.mark.parametrize(
        "argv",
        [
            ["adapter", "0x1234"],
            ["collateral", "0x5AAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"],
            ["market", MARKET_ADAPTER, USDC, CBBTC, CBBTC_USDC_ORACLE, ADAPTIVE_IRM, "86%"],
            ["market", MARKET_ADAPTER, USDC, CBBTC, CBBTC_USDC_ORACLE, ADAPTIVE_IRM, str(2**256)],
            ["market-data", USDC, CBBTC, "0xnope", ADAPTIVE_IRM, LLTV],
        ],
    )
    def test_invalid_input(self, capsys, argv) -> None:
        assert main(argv) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error: ")

    @pytest.mark.parametrize(
        "argv",
        [
            ["adapter"],
            ["collateral", USDC, CBBTC],
            ["market", MARKET_ADAPTER, USDC],
            ["market-data", *MARKET_ARGS, "extra"],
            ["unknown-command"],
        ],
    )
    def test_usage_errors_print_usage(self, capsys, argv) -> None:
        assert main(argv) == 1
        err = capsys.readouterr().err
        assert err.startswith("error: ")
        assert "Usage:" in err

    def test_oversized_lltv_is_a_validation_error(self, capsys) -> None:
        assert main(["market-data", USDC, CBBTC, CBBTC_USDC_ORACLE, ADAPTIVE_IRM, "9" * 5000]) == 1
        err = capsys.readouterr().err
        assert err.startswith("error: invalid lltv")
        assert "Traceback" not in err

    def test_usage_error_types_cover_typer_and_click(self) -> None:
        assert isinstance(typer.BadParameter("x"), cli_main._CLICK_ERRORS)
        assert isinstance(click.BadParameter("x"), cli_main._CLICK_ERRORS)
        assert isinstance(typer.Exit(3), cli_main._EXIT_ERRORS)
        assert isinstance(typer.Abort(), cli_main._ABORT_ERRORS)

    def test_lltv_error_names_the_field(self, capsys) -> None:
        assert main(["market-data", USDC, CBBTC, CBBTC_USDC_ORACLE, ADAPTIVE_IRM, "1.5"]) == 1
        assert "lltv" in capsys.readouterr().err

    def test_json_error(self, capsys) -> None:
        assert main(["--json", "adapter", "0x1234"]) == 1
        doc = json.loads(capsys.readouterr().err)
        assert doc["error"]["code"] == "VAULT_IDS/MALFORMED_INPUT"

    def test_help_returns_zero(self, capsys) -> None:
        assert main(["--help"]) == 0


def test_verbose_logs_to_stderr(capsys) -> None:
    assert main(["-v", "adapter", VAULT_V1_ADAPTER]) == 0
    captured = capsys.readouterr()
    assert "derived id" in captured.err
    assert "derived id" not in captured.out
