"""Smoke tests for the command line entry point."""

import logging

import pytest

from einlogic.__main__ import _build_parser, main


def test_list(capsys):
    main(["list"])
    out = capsys.readouterr().out
    assert "gnn" in out
    assert "Hidden Markov Model" in out


def test_list_category(capsys):
    main(["list", "--category", "symbolic"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("logic")


def test_run_gnn(capsys):
    main(["run", "gnn"])
    out = capsys.readouterr().out
    assert "Graph Neural Network: Message Passing" in out
    assert "--- Step 4: Message Aggregation ---" in out
    assert "[2.00, 1.40, 1.00]" in out


def test_run_with_precision_override(capsys):
    main(["run", "gnn", "--precision", "1"])
    assert "[2.0, 1.4, 1.0]" in capsys.readouterr().out


def test_run_unknown_example():
    with pytest.raises(SystemExit, match="Unknown example 'nope'"):
        main(["run", "nope"])


def test_einsum_command(capsys):
    main(["einsum", "ij,jk->ik", "[[1, 2], [3, 4]]", "[[5, 6], [7, 8]]", "--precision", "0"])
    out = capsys.readouterr().out
    assert "[19, 22]\n[43, 50]" in out


def test_einsum_trace(capsys):
    main(["einsum", "ii->", "[[1, 2], [3, 4]]", "--precision", "1"])
    assert capsys.readouterr().out.strip().endswith("5.0")


def test_einsum_error_exits():
    with pytest.raises(SystemExit, match="error: .*'k'"):
        main(["einsum", "ij->ik", "[[1, 2], [3, 4]]"])


def test_einsum_operand_count():
    with pytest.raises(SystemExit, match="needs 2 operands"):
        main(["einsum", "ij,jk->ik", "[[1]]"])


def test_run_verbose(capsys, caplog):
    caplog.set_level(logging.INFO, logger="einlogic")
    main(["run", "gnn", "-v"])
    assert "Graph Neural Network: Message Passing" in capsys.readouterr().out
    assert "Running example 'gnn'" in caplog.text


def test_verbose_before_subcommand(capsys):
    main(["-v", "list", "--category", "symbolic"])
    assert capsys.readouterr().out.startswith("logic")
    args = _build_parser().parse_args(["-v", "run", "gnn"])
    assert args.verbose and args.example == "gnn"
