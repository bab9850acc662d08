import pytest
import typer
from typer.testing import CliRunner

from qpauli.__main__ import app, parse_prep

runner = CliRunner()


def test_parse_prep():
    assert parse_prep("H 0; CX 0 1;") == [("H", [0]), ("CX", [0, 1])]
    assert parse_prep("h 0; sdg 1", 2) == [("H", [0]), ("Sdg", [1])]
    assert parse_prep("") == []


@pytest.mark.parametrize("prep", ["T 0", "H x", "CX 0", "H", "H 2", "CX 0 -1"])
def test_parse_prep_rejects(prep: str):
    with pytest.raises(typer.BadParameter):
        parse_prep(prep, 2)


def test_measure_accepts_lower_case_prep():
    result = runner.invoke(app, ["measure", "ZZ", "--prep", "h 0; cx 0 1", "--shots", "3", "--backend", "stim"])
    assert result.exit_code == 0, result.output


@pytest.mark.parametrize("prep", ["T 0", "H 5", "CX 0"])
def test_measure_rejects_bad_prep(prep: str):
    result = runner.invoke(app, ["measure", "ZZ", "--prep", prep, "--backend", "stim"])
    assert result.exit_code == 2


def test_measure_bell_state():
    result = runner.invoke(app, ["measure", "ZZ", "--prep", "H 0; CX 0 1", "--shots", "5", "--backend", "stim"])
    assert result.exit_code == 0, result.output
    assert "gadget" in result.output
    assert "direct" in result.output


def test_measure_rejects_bad_backend():
    result = runner.invoke(app, ["measure", "XX", "--backend", "nope"])
    assert result.exit_code != 0


def test_measure_rejects_bad_label():
    result = runner.invoke(app, ["measure", "XQ", "--backend", "stim"])
    assert result.exit_code != 0


def test_orbital_index():
    result = runner.invoke(app, ["orbital-index", "1", "1", "10"])
    assert result.exit_code == 0, result.output
    assert "11" in result.output


def test_orbital_from_index():
    result = runner.invoke(app, ["orbital-from-index", "11", "10"])
    assert result.exit_code == 0, result.output
    assert "(1, d)" in result.output


def test_orbital_index_invalid():
    result = runner.invoke(app, ["orbital-index", "10", "0", "10"])
    assert result.exit_code != 0


def test_weight_one():
    result = runner.invoke(app, ["weight-one", "2"])
    assert result.exit_code == 0, result.output
    for label in ("XI", "YI", "ZI", "IX", "IY", "IZ"):
        assert label in result.output


def test_random_pauli_seeded():
    a = runner.invoke(app, ["random-pauli", "--count", "8", "--seed", "3"])
    b = runner.invoke(app, ["random-pauli", "--count", "8", "--seed", "3"])
    assert a.exit_code == 0, a.output
    assert a.output == b.output
