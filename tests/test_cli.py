import io

import pytest

from nonmyopic.cli import PayoffParseError, main, parse_payoffs, prompt_payoffs
from nonmyopic.payoffs import PayoffMatrix3x3


def test_parse_payoffs(prisoners_dilemma):
    assert parse_payoffs("3,3 0,5 5,0 1,1", 2) == prisoners_dilemma
    assert parse_payoffs("3,3; 0,5;\n5,0; 1,1", 2) == prisoners_dilemma
    assert parse_payoffs("1,-1 -1,1 -1,1 1,-1", 2).cell(0, 1) == (-1.0, 1.0)


@pytest.mark.parametrize("text", ["3,3 0,5 5,0", "3,3 0,5 5,0 1", "3,3 0,5 5,0 x,1"])
def test_parse_payoffs_rejects_bad_text(text):
    with pytest.raises(PayoffParseError):
        parse_payoffs(text, 2)


def test_prompt_payoffs_retries_bad_answers(capsys):
    answers = iter(["oops"] + [str(v) for v in range(18)])
    matrix = prompt_payoffs(3, ask=lambda prompt: next(answers))
    assert isinstance(matrix, PayoffMatrix3x3)
    assert matrix.cell(0, 0) == (0.0, 1.0)
    assert matrix.cell(2, 2) == (16.0, 17.0)
    assert "Not a number: 'oops'" in capsys.readouterr().out


def test_2x2_example(capsys):
    assert main(["2x2", "--example", "prisoners-dilemma"]) == 0
    out = capsys.readouterr().out
    assert "- Pure strategy NE: Player 1 plays 1, Player 2 plays 1" in out
    assert "Non-myopic equilibrium: Player 1 plays strategy 1 with probability 0.00" in out
    assert "Analysis complete!" in out


def test_2x2_payoffs_without_nash(capsys):
    main(["2x2", "--payoffs", "1,-1 -1,1 -1,1 1,-1"])
    out = capsys.readouterr().out
    assert "No Nash equilibria found." in out
    assert "probability 0.50, Player 2 plays strategy 1 with probability 0.50" in out


def test_3x3_example(capsys):
    main(["3x3", "--example", "extended-coordination", "--details"])
    out = capsys.readouterr().out
    assert "Found 9 valid 2x2 submatrices from the 3x3 game." in out
    assert "=== Submatrix 9 ===" in out
    assert "Outcome (2,2): 4 votes from submatrices: 4 6 8 9" in out
    assert ("- Pure strategy: Player 1 plays strategy 3, Player 2 plays strategy 3 -> "
            "Outcome (6,6) [Supported by 4/9 subgames]") in out
    assert "Player 1 row preferences: Row 2(3 votes) Row 3(6 votes)" in out


def test_default_example_is_used(capsys):
    main(["3x3"])
    assert "Using example game: extended-coordination" in capsys.readouterr().out


def test_bad_payoffs_exit_with_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["2x2", "--payoffs", "1,2 3,4"])
    assert exc.value.code == 2
    assert "expected 4 cells" in capsys.readouterr().err


def test_plot_option_writes_file(tmp_path, capsys):
    path = tmp_path / "votes.png"
    main(["3x3", "--plot", str(path)])
    assert path.exists()


def test_2x2_plot_option_writes_file(tmp_path):
    path = tmp_path / "br.png"
    main(["2x2", "--example", "matching-pennies", "--plot", str(path)])
    assert path.exists()


def test_exact_flag_lists_support_enumeration(capsys):
    main(["2x2", "--example", "matching-pennies", "--exact"])
    out = capsys.readouterr().out
    assert "No Nash equilibria found." in out
    assert "Support Enumeration Equilibria:" in out
    assert ("- Support enumeration NE: Player 1 plays strategy 1 with probability 0.500000, "
            "Player 2 plays strategy 1 with probability 0.500000") in out


def test_exact_flag_is_off_by_default(capsys):
    main(["2x2", "--example", "matching-pennies"])
    assert "Support Enumeration Equilibria" not in capsys.readouterr().out


def test_graph_option_writes_file(tmp_path):
    path = tmp_path / "graph.png"
    main(["3x3", "--graph", str(path)])
    assert path.exists()


def test_interactive_input_running_out_is_a_usage_error(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n3\n0\n"))
    with pytest.raises(SystemExit) as exc:
        main(["2x2", "--interactive"])
    assert exc.value.code == 2
    assert "input ended before every payoff was entered" in capsys.readouterr().err
