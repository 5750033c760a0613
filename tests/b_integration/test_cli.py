"""Integration tests for the kmerbench command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from kmerbench.cli import create_parser, main


class TestCount:
    """Tests for the count command."""

    @pytest.mark.parametrize("structure", ["bst", "djb2", "polynomial"])
    def test_homopolymer(self, structure: str, capsys: pytest.CaptureFixture) -> None:
        """Every structure prints 'aa' with count 3."""
        assert main(["count", "aaaa", "-k", "2", "--structure", structure]) == 0
        out = capsys.readouterr().out
        assert "aa\t3" in out
        assert "Unique k-mers:   1" in out
        assert "Total k-mers:    3" in out

    def test_sorted_output(self, capsys: pytest.CaptureFixture) -> None:
        """Distribution lines are in key order."""
        main(["count", "tgca", "-k", "1"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[:4] == ["a\t1", "c\t1", "g\t1", "t\t1"]

    def test_table_layout(self, capsys: pytest.CaptureFixture) -> None:
        """--table prints the bucket chains."""
        main(["count", "aaaa", "-k", "2", "--structure", "djb2", "--table"])
        out = capsys.readouterr().out
        assert "Index 3: [aa:3]" in out
        assert "Collisions:      2" in out

    def test_generated(self, capsys: pytest.CaptureFixture) -> None:
        """--length generates a sequence."""
        assert main(["count", "-k", "3", "--length", "100", "--seed", "1"]) == 0
        assert "Total k-mers:    98" in capsys.readouterr().out

    def test_missing_input(self, capsys: pytest.CaptureFixture) -> None:
        """Without a sequence or length the command fails."""
        assert main(["count", "-k", "3"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_invalid_k(self, capsys: pytest.CaptureFixture) -> None:
        """k larger than the sequence prints an empty distribution."""
        assert main(["count", "acg", "-k", "5"]) == 0
        assert "Unique k-mers:   0" in capsys.readouterr().out


class TestHash:
    """Tests for the hash command."""

    def test_minimum_value_key(self, capsys: pytest.CaptureFixture) -> None:
        """The polynomial minimum-value key gets a valid index."""
        assert main(["hash", "polygenelubricants", "--size", "7"]) == 0
        out = capsys.readouterr().out
        assert "-2147483648" in out

    def test_invalid_size(self, capsys: pytest.CaptureFixture) -> None:
        """Non-positive sizes are rejected."""
        assert main(["hash", "a", "--size", "0"]) == 1


class TestRun:
    """Tests for the run command."""

    def test_small_matrix(self, capsys: pytest.CaptureFixture) -> None:
        """A small matrix runs and prints one table per length."""
        code = main(
            ["run", "--lengths", "100,200", "--ks", "2,3", "--seed", "5", "--quiet"]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "String length n = 100" in out
        assert "String length n = 200" in out
        assert "BST (ms)" in out

    def test_suite_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Suite files are loaded and flags override them."""
        path = tmp_path / "suite.yaml"
        path.write_text("lengths: [1000]\nks: [2]\nstructures: [bst]\nseed: 1\n")
        code = main(
            ["run", "--suite", str(path), "--lengths", "50", "--repeats", "2", "--quiet"]
        )
        assert code == 0
        out = capsys.readouterr().out
        assert "String length n = 50" in out
        assert "HT1" not in out
        assert "2 runs" in out

    def test_malformed_suite(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A suite file that is not valid YAML is reported, not raised."""
        path = tmp_path / "suite.yaml"
        path.write_text("lengths: [100\nks: [2]\n")
        assert main(["run", "--suite", str(path), "--quiet"]) == 1
        assert "Error" in capsys.readouterr().out

    def test_missing_suite(self, capsys: pytest.CaptureFixture) -> None:
        """A missing suite file is an error."""
        assert main(["run", "--suite", "does-not-exist.yaml"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_bad_structure(self, capsys: pytest.CaptureFixture) -> None:
        """Unknown structures are reported, not raised."""
        assert main(["run", "--structures", "avl", "--lengths", "10", "--quiet"]) == 1
        assert "Unknown structure" in capsys.readouterr().out

    def test_bad_lengths(self) -> None:
        """Non-integer lengths are rejected by argparse."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["run", "--lengths", "ten"])


class TestMain:
    """Tests for the entry point."""

    def test_no_command(self, capsys: pytest.CaptureFixture) -> None:
        """No subcommand prints help."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
