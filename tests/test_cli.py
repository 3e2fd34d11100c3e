"""
Tests for the CLI column conversion.
"""

from zoneinfo import ZoneInfo

import pandas as pd
import pytest

from credinica import cli
from credinica.normalization.date_normalizer import DateNormalizer


class TestConvertColumn:
    """Test suite for convert_column"""

    @pytest.fixture
    def df(self):
        """Sample export with one good, one empty and one broken date"""
        return pd.DataFrame({
            "cliente": ["Ana", "Luis", "Rosa"],
            "fecha": ["2024-03-15", "", "no es fecha"],
        })

    @pytest.fixture
    def normalizer(self):
        return DateNormalizer(tz=ZoneInfo("America/Managua"))

    def test_canonical(self, df, normalizer):
        """Test conversion to canonical ISO strings"""
        result, summary = cli.convert_column(df, "fecha", "canonical", normalizer)
        assert result["fecha"].iloc[0] == "2024-03-15T06:00:00.000Z"
        assert result["fecha"].iloc[1:].isna().all()
        assert summary == {'total': 3, 'converted': 1, 'failed': 2}

        # Source frame untouched
        assert df["fecha"].tolist() == ["2024-03-15", "", "no es fecha"]

    def test_display(self, df, normalizer):
        """Test conversion to display strings"""
        result, summary = cli.convert_column(df, "fecha", "display", normalizer)
        assert result["fecha"].tolist() == ["15/03/2024", "N/A", "Fecha Inválida"]
        assert summary['failed'] == 2

    def test_unknown_column(self, df, normalizer):
        with pytest.raises(KeyError):
            cli.convert_column(df, "monto", "canonical", normalizer)

    def test_unknown_mode(self, df, normalizer):
        with pytest.raises(ValueError):
            cli.convert_column(df, "fecha", "epoch", normalizer)


class TestMain:
    """Test suite for the CLI entry point"""

    def test_convert_file(self, tmp_path, capsys):
        """Test converting a CSV file to MySQL DATETIME strings"""
        source = tmp_path / "pagos.csv"
        output = tmp_path / "pagos_mysql.csv"
        pd.DataFrame({
            "cliente": ["Ana", "Luis"],
            "fecha": ["2024-03-15T06:00:00.000Z", "2024-03-16T10:00:00.000Z"],
        }).to_csv(source, index=False)

        assert cli.main(["convert", str(source), "fecha", "storage", str(output)]) == 0

        result = pd.read_csv(output, dtype=str, keep_default_na=False)
        assert result["fecha"].tolist() == ["2024-03-15 06:00:00", "2024-03-16 10:00:00"]
        assert "Converted: 2/2" in capsys.readouterr().out

    def test_missing_file(self, tmp_path):
        assert cli.main(["convert", str(tmp_path / "missing.csv"), "fecha"]) == 1

    def test_bad_arguments(self, capsys):
        assert cli.main(["convert"]) == 1
        assert cli.main(["bogus"]) == 1
        assert "Usage" in capsys.readouterr().out

    def test_today(self, capsys):
        assert cli.main(["today"]) == 0
        out = capsys.readouterr().out
        assert "Today:" in out
        assert "America/Managua" in out
        assert "CrediNica - Configuration Summary" in out


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
