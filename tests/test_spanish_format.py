"""
Tests for Spanish pattern formatting.
"""

from datetime import datetime

import pytest

from credinica.normalization.spanish_format import format_pattern, tokenize

# Friday
MORNING = datetime(2024, 3, 15, 9, 5, 7, 123456)
EVENING = datetime(2024, 3, 15, 21, 5, 7)


class TestFormatPattern:
    """Test suite for format_pattern"""

    @pytest.mark.parametrize("pattern,expected", [
        ("dd/MM/yyyy", "15/03/2024"),
        ("dd/MM/yyyy HH:mm:ss", "15/03/2024 09:05:07"),
        ("d/M/yy", "15/3/24"),
        ("MMM", "mar"),
        ("MMMM", "marzo"),
        ("MMMMM", "M"),
        ("EEE", "vie"),
        ("EEEE", "viernes"),
        ("EEEEE", "V"),
        ("H:m:s", "9:5:7"),
        ("hh:mm a", "09:05 a. m."),
        ("SSS", "123"),
        ("EEEE d 'de' MMMM 'de' yyyy", "viernes 15 de marzo de 2024"),
        ("HH 'o''clock'", "09 o'clock"),
        ("''", "'"),
    ])
    def test_patterns(self, pattern, expected):
        """Test the supported symbols"""
        assert format_pattern(MORNING, pattern) == expected

    def test_afternoon(self):
        """Test 12-hour clock after noon"""
        assert format_pattern(EVENING, "h:mm a") == "9:05 p. m."
        assert format_pattern(datetime(2024, 3, 15, 0, 30), "h:mm a") == "12:30 a. m."

    def test_weekdays(self):
        """Test weekday names across a week"""
        names = [format_pattern(datetime(2024, 3, day), "EEEE") for day in range(11, 18)]
        assert names == ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]

    @pytest.mark.parametrize("pattern", ["QQ", "dd/MM/yyyy 'sin cerrar"])
    def test_invalid_patterns(self, pattern):
        """Test that unknown symbols and open quotes raise ValueError"""
        with pytest.raises(ValueError):
            format_pattern(MORNING, pattern)


class TestTokenize:
    """Test suite for tokenize"""

    def test_runs_and_literals(self):
        """Test splitting into symbol runs and literals"""
        assert tokenize("dd/MM") == [("d", 2), ("literal", "/"), ("M", 2)]
        assert tokenize("'de' y") == [("literal", "de"), ("literal", " "), ("y", 1)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
