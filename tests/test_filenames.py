"""
Tests for output filename utilities.
"""

import pytest

from src.export.filenames import OutputNames


class TestOutputNames:
    """Tests for filename generation."""

    def test_build(self):
        """Prefix, code, suffix and extension are joined verbatim."""
        assert OutputNames.build("IT_", "ABCD1234", "_v1", "svg") == "IT_ABCD1234_v1.svg"

    def test_build_without_affixes(self):
        assert OutputNames.build("", "4006381333931", "", "png") == "4006381333931.png"

    def test_build_keeps_code_untouched(self):
        """Spaces and symbols in the code are not altered."""
        assert OutputNames.build("", "A B$%", "", "jpg") == "A B$%.jpg"

    def test_numbered(self):
        """Repeated names get a browser-style counter."""
        assert OutputNames.numbered("ABC.png", 1) == "ABC (1).png"
        assert OutputNames.numbered("A.B.svg", 2) == "A.B (2).svg"
        assert OutputNames.numbered("noextension", 3) == "noextension (3)"

    def test_numbered_requires_positive(self):
        with pytest.raises(ValueError):
            OutputNames.numbered("ABC.png", 0)

    def test_unique(self):
        """The first free name is chosen."""
        taken = {"ABC.png", "ABC (1).png"}
        assert OutputNames.unique("ABC.png", taken) == "ABC (2).png"
        assert OutputNames.unique("XYZ.png", taken) == "XYZ.png"


class TestSafeNames:
    """Tests for path-safe names."""

    def test_separators_replaced(self):
        """Code 39 slashes cannot escape the output directory."""
        assert OutputNames.safe("A/B.png") == "A_B.png"
        assert OutputNames.safe("..\\x.png") == ".._x.png"

    def test_plain_name_unchanged(self):
        assert OutputNames.safe("IT_ABCD1234_v1.svg") == "IT_ABCD1234_v1.svg"

    def test_invalid_names(self):
        with pytest.raises(ValueError):
            OutputNames.safe("..")
