"""
Output filename utilities for consistent download names.
"""


class OutputNames:
    """
    Standardized output filename generation.

    Naming:
    - {prefix}{code}{suffix}.{format}      -> Every exported artifact
    - {stem} ({n}).{format}                -> Repeated name in one export target
    """

    # Characters that would turn a name into a path
    PATH_SEPARATORS = ("/", "\\", "\x00")

    @staticmethod
    def build(prefix: str, code: str, suffix: str, extension: str) -> str:
        """Filename for one exported barcode."""
        return f"{prefix}{code}{suffix}.{extension}"

    @staticmethod
    def split(name: str) -> tuple[str, str]:
        """
        Split a filename into stem and extension.

        Args:
            name: Filename like "IT_ABCD1234_v1.svg"

        Returns:
            Tuple of (stem, extension); extension is "" when absent
        """
        if "." not in name:
            return name, ""
        stem, extension = name.rsplit(".", 1)
        return stem, extension

    @staticmethod
    def numbered(name: str, number: int) -> str:
        """
        Numbered variant of a filename, the way browsers rename repeated downloads.

        Args:
            name: Original name like "ABC.png"
            number: Repeat counter starting at 1

        Returns:
            Name like "ABC (1).png"
        """
        if number < 1:
            raise ValueError(f"Number must be positive: {number}")
        stem, extension = OutputNames.split(name)
        if not extension:
            return f"{stem} ({number})"
        return f"{stem} ({number}).{extension}"

    @staticmethod
    def unique(name: str, taken: set[str]) -> str:
        """First of name, name (1), name (2)... that is not in taken."""
        candidate = name
        number = 0
        while candidate in taken:
            number += 1
            candidate = OutputNames.numbered(name, number)
        return candidate

    @staticmethod
    def safe(name: str) -> str:
        """Replace path separators so a name stays a single path component."""
        for separator in OutputNames.PATH_SEPARATORS:
            name = name.replace(separator, "_")
        if name in ("", ".", ".."):
            raise ValueError(f"Invalid output filename: {name!r}")
        return name
