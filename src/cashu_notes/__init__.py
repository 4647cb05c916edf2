"""Top-level package for Cashu Notes.

Provides subpackages:
- cashu_notes.printing – page layout planner, print marks and PDF assembly
- cashu_notes.core – shared value types and template validation
- cashu_notes.storage – storage adapters and print history
- cashu_notes.templates – note template bundle loader
- cashu_notes.wallet – denomination helpers at the wallet boundary
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import version as pkg_version, PackageNotFoundError

    try:
        return pkg_version("cashu-notes")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
