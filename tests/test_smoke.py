"""
Smoke tests to verify basic infrastructure setup.
Run these after fresh environment setup to confirm everything works.
"""

import sys
import importlib
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parent.parent


def test_python_version():
    """Test Python version meets requirements."""
    assert sys.version_info >= (3, 10), f"Python 3.10+ required, got {sys.version}"


def test_package_imports():
    """Test that configured packages can be imported."""
    packages = [
        "numpy",
        "pytest",
        "psutil",
        "lifefeed",
        "lifefeed.core",
        "lifefeed.display",
        "lifefeed.scheduler",
    ]

    failed_imports = []
    for package in packages:
        try:
            importlib.import_module(package)
        except ImportError as e:
            failed_imports.append(f"{package}: {e}")

    if failed_imports:
        pytest.fail(f"Failed to import packages: {failed_imports}")


def test_public_api():
    """Top-level package exposes the engine types."""
    import lifefeed

    for name in lifefeed.__all__:
        assert hasattr(lifefeed, name), f"lifefeed.{name} missing"
    assert lifefeed.__version__


def test_display_not_imported_by_engine():
    """The engine package stands alone; display only consumes snapshots."""
    core_dir = ROOT / "src" / "lifefeed" / "core"
    for source in core_dir.glob("*.py"):
        text = source.read_text()
        assert "..display" not in text and "lifefeed.display" not in text, f"{source.name} imports display code"


def test_env_file():
    """Test that .env.example documents every configuration variable."""
    from lifefeed.core.config import ENV_PREFIX, _ENV_FIELDS

    env_example = ROOT / ".env.example"
    assert env_example.exists(), ".env.example file missing"

    content = env_example.read_text()
    for suffix in _ENV_FIELDS:
        assert ENV_PREFIX + suffix in content, f"{ENV_PREFIX + suffix} not in .env.example"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
