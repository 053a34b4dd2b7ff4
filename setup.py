"""
Custom setup.py to keep pygame-dependent modules out of the wheel.

viewer.py and controls.py need pygame, which headless installs (snapshot
rendering, library use) do not carry. Install the "viewer" extra and run
from an editable checkout for the interactive window.
"""

from setuptools import setup
from setuptools.command.build_py import build_py as _build_py


# Modules that require pygame and are left out of the wheel
_EXCLUDE_MODULES = {"viewer", "controls"}


class BuildPy(_build_py):
    """build_py that drops pygame-dependent modules."""

    def find_package_modules(self, package, package_dir):
        modules = super().find_package_modules(package, package_dir)
        return [
            (pkg, mod, path)
            for (pkg, mod, path) in modules
            if mod not in _EXCLUDE_MODULES
        ]


setup(
    cmdclass={"build_py": BuildPy},
)
