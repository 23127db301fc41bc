"""
Import every module of the package, so syntax errors and import cycles
show up even in modules no other test reaches.
"""

import importlib
import pkgutil

import pytest

import fretboarder

# Opens PortAudio at import time; covered through the audio engine factory instead
SKIP = {"fretboarder.audio.output"}


def find_modules():
    modules = []
    for info in pkgutil.walk_packages(fretboarder.__path__, prefix="fretboarder."):
        if info.name not in SKIP:
            modules.append(info.name)
    return sorted(modules)


@pytest.mark.parametrize("module_name", find_modules())
def test_module_imports(module_name):
    assert importlib.import_module(module_name)


def test_version():
    assert fretboarder.__version__
