"""Built-in default configuration for cmake-clangd."""

from __future__ import annotations

from cmake_clangd.clangd import CLANGD_FILE, DEFAULT_INDENT, KEY, SECTION
from cmake_clangd.presets import PRESET_FILES

DEFAULT_CONFIG_DICT = {
    "cmake": {
        "executable": "cmake",
        "default_binary_dir": "build",
        "extra_flags": [],
    },
    "project": {
        "marker": "CMakeLists.txt",
        "preset_files": list(PRESET_FILES),
    },
    "clangd": {
        "file_name": CLANGD_FILE,
        "section": SECTION,
        "key": KEY,
        "indent": len(DEFAULT_INDENT),
    },
    "cli": {
        "auto_confirm": False,
        "debug": False,
    },
}
