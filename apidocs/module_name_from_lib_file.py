"""Logic for deriving documentation module names from library file names."""

from pathlib import Path


def module_name_from_lib_file(lib_file: str | Path) -> str:
    """Map a library file to the module its documentation is filed under.

    ``libQt5Core.so.5.15`` and ``Qt6Widgets.dll`` give ``QtCore`` and
    ``QtWidgets``: the ``lib`` prefix, every extension and the major version
    digit after ``Qt`` are dropped.
    """
    module = Path(lib_file).name
    if module.startswith("lib"):
        module = module[len("lib") :]
    while "." in module:
        module = Path(module).stem
    if module.startswith("Qt") and module[2:3].isdigit():
        return "Qt" + module[3:]
    return module
