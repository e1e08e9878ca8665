"""Source file scaffolding for `crun init`."""

from __future__ import annotations

from pathlib import Path

from crun.compilers import Language, detect_language

DEFAULT_NAME = "main.c"

_C_TEMPLATE = """\
#include <stdio.h>

int main() {
    printf("Hello from C!\\n");
    return 0;
}
"""

_CPP_TEMPLATE = """\
#include <iostream>

int main() {
    std::cout << "Hello from C++!" << std::endl;
    return 0;
}
"""


def init_source_file(name: str = DEFAULT_NAME, parent: Path | None = None) -> tuple[Path, bool]:
    """Create a hello-world source file. Returns (path, created).

    A name without an extension becomes a ``.c`` file. An existing file is
    never overwritten.
    """
    path = Path(name or DEFAULT_NAME)
    if not path.suffix:
        path = path.with_suffix(".c")
    if parent is not None:
        path = parent / path

    if path.exists():
        return path, False

    template = _CPP_TEMPLATE if detect_language(path) is Language.CPP else _C_TEMPLATE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template)
    return path, True
