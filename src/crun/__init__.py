"""crun: compile and run a single C/C++ source file."""

__version__ = "0.1.0"
