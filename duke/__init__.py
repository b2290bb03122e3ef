"""duke: a self-bootstrapping build-and-run launcher.

duke builds (or downloads) its runner module into ``.duke/bin``, compiles
the project's modules next to it, and launches the runner with the
remaining command line arguments.
"""

__version__ = "2023.2.28"
