"""vSphere inventory, clone, status and power command line helper"""
from .version import __version__  # noqa: F401
