"""kclsp – KCL compiler diagnostics for the Language Server Protocol."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version('kclsp')
except PackageNotFoundError:
    __version__ = '0.0.0.dev0'
